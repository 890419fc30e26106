"""Configuration management for Hostpulse agent."""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/hostpulse/config.json"


@dataclass
class AgentConfig:
    """Agent configuration."""

    report_url: Optional[str] = None
    heartbeat_url: Optional[str] = None
    enabled: bool = False
    interval: float = 1.0  # seconds between loop cycles
    sample_interval: float = 1.0  # throughput window, seconds
    report_every: int = 60  # loop cycles between snapshot reports
    timeout: int = 30

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError(f"interval must be positive: {self.interval}")
        if self.sample_interval <= 0:
            raise ValueError(f"sample_interval must be positive: {self.sample_interval}")
        if self.report_every < 1:
            raise ValueError(f"report_every must be at least 1: {self.report_every}")

    @property
    def reporting(self) -> bool:
        """True when reporting is enabled and has somewhere to go."""
        return self.enabled and bool(self.report_url or self.heartbeat_url)


class ConfigManager:
    """Manages agent configuration."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)

    def load(self) -> AgentConfig:
        """Load configuration from file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r") as f:
            data = json.load(f)

        config = AgentConfig(**data)
        if config.enabled and not config.reporting:
            logger.warning("Reporting enabled but no report_url or heartbeat_url set")
        return config

    def load_or_default(self) -> AgentConfig:
        """Load configuration, or return defaults when no file exists."""
        if not self.exists():
            logger.debug("No config at %s, using defaults", self.config_path)
            return AgentConfig()
        return self.load()

    def save(self, config: AgentConfig) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            json.dump(asdict(config), f, indent=2)

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

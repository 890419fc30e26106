"""Platform identity collector."""

import logging
import platform
import subprocess
from pathlib import Path
from typing import Callable, Dict, Optional

import distro

logger = logging.getLogger(__name__)

CPUINFO_PATH = Path("/proc/cpuinfo")
HYPERVISOR_PATH = Path("/sys/hypervisor/type")
PHYSICAL = "Physical"


def first_available(*probes: Callable[[], Optional[str]], default: str) -> str:
    """
    Run probes in priority order and return the first non-empty answer.

    Args:
        probes: Zero-argument callables, fastest first
        default: Value returned when every probe fails or answers nothing

    Returns:
        The first truthy probe result, stripped, or ``default``
    """
    for probe in probes:
        try:
            value = probe()
        except (OSError, subprocess.SubprocessError, ValueError) as e:
            logger.debug("Probe %s failed: %s", getattr(probe, "__name__", probe), e)
            continue
        if value and value.strip():
            return value.strip()
    return default


def parse_key_value(text: str, sep: str = "=") -> Dict[str, str]:
    """Parse ``key=value`` (or ``key: value``) lines, ignoring comments."""
    result = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or sep not in line:
            continue
        key, value = line.split(sep, 1)
        result[key.strip()] = value.strip().strip("\"'")
    return result


def _run(args) -> Optional[str]:
    result = subprocess.run(args, capture_output=True, text=True, timeout=5)
    if result.returncode != 0:
        return None
    return result.stdout


def collect_platform() -> str:
    """OS family name, e.g. "linux"."""
    return platform.system().lower() or "unknown"


def collect_architecture() -> str:
    return platform.machine() or "unknown"


def collect_platform_version() -> str:
    return first_available(distro.version, platform.release, default="unknown")


def describe_distribution(info: Optional[Dict[str, str]]) -> str:
    """
    Build "<id>-<version>" from parsed os-release fields.

    Falls back to the OS family name when the descriptor is missing or has
    no ID, and to the bare ID when the version is missing.
    """
    if not info or not info.get("id"):
        return collect_platform()

    dist_id = info["id"]
    version = info.get("version_id")
    return f"{dist_id}-{version}" if version else dist_id


def collect_distribution() -> str:
    try:
        info = distro.os_release_info()
    except OSError as e:
        logger.debug("os-release unavailable: %s", e)
        info = None
    return describe_distribution(info)


def _cpuinfo_model() -> Optional[str]:
    if not CPUINFO_PATH.exists():
        return None
    with open(CPUINFO_PATH) as f:
        for line in f:
            if "model name" in line.lower():
                return line.split(":", 1)[1]
    return None


def _lscpu_model() -> Optional[str]:
    output = _run(["lscpu"])
    if not output:
        return None
    return parse_key_value(output, sep=":").get("Model name")


def collect_cpu_model() -> str:
    """CPU model name: /proc/cpuinfo, then lscpu, then the architecture."""
    return first_available(
        _cpuinfo_model,
        _lscpu_model,
        platform.processor,
        default=collect_architecture(),
    )


def _hypervisor_type() -> Optional[str]:
    if not HYPERVISOR_PATH.exists():
        return None
    return HYPERVISOR_PATH.read_text()


def _detect_virt() -> Optional[str]:
    # systemd-detect-virt exits non-zero when it prints "none"
    return _run(["systemd-detect-virt"])


def collect_virtualization() -> str:
    """Upper-cased virtualization type, or "Physical"."""
    vtype = first_available(_hypervisor_type, _detect_virt, default="none")
    if vtype.lower() == "none":
        return PHYSICAL
    return vtype.upper()

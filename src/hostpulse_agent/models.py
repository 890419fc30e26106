"""Snapshot and heartbeat records."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .formatting import format_bytes, format_uptime

CPU_PERCENT_UNAVAILABLE = -1.0


@dataclass(frozen=True)
class UsageSummary:
    """Total/used capacity pair, shared by memory, swap and disk."""

    total_bytes: int = 0
    used_bytes: int = 0
    percent: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": format_bytes(self.total_bytes),
            "used": format_bytes(self.used_bytes),
            "percent": self.percent,
            "total_bytes": self.total_bytes,
            "used_bytes": self.used_bytes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UsageSummary":
        return cls(
            total_bytes=data["total_bytes"],
            used_bytes=data["used_bytes"],
            percent=data["percent"],
        )


@dataclass(frozen=True)
class CpuSummary:
    """CPU model, logical core count and utilization."""

    model: str = "unknown"
    count: int = 0
    percent: float = CPU_PERCENT_UNAVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        return {"model": self.model, "count": self.count, "percent": self.percent}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CpuSummary":
        return cls(model=data["model"], count=data["count"], percent=data["percent"])


@dataclass(frozen=True)
class Throughput:
    """Network transfer rate over one sampling window, in bytes/second."""

    upload: float = 0.0
    download: float = 0.0
    interval: float = 0.0


@dataclass(frozen=True)
class NetworkSummary:
    """Instantaneous rates plus cumulative counters since boot."""

    upload_rate: float = 0.0
    download_rate: float = 0.0
    upload_total: int = 0
    download_total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "upload_speed": format_bytes(self.upload_rate),
            "download_speed": format_bytes(self.download_rate),
            "upload_total": format_bytes(self.upload_total),
            "download_total": format_bytes(self.download_total),
            "upload_speed_bps": self.upload_rate,
            "download_speed_bps": self.download_rate,
            "upload_total_bytes": self.upload_total,
            "download_total_bytes": self.download_total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkSummary":
        return cls(
            upload_rate=data["upload_speed_bps"],
            download_rate=data["download_speed_bps"],
            upload_total=data["upload_total_bytes"],
            download_total=data["download_total_bytes"],
        )


@dataclass(frozen=True)
class LoadAverage:
    """
    Tagged load average result.

    Either ``status == "ok"`` with all three values set, or
    ``status == "error"`` with the values unset and ``error`` holding the
    reason. The serialized form carries the same keys in both cases.
    """

    status: str
    one: Optional[float] = None
    five: Optional[float] = None
    fifteen: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, one: float, five: float, fifteen: float) -> "LoadAverage":
        return cls(status="ok", one=one, five=five, fifteen=fifteen)

    @classmethod
    def failed(cls, reason: str) -> "LoadAverage":
        return cls(status="error", error=reason)

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "1min": self.one,
            "5min": self.five,
            "15min": self.fifteen,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadAverage":
        return cls(
            status=data["status"],
            one=data["1min"],
            five=data["5min"],
            fifteen=data["15min"],
            error=data["error"],
        )


@dataclass(frozen=True)
class HostInfo:
    """Boot time, uptime and process count, queried once per snapshot."""

    boot_time: float = 0.0
    uptime_seconds: int = 0
    process_count: int = 0


@dataclass(frozen=True)
class Snapshot:
    """One complete host metrics report."""

    platform: str
    platform_version: str
    distribution: str
    architecture: str
    virtualization: str
    cpu: CpuSummary
    memory: UsageSummary
    swap: UsageSummary
    disk: UsageSummary
    network: NetworkSummary
    load_average: LoadAverage
    uptime_seconds: int
    boot_time: str
    current_time: str
    process_count: int

    @property
    def uptime(self) -> str:
        return format_uptime(self.uptime_seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.platform,
            "platform_version": self.platform_version,
            "distribution": self.distribution,
            "virtualization": self.virtualization,
            "architecture": self.architecture,
            "cpu": self.cpu.to_dict(),
            "memory": self.memory.to_dict(),
            "swap": self.swap.to_dict(),
            "disk": self.disk.to_dict(),
            "network": self.network.to_dict(),
            "load_average": self.load_average.to_dict(),
            "uptime": self.uptime,
            "uptime_seconds": self.uptime_seconds,
            "boot_time": self.boot_time,
            "current_time": self.current_time,
            "process_count": self.process_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        return cls(
            platform=data["platform"],
            platform_version=data["platform_version"],
            distribution=data["distribution"],
            architecture=data["architecture"],
            virtualization=data["virtualization"],
            cpu=CpuSummary.from_dict(data["cpu"]),
            memory=UsageSummary.from_dict(data["memory"]),
            swap=UsageSummary.from_dict(data["swap"]),
            disk=UsageSummary.from_dict(data["disk"]),
            network=NetworkSummary.from_dict(data["network"]),
            load_average=LoadAverage.from_dict(data["load_average"]),
            uptime_seconds=data["uptime_seconds"],
            boot_time=data["boot_time"],
            current_time=data["current_time"],
            process_count=data["process_count"],
        )


@dataclass(frozen=True)
class Heartbeat:
    """Minimal liveness record."""

    timestamp: int
    status: str = field(default="online")

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "timestamp": self.timestamp}

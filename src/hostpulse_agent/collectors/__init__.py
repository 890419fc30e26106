"""Metrics collectors for host snapshots."""

from .identity import (
    collect_architecture,
    collect_cpu_model,
    collect_distribution,
    collect_platform,
    collect_platform_version,
    collect_virtualization,
)
from .system import (
    collect_cpu,
    collect_host,
    collect_load_average,
    collect_memory,
    collect_swap,
    prime_cpu_percent,
)
from .disks import aggregate_disks
from .network import collect_network_totals, sample_throughput
from .heartbeat import collect_heartbeat

__all__ = [
    "collect_architecture",
    "collect_cpu_model",
    "collect_distribution",
    "collect_platform",
    "collect_platform_version",
    "collect_virtualization",
    "collect_cpu",
    "collect_host",
    "collect_load_average",
    "collect_memory",
    "collect_swap",
    "prime_cpu_percent",
    "aggregate_disks",
    "collect_network_totals",
    "sample_throughput",
    "collect_heartbeat",
]

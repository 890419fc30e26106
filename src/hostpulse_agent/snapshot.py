"""Snapshot assembly."""

import logging
import threading
import time
from typing import Optional

from .collectors import (
    aggregate_disks,
    collect_architecture,
    collect_cpu,
    collect_distribution,
    collect_host,
    collect_load_average,
    collect_memory,
    collect_network_totals,
    collect_platform,
    collect_platform_version,
    collect_swap,
    collect_virtualization,
    prime_cpu_percent,
    sample_throughput,
)
from .formatting import format_timestamp
from .models import NetworkSummary, Snapshot

logger = logging.getLogger(__name__)


def collect_snapshot(
    sample_interval: float = 1.0,
    stop_event: Optional[threading.Event] = None,
) -> Snapshot:
    """
    Run every probe once and assemble a Snapshot.

    The throughput sample blocks for ``sample_interval`` seconds (less if
    ``stop_event`` is set, in which case the rates are reported as 0). The
    CPU percentage is measured over the same window.
    """
    prime_cpu_percent()
    throughput = sample_throughput(sample_interval, stop_event)
    if throughput is None:
        logger.debug("Throughput sample cancelled, reporting zero rates")

    sent, recv = collect_network_totals()
    network = NetworkSummary(
        upload_rate=throughput.upload if throughput else 0.0,
        download_rate=throughput.download if throughput else 0.0,
        upload_total=sent,
        download_total=recv,
    )

    host = collect_host()

    return Snapshot(
        platform=collect_platform(),
        platform_version=collect_platform_version(),
        distribution=collect_distribution(),
        architecture=collect_architecture(),
        virtualization=collect_virtualization(),
        cpu=collect_cpu(),
        memory=collect_memory(),
        swap=collect_swap(),
        disk=aggregate_disks(),
        network=network,
        load_average=collect_load_average(),
        uptime_seconds=host.uptime_seconds,
        boot_time=format_timestamp(host.boot_time),
        current_time=format_timestamp(time.time()),
        process_count=host.process_count,
    )

"""Disk usage aggregator."""

import logging

import psutil

from ..formatting import round_percent
from ..models import UsageSummary

logger = logging.getLogger(__name__)


def aggregate_disks(all_partitions: bool = True) -> UsageSummary:
    """
    Sum capacity across every mounted filesystem.

    Partitions whose usage cannot be read (permission denied, stale or
    vanished mounts) are left out of the totals. A mountpoint listed more
    than once is counted once.

    Args:
        all_partitions: Include pseudo and logical mounts (default: True)

    Returns:
        Aggregated total/used bytes and the overall used percentage
    """
    try:
        partitions = psutil.disk_partitions(all=all_partitions)
    except (OSError, RuntimeError) as e:
        logger.warning("Could not enumerate partitions: %s", e)
        return UsageSummary()

    total = 0
    used = 0
    seen = set()

    for partition in partitions:
        if partition.mountpoint in seen:
            continue
        seen.add(partition.mountpoint)

        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except Exception as e:
            logger.debug("Skipping %s: %s", partition.mountpoint, e)
            continue

        total += usage.total
        used += usage.used

    return UsageSummary(
        total_bytes=total,
        used_bytes=used,
        percent=round_percent(used, total),
    )

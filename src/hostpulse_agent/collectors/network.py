"""Network throughput sampler."""

import logging
import threading
from typing import Callable, Optional, Tuple

import psutil

from ..models import Throughput

logger = logging.getLogger(__name__)

Counters = Tuple[int, int]


def read_counters() -> Optional[Counters]:
    """
    Read cumulative (bytes_sent, bytes_recv) summed over all interfaces.

    Returns None when no interfaces are reported or the query fails.
    """
    try:
        counters = psutil.net_io_counters(pernic=False)
    except (OSError, RuntimeError) as e:
        logger.warning("Network counters unavailable: %s", e)
        return None

    if counters is None:
        return None
    return counters.bytes_sent, counters.bytes_recv


def collect_network_totals() -> Counters:
    """Cumulative sent/received bytes since boot, zeros on failure."""
    return read_counters() or (0, 0)


def compute_rate(before: int, after: int, interval: float) -> float:
    """Bytes/second between two counter reads. A counter reset yields 0."""
    if interval <= 0 or after < before:
        return 0.0
    return (after - before) / interval


def sample_throughput(
    interval: float = 1.0,
    stop_event: Optional[threading.Event] = None,
    reader: Callable[[], Optional[Counters]] = read_counters,
) -> Optional[Throughput]:
    """
    Measure upload/download rates over one interval.

    Reads the counters, waits ``interval`` seconds on ``stop_event``, then
    reads them again. The wait returns early once the event is set.

    Args:
        interval: Sampling window in seconds
        stop_event: Event that cancels the wait
        reader: Counter source, returning (sent, recv) or None

    Returns:
        Throughput for the window, or None if cancelled
    """
    if stop_event is None:
        stop_event = threading.Event()
    if stop_event.is_set():
        return None

    before = reader()
    if stop_event.wait(interval):
        return None
    after = reader()

    if not before or not after:
        return Throughput(upload=0.0, download=0.0, interval=interval)

    return Throughput(
        upload=compute_rate(before[0], after[0], interval),
        download=compute_rate(before[1], after[1], interval),
        interval=interval,
    )

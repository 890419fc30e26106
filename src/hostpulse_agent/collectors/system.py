"""CPU, memory, swap, load and host probes."""

import logging
import time

import psutil

from ..formatting import round2, round_percent
from ..models import CPU_PERCENT_UNAVAILABLE, CpuSummary, HostInfo, LoadAverage, UsageSummary
from .identity import collect_cpu_model

logger = logging.getLogger(__name__)


def prime_cpu_percent() -> None:
    """Start a CPU measurement window ending at the next collect_cpu() call."""
    try:
        psutil.cpu_percent(interval=None)
    except (OSError, RuntimeError) as e:
        logger.debug("Could not prime CPU counter: %s", e)


def collect_cpu() -> CpuSummary:
    """
    Collect CPU model, logical core count and utilization.

    Utilization is non-blocking: it covers the time since the previous
    psutil.cpu_percent() call (see prime_cpu_percent). Returns -1.0 as the
    percent when the counter cannot be read.
    """
    try:
        count = psutil.cpu_count(logical=True) or 0
    except (OSError, RuntimeError) as e:
        logger.warning("CPU count unavailable: %s", e)
        count = 0

    try:
        percent = round2(psutil.cpu_percent(interval=None))
    except (OSError, RuntimeError) as e:
        logger.warning("CPU percent unavailable: %s", e)
        percent = CPU_PERCENT_UNAVAILABLE

    return CpuSummary(model=collect_cpu_model(), count=count, percent=percent)


def collect_memory() -> UsageSummary:
    try:
        mem = psutil.virtual_memory()
    except (OSError, RuntimeError) as e:
        logger.warning("Memory stats unavailable: %s", e)
        return UsageSummary()

    return UsageSummary(
        total_bytes=mem.total,
        used_bytes=mem.used,
        percent=round_percent(mem.used, mem.total),
    )


def collect_swap() -> UsageSummary:
    try:
        swap = psutil.swap_memory()
    except (OSError, RuntimeError) as e:
        logger.warning("Swap stats unavailable: %s", e)
        return UsageSummary()

    return UsageSummary(
        total_bytes=swap.total,
        used_bytes=swap.used,
        percent=round_percent(swap.used, swap.total),
    )


def collect_load_average() -> LoadAverage:
    """1/5/15 minute load averages, or the error variant with a reason."""
    try:
        m1, m5, m15 = psutil.getloadavg()
    except (OSError, AttributeError) as e:
        logger.warning("Load average unavailable: %s", e)
        return LoadAverage.failed(str(e) or e.__class__.__name__)

    return LoadAverage.ok(m1, m5, m15)


def collect_host() -> HostInfo:
    """Boot time, uptime and process count. Zero-valued on failure."""
    try:
        boot_time = psutil.boot_time()
    except (OSError, RuntimeError) as e:
        logger.warning("Boot time unavailable: %s", e)
        boot_time = 0.0

    uptime_seconds = max(int(time.time() - boot_time), 0) if boot_time else 0

    try:
        process_count = len(psutil.pids())
    except (OSError, RuntimeError) as e:
        logger.warning("Process list unavailable: %s", e)
        process_count = 0

    return HostInfo(
        boot_time=boot_time,
        uptime_seconds=uptime_seconds,
        process_count=process_count,
    )

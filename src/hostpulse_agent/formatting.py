"""Unit formatting helpers for snapshot fields."""

import math
from datetime import datetime
from typing import Optional, Union

_UNITS = "KMGTPE"
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

Number = Union[int, float]


def format_bytes(n: Number) -> str:
    """
    Format a byte count with a binary unit suffix.

    Counts below 1024 are printed as whole bytes ("512B"). Larger counts are
    scaled by powers of 1024 and printed with two decimals ("1.00K").
    Anything beyond the exabyte range stays in exabytes.
    """
    if n < 0:
        raise ValueError(f"Byte count must be non-negative: {n}")

    n = int(n)
    if n < 1024:
        return f"{n}B"

    div, exp = 1024, 0
    scaled = n // 1024
    while scaled >= 1024 and exp < len(_UNITS) - 1:
        div *= 1024
        exp += 1
        scaled //= 1024

    return f"{n / div:.2f}{_UNITS[exp]}"


def format_uptime(seconds: Number) -> str:
    """Format an uptime as whole days, or HH:MM:SS below one day."""
    seconds = int(seconds)
    if seconds >= 86400:
        days = seconds // 86400
        return f"{days} day" if days == 1 else f"{days} days"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_timestamp(epoch: Optional[Number]) -> str:
    """Format epoch seconds as local time, or "unknown" when unset."""
    if not epoch:
        return "unknown"
    return datetime.fromtimestamp(epoch).strftime(_TIMESTAMP_FORMAT)


def round_percent(used: Number, total: Number) -> float:
    """Return used/total as a percentage in [0, 100] with two decimals."""
    if total <= 0:
        return 0.0

    # Round half up
    percent = math.floor(used * 10000 / total + 0.5) / 100
    return min(max(percent, 0.0), 100.0)


def round2(value: float) -> float:
    """Round a float to two decimals, half up."""
    return math.floor(value * 100 + 0.5) / 100

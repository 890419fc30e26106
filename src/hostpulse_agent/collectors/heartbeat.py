"""Heartbeat record builder."""

import time

from ..models import Heartbeat


def collect_heartbeat() -> Heartbeat:
    """Build an "online" heartbeat stamped with the current epoch second."""
    return Heartbeat(timestamp=int(time.time()))

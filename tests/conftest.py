"""Shared fixtures for the hostpulse agent test suite."""

import pytest

from hostpulse_agent.models import (
    CpuSummary,
    LoadAverage,
    NetworkSummary,
    Snapshot,
    UsageSummary,
)

MiB = 1024**2


def _build_snapshot(**overrides):
    fields = dict(
        platform="linux",
        platform_version="22.04",
        distribution="ubuntu-22.04",
        architecture="x86_64",
        virtualization="KVM",
        cpu=CpuSummary(model="AMD EPYC 7B13", count=4, percent=3.5),
        memory=UsageSummary(total_bytes=2048 * MiB, used_bytes=512 * MiB, percent=25.0),
        swap=UsageSummary(),
        disk=UsageSummary(total_bytes=100 * 1024**3, used_bytes=40 * 1024**3, percent=40.0),
        network=NetworkSummary(upload_rate=1000.0, download_rate=2048.5, upload_total=123456, download_total=7890123),
        load_average=LoadAverage.ok(0.1, 0.2, 0.3),
        uptime_seconds=3661,
        boot_time="2026-10-19 08:00:00",
        current_time="2026-10-19 09:01:01",
        process_count=211,
    )
    fields.update(overrides)
    return Snapshot(**fields)


@pytest.fixture
def make_snapshot():
    """Factory for a fully populated Snapshot; keyword arguments override fields."""
    return _build_snapshot


@pytest.fixture
def snapshot():
    return _build_snapshot()

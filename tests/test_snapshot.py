"""End-to-end tests for snapshot assembly with every probe mocked."""

import json
import threading
from unittest.mock import MagicMock, patch

from hostpulse_agent.models import (
    CpuSummary,
    HostInfo,
    LoadAverage,
    Snapshot,
    Throughput,
    UsageSummary,
)
from hostpulse_agent.snapshot import collect_snapshot

MiB = 1024**2
MODULE = "hostpulse_agent.snapshot"


def _mock_probes(throughput=Throughput(upload=1000.0, download=2000.0, interval=1.0), real=()):
    values = {
        "prime_cpu_percent": None,
        "sample_throughput": throughput,
        "collect_network_totals": (5 * MiB, 50 * MiB),
        "collect_host": HostInfo(boot_time=0.0, uptime_seconds=90061, process_count=321),
        "collect_platform": "linux",
        "collect_platform_version": "12",
        "collect_distribution": "debian-12",
        "collect_architecture": "aarch64",
        "collect_virtualization": "Physical",
        "collect_cpu": CpuSummary(model="Cortex-A72", count=4, percent=7.25),
        "collect_memory": UsageSummary(total_bytes=2048 * MiB, used_bytes=512 * MiB, percent=25.0),
        "collect_swap": UsageSummary(),
        "aggregate_disks": UsageSummary(total_bytes=1000, used_bytes=10, percent=1.0),
        "collect_load_average": LoadAverage.ok(0.5, 0.4, 0.3),
    }
    return {name: patch(f"{MODULE}.{name}", return_value=value) for name, value in values.items() if name not in real}


class _Probes:
    def __init__(self, **kwargs):
        self.patchers = _mock_probes(**kwargs)
        self.mocks = {}

    def __enter__(self):
        for name, patcher in self.patchers.items():
            self.mocks[name] = patcher.start()
        return self.mocks

    def __exit__(self, *exc):
        for patcher in self.patchers.values():
            patcher.stop()


class TestCollectSnapshot:
    def test_memory_percent(self):
        with _Probes():
            snapshot = collect_snapshot()
        assert snapshot.memory.percent == 25.0
        assert snapshot.to_dict()["memory"]["percent"] == 25.0

    def test_memory_percent_from_counters(self):
        vmem = MagicMock(total=2048 * MiB, used=512 * MiB)
        with _Probes(real=("collect_memory",)), \
                patch("hostpulse_agent.collectors.system.psutil.virtual_memory", return_value=vmem):
            snapshot = collect_snapshot()
        assert snapshot.memory.used_bytes == 512 * MiB
        assert snapshot.memory.percent == 25.0
        assert snapshot.to_dict()["memory"]["total"] == "2.00G"

    def test_fields_merged(self):
        with _Probes():
            data = collect_snapshot().to_dict()
        assert data["platform"] == "linux"
        assert data["distribution"] == "debian-12"
        assert data["architecture"] == "aarch64"
        assert data["virtualization"] == "Physical"
        assert data["cpu"] == {"model": "Cortex-A72", "count": 4, "percent": 7.25}
        assert data["network"]["upload_speed"] == "1000B"
        assert data["network"]["download_speed"] == "1.95K"
        assert data["network"]["upload_total"] == "5.00M"
        assert data["network"]["download_total"] == "50.00M"
        assert data["uptime"] == "1 day"
        assert data["boot_time"] == "unknown"
        assert data["process_count"] == 321
        assert data["load_average"]["status"] == "ok"

    def test_each_probe_called_once(self):
        with _Probes() as mocks:
            collect_snapshot(sample_interval=0.5)
        for name, mock in mocks.items():
            assert mock.call_count == 1, name
        assert mocks["sample_throughput"].call_args[0][0] == 0.5

    def test_cancelled_sample_reports_zero_rates(self):
        with _Probes(throughput=None):
            snapshot = collect_snapshot(stop_event=threading.Event())
        assert snapshot.network.upload_rate == 0.0
        assert snapshot.network.download_rate == 0.0
        assert snapshot.network.upload_total == 5 * MiB

    def test_round_trip(self):
        with _Probes():
            snapshot = collect_snapshot()
        assert Snapshot.from_dict(json.loads(json.dumps(snapshot.to_dict()))) == snapshot

    def test_independent_invocations(self):
        with _Probes():
            first = collect_snapshot()
            second = collect_snapshot()
        assert first is not second
        assert first.memory == second.memory


class TestCollectSnapshotFallbacks:
    def test_failed_probes_still_produce_full_schema(self):
        with _Probes() as mocks:
            mocks["collect_cpu"].return_value = CpuSummary(model="x86_64", count=0, percent=-1.0)
            mocks["collect_memory"].return_value = UsageSummary()
            mocks["collect_load_average"].return_value = LoadAverage.failed("unsupported")
            data = collect_snapshot().to_dict()
        assert data["cpu"]["percent"] == -1.0
        assert data["memory"]["total"] == "0B"
        assert data["load_average"] == {
            "status": "error",
            "1min": None,
            "5min": None,
            "15min": None,
            "error": "unsupported",
        }

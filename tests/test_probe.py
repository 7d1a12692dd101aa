"""Tests for the probe layer."""

from __future__ import annotations

import logging
from types import SimpleNamespace

import psutil
import pytest

from host_exporter.errors import NoSensorsFound, ProbeIoError, ProbeParseError
from host_exporter.probe.cpu import CpuUsageProbe, PsutilCpuFrequencyProbe, SysfsCpuFrequencyProbe
from host_exporter.probe.disk import DiskIoProbe
from host_exporter.probe.memory import MemoryProbe, SwapProbe
from host_exporter.probe.network import NetworkIoProbe
from host_exporter.probe.reader import FileReader, LocalFileReader
from host_exporter.probe.snapshot import CpuSnapshot


class HardcodedReader(FileReader):
    """Serves file content from a dict; missing paths raise FileNotFoundError."""

    def __init__(self, files: dict[str, str | bytes], errors: dict[str, OSError] | None = None) -> None:
        self.files = files
        self.errors = errors or {}
        self.reads: list[str] = []

    def read_bytes(self, path: str) -> bytes:
        self.reads.append(path)
        if path in self.errors:
            raise self.errors[path]
        try:
            content = self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None
        return content.encode() if isinstance(content, str) else content


def cpu_freq_path(cpu: int) -> str:
    return f"/sys/devices/system/cpu/cpu{cpu}/cpufreq/scaling_cur_freq"


# ---------------------------------------------------------------------------
# Sysfs CPU frequency
# ---------------------------------------------------------------------------

class TestSysfsCpuFrequency:

    def test_four_cores_scaled_to_hertz(self):
        reader = HardcodedReader({
            cpu_freq_path(0): "1100980",
            cpu_freq_path(1): "883485",
            cpu_freq_path(2): "4203950",
            cpu_freq_path(3): "5100362",
        })
        stats = SysfsCpuFrequencyProbe(reader).cpu_frequency()

        assert len(stats.cores) == 4
        assert stats.cores[0] == 1100980 * 1000
        assert stats.cores[1] == 883485 * 1000
        assert stats.cores[2] == 4203950 * 1000
        assert stats.cores[3] == 5100362 * 1000

    def test_stops_at_first_missing_core(self):
        reader = HardcodedReader({cpu_freq_path(i): "1000" for i in range(4)})
        stats = SysfsCpuFrequencyProbe(reader).cpu_frequency()

        assert len(stats.cores) == 4
        assert reader.reads[-1] == cpu_freq_path(4)
        assert len(reader.reads) == 5

    def test_trailing_newline_is_accepted(self):
        reader = HardcodedReader({cpu_freq_path(0): "1100980\n"})
        stats = SysfsCpuFrequencyProbe(reader).cpu_frequency()
        assert stats.cores == (1100980000,)

    def test_no_cores_is_an_error(self):
        with pytest.raises(NoSensorsFound):
            SysfsCpuFrequencyProbe(HardcodedReader({})).cpu_frequency()

    def test_malformed_core_reads_as_zero(self, caplog):
        reader = HardcodedReader({
            cpu_freq_path(0): "1100980",
            cpu_freq_path(1): "garbage",
            cpu_freq_path(2): "883485",
        })
        with caplog.at_level(logging.ERROR):
            stats = SysfsCpuFrequencyProbe(reader).cpu_frequency()

        assert stats.cores == (1100980000, 0, 883485000)
        assert "core 1" in caplog.text

    def test_undecodable_core_reads_as_zero(self, caplog):
        reader = HardcodedReader({
            cpu_freq_path(0): b"1200000",
            cpu_freq_path(1): b"\xff\xfe",
            cpu_freq_path(2): b"2400000",
        })
        with caplog.at_level(logging.ERROR):
            stats = SysfsCpuFrequencyProbe(reader).cpu_frequency()

        assert stats.cores == (1_200_000_000, 0, 2_400_000_000)
        assert "core 1" in caplog.text

    def test_walks_past_256_cores(self):
        reader = HardcodedReader({cpu_freq_path(i): str(1000 + i) for i in range(300)})
        stats = SysfsCpuFrequencyProbe(reader).cpu_frequency()

        assert len(stats.cores) == 300
        assert stats.cores[299] == 1299 * 1000
        assert reader.reads[-1] == cpu_freq_path(300)

    def test_all_cores_malformed_is_a_parse_error(self):
        reader = HardcodedReader({cpu_freq_path(0): "", cpu_freq_path(1): "n/a"})
        with pytest.raises(ProbeParseError):
            SysfsCpuFrequencyProbe(reader).cpu_frequency()

    def test_other_io_errors_are_fatal(self):
        reader = HardcodedReader(
            {cpu_freq_path(0): "1000", cpu_freq_path(1): "1000"},
            errors={cpu_freq_path(1): PermissionError("denied")},
        )
        with pytest.raises(ProbeIoError):
            SysfsCpuFrequencyProbe(reader).cpu_frequency()

    def test_custom_root(self):
        reader = HardcodedReader({"/tmp/fake/cpu0/cpufreq/scaling_cur_freq": "42"})
        probe = SysfsCpuFrequencyProbe(reader, root="/tmp/fake/")
        assert probe.cpu_frequency().cores == (42000,)

    def test_local_reader_on_real_files(self, tmp_path):
        for core, khz in enumerate(("1200000", "2400000")):
            freq_dir = tmp_path / f"cpu{core}" / "cpufreq"
            freq_dir.mkdir(parents=True)
            (freq_dir / "scaling_cur_freq").write_text(khz + "\n")

        probe = SysfsCpuFrequencyProbe(LocalFileReader(), root=str(tmp_path))
        assert probe.cpu_frequency().cores == (1_200_000_000, 2_400_000_000)

    def test_local_reader_with_binary_garbage(self, tmp_path):
        for core, raw in enumerate((b"1200000\n", b"\xff\xfe", b"2400000\n")):
            freq_dir = tmp_path / f"cpu{core}" / "cpufreq"
            freq_dir.mkdir(parents=True)
            (freq_dir / "scaling_cur_freq").write_bytes(raw)

        probe = SysfsCpuFrequencyProbe(LocalFileReader(), root=str(tmp_path))
        assert probe.cpu_frequency().cores == (1_200_000_000, 0, 2_400_000_000)


# ---------------------------------------------------------------------------
# Snapshot-backed CPU probes
# ---------------------------------------------------------------------------

def _snapshot(usage, freq=()):
    return CpuSnapshot(sampler=lambda: (list(usage), list(freq)))


def test_cpu_usage_is_a_ratio():
    stats = CpuUsageProbe(_snapshot([50.0, 100.0, 0.0])).cpu_usage()
    assert stats.cores == (0.5, 1.0, 0.0)
    assert stats.total == pytest.approx(0.5)


def test_cpu_usage_clamps_out_of_range_values():
    stats = CpuUsageProbe(_snapshot([104.0, -1.0])).cpu_usage()
    assert stats.cores == (1.0, 0.0)


def test_cpu_usage_without_cores():
    with pytest.raises(NoSensorsFound):
        CpuUsageProbe(_snapshot([])).cpu_usage()


def test_psutil_frequency_converts_mhz():
    stats = PsutilCpuFrequencyProbe(_snapshot([10.0, 20.0], [2000.0, 800.0])).cpu_frequency()
    assert stats.cores == (2_000_000_000, 800_000_000)


def test_psutil_frequency_without_data():
    with pytest.raises(NoSensorsFound):
        PsutilCpuFrequencyProbe(_snapshot([10.0])).cpu_frequency()


def test_real_cpu_usage_probe():
    stats = CpuUsageProbe(CpuSnapshot()).cpu_usage()
    assert len(stats.cores) > 0
    assert 0.0 <= stats.total <= 1.0


# ---------------------------------------------------------------------------
# psutil-backed probes
# ---------------------------------------------------------------------------

def test_memory_probe():
    stats = MemoryProbe().memory()
    assert stats.total > 0
    assert 0 <= stats.available <= stats.total


def test_swap_probe():
    stats = SwapProbe().swap()
    assert stats.total >= 0
    assert stats.used >= 0


def test_memory_probe_wraps_psutil_errors(monkeypatch):
    def boom():
        raise psutil.AccessDenied()

    monkeypatch.setattr(psutil, "virtual_memory", boom)
    with pytest.raises(ProbeIoError):
        MemoryProbe().memory()


def test_disk_probe_maps_counters(monkeypatch):
    counters = {
        "sdb": SimpleNamespace(read_bytes=10, write_bytes=20),
        "sda": SimpleNamespace(read_bytes=1, write_bytes=2),
    }
    monkeypatch.setattr(psutil, "disk_io_counters", lambda **_: counters)

    stats = DiskIoProbe().disk_io()
    assert [d.device_name for d in stats.devices] == ["sda", "sdb"]
    assert stats.devices[1].bytes_read == 10
    assert stats.devices[1].bytes_written == 20


def test_disk_probe_without_devices(monkeypatch):
    monkeypatch.setattr(psutil, "disk_io_counters", lambda **_: {})
    with pytest.raises(NoSensorsFound):
        DiskIoProbe().disk_io()


def test_disk_probe_wraps_os_errors(monkeypatch):
    def boom(**_):
        raise OSError("no /proc/diskstats")

    monkeypatch.setattr(psutil, "disk_io_counters", boom)
    with pytest.raises(ProbeIoError):
        DiskIoProbe().disk_io()


def test_network_probe_maps_counters(monkeypatch):
    counters = {
        "eth0": SimpleNamespace(bytes_sent=1, bytes_recv=2, packets_sent=3, packets_recv=4),
    }
    monkeypatch.setattr(psutil, "net_io_counters", lambda **_: counters)

    (iface,) = NetworkIoProbe().network_io().interfaces
    assert iface.interface == "eth0"
    assert (iface.bytes_sent, iface.bytes_received) == (1, 2)
    assert (iface.packets_sent, iface.packets_received) == (3, 4)


def test_network_probe_without_interfaces(monkeypatch):
    monkeypatch.setattr(psutil, "net_io_counters", lambda **_: {})
    with pytest.raises(NoSensorsFound):
        NetworkIoProbe().network_io()


def test_real_network_probe():
    stats = NetworkIoProbe().network_io()
    assert len(stats.interfaces) > 0

"""CPU usage and CPU frequency probes."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

from ..errors import NoSensorsFound, ProbeIoError, ProbeParseError
from .reader import FileReader, LocalFileReader
from .snapshot import CpuSnapshot

logger = logging.getLogger(__name__)

SYSFS_CPU_ROOT = "/sys/devices/system/cpu"


@dataclass(frozen=True)
class CpuUsageStats:
    """CPU usage as ratios in [0.0, 1.0]."""

    total: float
    cores: tuple[float, ...]


@dataclass(frozen=True)
class CpuFrequencyStats:
    """Per-core clock frequency in hertz, indexed by core number."""

    cores: tuple[int, ...]


class CpuUsageProbe:
    """Derives usage ratios from the shared CPU snapshot."""

    def __init__(self, snapshot: CpuSnapshot) -> None:
        self._snapshot = snapshot

    def cpu_usage(self) -> CpuUsageStats:
        reading = self._snapshot.current()
        if not reading.usage_percent:
            raise NoSensorsFound("No CPU usage counters reported")
        cores = tuple(_ratio(pct) for pct in reading.usage_percent)
        return CpuUsageStats(total=sum(cores) / len(cores), cores=cores)


def _ratio(percent: float) -> float:
    return min(max(percent / 100.0, 0.0), 1.0)


class SysfsCpuFrequencyProbe:
    """Reads ``scaling_cur_freq`` for each core from sysfs.

    Cores are probed from index 0 upward until a file is missing. Values
    are reported by the kernel in kHz and returned in Hz. A core whose
    content does not parse is reported as 0 so the other cores survive.
    """

    def __init__(self, reader: FileReader | None = None, root: str = SYSFS_CPU_ROOT) -> None:
        self._reader = reader or LocalFileReader()
        self._root = root.rstrip("/")

    def core_path(self, core: int) -> str:
        return f"{self._root}/cpu{core}/cpufreq/scaling_cur_freq"

    def cpu_frequency(self) -> CpuFrequencyStats:
        cores: list[int] = []
        parse_failures = 0

        for core in itertools.count():
            try:
                content = self._reader.read_bytes(self.core_path(core))
            except FileNotFoundError:
                # no more cores
                break
            except OSError as exc:
                raise ProbeIoError(f"Failed to read CPU {core} frequency: {exc}") from exc

            try:
                khz = int(content.decode("ascii").strip())
            except ValueError:
                logger.error("Failed to parse the CPU frequency for core %d: %r", core, content)
                parse_failures += 1
                khz = 0
            cores.append(khz * 1000)

        if not cores:
            raise NoSensorsFound(f"No CPU frequency sensors found under {self._root}")
        if parse_failures == len(cores):
            raise ProbeParseError(f"No CPU frequency value under {self._root} could be parsed")

        return CpuFrequencyStats(cores=tuple(cores))


class PsutilCpuFrequencyProbe:
    """Reads per-core frequency from the shared CPU snapshot (psutil reports MHz)."""

    def __init__(self, snapshot: CpuSnapshot) -> None:
        self._snapshot = snapshot

    def cpu_frequency(self) -> CpuFrequencyStats:
        reading = self._snapshot.current()
        if not reading.frequency_mhz:
            raise NoSensorsFound("psutil reported no CPU frequency data")
        return CpuFrequencyStats(cores=tuple(int(mhz * 1_000_000) for mhz in reading.frequency_mhz))

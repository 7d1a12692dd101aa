"""Collector assembly and the scrape orchestrator."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from prometheus_client import CollectorRegistry, generate_latest

from ..config import CollectorsConfig, ScrapeConfig
from ..errors import ScrapeError
from ..probe.cpu import CpuUsageProbe, PsutilCpuFrequencyProbe, SysfsCpuFrequencyProbe
from ..probe.disk import DiskIoProbe
from ..probe.memory import MemoryProbe, SwapProbe
from ..probe.network import NetworkIoProbe
from ..probe.snapshot import CpuSnapshot
from .base import Collector, NoOpCollector
from .cpu_frequency import CpuFrequency, CpuFrequencySource
from .cpu_usage import CpuUsage, CpuUsageSource
from .disk_io import DiskIo, DiskIoSource
from .memory import Memory, MemorySource
from .network_io import NetworkIo, NetworkIoSource
from .swap import Swap, SwapSource

logger = logging.getLogger(__name__)


@dataclass
class DataSources:
    """One data source per metric family."""

    cpu_usage: CpuUsageSource
    cpu_frequency: CpuFrequencySource
    memory: MemorySource
    swap: SwapSource
    disk_io: DiskIoSource
    network_io: NetworkIoSource


def default_data_sources(
    config: CollectorsConfig,
    scrape: ScrapeConfig | None = None,
    snapshot: CpuSnapshot | None = None,
) -> DataSources:
    """Build the host probes. CPU usage and psutil frequency share one snapshot."""
    scrape = scrape or ScrapeConfig()
    if snapshot is None:
        snapshot = CpuSnapshot(
            min_interval=scrape.cpu_min_refresh_seconds,
            lock_timeout=scrape.snapshot_lock_timeout_seconds,
        )

    if config.cpu_frequency.source == "psutil":
        frequency: CpuFrequencySource = PsutilCpuFrequencyProbe(snapshot)
    else:
        frequency = SysfsCpuFrequencyProbe(root=config.cpu_frequency.sysfs_root)

    return DataSources(
        cpu_usage=CpuUsageProbe(snapshot),
        cpu_frequency=frequency,
        memory=MemoryProbe(),
        swap=SwapProbe(),
        disk_io=DiskIoProbe(),
        network_io=NetworkIoProbe(),
    )


def init_collectors(
    config: CollectorsConfig,
    registry: CollectorRegistry,
    sources: DataSources,
) -> list[Collector]:
    """Register every configured family and return its collector.

    Disabled families come back as no-op collectors so the list always has
    one entry per family, in a fixed order.
    """
    metrics = [
        (CpuUsage(config.cpu_usage), sources.cpu_usage),
        (CpuFrequency(config.cpu_frequency), sources.cpu_frequency),
        (Memory(config.memory), sources.memory),
        (Swap(config.swap), sources.swap),
        (DiskIo(config.disk_io), sources.disk_io),
        (NetworkIo(config.network_io), sources.network_io),
    ]
    return [metric.register(registry, source) for metric, source in metrics]


class CollectorManager:
    """Runs every collector on demand and renders the registry.

    With ``fail_fast`` off, a failing collector is logged and skipped; its
    series keep their last values and every other family is still exposed.
    With ``fail_fast`` on, the first failure aborts the scrape with
    :class:`ScrapeError`.
    """

    def __init__(
        self,
        collectors: list[Collector],
        registry: CollectorRegistry,
        fail_fast: bool = False,
    ) -> None:
        self._collectors = list(collectors)
        self._registry = registry
        self._fail_fast = fail_fast

    @classmethod
    def from_config(
        cls,
        config: CollectorsConfig,
        scrape: ScrapeConfig | None = None,
        registry: CollectorRegistry | None = None,
        sources: DataSources | None = None,
    ) -> CollectorManager:
        scrape = scrape or ScrapeConfig()
        registry = registry or CollectorRegistry()
        sources = sources or default_data_sources(config, scrape)
        collectors = init_collectors(config, registry, sources)
        enabled = [c.name for c in collectors if not isinstance(c, NoOpCollector)]
        logger.info("Collectors initialised: %s", ", ".join(enabled) or "(none)")
        return cls(collectors, registry, fail_fast=scrape.fail_fast)

    @property
    def collectors(self) -> list[Collector]:
        return list(self._collectors)

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def _handle_failure(self, collector: Collector, exc: Exception, failed: list[str]) -> None:
        if self._fail_fast:
            raise ScrapeError(collector.name, exc) from exc
        logger.exception("Collector %s failed", collector.name)
        failed.append(collector.name)

    def collect_once(self) -> list[str]:
        """Run all collectors once. Returns the names of those that failed."""
        failed: list[str] = []
        for collector in self._collectors:
            try:
                collector.collect()
            except Exception as exc:
                self._handle_failure(collector, exc, failed)
        return failed

    async def acollect_once(self) -> list[str]:
        """Like :meth:`collect_once`, with blocking collectors run in worker threads."""
        failed: list[str] = []
        for collector in self._collectors:
            try:
                if collector.blocking:
                    await asyncio.to_thread(collector.collect)
                else:
                    collector.collect()
            except Exception as exc:
                self._handle_failure(collector, exc, failed)
        return failed

    def render(self) -> bytes:
        """Serialize the registry in the Prometheus text exposition format."""
        return generate_latest(self._registry)

    def scrape(self) -> bytes:
        self.collect_once()
        return self.render()

    async def ascrape(self) -> bytes:
        await self.acollect_once()
        return self.render()

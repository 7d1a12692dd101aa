"""Base interfaces for metric families and their collectors."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from prometheus_client import CollectorRegistry, Gauge
from prometheus_client.metrics_core import Metric as PromMetric
from prometheus_client.registry import Collector as RegistryCollector

from ..config import MetricConfig
from ..errors import RegistrationError

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound=MetricConfig)


@dataclass(frozen=True)
class MetricDefinition:
    """Name, help text and label schema of one exposed series."""

    name: str
    documentation: str
    labelnames: tuple[str, ...] = ()


class ObservedGauge(RegistryCollector):
    """A gauge that stays out of the exposition until it holds a real value.

    prometheus_client starts an unlabeled gauge at 0.0. Wrapping it keeps a
    family whose probe has never succeeded absent instead of reporting zeros,
    while ``describe`` still reserves the name in the registry.
    """

    def __init__(self, definition: MetricDefinition) -> None:
        self.definition = definition
        self._gauge = Gauge(
            definition.name,
            definition.documentation,
            labelnames=definition.labelnames,
            registry=None,
        )
        self._observed = False

    def set(self, value: float) -> None:
        self._gauge.set(value)
        self._observed = True

    def labels(self, **labelvalues: str) -> Gauge:
        return self._gauge.labels(**labelvalues)

    def describe(self) -> Iterable[PromMetric]:
        return self._gauge.describe()

    def collect(self) -> Iterable[PromMetric]:
        if not self.definition.labelnames:
            return self._gauge.collect() if self._observed else []
        # labeled families appear once at least one child exists
        return [m for m in self._gauge.collect() if m.samples]


def register_gauge(registry: CollectorRegistry, definition: MetricDefinition) -> ObservedGauge:
    """Create a gauge for *definition* and register it in *registry*."""
    gauge = ObservedGauge(definition)
    try:
        registry.register(gauge)
    except ValueError as exc:
        raise RegistrationError(f"Cannot register metric {definition.name}: {exc}") from exc
    return gauge


class Collector(abc.ABC):
    """Refreshes the values of one metric family on demand."""

    # Collectors whose probes do I/O are run off the event loop.
    blocking: bool = True

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Family name used in configuration and logs."""

    @abc.abstractmethod
    def collect(self) -> None:
        """Read current values from the data source and update the gauges."""


class NoOpCollector(Collector):
    """Stands in for a disabled family; does nothing."""

    blocking = False

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def collect(self) -> None:
        return None


class Metric(abc.ABC, Generic[ConfigT]):
    """Config-gated factory that binds a family's gauges to a data source."""

    name: str = ""
    definitions: tuple[MetricDefinition, ...] = ()

    def __init__(self, config: ConfigT) -> None:
        self.config = config

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def register(self, registry: CollectorRegistry, data_source: Any) -> Collector:
        """Register the family's series and return its collector.

        A disabled family registers nothing and yields a :class:`NoOpCollector`.
        """
        if not self.enabled:
            logger.info("Metric %s disabled", self.name)
            return NoOpCollector(self.name)

        gauges = {d.name: register_gauge(registry, d) for d in self.definitions}
        logger.info("Metric %s registered (%d series)", self.name, len(gauges))
        return self.build_collector(gauges, data_source)

    @abc.abstractmethod
    def build_collector(self, gauges: dict[str, ObservedGauge], data_source: Any) -> Collector:
        """Create the collector for an enabled family."""

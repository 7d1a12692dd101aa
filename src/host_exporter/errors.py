"""Exception hierarchy for host_exporter."""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for all exporter errors."""


class ProbeError(ExporterError):
    """A data source could not produce a measurement."""


class ProbeIoError(ProbeError):
    """The underlying file or OS read failed."""


class ProbeParseError(ProbeError):
    """Content was read but none of it could be interpreted."""


class NoSensorsFound(ProbeError):
    """The probe ran cleanly but found no entities to report."""


class SnapshotUnavailable(ExporterError):
    """The shared CPU snapshot could not be read safely."""


class RegistrationError(ExporterError):
    """A metric could not be registered (usually a duplicate name)."""


class ScrapeError(ExporterError):
    """A collector failed while the manager was running in fail-fast mode."""

    def __init__(self, collector: str, cause: BaseException) -> None:
        super().__init__(f"Collector {collector} failed: {cause}")
        self.collector = collector
        self.cause = cause

"""Host metrics exporter: samples OS counters and serves them to Prometheus."""

__version__ = "0.1.0"

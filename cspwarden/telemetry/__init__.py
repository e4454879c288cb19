"""Relay of accepted reports to log and metric telemetry stores.

Public API
----------
TelemetryConfig
    Frozen destinations read from the environment.
TelemetryForwarder
    Builds and dispatches log records and metric data points.
TelemetrySinks
    Sink adapters handed to the forwarder.
ClientContext
    Client IP and user agent recorded with each log record.
LogSink, MetricSink
    Ports implemented by sink adapters.
CloudWatchLogSink, CloudWatchMetricSink
    CloudWatch adapters for the two ports.
build_forwarder
    Wire a forwarder to CloudWatch from configuration.
SinkDeliveryError
    Raised when a sink call fails.
"""

from cspwarden.telemetry.cloudwatch import CloudWatchLogSink, CloudWatchMetricSink
from cspwarden.telemetry.config import TelemetryConfig
from cspwarden.telemetry.errors import (
    SinkDeliveryError,
    TelemetryConfigError,
    TelemetryError,
)
from cspwarden.telemetry.factory import build_forwarder
from cspwarden.telemetry.forwarder import (
    ClientContext,
    TelemetryForwarder,
    TelemetrySinks,
)
from cspwarden.telemetry.sink import (
    LogDestination,
    LogEvent,
    LogSink,
    MetricDatum,
    MetricDestination,
    MetricDimension,
    MetricSink,
)

__all__ = [
    "ClientContext",
    "CloudWatchLogSink",
    "CloudWatchMetricSink",
    "LogDestination",
    "LogEvent",
    "LogSink",
    "MetricDatum",
    "MetricDestination",
    "MetricDimension",
    "MetricSink",
    "SinkDeliveryError",
    "TelemetryConfig",
    "TelemetryConfigError",
    "TelemetryError",
    "TelemetryForwarder",
    "TelemetrySinks",
    "build_forwarder",
]

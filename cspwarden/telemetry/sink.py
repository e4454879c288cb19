"""Ports for the two telemetry stores reports are relayed to.

The log sink receives timestamped text records for a named group and
stream. The metric sink receives single data points for a namespaced
metric. Adapters live in :mod:`cspwarden.telemetry.cloudwatch`; tests
provide in-memory fakes.

Both protocols are ``runtime_checkable`` so wiring code and tests can
check an adapter with ``isinstance``.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

__all__ = [
    "COUNT_UNIT",
    "LogDestination",
    "LogEvent",
    "LogSink",
    "MetricDatum",
    "MetricDestination",
    "MetricDimension",
    "MetricSink",
]

COUNT_UNIT = "Count"


@dc.dataclass(frozen=True, slots=True)
class LogDestination:
    """Log group and stream receiving report records."""

    group_name: str
    stream_name: str


@dc.dataclass(frozen=True, slots=True)
class MetricDestination:
    """Namespace and metric name receiving violation counts."""

    namespace: str
    metric_name: str


@dc.dataclass(frozen=True, slots=True)
class LogEvent:
    """One timestamped log record.

    Attributes
    ----------
    timestamp_ms
        Milliseconds since the Unix epoch.
    message
        Serialized record text.

    """

    timestamp_ms: int
    message: str


@dc.dataclass(frozen=True, slots=True)
class MetricDimension:
    """Named dimension attached to a metric data point."""

    name: str
    value: str


@dc.dataclass(frozen=True, slots=True)
class MetricDatum:
    """Single metric data point.

    Attributes
    ----------
    dimensions
        Dimensions in the order they are sent.
    timestamp
        Aware UTC time of the observation.
    value
        Observed value.
    unit
        Unit label understood by the metric store.

    """

    dimensions: tuple[MetricDimension, ...]
    timestamp: dt.datetime
    value: float = 1
    unit: str = COUNT_UNIT


@typ.runtime_checkable
class LogSink(typ.Protocol):
    """Protocol for writing records to a log store."""

    async def put_log_events(
        self,
        destination: LogDestination,
        events: cabc.Sequence[LogEvent],
    ) -> None:
        """Write *events* to *destination*.

        Raises
        ------
        SinkDeliveryError
            If the store rejects the write or cannot be reached.

        """
        ...


@typ.runtime_checkable
class MetricSink(typ.Protocol):
    """Protocol for publishing data points to a metric store."""

    async def put_metric_datum(
        self,
        destination: MetricDestination,
        datum: MetricDatum,
    ) -> None:
        """Publish *datum* under *destination*.

        Raises
        ------
        SinkDeliveryError
            If the store rejects the data point or cannot be reached.

        """
        ...

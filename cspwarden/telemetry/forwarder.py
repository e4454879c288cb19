"""Relay accepted reports to the log sink, the metric sink, or both.

The forwarder is bound to a frozen :class:`TelemetryConfig` at
construction. For each report it builds a log record when the log
destination is active and a metric data point when the metric destination
is active, then dispatches whichever exist. When both exist the two sink
calls run concurrently and ``forward`` returns once both have completed;
a failure in either propagates to the caller. The sinks are independent:
nothing is skipped because the other sink failed.

Usage
-----
>>> forwarder = TelemetryForwarder(
...     TelemetryConfig.from_env(),
...     codec=SchemaCodec(),
...     sinks=TelemetrySinks(log=log_sink, metric=metric_sink),
... )
>>> await forwarder.forward(report, ClientContext(client_ip="2001:db8::1"))

"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import typing as typ

from cspwarden.common.time import to_epoch_millis, utcnow
from cspwarden.schema.models import EnrichedReportRecord
from cspwarden.telemetry.errors import TelemetryConfigError
from cspwarden.telemetry.sink import (
    LogDestination,
    LogEvent,
    LogSink,
    MetricDatum,
    MetricDestination,
    MetricDimension,
    MetricSink,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from cspwarden.schema.codec import SchemaCodec
    from cspwarden.schema.models import CspViolationReport
    from cspwarden.telemetry.config import TelemetryConfig

__all__ = [
    "SOURCE_FILE_PLACEHOLDER",
    "ClientContext",
    "TelemetryForwarder",
    "TelemetrySinks",
    "build_metric_dimensions",
]

SOURCE_FILE_PLACEHOLDER = "none"


@dc.dataclass(frozen=True, slots=True)
class ClientContext:
    """Client details recorded alongside a report in the log sink."""

    client_ip: str | None = None
    user_agent: str | None = None


@dc.dataclass(frozen=True, slots=True)
class TelemetrySinks:
    """Sink adapters available to the forwarder."""

    log: LogSink | None = None
    metric: MetricSink | None = None


@dc.dataclass(frozen=True, slots=True)
class _LogRoute:
    destination: LogDestination
    sink: LogSink


@dc.dataclass(frozen=True, slots=True)
class _MetricRoute:
    destination: MetricDestination
    sink: MetricSink


def build_metric_dimensions(
    report: CspViolationReport,
) -> tuple[MetricDimension, ...]:
    """Return the metric dimensions for *report*, in their fixed order.

    The order is violated directive, source file, blocked URI, document
    URI. A null source file is sent as ``"none"``.
    """
    body = report.csp_report
    source_file = body.source_file
    if source_file is None:
        source_file = SOURCE_FILE_PLACEHOLDER
    return (
        MetricDimension("ViolatedDirective", body.violated_directive),
        MetricDimension("SourceFile", source_file),
        MetricDimension("BlockedUri", body.blocked_uri),
        MetricDimension("DocumentUri", body.document_uri),
    )


class TelemetryForwarder:
    """Relay validated reports to the configured telemetry sinks.

    Parameters
    ----------
    config
        Frozen telemetry configuration.
    codec
        Codec used to serialize log records.
    sinks
        Sink adapters. A sink must be supplied for every active
        destination when forwarding is enabled.
    clock
        Source of aware UTC timestamps.

    Raises
    ------
    TelemetryConfigError
        If an active destination has no matching sink.

    """

    def __init__(
        self,
        config: TelemetryConfig,
        *,
        codec: SchemaCodec,
        sinks: TelemetrySinks | None = None,
        clock: cabc.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        """Resolve the active routes from *config* and *sinks*."""
        sinks = sinks or TelemetrySinks()
        self._codec = codec
        self._clock = clock
        self._enabled = config.forwarding_enabled
        self._log_route: _LogRoute | None = None
        self._metric_route: _MetricRoute | None = None
        if not self._enabled:
            return

        log_destination = config.log_destination
        if log_destination is not None:
            if sinks.log is None:
                raise TelemetryConfigError.missing_sink("log")
            self._log_route = _LogRoute(log_destination, sinks.log)

        metric_destination = config.metric_destination
        if metric_destination is not None:
            if sinks.metric is None:
                raise TelemetryConfigError.missing_sink("metric")
            self._metric_route = _MetricRoute(metric_destination, sinks.metric)

    @property
    def enabled(self) -> bool:
        """Whether forwarding is enabled by configuration."""
        return self._enabled

    async def forward(
        self,
        report: CspViolationReport,
        context: ClientContext | None = None,
    ) -> None:
        """Relay *report* to every active sink.

        Parameters
        ----------
        report
            Validated report.
        context
            Client details added to the log record only.

        Raises
        ------
        SinkDeliveryError
            If a sink call fails. With both sinks active, the first failure
            is raised once it occurs.

        """
        if not self._enabled:
            return

        now = self._clock()
        log_event = self._build_log_event(report, context or ClientContext(), now)
        metric_datum = self._build_metric_datum(report, now)

        match (log_event, metric_datum):
            case (None, None):
                return
            case (LogEvent() as event, None):
                await self._send_log(event)
            case (None, MetricDatum() as datum):
                await self._send_metric(datum)
            case (LogEvent() as event, MetricDatum() as datum):
                await asyncio.gather(self._send_log(event), self._send_metric(datum))

    def _build_log_event(
        self,
        report: CspViolationReport,
        context: ClientContext,
        now: dt.datetime,
    ) -> LogEvent | None:
        if self._log_route is None:
            return None
        record = EnrichedReportRecord.from_report(
            report,
            client_ip=context.client_ip,
            user_agent=context.user_agent,
        )
        return LogEvent(
            timestamp_ms=to_epoch_millis(now),
            message=self._codec.serialize_log_record(record),
        )

    def _build_metric_datum(
        self,
        report: CspViolationReport,
        now: dt.datetime,
    ) -> MetricDatum | None:
        if self._metric_route is None:
            return None
        return MetricDatum(dimensions=build_metric_dimensions(report), timestamp=now)

    async def _send_log(self, event: LogEvent) -> None:
        route = typ.cast("_LogRoute", self._log_route)
        await route.sink.put_log_events(route.destination, (event,))

    async def _send_metric(self, datum: MetricDatum) -> None:
        route = typ.cast("_MetricRoute", self._metric_route)
        await route.sink.put_metric_datum(route.destination, datum)

"""Build a telemetry forwarder wired to CloudWatch from configuration."""

from __future__ import annotations

import typing as typ

import boto3

from cspwarden.telemetry.cloudwatch import CloudWatchLogSink, CloudWatchMetricSink
from cspwarden.telemetry.forwarder import TelemetryForwarder, TelemetrySinks

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from cspwarden.schema.codec import SchemaCodec
    from cspwarden.telemetry.config import TelemetryConfig

__all__ = ["build_forwarder"]


def build_forwarder(
    config: TelemetryConfig,
    *,
    codec: SchemaCodec,
    client_factory: cabc.Callable[..., typ.Any] | None = None,
) -> TelemetryForwarder:
    """Build a ``TelemetryForwarder`` for *config*.

    Clients are created only when forwarding is enabled, and only for the
    destinations that are active, so an unconfigured deployment never
    touches AWS credentials.

    Parameters
    ----------
    config
        Frozen telemetry configuration.
    codec
        Codec used for log record serialization.
    client_factory
        Callable with the ``boto3.client`` signature. Defaults to
        ``boto3.client``.

    Returns
    -------
    TelemetryForwarder
        Forwarder bound to *config*.

    """
    if not config.forwarding_enabled:
        return TelemetryForwarder(config, codec=codec)

    make_client = client_factory or boto3.client

    log_sink = None
    if config.log_destination is not None:
        log_sink = CloudWatchLogSink(make_client("logs", region_name=config.region))

    metric_sink = None
    if config.metric_destination is not None:
        metric_sink = CloudWatchMetricSink(
            make_client("cloudwatch", region_name=config.region)
        )

    return TelemetryForwarder(
        config,
        codec=codec,
        sinks=TelemetrySinks(log=log_sink, metric=metric_sink),
    )

"""Assemble a ``CspReportHandler`` from process configuration.

Hosting adapters call :func:`build_handler` once at start-up and reuse the
result for every invocation; the codec and configuration it captures are
the only state shared between invocations.
"""

from __future__ import annotations

import typing as typ

from cspwarden.ingest.handler import CspReportHandler
from cspwarden.schema.codec import SchemaCodec
from cspwarden.telemetry.config import TelemetryConfig
from cspwarden.telemetry.factory import build_forwarder

if typ.TYPE_CHECKING:
    import collections.abc as cabc

__all__ = ["build_handler"]


def build_handler(
    config: TelemetryConfig | None = None,
    *,
    client_factory: cabc.Callable[..., typ.Any] | None = None,
) -> CspReportHandler:
    """Build a handler with a fresh codec and CloudWatch forwarding.

    Parameters
    ----------
    config
        Telemetry configuration. Read from the environment when omitted.
    client_factory
        Optional replacement for ``boto3.client``.

    Returns
    -------
    CspReportHandler
        Handler ready to serve invocations.

    """
    effective = config if config is not None else TelemetryConfig.from_env()
    codec = SchemaCodec()
    forwarder = build_forwarder(effective, codec=codec, client_factory=client_factory)
    return CspReportHandler(codec=codec, forwarder=forwarder)

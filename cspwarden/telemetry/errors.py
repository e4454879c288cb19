"""Errors raised while relaying reports to telemetry sinks."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from cspwarden.telemetry.sink import LogDestination, MetricDestination


class TelemetryError(Exception):
    """Base class for telemetry errors."""


class SinkDeliveryError(TelemetryError):
    """Raised when a telemetry store rejects a write or cannot be reached.

    Attributes
    ----------
    sink
        Which sink failed, ``"log"`` or ``"metric"``.

    """

    def __init__(self, message: str, *, sink: str) -> None:
        """Initialise with a message and the name of the failing sink."""
        self.sink = sink
        super().__init__(message)

    @classmethod
    def log_delivery_failed(
        cls, destination: LogDestination, detail: object
    ) -> SinkDeliveryError:
        """Create error for a failed log write.

        Parameters
        ----------
        destination
            Group and stream the write targeted.
        detail
            Underlying client error.

        Returns
        -------
        SinkDeliveryError
            Error naming the destination.

        """
        msg = (
            f"Failed to write log event to {destination.group_name}/"
            f"{destination.stream_name}: {detail}"
        )
        return cls(msg, sink="log")

    @classmethod
    def metric_delivery_failed(
        cls, destination: MetricDestination, detail: object
    ) -> SinkDeliveryError:
        """Create error for a failed metric publish."""
        msg = (
            f"Failed to publish metric {destination.namespace}/"
            f"{destination.metric_name}: {detail}"
        )
        return cls(msg, sink="metric")


class TelemetryConfigError(TelemetryError):
    """Raised when forwarder wiring does not match its configuration."""

    @classmethod
    def missing_sink(cls, sink: str) -> TelemetryConfigError:
        """Create error for an active destination with no sink wired."""
        return cls(f"{sink} destination is configured but no {sink} sink was provided")

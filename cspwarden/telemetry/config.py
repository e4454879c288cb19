"""Telemetry destinations read from the process environment.

Usage
-----
>>> import os
>>> os.environ["CSPWARDEN_REGION"] = "us-east-1"
>>> os.environ["CSPWARDEN_METRIC_NAMESPACE"] = "CSP"
>>> os.environ["CSPWARDEN_METRIC_NAME"] = "Violations"
>>> config = TelemetryConfig.from_env()
>>> config.metric_destination
MetricDestination(namespace='CSP', metric_name='Violations')

"""

from __future__ import annotations

import dataclasses as dc
import os

from cspwarden.telemetry.sink import LogDestination, MetricDestination

__all__ = [
    "LOG_GROUP_NAME_ENV",
    "LOG_STREAM_NAME_ENV",
    "METRIC_NAMESPACE_ENV",
    "METRIC_NAME_ENV",
    "REGION_ENV",
    "TelemetryConfig",
]

REGION_ENV = "CSPWARDEN_REGION"
LOG_GROUP_NAME_ENV = "CSPWARDEN_LOG_GROUP_NAME"
LOG_STREAM_NAME_ENV = "CSPWARDEN_LOG_STREAM_NAME"
METRIC_NAMESPACE_ENV = "CSPWARDEN_METRIC_NAMESPACE"
METRIC_NAME_ENV = "CSPWARDEN_METRIC_NAME"


def _normalize(value: str | None) -> str | None:
    """Return *value* stripped, or ``None`` when it is missing or blank."""
    if value is None:
        return None
    return value.strip() or None


def _read_optional(env_var: str) -> str | None:
    """Return the stripped value of *env_var*, or ``None`` when blank."""
    return _normalize(os.environ.get(env_var))


@dc.dataclass(frozen=True, slots=True)
class TelemetryConfig:
    """Where accepted reports are relayed.

    Each destination is a pair; a pair with a missing half is inactive.
    Without ``region`` nothing is relayed, whatever else is set. Values are
    stripped, and empty or whitespace-only values count as absent.

    Attributes
    ----------
    region
        Region of the telemetry stores. Gates all forwarding.
    log_group_name
        Log group receiving report records.
    log_stream_name
        Log stream within ``log_group_name``.
    metric_namespace
        Namespace of the violation counter.
    metric_name
        Name of the violation counter.

    """

    region: str | None = None
    log_group_name: str | None = None
    log_stream_name: str | None = None
    metric_namespace: str | None = None
    metric_name: str | None = None

    def __post_init__(self) -> None:
        """Treat blank values as absent, however the config was built."""
        for field in dc.fields(self):
            object.__setattr__(self, field.name, _normalize(getattr(self, field.name)))

    @property
    def forwarding_enabled(self) -> bool:
        """Whether any sink may be called at all."""
        return self.region is not None

    @property
    def log_destination(self) -> LogDestination | None:
        """Return the log destination when both halves are set."""
        if self.log_group_name is None or self.log_stream_name is None:
            return None
        return LogDestination(self.log_group_name, self.log_stream_name)

    @property
    def metric_destination(self) -> MetricDestination | None:
        """Return the metric destination when both halves are set."""
        if self.metric_namespace is None or self.metric_name is None:
            return None
        return MetricDestination(self.metric_namespace, self.metric_name)

    @classmethod
    def from_env(cls) -> TelemetryConfig:
        """Create configuration from environment variables.

        Reads ``CSPWARDEN_REGION``, ``CSPWARDEN_LOG_GROUP_NAME``,
        ``CSPWARDEN_LOG_STREAM_NAME``, ``CSPWARDEN_METRIC_NAMESPACE`` and
        ``CSPWARDEN_METRIC_NAME``. Unset, empty, and whitespace-only values
        all count as absent.

        Returns
        -------
        TelemetryConfig
            Frozen configuration for the process lifetime.

        """
        return cls(
            region=_read_optional(REGION_ENV),
            log_group_name=_read_optional(LOG_GROUP_NAME_ENV),
            log_stream_name=_read_optional(LOG_STREAM_NAME_ENV),
            metric_namespace=_read_optional(METRIC_NAMESPACE_ENV),
            metric_name=_read_optional(METRIC_NAME_ENV),
        )

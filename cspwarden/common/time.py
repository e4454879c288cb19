"""Clock helpers shared by the telemetry sinks."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def to_epoch_millis(moment: dt.datetime) -> int:
    """Return *moment* as integer milliseconds since the Unix epoch."""
    return int(moment.timestamp() * 1000)

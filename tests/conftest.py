"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from cspwarden.schema.codec import SchemaCodec
from cspwarden.telemetry.config import (
    LOG_GROUP_NAME_ENV,
    LOG_STREAM_NAME_ENV,
    METRIC_NAME_ENV,
    METRIC_NAMESPACE_ENV,
    REGION_ENV,
)
from tests.helpers.reports import sample_report_json

if typ.TYPE_CHECKING:
    from cspwarden.schema.models import CspViolationReport

FIXED_NOW = dt.datetime(2024, 11, 24, 5, 11, 6, tzinfo=dt.UTC)

TELEMETRY_ENV_VARS = (
    REGION_ENV,
    LOG_GROUP_NAME_ENV,
    LOG_STREAM_NAME_ENV,
    METRIC_NAMESPACE_ENV,
    METRIC_NAME_ENV,
)


@pytest.fixture
def codec() -> SchemaCodec:
    """Return a freshly compiled schema codec."""
    return SchemaCodec()


@pytest.fixture
def report(codec: SchemaCodec) -> CspViolationReport:
    """Return the sample report decoded through the codec."""
    return codec.parse_report(sample_report_json())


@pytest.fixture
def clean_telemetry_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Clear every telemetry environment variable for the test."""
    for name in TELEMETRY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def fixed_now() -> dt.datetime:
    """Return the instant used by the frozen forwarder clock."""
    return FIXED_NOW

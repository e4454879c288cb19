"""Unit tests for the Lambda function URL entrypoint."""

from __future__ import annotations

import json
import typing as typ
from unittest import mock

import pytest

from cspwarden import aws_lambda
from cspwarden.ingest.factory import build_handler
from cspwarden.telemetry.config import TelemetryConfig
from tests.helpers.reports import load_event

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@pytest.fixture
def cached_handler_reset() -> cabc.Iterator[None]:
    """Clear the per-process handler cache around the test."""
    aws_lambda._process_handler.cache_clear()
    yield
    aws_lambda._process_handler.cache_clear()


@pytest.fixture
def disabled_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    """Serve invocations with forwarding disabled."""
    handler = build_handler(TelemetryConfig())
    monkeypatch.setattr(aws_lambda, "_process_handler", lambda: handler)


@pytest.mark.usefixtures("disabled_handler")
class TestLambdaHandler:
    """Tests for lambda_handler."""

    @pytest.mark.parametrize("name", ["report-uri-json", "report-uri-base64"])
    def test_accepts_fixture_events(self, name: str) -> None:
        """Fixture events return the success envelope."""
        result = aws_lambda.lambda_handler(load_event(name), None)

        assert result["statusCode"] == 200
        assert json.loads(result["body"]) == {"message": "Okay", "error": None}

    def test_rejects_get(self) -> None:
        """A GET event returns the 405 envelope."""
        event = load_event("report-uri-json")
        event["requestContext"]["http"]["method"] = "GET"

        result = aws_lambda.lambda_handler(event, None)

        assert result == {
            "statusCode": 405,
            "body": '{"message":"Method Not Allowed","error":"Method must be POST"}',
        }

    def test_malformed_event(self) -> None:
        """A malformed event returns a 500 envelope instead of raising."""
        result = aws_lambda.lambda_handler({"requestContext": {}}, None)

        assert result["statusCode"] == 500
        assert json.loads(result["body"])["message"] == "Internal Server Error"


@pytest.mark.usefixtures("cached_handler_reset")
def test_handler_built_once_per_process(
    clean_telemetry_env: pytest.MonkeyPatch,
) -> None:
    """The handler is constructed on first use and then reused."""
    clean_telemetry_env.setenv("CSPWARDEN_LOG_LEVEL", "WARNING")
    configure = mock.MagicMock(return_value=("WARNING", False))
    clean_telemetry_env.setattr(aws_lambda, "configure_logging", configure)

    first = aws_lambda._process_handler()
    second = aws_lambda._process_handler()

    assert first is second
    assert first.forwarding_enabled is False
    configure.assert_called_once_with("WARNING")


@pytest.mark.usefixtures("cached_handler_reset")
def test_handler_build_failure_returns_fault_envelope(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A handler that cannot be built still yields a logged 500 envelope."""
    monkeypatch.setattr(
        aws_lambda, "configure_logging", mock.MagicMock(return_value=("INFO", False))
    )
    build = mock.MagicMock(
        side_effect=ValueError("Provided region_name 'not a region!' is invalid")
    )
    monkeypatch.setattr(aws_lambda, "build_handler", build)
    event_logger = mock.MagicMock(spec=aws_lambda.IngestEventLogger)
    monkeypatch.setattr(aws_lambda, "IngestEventLogger", lambda: event_logger)
    event = {"requestContext": {"http": {"method": "GET"}}, "headers": {}}

    first = aws_lambda.lambda_handler(event, None)
    second = aws_lambda.lambda_handler(event, None)

    expected_body = {
        "message": "Internal Server Error",
        "error": "Provided region_name 'not a region!' is invalid",
    }
    assert first["statusCode"] == 500
    assert json.loads(first["body"]) == expected_body
    assert second == first, "every invocation should receive the envelope"
    assert event_logger.log_fault.call_count == 2
    logged = event_logger.log_fault.call_args.args[0]
    assert isinstance(logged, ValueError)

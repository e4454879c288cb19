"""Unit tests for the report schema codec.

Run with:
    pytest tests/unit/test_schema_codec.py
"""

from __future__ import annotations

import json
import typing as typ

import pytest

from cspwarden.schema.errors import GENERIC_PARSE_FAILURE, ReportParseError
from cspwarden.schema.models import EnrichedReportRecord, ResponseEnvelope
from tests.helpers.reports import SAMPLE_REPORT, sample_report, sample_report_json

if typ.TYPE_CHECKING:
    from cspwarden.schema.codec import SchemaCodec
    from cspwarden.schema.models import CspViolationReport


def _without_body_key(key: str) -> dict[str, typ.Any]:
    body = {k: v for k, v in SAMPLE_REPORT["csp-report"].items() if k != key}
    return {"csp-report": body}


class TestParseReport:
    """Tests for SchemaCodec.parse_report."""

    def test_parses_sample_report(self, codec: SchemaCodec) -> None:
        """Every hyphenated wire key maps onto its attribute."""
        report = codec.parse_report(sample_report_json())
        body = report.csp_report

        assert body.document_uri == "https://www.example.com/"
        assert body.referrer == ""
        assert body.blocked_uri == "https://example.com/js/script.js"
        assert body.effective_directive == "connect-src"
        assert body.violated_directive == "connect-src"
        assert body.original_policy == "default-src 'self' https://www.example.com"
        assert body.disposition == "report"
        assert body.status_code == 200
        assert body.script_sample == ""
        assert body.source_file == "https://www.example.com/run.js"
        assert body.line_number == 3
        assert body.column_number == 26

    def test_accepts_bytes(self, codec: SchemaCodec) -> None:
        """Raw bytes parse the same as text."""
        report = codec.parse_report(sample_report_json().encode("utf-8"))
        assert report.csp_report.line_number == 3

    def test_accepts_null_source_file(self, codec: SchemaCodec) -> None:
        """A null source-file is valid."""
        report = codec.parse_report(sample_report_json(**{"source-file": None}))
        assert report.csp_report.source_file is None

    def test_accepts_enforce_disposition(self, codec: SchemaCodec) -> None:
        """Both dispositions are accepted."""
        report = codec.parse_report(sample_report_json(disposition="enforce"))
        assert report.csp_report.disposition == "enforce"

    @pytest.mark.parametrize(
        "payload",
        [
            pytest.param(
                {**SAMPLE_REPORT, "extra": True},
                id="unknown-top-level-key",
            ),
            pytest.param(
                sample_report(**{"effective-policy": "script-src"}),
                id="unknown-body-key",
            ),
            pytest.param({}, id="missing-csp-report"),
            pytest.param(
                _without_body_key("source-file"),
                id="missing-source-file",
            ),
            pytest.param(sample_report(disposition="block"), id="unknown-disposition"),
            pytest.param(sample_report(**{"status-code": "200"}), id="string-status"),
            pytest.param(
                sample_report(**{"status-code": 65_536}), id="status-overflow"
            ),
            pytest.param(sample_report(**{"line-number": -1}), id="negative-line"),
            pytest.param(
                sample_report(**{"column-number": 4_294_967_296}),
                id="column-overflow",
            ),
            pytest.param(sample_report(referrer=None), id="null-referrer"),
            pytest.param([SAMPLE_REPORT], id="array-document"),
        ],
    )
    def test_rejects_schema_violations(
        self,
        codec: SchemaCodec,
        payload: object,
    ) -> None:
        """Documents outside the closed schema raise ReportParseError."""
        with pytest.raises(ReportParseError) as excinfo:
            codec.parse_report(json.dumps(payload))

        assert excinfo.value.diagnostic, "diagnostic should never be empty"

    @pytest.mark.parametrize(
        "text",
        [
            pytest.param("", id="empty"),
            pytest.param("{", id="truncated"),
            pytest.param("csp-report", id="bare-word"),
            pytest.param("\ufffd\ufffd", id="replacement-chars"),
        ],
    )
    def test_rejects_malformed_json(self, codec: SchemaCodec, text: str) -> None:
        """Text that is not JSON raises ReportParseError."""
        with pytest.raises(ReportParseError):
            codec.parse_report(text)

    def test_diagnostic_names_unknown_field(self, codec: SchemaCodec) -> None:
        """The diagnostic points at the offending key."""
        with pytest.raises(ReportParseError) as excinfo:
            codec.parse_report(json.dumps(sample_report(blocked="x")))

        assert "blocked" in excinfo.value.diagnostic
        assert str(excinfo.value) == excinfo.value.diagnostic


class TestReportParseError:
    """Tests for ReportParseError diagnostics."""

    def test_blank_diagnostic_uses_generic_text(self) -> None:
        """A blank diagnostic is replaced by the generic failure text."""
        assert ReportParseError("   ").diagnostic == GENERIC_PARSE_FAILURE

    def test_diagnostic_is_stripped(self) -> None:
        """Surrounding whitespace is removed from the diagnostic."""
        assert ReportParseError("  bad key \n").diagnostic == "bad key"


class TestSerializeEnvelope:
    """Tests for SchemaCodec.serialize_envelope."""

    def test_success_envelope_keeps_null_error(self, codec: SchemaCodec) -> None:
        """The error key is present as null on success."""
        text = codec.serialize_envelope(ResponseEnvelope(message="Okay", error=None))
        assert text == '{"message":"Okay","error":null}'

    def test_error_envelope(self, codec: SchemaCodec) -> None:
        """Message precedes error in the serialized envelope."""
        text = codec.serialize_envelope(
            ResponseEnvelope(message="Bad Request", error='say "hi"')
        )
        assert text == '{"message":"Bad Request","error":"say \\"hi\\""}'


class TestSerializeLogRecord:
    """Tests for SchemaCodec.serialize_log_record."""

    def test_includes_client_context(
        self,
        codec: SchemaCodec,
        report: CspViolationReport,
    ) -> None:
        """Client context follows the report fields inside csp-report."""
        record = EnrichedReportRecord.from_report(
            report,
            client_ip="2001:db8::1",
            user_agent="Mozilla/5.0",
        )

        decoded = json.loads(codec.serialize_log_record(record))

        expected_body = {
            **SAMPLE_REPORT["csp-report"],
            "userAgent": "Mozilla/5.0",
            "clientIp": "2001:db8::1",
        }
        assert decoded == {"csp-report": expected_body}
        assert list(decoded["csp-report"]) == list(expected_body), (
            "report fields should keep wire order, with client context last"
        )

    def test_omits_absent_client_context(
        self,
        codec: SchemaCodec,
        report: CspViolationReport,
    ) -> None:
        """Unknown user agent and client IP are left out entirely."""
        record = EnrichedReportRecord.from_report(report)

        text = codec.serialize_log_record(record)

        assert text == json.dumps(SAMPLE_REPORT, separators=(",", ":"))

    def test_keeps_null_source_file(self, codec: SchemaCodec) -> None:
        """A null source-file stays in the record as null."""
        report = codec.parse_report(sample_report_json(**{"source-file": None}))
        record = EnrichedReportRecord.from_report(report, client_ip="192.0.2.1")

        decoded = json.loads(codec.serialize_log_record(record))

        assert decoded["csp-report"]["source-file"] is None
        assert decoded["csp-report"]["clientIp"] == "192.0.2.1"
        assert "userAgent" not in decoded["csp-report"]

    def test_client_context_follows_report_fields(
        self,
        codec: SchemaCodec,
        report: CspViolationReport,
    ) -> None:
        """The encoded record is the report with client context appended."""
        record = EnrichedReportRecord.from_report(
            report, client_ip="1.2.3.4", user_agent="UA"
        )

        text = codec.serialize_log_record(record)

        report_text = json.dumps(SAMPLE_REPORT, separators=(",", ":"))
        assert text == report_text[:-2] + ',"userAgent":"UA","clientIp":"1.2.3.4"}}'

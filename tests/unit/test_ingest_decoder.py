"""Unit tests for body decoding."""

from __future__ import annotations

import base64
import typing as typ

import pytest

from cspwarden.ingest.decoder import decode_base64_text, decode_report
from cspwarden.ingest.outcome import Accepted, ParseFailed
from tests.helpers.reports import sample_report_json

if typ.TYPE_CHECKING:
    from cspwarden.schema.codec import SchemaCodec


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestDecodeBase64Text:
    """Tests for the permissive base64 decoder."""

    def test_decodes_standard_base64(self) -> None:
        """Well-formed input decodes exactly."""
        assert decode_base64_text(_b64("csp-report")) == "csp-report"

    def test_repairs_missing_padding(self) -> None:
        """Stripped padding is restored."""
        assert decode_base64_text(_b64("ab").rstrip("=")) == "ab"

    def test_accepts_urlsafe_alphabet(self) -> None:
        """URL-safe symbols decode like their standard counterparts."""
        encoded = base64.urlsafe_b64encode(b"\xfb\xff").decode("ascii")
        assert decode_base64_text(encoded) == "\ufffd\ufffd"

    def test_ignores_whitespace(self) -> None:
        """Line breaks inside the payload are dropped."""
        encoded = _b64("report-uri payload")
        wrapped = f"{encoded[:8]}\n{encoded[8:]}\r\n"
        assert decode_base64_text(wrapped) == "report-uri payload"

    @pytest.mark.parametrize(
        "garbage",
        ["!!!", "a", "%%%%%", "not base64 at all?", ""],
    )
    def test_never_raises_on_garbage(self, garbage: str) -> None:
        """Garbage input produces some text instead of an exception."""
        assert isinstance(decode_base64_text(garbage), str)


class TestDecodeReport:
    """Tests for decode_report."""

    def test_plain_body(self, codec: SchemaCodec) -> None:
        """A plain JSON body is accepted."""
        outcome = decode_report(
            sample_report_json(), is_body_encoded=False, codec=codec
        )
        assert isinstance(outcome, Accepted)
        assert outcome.report.csp_report.violated_directive == "connect-src"

    def test_encoded_body_matches_plain(self, codec: SchemaCodec) -> None:
        """Base64 transport encoding yields the same report."""
        plain = decode_report(sample_report_json(), is_body_encoded=False, codec=codec)
        encoded = decode_report(
            _b64(sample_report_json()), is_body_encoded=True, codec=codec
        )
        assert encoded == plain

    def test_encoded_flag_false_does_not_decode(self, codec: SchemaCodec) -> None:
        """A base64 body without the flag fails to parse."""
        outcome = decode_report(
            _b64(sample_report_json()), is_body_encoded=False, codec=codec
        )
        assert isinstance(outcome, ParseFailed)

    @pytest.mark.parametrize(
        ("body", "encoded"),
        [
            pytest.param("", False, id="empty-plain"),
            pytest.param("", True, id="empty-encoded"),
            pytest.param("{not json", False, id="malformed-plain"),
            pytest.param("!!!!", True, id="garbage-encoded"),
            pytest.param(_b64('{"csp-report":{}}'), True, id="incomplete-encoded"),
        ],
    )
    def test_parse_failures(
        self,
        codec: SchemaCodec,
        body: str,
        encoded: bool,  # noqa: FBT001
    ) -> None:
        """Undecodable bodies become ParseFailed with a diagnostic."""
        outcome = decode_report(body, is_body_encoded=encoded, codec=codec)
        assert isinstance(outcome, ParseFailed)
        assert outcome.reason, "parse failure should carry a diagnostic"

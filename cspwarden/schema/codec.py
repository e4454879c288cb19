"""Compiled parser and serializers for the handler's wire formats.

``SchemaCodec`` builds its msgspec decoder and encoder once. Construct a
single instance at process start and hand it to every component that
parses or serializes; the instance holds no mutable state.

Usage
-----
>>> codec = SchemaCodec()
>>> codec.serialize_envelope(ResponseEnvelope(message="Okay", error=None))
'{"message":"Okay","error":null}'

"""

from __future__ import annotations

import msgspec

from cspwarden.schema.errors import ReportParseError
from cspwarden.schema.models import (
    CspViolationReport,
    EnrichedReportRecord,
    ResponseEnvelope,
)

__all__ = ["SchemaCodec"]


class SchemaCodec:
    """Parse report-uri payloads and serialize envelopes and log records."""

    __slots__ = ("_encoder", "_report_decoder")

    def __init__(self) -> None:
        """Compile the report decoder and the shared JSON encoder."""
        self._report_decoder = msgspec.json.Decoder(CspViolationReport)
        self._encoder = msgspec.json.Encoder()

    def parse_report(self, text: str | bytes) -> CspViolationReport:
        """Decode and validate a report-uri document.

        Parameters
        ----------
        text
            Raw JSON document.

        Returns
        -------
        CspViolationReport
            The validated report.

        Raises
        ------
        ReportParseError
            If *text* is not JSON, or does not match the closed report
            schema (missing or unknown keys, wrong types, out-of-range
            integers, unknown disposition).

        """
        try:
            return self._report_decoder.decode(text)
        except msgspec.DecodeError as exc:
            raise ReportParseError(str(exc)) from exc

    def serialize_envelope(self, envelope: ResponseEnvelope) -> str:
        """Encode *envelope* as ``{"message":...,"error":...}``."""
        return self._encoder.encode(envelope).decode("utf-8")

    def serialize_log_record(self, record: EnrichedReportRecord) -> str:
        """Encode *record* as the log sink message text."""
        return self._encoder.encode(record).decode("utf-8")

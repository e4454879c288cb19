"""Closed wire schemas and the compiled codec for CSP reports.

Public API
----------
SchemaCodec
    Once-built parser for report-uri payloads and serializer for response
    envelopes and log records.
CspViolationReport
    Validated report-uri document.
CspReportBody
    Violation attributes under the ``csp-report`` key.
EnrichedReportRecord
    Report merged with client IP and user agent for the log sink.
ResponseEnvelope
    Two-field ``{message, error}`` reply.
ReportParseError
    Raised when a payload fails decoding or schema validation.
"""

from cspwarden.schema.codec import SchemaCodec
from cspwarden.schema.errors import ReportParseError
from cspwarden.schema.models import (
    CspReportBody,
    CspViolationReport,
    EnrichedReportBody,
    EnrichedReportRecord,
    ResponseEnvelope,
)

__all__ = [
    "CspReportBody",
    "CspViolationReport",
    "EnrichedReportBody",
    "EnrichedReportRecord",
    "ReportParseError",
    "ResponseEnvelope",
    "SchemaCodec",
]

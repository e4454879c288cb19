"""Wire structures for CSP report-uri payloads and handler replies.

Every structure here is closed: ``forbid_unknown_fields`` makes decoding
fail on any key that is not declared, at every nesting level. Field names
on the wire are the literal hyphenated keys browsers send, for example
``document-uri`` and ``line-number``.

See https://www.w3.org/TR/CSP3/#deprecated-serialize-violation for the
payload browsers emit.
"""

from __future__ import annotations

import typing as typ

import msgspec

UINT16_MAX = 65_535
UINT32_MAX = 4_294_967_295

UInt16 = typ.Annotated[int, msgspec.Meta(ge=0, le=UINT16_MAX)]
UInt32 = typ.Annotated[int, msgspec.Meta(ge=0, le=UINT32_MAX)]

Disposition = typ.Literal["enforce", "report"]


class CspReportBody(
    msgspec.Struct, kw_only=True, frozen=True, forbid_unknown_fields=True
):
    """Violation attributes carried under the ``csp-report`` key.

    Attributes
    ----------
    document_uri
        Address of the protected resource, stripped for reporting.
    referrer
        Referrer of the protected resource, or the empty string.
    blocked_uri
        Originally requested URL of the blocked resource, or the empty
        string for inline content.
    effective_directive
        Directive whose enforcement triggered the violation, even when it
        was only implied through ``default-src``.
    violated_directive
        Directive as it appears in the policy.
    original_policy
        Policy text as received by the user agent.
    disposition
        ``enforce`` or ``report``.
    status_code
        HTTP status of the protected resource, or ``0``.
    script_sample
        Sample of the offending script, usually empty.
    source_file
        URL of the resource where the violation occurred, or ``None``.
        Always present on the wire.
    line_number
        Line in ``source_file`` where the violation occurred.
    column_number
        Column in ``source_file`` where the violation occurred.

    """

    document_uri: str = msgspec.field(name="document-uri")
    referrer: str
    blocked_uri: str = msgspec.field(name="blocked-uri")
    effective_directive: str = msgspec.field(name="effective-directive")
    violated_directive: str = msgspec.field(name="violated-directive")
    original_policy: str = msgspec.field(name="original-policy")
    disposition: Disposition
    status_code: UInt16 = msgspec.field(name="status-code")
    script_sample: str = msgspec.field(name="script-sample")
    source_file: str | None = msgspec.field(name="source-file")
    line_number: UInt32 = msgspec.field(name="line-number")
    column_number: UInt32 = msgspec.field(name="column-number")


class CspViolationReport(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Top-level report-uri document: ``{"csp-report": {...}}``."""

    csp_report: CspReportBody = msgspec.field(name="csp-report")


class EnrichedReportBody(CspReportBody, kw_only=True, omit_defaults=True):
    """Report attributes plus the client context recorded in the log sink.

    ``userAgent`` and ``clientIp`` are left out of the encoded record when
    they are unknown.
    """

    user_agent: str | None = msgspec.field(default=None, name="userAgent")
    client_ip: str | None = msgspec.field(default=None, name="clientIp")


class EnrichedReportRecord(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Log record written to the log sink for each accepted report."""

    csp_report: EnrichedReportBody = msgspec.field(name="csp-report")

    @classmethod
    def from_report(
        cls,
        report: CspViolationReport,
        *,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> EnrichedReportRecord:
        """Merge *report* with the client context of the request."""
        body = EnrichedReportBody(
            **msgspec.structs.asdict(report.csp_report),
            user_agent=user_agent,
            client_ip=client_ip,
        )
        return cls(csp_report=body)


class ResponseEnvelope(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Two-field reply returned for every outcome.

    ``error`` is always encoded, as ``null`` on success.
    """

    message: str
    error: str | None


__all__ = [
    "CspReportBody",
    "CspViolationReport",
    "Disposition",
    "EnrichedReportBody",
    "EnrichedReportRecord",
    "ResponseEnvelope",
    "UInt16",
    "UInt32",
]

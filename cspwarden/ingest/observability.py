"""Structured log events for the ingestion pipeline.

Usage
-----
>>> events = IngestEventLogger()
>>> events.log_request_rejected(Rejected("Method must be POST", 405), method="GET")

"""

from __future__ import annotations

import enum
import typing as typ

from cspwarden.logging import get_logger, log_error, log_info, log_warning
from cspwarden.schema.directives import is_known_directive

if typ.TYPE_CHECKING:
    from cspwarden.ingest.outcome import ParseFailed, Rejected
    from cspwarden.schema.models import CspViolationReport

logger = get_logger(__name__)


class IngestEventType(enum.StrEnum):
    """Structured log event types for one handled request."""

    REPORT_ACCEPTED = "ingest.report.accepted"
    REPORT_REJECTED = "ingest.report.rejected"
    REPORT_PARSE_FAILED = "ingest.report.parse_failed"
    REPORT_FAULT = "ingest.report.fault"


class IngestEventLogger:
    """Emit ingestion events via femtologging.

    Rejections and parse failures are expected traffic from misbehaving
    clients and are logged below ERROR. Only faults are errors.
    """

    def log_report_accepted(
        self,
        report: CspViolationReport,
        *,
        client_ip: str | None,
    ) -> None:
        """Log an accepted report with its directive and document.

        Parameters
        ----------
        report
            The validated report.
        client_ip
            Resolved client address, if any.

        """
        body = report.csp_report
        log_info(
            logger,
            "[%s] document_uri=%s violated_directive=%s known_directive=%s "
            "disposition=%s client_ip=%s",
            IngestEventType.REPORT_ACCEPTED,
            body.document_uri,
            body.violated_directive,
            is_known_directive(body.violated_directive),
            body.disposition,
            client_ip,
        )

    def log_request_rejected(self, rejection: Rejected, *, method: str) -> None:
        """Log a request that failed a structural guard."""
        log_info(
            logger,
            "[%s] status_code=%d method=%s reason=%s",
            IngestEventType.REPORT_REJECTED,
            rejection.status_code,
            method,
            rejection.reason,
        )

    def log_parse_failed(self, failure: ParseFailed, *, is_body_encoded: bool) -> None:
        """Log a body that failed decoding or schema validation."""
        log_warning(
            logger,
            "[%s] is_body_encoded=%s reason=%s",
            IngestEventType.REPORT_PARSE_FAILED,
            is_body_encoded,
            failure.reason,
        )

    def log_fault(self, error: BaseException) -> None:
        """Log an unexpected failure, with its traceback.

        Parameters
        ----------
        error
            The exception that aborted the request.

        """
        log_error(
            logger,
            "[%s] error_type=%s error_message=%s",
            IngestEventType.REPORT_FAULT,
            type(error).__name__,
            str(error),
            exc_info=error,
        )

"""Errors raised by the schema codec."""

from __future__ import annotations

GENERIC_PARSE_FAILURE = "invalid report-uri payload"


class ReportParseError(Exception):
    """Raised when a body is not a well-formed report-uri document.

    Attributes
    ----------
    diagnostic
        Human-readable description of the first schema or syntax problem.
        Never empty.

    """

    diagnostic: str

    def __init__(self, diagnostic: str) -> None:
        """Initialize with the decoder diagnostic, or a generic fallback."""
        self.diagnostic = diagnostic.strip() or GENERIC_PARSE_FAILURE
        super().__init__(self.diagnostic)

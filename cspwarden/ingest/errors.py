"""Errors raised while reading an invocation from the hosting transport."""

from __future__ import annotations


class IngestError(Exception):
    """Base class for ingestion pipeline errors."""


class RequestShapeError(IngestError):
    """Raised when a transport event does not have the expected shape.

    This is a fault of the hosting transport, not of the browser that sent
    the report, so it surfaces as an internal server error.
    """

    @classmethod
    def not_a_mapping(cls, path: str) -> RequestShapeError:
        """Create error for a value that should be a JSON object.

        Parameters
        ----------
        path
            Dotted path of the offending value within the event.

        Returns
        -------
        RequestShapeError
            Error naming the offending path.

        """
        return cls(f"Invocation event field {path} must be an object")

    @classmethod
    def missing(cls, path: str) -> RequestShapeError:
        """Create error for a required field that is absent."""
        return cls(f"Invocation event is missing required field: {path}")

    @classmethod
    def wrong_type(cls, path: str, expected: str) -> RequestShapeError:
        """Create error for a field holding a value of the wrong type."""
        return cls(f"Invocation event field {path} must be {expected}")

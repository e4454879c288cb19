"""Map pipeline outcomes to status codes and serialized envelopes."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from http import HTTPStatus

from cspwarden.ingest.outcome import Accepted, Fault, ParseFailed, Rejected
from cspwarden.schema.models import ResponseEnvelope

if typ.TYPE_CHECKING:
    from cspwarden.ingest.outcome import Outcome
    from cspwarden.schema.codec import SchemaCodec

__all__ = [
    "ACCEPTED_MESSAGE",
    "GENERIC_FAULT_MESSAGE",
    "HandlerReply",
    "build_envelope",
    "build_response",
    "fault_message",
]

ACCEPTED_MESSAGE = "Okay"
GENERIC_FAULT_MESSAGE = "An unexpected error occurred. Please try again later."


@dc.dataclass(frozen=True, slots=True)
class HandlerReply:
    """Status code and serialized envelope handed back to the transport."""

    status_code: int
    body: str


def fault_message(detail: object) -> str:
    """Return the caller-visible message for a fault.

    Exceptions with a non-empty message surface that message. Anything
    else gets a fixed generic text; tracebacks never leave the process.
    """
    if isinstance(detail, Exception):
        message = str(detail).strip()
        if message:
            return message
    return GENERIC_FAULT_MESSAGE


def build_envelope(outcome: Outcome) -> tuple[int, ResponseEnvelope]:
    """Return the status code and envelope for *outcome*."""
    match outcome:
        case Rejected(reason=reason, status_code=status_code):
            phrase = HTTPStatus(status_code).phrase
            return status_code, ResponseEnvelope(message=phrase, error=reason)
        case ParseFailed(reason=reason):
            return HTTPStatus.BAD_REQUEST, ResponseEnvelope(
                message=HTTPStatus.BAD_REQUEST.phrase, error=reason
            )
        case Accepted():
            return HTTPStatus.OK, ResponseEnvelope(message=ACCEPTED_MESSAGE, error=None)
        case Fault(detail=detail):
            return HTTPStatus.INTERNAL_SERVER_ERROR, ResponseEnvelope(
                message=HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
                error=fault_message(detail),
            )
    typ.assert_never(outcome)


def build_response(outcome: Outcome, codec: SchemaCodec) -> HandlerReply:
    """Serialize the envelope for *outcome* through *codec*."""
    status_code, envelope = build_envelope(outcome)
    return HandlerReply(int(status_code), codec.serialize_envelope(envelope))

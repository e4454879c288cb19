"""Pipeline outcomes threaded from validation through to the reply."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from cspwarden.schema.models import CspViolationReport

__all__ = ["Accepted", "Fault", "Outcome", "ParseFailed", "Rejected"]


@dc.dataclass(frozen=True, slots=True)
class Rejected:
    """The request failed a structural guard."""

    reason: str
    status_code: int


@dc.dataclass(frozen=True, slots=True)
class ParseFailed:
    """The body could not be decoded into a report."""

    reason: str


@dc.dataclass(frozen=True, slots=True)
class Accepted:
    """The body decoded into a valid report."""

    report: CspViolationReport


@dc.dataclass(frozen=True, slots=True)
class Fault:
    """An unexpected failure occurred while handling the request."""

    detail: object


Outcome = Rejected | ParseFailed | Accepted | Fault

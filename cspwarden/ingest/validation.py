"""Ordered structural guards over an inbound request.

Each guard is a pure function returning ``None`` when the request passes
and a :class:`~cspwarden.ingest.outcome.Rejected` when it does not.
:func:`validate_request` runs them in order and stops at the first
rejection, so the order of ``REQUEST_GUARDS`` decides which reason a
caller sees when a request is wrong in several ways at once.
"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from cspwarden.common.headers import header_values
from cspwarden.ingest.outcome import Rejected

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from cspwarden.ingest.request import InboundRequest

__all__ = [
    "ACCEPTABLE_CONTENT_TYPE",
    "REQUEST_GUARDS",
    "RequestGuard",
    "require_body",
    "require_csp_content_type",
    "require_post",
    "validate_request",
]

ACCEPTABLE_CONTENT_TYPE = "application/csp-report"

RequestGuard = typ.Callable[["InboundRequest"], Rejected | None]


def require_post(request: InboundRequest) -> Rejected | None:
    """Reject any method other than an exact ``POST``."""
    if request.method != "POST":
        return Rejected("Method must be POST", HTTPStatus.METHOD_NOT_ALLOWED)
    return None


def require_csp_content_type(request: InboundRequest) -> Rejected | None:
    """Reject requests without an exact ``application/csp-report`` type.

    Every casing of ``content-type`` present in the header map is checked;
    one exact match is enough. Parameters such as ``; charset=utf-8`` are
    not stripped, so they fail the match.
    """
    if ACCEPTABLE_CONTENT_TYPE in header_values(request.headers, "content-type"):
        return None
    return Rejected(
        f"Content-Type must be {ACCEPTABLE_CONTENT_TYPE}",
        HTTPStatus.BAD_REQUEST,
    )


def require_body(request: InboundRequest) -> Rejected | None:
    """Reject requests that carry no body at all.

    An empty-string body passes; it fails later, during parsing.
    """
    if request.body is None:
        return Rejected("event.body is undefined!", HTTPStatus.BAD_REQUEST)
    return None


REQUEST_GUARDS: tuple[RequestGuard, ...] = (
    require_post,
    require_csp_content_type,
    require_body,
)


def validate_request(
    request: InboundRequest,
    guards: cabc.Sequence[RequestGuard] = REQUEST_GUARDS,
) -> Rejected | None:
    """Run *guards* in order and return the first rejection.

    Parameters
    ----------
    request
        Request under validation.
    guards
        Guards to apply, in evaluation order.

    Returns
    -------
    Rejected | None
        The first rejection, or ``None`` when every guard passes.

    """
    for guard in guards:
        rejection = guard(request)
        if rejection is not None:
            return rejection
    return None

"""Header lookup for transport-supplied, non-normalized header maps.

Hosting transports do not agree on header-name casing: Lambda function
URLs lowercase names, ASGI servers upper- or title-case them, and a hand
built event may carry several spellings at once. Every header read in
cspwarden goes through :func:`header_values` so the casing policy lives in
one place.

Example:
>>> headers = {"X-Forwarded-For": "2001:db8::1, 10.0.0.1"}
>>> resolve_client_ip(headers, "192.0.2.10")
'2001:db8::1'

"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

FORWARDED_FOR_HEADER = "x-forwarded-for"


def header_values(headers: cabc.Mapping[str, str | None], name: str) -> list[str]:
    """Return every value stored under any casing of *name*.

    Parameters
    ----------
    headers
        Raw header mapping from the transport. Keys may repeat with
        different casings; ``None`` values are skipped.
    name
        Header name to look up, in any casing.

    Returns
    -------
    list[str]
        Matching values in mapping iteration order. Empty when the header
        is absent.

    """
    wanted = name.lower()
    return [
        value
        for key, value in headers.items()
        if value is not None and key.lower() == wanted
    ]


def first_header(headers: cabc.Mapping[str, str | None], name: str) -> str | None:
    """Return the first value of *name* under any casing, or ``None``."""
    values = header_values(headers, name)
    return values[0] if values else None


def resolve_client_ip(
    headers: cabc.Mapping[str, str | None],
    source_address: str | None,
) -> str | None:
    """Resolve the originating client address for a request.

    The first comma-separated token of ``x-forwarded-for`` wins, trimmed of
    surrounding whitespace. When the header is absent, or its first token
    is blank, the transport-reported *source_address* is used.

    Parameters
    ----------
    headers
        Raw header mapping from the transport.
    source_address
        Peer address reported by the transport.

    Returns
    -------
    str | None
        The resolved client address, ``None`` only when neither source
        provides one.

    """
    forwarded = first_header(headers, FORWARDED_FOR_HEADER)
    if forwarded is not None:
        candidate = forwarded.split(",", 1)[0].strip()
        if candidate:
            return candidate
    return source_address

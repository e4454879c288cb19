"""Turn a validated request body into a report or a parse failure."""

from __future__ import annotations

import base64
import re
import typing as typ

from cspwarden.ingest.outcome import Accepted, ParseFailed
from cspwarden.schema.errors import ReportParseError

if typ.TYPE_CHECKING:
    from cspwarden.schema.codec import SchemaCodec

__all__ = ["decode_base64_text", "decode_report"]

_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")
_NON_ALPHABET = re.compile(r"[^A-Za-z0-9+/]")


def decode_base64_text(encoded: str) -> str:
    """Decode base64 *encoded* into text without raising.

    Characters outside the base64 alphabet are dropped, URL-safe symbols
    are accepted, padding is repaired, and a dangling final character is
    ignored. Bytes that are not UTF-8 become U+FFFD. Garbage in therefore
    yields garbage text out, which the schema parser then rejects.
    """
    cleaned = _NON_ALPHABET.sub("", encoded.translate(_URLSAFE_TO_STANDARD))
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    padded = cleaned + "=" * (-len(cleaned) % 4)
    return base64.b64decode(padded).decode("utf-8", errors="replace")


def decode_report(
    body: str,
    *,
    is_body_encoded: bool,
    codec: SchemaCodec,
) -> Accepted | ParseFailed:
    """Decode *body* and parse it as a report-uri document.

    Parameters
    ----------
    body
        Request body as delivered by the transport.
    is_body_encoded
        Whether *body* is base64 transport encoding.
    codec
        Codec providing the compiled report parser.

    Returns
    -------
    Accepted | ParseFailed
        ``Accepted`` with the report, or ``ParseFailed`` carrying the
        parser diagnostic.

    """
    text = decode_base64_text(body) if is_body_encoded else body
    try:
        report = codec.parse_report(text)
    except ReportParseError as exc:
        return ParseFailed(exc.diagnostic)
    return Accepted(report)

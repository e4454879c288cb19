"""CSP Level 3 directive names.

See https://www.w3.org/TR/CSP3/#csp-directives. Reports keep directives
as free text, since browsers add directives faster than this list moves;
the enum is used to flag directives the handler has not seen before.
"""

from __future__ import annotations

import enum


class CspDirective(enum.StrEnum):
    """Directive names defined by CSP Level 3."""

    # Fetch directives
    CHILD_SRC = "child-src"
    CONNECT_SRC = "connect-src"
    DEFAULT_SRC = "default-src"
    FONT_SRC = "font-src"
    FRAME_SRC = "frame-src"
    IMG_SRC = "img-src"
    MANIFEST_SRC = "manifest-src"
    MEDIA_SRC = "media-src"
    OBJECT_SRC = "object-src"
    SCRIPT_SRC = "script-src"
    SCRIPT_SRC_ELEM = "script-src-elem"
    SCRIPT_SRC_ATTR = "script-src-attr"
    STYLE_SRC = "style-src"
    STYLE_SRC_ELEM = "style-src-elem"
    STYLE_SRC_ATTR = "style-src-attr"
    # Other directives
    WEBRTC = "webrtc"
    WORKER_SRC = "worker-src"
    # Document directives
    BASE_URI = "base-uri"
    SANDBOX = "sandbox"
    # Navigation directives
    FORM_ACTION = "form-action"
    FRAME_ANCESTORS = "frame-ancestors"
    # Reporting directives
    REPORT_URI = "report-uri"
    REPORT_TO = "report-to"


_KNOWN = frozenset(member.value for member in CspDirective)


def directive_name(directive: str) -> str:
    """Return the directive name from a ``violated-directive`` value.

    Older browsers send the whole directive with its source list, for
    example ``"script-src 'self'"``; only the leading token is the name.
    """
    return directive.strip().split(" ", 1)[0].lower()


def is_known_directive(directive: str) -> bool:
    """Return ``True`` when *directive* names a CSP Level 3 directive."""
    return directive_name(directive) in _KNOWN

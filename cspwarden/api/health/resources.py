"""Liveness probe for container deployments."""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource"]


class HealthResource:
    """Report that the process is up and whether it relays telemetry.

    Parameters
    ----------
    forwarding_enabled
        Whether accepted reports are relayed to telemetry sinks.

    """

    def __init__(self, *, forwarding_enabled: bool) -> None:
        """Capture the forwarding state reported by the probe."""
        self._forwarding = "enabled" if forwarding_enabled else "disabled"

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health with ``{"status": "ok", "forwarding": ...}``."""
        resp.media = {"status": "ok", "forwarding": self._forwarding}
        resp.status = HTTPStatus.OK

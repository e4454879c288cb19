"""Application factory for the cspwarden Falcon ASGI application.

Usage
-----
Serve reports with a handler built from the environment::

    from cspwarden.api.app import create_app
    from cspwarden.ingest import build_handler

    app = create_app(build_handler())

"""

from __future__ import annotations

import typing as typ

import falcon.asgi

from cspwarden.api.health.resources import HealthResource
from cspwarden.api.resources import CspReportResource

if typ.TYPE_CHECKING:
    from cspwarden.ingest.handler import CspReportHandler

__all__ = ["HEALTH_ROUTE", "REPORT_ROUTE", "create_app"]

REPORT_ROUTE = "/csp-report"
HEALTH_ROUTE = "/health"


def create_app(handler: CspReportHandler) -> falcon.asgi.App:
    """Create the Falcon ASGI application.

    Parameters
    ----------
    handler
        Ingestion pipeline shared by all requests.

    Returns
    -------
    falcon.asgi.App
        App serving ``POST /csp-report`` and ``GET /health``.

    """
    app = falcon.asgi.App()
    app.add_route(REPORT_ROUTE, CspReportResource(handler))
    app.add_route(
        HEALTH_ROUTE,
        HealthResource(forwarding_enabled=handler.forwarding_enabled),
    )
    return app

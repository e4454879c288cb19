"""cspwarden HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that receives browser CSP reports.

Public API
----------
create_app
    Application factory registering the report endpoint and the health
    probe around a ``CspReportHandler``.
"""

from cspwarden.api.app import create_app

__all__ = ["create_app"]

"""cspwarden runtime entrypoint for container deployments.

This module provides the ASGI application factory used by Granian
(``cspwarden.runtime:create_app``) and a ``main`` function that starts the
server. The telemetry configuration and the schema codec are built once,
when the factory runs, and shared by every request.

Configuration is driven by environment variables:

- ``CSPWARDEN_HOST``: Bind address (default ``0.0.0.0``)
- ``CSPWARDEN_PORT``: Listen port (default ``8080``)
- ``CSPWARDEN_LOG_LEVEL``: Log level (default ``INFO``)
- ``CSPWARDEN_REGION`` and the destination variables read by
  :meth:`cspwarden.telemetry.config.TelemetryConfig.from_env`

Run the service directly with ``python -m cspwarden.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from cspwarden.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
    except ValueError as exc:
        log_error(logger, "Invalid CSPWARDEN_PORT value: %r: %s", port_str, exc)
        raise SystemExit(1) from exc
    if not _MIN_PORT <= port <= _MAX_PORT:
        log_error(
            logger,
            "Invalid CSPWARDEN_PORT value: %r (must be %d-%d)",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
        )
        raise SystemExit(1)
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from the environment.

    Returns
    -------
    falcon.asgi.App
        App serving the report endpoint and the health probe.

    """
    from cspwarden.api.app import create_app as _create_api_app
    from cspwarden.ingest.factory import build_handler
    from cspwarden.telemetry.config import TelemetryConfig

    config = TelemetryConfig.from_env()
    log_info(
        logger,
        "Telemetry forwarding %s (log=%s metric=%s)",
        "enabled" if config.forwarding_enabled else "disabled",
        config.log_destination is not None,
        config.metric_destination is not None,
    )
    return _create_api_app(build_handler(config))


def main() -> None:
    """Start the cspwarden server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("CSPWARDEN_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("CSPWARDEN_PORT", "8080"))
    log_level_str = os.environ.get("CSPWARDEN_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid CSPWARDEN_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting cspwarden on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "cspwarden.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()

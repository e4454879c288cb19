"""AWS Lambda function URL entrypoint.

Configure the function handler as ``cspwarden.aws_lambda.lambda_handler``.
The codec, configuration, and CloudWatch clients are built on the first
invocation and reused by every later invocation of the same process.
"""

from __future__ import annotations

import asyncio
import functools
import os
import typing as typ

from cspwarden.ingest.factory import build_handler
from cspwarden.ingest.observability import IngestEventLogger
from cspwarden.ingest.outcome import Fault
from cspwarden.ingest.response import build_response
from cspwarden.logging import configure_logging, get_logger, log_warning
from cspwarden.schema.codec import SchemaCodec

if typ.TYPE_CHECKING:
    from cspwarden.ingest.handler import CspReportHandler

__all__ = ["lambda_handler"]

logger = get_logger(__name__)


@functools.cache
def _process_handler() -> CspReportHandler:
    """Build the handler shared by all invocations in this process."""
    log_level_str = os.environ.get("CSPWARDEN_LOG_LEVEL", "INFO")
    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid CSPWARDEN_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )
    return build_handler()


def lambda_handler(event: object, _context: object) -> dict[str, typ.Any]:
    """Handle one function URL invocation.

    A failure while building the handler, such as an invalid region, is
    logged and answered with a 500 envelope like any other fault.

    Parameters
    ----------
    event
        Function URL event (payload format 2.0).
    _context
        Lambda context object (unused).

    Returns
    -------
    dict[str, Any]
        Function URL result with ``statusCode`` and ``body``.

    """
    try:
        handler = _process_handler()
    except Exception as exc:  # noqa: BLE001
        IngestEventLogger().log_fault(exc)
        reply = build_response(Fault(exc), SchemaCodec())
    else:
        reply = asyncio.run(handler.handle_event(event))
    return {"statusCode": reply.status_code, "body": reply.body}

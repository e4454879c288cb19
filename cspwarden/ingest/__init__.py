"""Request validation, report decoding, and replies for CSP reports.

Public API
----------
CspReportHandler
    Runs one invocation through validation, decoding, forwarding, and
    reply construction.
InboundRequest
    Read-only view of the request supplied by a hosting transport.
HandlerReply
    Status code and serialized envelope returned to the transport.
build_handler
    Assemble a handler from telemetry configuration.
validate_request, decode_report, build_response
    The individual pipeline stages.
"""

from cspwarden.ingest.decoder import decode_report
from cspwarden.ingest.factory import build_handler
from cspwarden.ingest.handler import CspReportHandler
from cspwarden.ingest.outcome import Accepted, Fault, Outcome, ParseFailed, Rejected
from cspwarden.ingest.request import InboundRequest
from cspwarden.ingest.response import HandlerReply, build_response
from cspwarden.ingest.validation import validate_request

__all__ = [
    "Accepted",
    "CspReportHandler",
    "Fault",
    "HandlerReply",
    "InboundRequest",
    "Outcome",
    "ParseFailed",
    "Rejected",
    "build_handler",
    "build_response",
    "decode_report",
    "validate_request",
]

"""The CSP report ingestion pipeline.

``CspReportHandler`` runs one invocation start to finish: validate the
request, decode the report, forward telemetry, and build the reply. Early
exits produce their own reply; any exception raised along the way,
including while the transport event is being read, becomes a 500 reply
after it has been logged.

Usage
-----
>>> handler = CspReportHandler(codec=SchemaCodec(), forwarder=forwarder)
>>> reply = await handler.handle_event(function_url_event)
>>> reply.status_code
200

"""

from __future__ import annotations

import typing as typ

from cspwarden.common.headers import resolve_client_ip
from cspwarden.ingest.decoder import decode_report
from cspwarden.ingest.observability import IngestEventLogger
from cspwarden.ingest.outcome import Fault, ParseFailed
from cspwarden.ingest.request import InboundRequest
from cspwarden.ingest.response import build_response
from cspwarden.ingest.validation import validate_request
from cspwarden.telemetry.forwarder import ClientContext

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from cspwarden.ingest.outcome import Outcome
    from cspwarden.ingest.response import HandlerReply
    from cspwarden.schema.codec import SchemaCodec
    from cspwarden.telemetry.forwarder import TelemetryForwarder

__all__ = ["CspReportHandler", "RequestLoader"]

RequestLoader = typ.Callable[[], "cabc.Awaitable[InboundRequest]"]


class CspReportHandler:
    """Validate, decode, and forward browser CSP violation reports.

    Parameters
    ----------
    codec
        Compiled schema codec shared for the process lifetime.
    forwarder
        Telemetry forwarder bound to the frozen process configuration.
    event_logger
        Optional event logger; a default one is created when omitted.

    """

    def __init__(
        self,
        *,
        codec: SchemaCodec,
        forwarder: TelemetryForwarder,
        event_logger: IngestEventLogger | None = None,
    ) -> None:
        """Bind the handler to its long-lived collaborators."""
        self._codec = codec
        self._forwarder = forwarder
        self._events = event_logger or IngestEventLogger()

    @property
    def forwarding_enabled(self) -> bool:
        """Whether accepted reports are relayed to any telemetry sink."""
        return self._forwarder.enabled

    async def handle(self, request: InboundRequest) -> HandlerReply:
        """Handle an already constructed request."""

        async def _given() -> InboundRequest:
            return request

        return await self.run(_given)

    async def handle_event(self, event: object) -> HandlerReply:
        """Handle a raw Lambda function URL event.

        A malformed event is reported as a 500 reply rather than raised.
        """

        async def _from_event() -> InboundRequest:
            return InboundRequest.from_function_url_event(event)

        return await self.run(_from_event)

    async def run(self, load_request: RequestLoader) -> HandlerReply:
        """Load a request with *load_request* and run the pipeline on it.

        Parameters
        ----------
        load_request
            Coroutine factory producing the request. Failures while loading
            are handled like any other fault.

        Returns
        -------
        HandlerReply
            Status code and serialized envelope.

        """
        try:
            request = await load_request()
            outcome = await self._process(request)
        except Exception as exc:  # noqa: BLE001
            self._events.log_fault(exc)
            outcome = Fault(exc)
        return build_response(outcome, self._codec)

    async def _process(self, request: InboundRequest) -> Outcome:
        rejection = validate_request(request)
        if rejection is not None:
            self._events.log_request_rejected(rejection, method=request.method)
            return rejection

        # validate_request guarantees a body is present.
        body = typ.cast("str", request.body)
        decoded = decode_report(
            body,
            is_body_encoded=request.is_body_encoded,
            codec=self._codec,
        )
        if isinstance(decoded, ParseFailed):
            self._events.log_parse_failed(
                decoded, is_body_encoded=request.is_body_encoded
            )
            return decoded

        context = ClientContext(
            client_ip=resolve_client_ip(request.headers, request.source_address),
            user_agent=request.client_user_agent,
        )
        await self._forwarder.forward(decoded.report, context)
        self._events.log_report_accepted(decoded.report, client_ip=context.client_ip)
        return decoded

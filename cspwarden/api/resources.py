"""Falcon resource accepting browser CSP violation reports.

Every HTTP method, OPTIONS included, is routed to the ingestion pipeline
so that a wrong method receives the same JSON envelope as any other
rejection, instead of Falcon's built-in 405 page or its default OPTIONS
responder. HEAD replies carry the 405 status without a body.

Usage
-----
Register the resource on the Falcon app::

    app.add_route("/csp-report", CspReportResource(handler))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import falcon

from cspwarden.ingest.request import InboundRequest

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from cspwarden.ingest.handler import CspReportHandler

__all__ = ["CspReportResource", "read_inbound_request"]


async def read_inbound_request(req: Request) -> InboundRequest:
    """Build an ``InboundRequest`` from a Falcon ASGI request.

    A request with neither a body nor a ``Content-Length`` header is
    treated as having no body; ``Content-Length: 0`` is an empty body.

    Parameters
    ----------
    req
        Falcon request whose stream has not been consumed.

    Returns
    -------
    InboundRequest
        Request view handed to the pipeline.

    """
    raw = await req.stream.read()
    body: str | None
    if not raw and req.content_length is None:
        body = None
    else:
        body = raw.decode("utf-8", errors="replace")
    return InboundRequest(
        method=req.method,
        headers=dict(req.headers),
        body=body,
        is_body_encoded=False,
        source_address=req.remote_addr,
        client_user_agent=req.user_agent,
    )


class CspReportResource:
    """Resource feeding every request into a ``CspReportHandler``."""

    def __init__(self, handler: CspReportHandler) -> None:
        """Configure the resource with the shared handler.

        Parameters
        ----------
        handler
            Pipeline run for each request.

        """
        self._handler = handler

    async def on_post(self, req: Request, resp: Response) -> None:
        """Run the pipeline and write its envelope as the response.

        Parameters
        ----------
        req
            Falcon request object.
        resp
            Falcon response object.

        """

        async def _load() -> InboundRequest:
            return await read_inbound_request(req)

        reply = await self._handler.run(_load)
        resp.status = HTTPStatus(reply.status_code)
        resp.content_type = falcon.MEDIA_JSON
        resp.text = reply.body

    on_get = on_post
    on_put = on_post
    on_patch = on_post
    on_delete = on_post
    on_head = on_post
    on_options = on_post
    on_trace = on_post
    on_connect = on_post

"""Read-only view of one inbound HTTP-shaped request.

``InboundRequest`` is what every hosting transport hands to the pipeline.
The Lambda function URL adapter builds it with
:meth:`InboundRequest.from_function_url_event`; the Falcon resource builds
it from the ASGI request.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import types
import typing as typ

from cspwarden.ingest.errors import RequestShapeError

__all__ = ["InboundRequest"]


def _mapping(value: object, path: str) -> cabc.Mapping[str, typ.Any]:
    if not isinstance(value, cabc.Mapping):
        raise RequestShapeError.not_a_mapping(path)
    return value


def _optional_str(
    source: cabc.Mapping[str, typ.Any], key: str, path: str
) -> str | None:
    value = source.get(key)
    if value is not None and not isinstance(value, str):
        raise RequestShapeError.wrong_type(path, "a string")
    return value


@dc.dataclass(frozen=True, slots=True)
class InboundRequest:
    """HTTP-shaped request as delivered by the hosting transport.

    Attributes
    ----------
    method
        Request method, compared case-sensitively.
    headers
        Header map exactly as the transport supplied it. Names are not
        normalized; look values up with
        :func:`cspwarden.common.headers.header_values`.
    body
        Body text, or ``None`` when the transport delivered no body. An
        empty string is a present, empty body.
    is_body_encoded
        ``True`` when ``body`` is base64 transport encoding.
    source_address
        Peer address reported by the transport.
    client_user_agent
        User agent reported by the transport, when known.

    """

    method: str
    headers: cabc.Mapping[str, str | None] = dc.field(
        default_factory=lambda: types.MappingProxyType({})
    )
    body: str | None = None
    is_body_encoded: bool = False
    source_address: str | None = None
    client_user_agent: str | None = None

    @classmethod
    def from_function_url_event(cls, event: object) -> InboundRequest:
        """Build a request from a Lambda function URL event (payload 2.0).

        Parameters
        ----------
        event
            Decoded invocation event.

        Returns
        -------
        InboundRequest
            Request view over the event.

        Raises
        ------
        RequestShapeError
            If the event is not an object, lacks
            ``requestContext.http.method``, or carries values of the wrong
            type.

        """
        payload = _mapping(event, "event")
        context = _mapping(payload.get("requestContext"), "requestContext")
        http = _mapping(context.get("http"), "requestContext.http")

        method = http.get("method")
        if method is None:
            raise RequestShapeError.missing("requestContext.http.method")
        if not isinstance(method, str):
            raise RequestShapeError.wrong_type("requestContext.http.method", "a string")

        raw_encoded = payload.get("isBase64Encoded")
        if raw_encoded is not None and not isinstance(raw_encoded, bool):
            raise RequestShapeError.wrong_type("isBase64Encoded", "a boolean")

        raw_headers = payload.get("headers")
        headers = {} if raw_headers is None else _mapping(raw_headers, "headers")

        return cls(
            method=method,
            headers=types.MappingProxyType(dict(headers)),
            body=_optional_str(payload, "body", "body"),
            is_body_encoded=raw_encoded is True,
            source_address=_optional_str(
                http, "sourceIp", "requestContext.http.sourceIp"
            ),
            client_user_agent=_optional_str(
                http, "userAgent", "requestContext.http.userAgent"
            ),
        )

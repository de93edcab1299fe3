"""
HTTP/1.1 hand-off for finished requests.

This module converts a FinishedRequest into h11 events so an HTTP/1.1
transport can send it. h11 validates header syntax and picks body
framing from the Content-Length / Transfer-Encoding headers set by the
resolver.

h11 treats a request with neither header as having an empty body, so a
request whose streaming body was left for the transport to frame cannot
be handed to h11 as-is; it is rejected with ProtocolError.
"""

import logging

import h11

from .exceptions import ProtocolError
from .http_primitives import CONTENT_LENGTH, TRANSFER_ENCODING, FinishedRequest

logger = logging.getLogger(__name__)


def to_h11_request(request: FinishedRequest, has_body: bool = True) -> h11.Request:
    """
    Build the h11 Request event for a finished request.

    A Host header is added from the request URL when missing.

    Args:
        request: The finished request
        has_body: Whether body bytes follow the head. Pass False for
            requests without a body.

    Raises:
        ProtocolError: If h11 rejects the method, target or headers, or if
            a request with a body declares no framing
    """
    if has_body and not (request.has_header(CONTENT_LENGTH) or request.has_header(TRANSFER_ENCODING)):
        raise ProtocolError(
            "Request body has neither Content-Length nor Transfer-Encoding; "
            "HTTP/1.1 would send it as an empty body"
        )

    headers = list(request.headers)
    if not request.has_header(b"Host"):
        headers.insert(0, (b"Host", request.authority))

    try:
        return h11.Request(
            method=request.method,
            target=request.target,
            headers=headers,
        )
    except h11.LocalProtocolError as e:
        raise ProtocolError(f"Invalid request: {e}", cause=e) from e


def encode_request_head(request: FinishedRequest, has_body: bool = True) -> bytes:
    """
    Serialize the request line and headers as an HTTP/1.1 client would.

    Returns:
        The bytes of the request head, ending with a blank line

    Raises:
        ProtocolError: If the request can't be framed or h11 rejects it
    """
    event = to_h11_request(request, has_body=has_body)
    connection = h11.Connection(h11.CLIENT)
    try:
        data = connection.send(event)
    except h11.LocalProtocolError as e:
        raise ProtocolError(f"Cannot send request: {e}", cause=e) from e

    logger.debug(f"Encoded {len(data)} bytes of request head for {request.method.decode()} {request.target.decode()}")
    return data

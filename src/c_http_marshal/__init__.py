"""
c_http_marshal - Streaming request marshalling for HTTP clients

Decides how a request with an incrementally produced body is framed
on the wire (Content-Length, chunked transfer, or left to the
transport) and enforces the HTTP/2 restrictions on that choice.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .http_primitives import (
    CHUNKED,
    CONTENT_LENGTH,
    TRANSFER_ENCODING,
    FinishedRequest,
    RequestSkeleton,
    URLComponents,
)
from .policy import HTTPVersion, TransferPolicy
from .transfer import TransferDecision, apply_transfer_headers, decide_transfer, resolve
from .marshaller import (
    FunctionMarshaller,
    Marshaller,
    StreamingRequestMarshaller,
    create_streaming_marshaller,
)
from .http11 import encode_request_head, to_h11_request
from .exceptions import HTTPCoreError, MissingLengthError, ProtocolError, StreamError
from .streams import (
    AsyncRequestBody,
    RequestBody,
    StreamingBody,
    create_async_request_body,
    create_request_body,
)

__all__ = [
    "CHUNKED",
    "CONTENT_LENGTH",
    "TRANSFER_ENCODING",
    "FinishedRequest",
    "RequestSkeleton",
    "URLComponents",
    "HTTPVersion",
    "TransferPolicy",
    "TransferDecision",
    "apply_transfer_headers",
    "decide_transfer",
    "resolve",
    "FunctionMarshaller",
    "Marshaller",
    "StreamingRequestMarshaller",
    "create_streaming_marshaller",
    "encode_request_head",
    "to_h11_request",
    "HTTPCoreError",
    "MissingLengthError",
    "ProtocolError",
    "StreamError",
    "AsyncRequestBody",
    "RequestBody",
    "StreamingBody",
    "create_async_request_body",
    "create_request_body",
]

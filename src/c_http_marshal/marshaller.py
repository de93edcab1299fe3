"""
Streaming request marshaller.

Wraps a base marshaller, which turns a typed request into a request
without body transfer headers, and completes its output with the
headers required by a streaming body.
"""

import logging
from typing import Any, Callable, Generic, TypeVar, Union

from typing_extensions import Protocol

from .http_primitives import FinishedRequest
from .policy import TransferPolicy
from .streams import StreamingBody
from .transfer import resolve

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class Marshaller(Protocol[T_contra]):
    """Converts a typed request into an HTTP request."""

    def marshall(self, obj: T_contra) -> FinishedRequest:
        ...


class FunctionMarshaller(Generic[T]):
    """Adapts a plain callable to the Marshaller protocol."""

    def __init__(self, func: Callable[[T], FinishedRequest]) -> None:
        self._func = func

    def marshall(self, obj: T) -> FinishedRequest:
        return self._func(obj)


class StreamingRequestMarshaller(Generic[T]):
    """
    Marshaller for requests with a streaming body.

    The delegate produces method, URL, query and non-body headers. This
    marshaller then adds Content-Length or Transfer-Encoding according
    to the body's declared length and the transfer policy. It holds no
    mutable state and can be shared between tasks and threads.
    """

    def __init__(
        self,
        delegate: Union[Marshaller[T], Callable[[T], FinishedRequest]],
        body: StreamingBody,
        policy: TransferPolicy = TransferPolicy(),
    ) -> None:
        """
        Initialize StreamingRequestMarshaller.

        Args:
            delegate: Base marshaller, or a callable with the same contract
            body: Streaming body whose declared length drives the headers
            policy: Transfer flags for the operation
        """
        if not hasattr(delegate, "marshall"):
            if not callable(delegate):
                raise TypeError("delegate must have a marshall() method or be callable")
            delegate = FunctionMarshaller(delegate)

        self._delegate = delegate
        self._body = body
        self._policy = policy

    def marshall(self, obj: T) -> FinishedRequest:
        """
        Marshall a typed request into a finished request.

        Raises:
            MissingLengthError: If the body has no length and the policy requires one
        """
        skeleton = self._delegate.marshall(obj).to_builder()
        return resolve(skeleton, self._body, self._policy)

    @property
    def body(self) -> StreamingBody:
        return self._body

    @property
    def policy(self) -> TransferPolicy:
        return self._policy

    def __repr__(self) -> str:
        return f"StreamingRequestMarshaller(delegate={self._delegate!r}, policy={self._policy!r})"


def create_streaming_marshaller(
    delegate: Union[Marshaller[Any], Callable[[Any], FinishedRequest]],
    body: StreamingBody,
    requires_length: bool = False,
    chunked_allowed: bool = False,
    use_http2: bool = False,
) -> StreamingRequestMarshaller[Any]:
    """
    Factory function to create a StreamingRequestMarshaller in one call.

    Args:
        delegate: Base marshaller, or a callable with the same contract
        body: Streaming body
        requires_length: Whether the operation requires a content length
        chunked_allowed: Whether chunked transfer is permitted
        use_http2: Whether the request is sent over HTTP/2

    Returns:
        StreamingRequestMarshaller instance
    """
    policy = TransferPolicy(
        requires_length=requires_length,
        chunked_allowed=chunked_allowed,
        use_http2=use_http2,
    )
    logger.debug(f"Creating streaming marshaller with {policy}")
    return StreamingRequestMarshaller(delegate, body, policy)

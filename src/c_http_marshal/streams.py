"""
Request body sources for c_http_marshal.

This module provides the streaming body abstractions consumed by the
marshalling pipeline. A body may know its total length before any byte
is produced (buffered data, or a length supplied by the producer) or it
may not (generators, piped input, on-the-fly compression).

The marshaller only ever asks a body for its declared length; bytes are
read later by the transport.
"""

from abc import ABC, abstractmethod
from typing import (
    AsyncIterable,
    AsyncIterator,
    Iterable,
    Iterator,
    List,
    Optional,
    Union,
)

from typing_extensions import Protocol, runtime_checkable

from .exceptions import StreamError


SyncData = Union[bytes, List[bytes], Iterable[bytes]]
AsyncData = Union[bytes, List[bytes], AsyncIterable[bytes]]


@runtime_checkable
class StreamingBody(Protocol):
    """Anything that can report the length it will produce, if known."""

    def content_length(self) -> Optional[int]:
        ...


def _measure(data: object) -> Optional[int]:
    """Length of buffered data, or None when it can't be known upfront."""
    if isinstance(data, bytes):
        return len(data)
    elif isinstance(data, list):
        return sum(len(chunk) for chunk in data)
    return None


class _BaseBody(ABC):
    """Length bookkeeping shared by sync and async bodies."""

    def __init__(self, data: object, content_length: Optional[int] = None) -> None:
        if content_length is not None and content_length < 0:
            raise ValueError("content_length must be non-negative")

        measured = _measure(data)
        if content_length is not None and measured is not None and measured != content_length:
            raise ValueError(
                f"Actual content length ({measured}) "
                f"does not match provided content_length ({content_length})"
            )

        self._data = data
        self._content_length = content_length if content_length is not None else measured
        self._closed = False

    def content_length(self) -> Optional[int]:
        """Total number of bytes this body will produce, if known."""
        return self._content_length

    @property
    def closed(self) -> bool:
        """Get whether the body is closed."""
        return self._closed

    @abstractmethod
    def _chunks(self):
        """Iterator over the raw chunks of data."""


class RequestBody(_BaseBody):
    """
    Synchronous request body.

    Accepts bytes, a list of bytes, or any iterable of bytes. Buffered
    data declares its measured length; iterables only declare a length
    when one is supplied by the caller.
    """

    def __init__(self, data: SyncData, content_length: Optional[int] = None) -> None:
        super().__init__(data, content_length)

    def _chunks(self) -> Iterator[bytes]:
        if isinstance(self._data, bytes):
            return iter([self._data])
        return iter(self._data)

    def __iter__(self) -> Iterator[bytes]:
        if self._closed:
            raise StreamError("Cannot iterate over closed body")
        return self._iter_chunks()

    def _iter_chunks(self) -> Iterator[bytes]:
        try:
            for chunk in self._chunks():
                if chunk:
                    yield chunk
        except StreamError:
            raise
        except Exception as e:
            raise StreamError(f"Error reading from body: {e}", cause=e) from e

    def read(self) -> bytes:
        """Read entire body and return as bytes."""
        if self._closed:
            raise StreamError("Cannot read from closed body")
        return b"".join(self)

    def close(self) -> None:
        """Close the body; further reads fail."""
        self._closed = True


class AsyncRequestBody(_BaseBody):
    """
    Asynchronous request body.

    Accepts bytes, a list of bytes, or an async iterable of bytes.
    The producer may run on a different task than the marshaller.
    """

    def __init__(self, data: AsyncData, content_length: Optional[int] = None) -> None:
        super().__init__(data, content_length)

    async def _chunks(self) -> AsyncIterator[bytes]:
        if isinstance(self._data, bytes):
            yield self._data
        elif isinstance(self._data, list):
            for chunk in self._data:
                yield chunk
        else:
            async for chunk in self._data:
                yield chunk

    def __aiter__(self) -> AsyncIterator[bytes]:
        if self._closed:
            raise StreamError("Cannot iterate over closed body")
        return self._aiter_chunks()

    async def _aiter_chunks(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._chunks():
                if chunk:  # Skip empty chunks
                    yield chunk
        except StreamError:
            raise
        except Exception as e:
            raise StreamError(f"Error reading from body: {e}", cause=e) from e

    async def aread(self) -> bytes:
        """Read entire body and return as bytes."""
        if self._closed:
            raise StreamError("Cannot read from closed body")

        chunks = []
        async for chunk in self:
            chunks.append(chunk)
        return b"".join(chunks)

    async def aclose(self) -> None:
        """Close the body; further reads fail."""
        self._closed = True


# Factory functions for creating bodies
def create_request_body(
    data: Union[str, SyncData],
    content_length: Optional[int] = None,
) -> RequestBody:
    """
    Factory function to create a RequestBody from various data types.

    Args:
        data: bytes, string, list of bytes, or iterable of bytes
        content_length: Optional declared length for unmeasurable data

    Returns:
        RequestBody instance
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return RequestBody(data, content_length=content_length)


def create_async_request_body(
    data: Union[str, AsyncData],
    content_length: Optional[int] = None,
) -> AsyncRequestBody:
    """
    Factory function to create an AsyncRequestBody from various data types.

    Args:
        data: bytes, string, list of bytes, or async iterable of bytes
        content_length: Optional declared length for unmeasurable data

    Returns:
        AsyncRequestBody instance
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return AsyncRequestBody(data, content_length=content_length)

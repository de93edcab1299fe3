"""
Unit tests for request body sources.

Tests RequestBody, AsyncRequestBody and the factory functions,
with emphasis on the declared length the marshaller relies on.
"""

import pytest

from c_http_marshal.streams import (
    AsyncRequestBody,
    RequestBody,
    StreamingBody,
    create_async_request_body,
    create_request_body,
)
from c_http_marshal.exceptions import StreamError


class TestRequestBody:
    """Test RequestBody class functionality."""
    
    def test_bytes_declare_length(self) -> None:
        """Test buffered bytes report their measured length."""
        body = RequestBody(b"Hello, World!")
        assert body.content_length() == 13
        assert list(body) == [b"Hello, World!"]
    
    def test_list_declares_length(self, sample_stream_data) -> None:
        """Test a list of chunks reports the summed length."""
        body = RequestBody(sample_stream_data)
        assert body.content_length() == 13
        assert body.read() == b"Hello, World!"
    
    def test_generator_has_no_length(self, sample_stream_data) -> None:
        """Test an iterable of unknown size declares no length."""
        body = RequestBody(chunk for chunk in sample_stream_data)
        assert body.content_length() is None
        assert body.read() == b"Hello, World!"
    
    def test_generator_with_supplied_length(self, sample_stream_data) -> None:
        """Test a producer can state the length of an iterable upfront."""
        body = RequestBody(iter(sample_stream_data), content_length=13)
        assert body.content_length() == 13
    
    def test_content_length_validation(self) -> None:
        """Test content length validation."""
        assert RequestBody(b"abc", content_length=3).content_length() == 3
        
        with pytest.raises(ValueError, match="does not match provided content_length"):
            RequestBody(b"abc", content_length=10)
        
        with pytest.raises(ValueError, match="content_length must be non-negative"):
            RequestBody(iter([]), content_length=-1)
    
    def test_empty_body(self) -> None:
        """Test an empty body declares zero and yields nothing."""
        body = RequestBody(b"")
        assert body.content_length() == 0
        assert list(body) == []
    
    def test_skips_empty_chunks(self) -> None:
        """Test empty chunks are not yielded."""
        body = RequestBody([b"a", b"", b"b"])
        assert list(body) == [b"a", b"b"]
    
    def test_close(self) -> None:
        """Test closing body."""
        body = RequestBody(b"data")
        assert body.closed is False
        body.close()
        assert body.closed is True
        
        with pytest.raises(StreamError, match="Cannot read from closed body"):
            body.read()
        
        with pytest.raises(StreamError, match="Cannot iterate over closed body"):
            list(body)
    
    def test_iter_closed_fails_immediately(self) -> None:
        """Test starting iteration on a closed body raises without a read."""
        body = RequestBody(b"data")
        body.close()
        
        with pytest.raises(StreamError, match="Cannot iterate over closed body"):
            iter(body)
    
    def test_producer_error_wrapped(self) -> None:
        """Test errors raised by the producer surface as StreamError."""
        def broken():
            yield b"first"
            raise OSError("pipe closed")
        
        body = RequestBody(broken())
        with pytest.raises(StreamError, match="pipe closed") as exc_info:
            body.read()
        assert isinstance(exc_info.value.cause, OSError)


class TestAsyncRequestBody:
    """Test AsyncRequestBody class functionality."""
    
    @pytest.mark.asyncio
    async def test_create_with_bytes(self) -> None:
        """Test creating AsyncRequestBody with bytes."""
        body = AsyncRequestBody(b"Hello, World!")
        assert body.content_length() == 13
        
        chunks = []
        async for chunk in body:
            chunks.append(chunk)
        assert chunks == [b"Hello, World!"]
    
    @pytest.mark.asyncio
    async def test_create_with_async_iterable(self, async_data_generator, sample_stream_data) -> None:
        """Test an async producer declares no length unless supplied."""
        body = AsyncRequestBody(async_data_generator(sample_stream_data))
        assert body.content_length() is None
        assert await body.aread() == b"Hello, World!"
    
    @pytest.mark.asyncio
    async def test_supplied_length(self, async_data_generator, sample_stream_data) -> None:
        """Test supplied length for an async producer."""
        body = AsyncRequestBody(async_data_generator(sample_stream_data), content_length=13)
        assert body.content_length() == 13
    
    @pytest.mark.asyncio
    async def test_multiple_iterations(self, sample_stream_data) -> None:
        """Test buffered bodies can be iterated more than once."""
        body = AsyncRequestBody(sample_stream_data)
        assert await body.aread() == await body.aread() == b"Hello, World!"
    
    @pytest.mark.asyncio
    async def test_aclose(self) -> None:
        """Test closing body."""
        body = AsyncRequestBody(b"Hello")
        await body.aclose()
        assert body.closed is True
        
        with pytest.raises(StreamError, match="Cannot read from closed body"):
            await body.aread()
        
        with pytest.raises(StreamError, match="Cannot iterate over closed body"):
            async for _ in body:
                pass
    
    @pytest.mark.asyncio
    async def test_aiter_closed_fails_immediately(self) -> None:
        """Test starting async iteration on a closed body raises at once."""
        body = AsyncRequestBody(b"Hello")
        await body.aclose()
        
        with pytest.raises(StreamError, match="Cannot iterate over closed body"):
            body.__aiter__()
    
    @pytest.mark.asyncio
    async def test_producer_error_wrapped(self) -> None:
        """Test errors raised by the producer surface as StreamError."""
        async def broken():
            yield b"first"
            raise RuntimeError("compressor failed")
        
        body = AsyncRequestBody(broken())
        with pytest.raises(StreamError, match="compressor failed"):
            await body.aread()


class TestFactoryFunctions:
    """Test factory functions."""
    
    def test_create_request_body_from_string(self) -> None:
        """Test strings are encoded as UTF-8 before measuring."""
        body = create_request_body("héllo")
        assert body.content_length() == 6
        assert body.read() == "héllo".encode("utf-8")
    
    @pytest.mark.asyncio
    async def test_create_async_request_body_from_string(self) -> None:
        """Test async factory with a string."""
        body = create_async_request_body("hi")
        assert body.content_length() == 2
        assert await body.aread() == b"hi"
    
    def test_bodies_satisfy_protocol(self) -> None:
        """Test both body kinds are StreamingBody instances."""
        assert isinstance(RequestBody(b""), StreamingBody)
        assert isinstance(AsyncRequestBody(b""), StreamingBody)
        assert not isinstance(object(), StreamingBody)

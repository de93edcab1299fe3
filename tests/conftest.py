"""
Pytest configuration for c_http_marshal tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import pytest
from dataclasses import dataclass
from typing import List, Optional

from c_http_marshal.http_primitives import FinishedRequest


@dataclass
class PutObjectRequest:
    """Typed request used by the fake base marshaller."""
    bucket: str
    key: str
    content_type: str = "application/octet-stream"


class FakeBaseMarshaller:
    """Base marshaller that emits path/query/header fields only."""
    
    def __init__(self) -> None:
        self.calls = 0
    
    def marshall(self, obj: PutObjectRequest) -> FinishedRequest:
        self.calls += 1
        return FinishedRequest.create(
            "PUT",
            f"https://{obj.bucket}.storage.example.com/{obj.key}?versioning=on",
            headers=[("Content-Type", obj.content_type)],
        )


class MockBody:
    """Body that only reports a length and counts how often it was asked."""
    
    def __init__(self, length: Optional[int]) -> None:
        self.length = length
        self.queries = 0
    
    def content_length(self) -> Optional[int]:
        self.queries += 1
        return self.length


@pytest.fixture
def base_marshaller():
    """Create a fake base marshaller."""
    return FakeBaseMarshaller()


@pytest.fixture
def put_request():
    """Sample typed request."""
    return PutObjectRequest(bucket="photos", key="2024/cat.jpg", content_type="image/jpeg")


@pytest.fixture
def mock_body():
    """Create a length-only body for testing."""
    def _create_body(length: Optional[int]) -> MockBody:
        return MockBody(length)
    return _create_body


@pytest.fixture
def skeleton(base_marshaller, put_request):
    """Skeleton as produced by the base marshaller."""
    return base_marshaller.marshall(put_request).to_builder()


@pytest.fixture
def sample_headers():
    """Sample headers for testing."""
    return [
        (b"Content-Type", b"application/json"),
        (b"Authorization", b"Bearer token123"),
        (b"User-Agent", b"c_http_marshal/0.1.0"),
    ]


@pytest.fixture
def sample_stream_data() -> List[bytes]:
    """Sample stream data for testing."""
    return [
        b"Hello",
        b", ",
        b"World",
        b"!",
    ]


@pytest.fixture
def async_data_generator():
    """Create an async data generator for testing."""
    async def generator(data: List[bytes]):
        for chunk in data:
            yield chunk
    
    return generator

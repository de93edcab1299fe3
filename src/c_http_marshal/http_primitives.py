"""
HTTP primitives for c_http_marshal.

This module defines the request data structures that flow through
the marshalling pipeline: a mutable RequestSkeleton that marshallers
write into, and an immutable FinishedRequest handed to the transport.
A skeleton can only become a finished request through build().
"""

from typing import (
    Iterable,
    List,
    Optional,
    Tuple,
    Union,
    NamedTuple,
)
from dataclasses import dataclass, field
from urllib.parse import quote, urlparse


# Type aliases for better readability
Header = Tuple[bytes, bytes]
Headers = List[Header]
# Query pairs are kept percent-encoded; None marks a valueless parameter
QueryParam = Tuple[str, Optional[str]]
QueryParams = List[QueryParam]

# Header names and values used for body transfer
CONTENT_LENGTH = b"Content-Length"
TRANSFER_ENCODING = b"Transfer-Encoding"
CHUNKED = b"chunked"

# Characters left as-is when normalizing a raw query component
_QUERY_SAFE = "!$'()*+,;=:@/?%~"


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("latin-1")
    return value


class URLComponents(NamedTuple):
    """Immutable representation of URL components."""
    scheme: bytes
    host: bytes
    port: int
    path: bytes
    query: Tuple[QueryParam, ...] = ()

    @classmethod
    def from_url(cls, url: str) -> "URLComponents":
        """Create URLComponents from a URL string."""
        parsed = urlparse(url)
        scheme = parsed.scheme.encode() if parsed.scheme else b"http"
        host = parsed.hostname.encode() if parsed.hostname else b""
        port = parsed.port or (443 if scheme == b"https" else 80)
        path = parsed.path.encode() if parsed.path else b"/"
        query = parse_query(parsed.query)

        return cls(scheme=scheme, host=host, port=port, path=path, query=query)


@dataclass(frozen=True)
class FinishedRequest:
    """
    Immutable HTTP request representation.

    Once built, the request cannot be modified. Any change to its
    headers requires a new skeleton via to_builder() and a new build().
    """

    method: bytes
    scheme: bytes
    host: bytes
    port: int
    path: bytes = b"/"
    query: Tuple[QueryParam, ...] = ()
    headers: Tuple[Header, ...] = ()

    def __post_init__(self) -> None:
        """Validate request data after initialization."""
        if not isinstance(self.method, bytes):
            raise ValueError("method must be bytes")

        if not all(isinstance(c, bytes) for c in (self.scheme, self.host, self.path)):
            raise ValueError("URL components must be bytes")

        if not isinstance(self.port, int):
            raise ValueError("URL port must be int")

        if not isinstance(self.headers, tuple):
            raise ValueError("headers must be a tuple")

        for name, value in self.headers:
            if not isinstance(name, bytes) or not isinstance(value, bytes):
                raise ValueError("header names and values must be bytes")

    @classmethod
    def create(
        cls,
        method: Union[str, bytes],
        url: Union[str, URLComponents],
        headers: Optional[Iterable[Tuple[Union[str, bytes], Union[str, bytes]]]] = None,
    ) -> "FinishedRequest":
        """
        Create a FinishedRequest with proper type conversion.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: URL string or URLComponents
            headers: Optional iterable of (name, value) header tuples

        Returns:
            New FinishedRequest instance
        """
        if isinstance(url, str):
            url = URLComponents.from_url(url)
        elif not isinstance(url, URLComponents):
            raise ValueError("url must be string or URLComponents")

        converted = tuple(
            (_to_bytes(name), _to_bytes(value)) for name, value in (headers or ())
        )

        return cls(
            method=_to_bytes(method),
            scheme=url.scheme,
            host=url.host,
            port=url.port,
            path=url.path,
            query=tuple(url.query),
            headers=converted,
        )

    def to_builder(self) -> "RequestSkeleton":
        """Return a fresh mutable skeleton carrying this request's fields."""
        return RequestSkeleton(
            method=self.method,
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query=list(self.query),
            headers=list(self.headers),
        )

    def get_header(self, name: Union[str, bytes]) -> Optional[bytes]:
        """Get a header value by name (case-insensitive)."""
        return _find_header(self.headers, name)

    def has_header(self, name: Union[str, bytes]) -> bool:
        """Check if a header exists (case-insensitive)."""
        return self.get_header(name) is not None

    @property
    def target(self) -> bytes:
        """Request target: path plus the query string."""
        if not self.query:
            return self.path
        return self.path + b"?" + render_query(self.query).encode("ascii")

    @property
    def authority(self) -> bytes:
        """Host, with the port when it is not the scheme's default."""
        default_port = 443 if self.scheme == b"https" else 80
        if self.port == default_port:
            return self.host
        return self.host + b":" + str(self.port).encode("ascii")


@dataclass
class RequestSkeleton:
    """
    Mutable, in-progress HTTP request.

    Marshallers populate method, URL parts, query and headers here.
    Call build() as the last step to obtain a FinishedRequest.
    """

    method: bytes
    scheme: bytes
    host: bytes
    port: int
    path: bytes = b"/"
    query: QueryParams = field(default_factory=list)
    headers: Headers = field(default_factory=list)

    def put_header(self, name: Union[str, bytes], value: Union[str, bytes]) -> "RequestSkeleton":
        """Set a header, replacing any existing values (case-insensitive)."""
        name = _to_bytes(name)
        self.remove_header(name)
        self.headers.append((name, _to_bytes(value)))
        return self

    def append_header(self, name: Union[str, bytes], value: Union[str, bytes]) -> "RequestSkeleton":
        """Add a header value, keeping existing ones."""
        self.headers.append((_to_bytes(name), _to_bytes(value)))
        return self

    def remove_header(self, name: Union[str, bytes]) -> bool:
        """Remove every value of a header. Returns True if any was removed."""
        name_lower = _to_bytes(name).lower()
        kept = [(n, v) for n, v in self.headers if n.lower() != name_lower]
        removed = len(kept) != len(self.headers)
        self.headers[:] = kept
        return removed

    def get_header(self, name: Union[str, bytes]) -> Optional[bytes]:
        """Get a header value by name (case-insensitive)."""
        return _find_header(self.headers, name)

    def has_header(self, name: Union[str, bytes]) -> bool:
        """Check if a header exists (case-insensitive)."""
        return self.get_header(name) is not None

    def add_query_param(self, name: str, value: Optional[str] = None) -> "RequestSkeleton":
        """Append a query parameter, percent-encoding name and value."""
        encoded = None if value is None else quote(value, safe="")
        self.query.append((quote(name, safe=""), encoded))
        return self

    def copy(self) -> "RequestSkeleton":
        """Return an independent copy of this skeleton."""
        return RequestSkeleton(
            method=self.method,
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query=list(self.query),
            headers=list(self.headers),
        )

    def build(self) -> FinishedRequest:
        """Freeze this skeleton into a FinishedRequest."""
        return FinishedRequest(
            method=self.method,
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query=tuple(self.query),
            headers=tuple(self.headers),
        )


def _find_header(headers: Iterable[Header], name: Union[str, bytes]) -> Optional[bytes]:
    name_lower = _to_bytes(name).lower()
    for header_name, header_value in headers:
        if header_name.lower() == name_lower:
            return header_value
    return None


def parse_query(raw: str) -> Tuple[QueryParam, ...]:
    """
    Split a raw query string into encoded (name, value) pairs.

    Escapes are not decoded, so render_query() gives back the same
    string. A parameter without "=" (e.g. "?uploads") has value None.
    Characters that are not legal in a request target are percent-encoded.
    """
    if not raw:
        return ()

    params = []
    for part in raw.split("&"):
        name, sep, value = part.partition("=")
        name = quote(name, safe=_QUERY_SAFE)
        params.append((name, quote(value, safe=_QUERY_SAFE) if sep else None))
    return tuple(params)


def render_query(params: Iterable[QueryParam]) -> str:
    """Join encoded (name, value) pairs into a query string."""
    return "&".join(name if value is None else f"{name}={value}" for name, value in params)

"""
Transfer policy configuration.

A TransferPolicy describes, per operation and per transport, which
body transfer strategies are legal or required.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class HTTPVersion(Enum):
    """Negotiated wire protocol."""
    HTTP_1_1 = "HTTP/1.1"
    HTTP_2 = "HTTP/2"


@dataclass(frozen=True)
class TransferPolicy:
    """
    Immutable set of transfer flags.

    Attributes:
        requires_length: The operation mandates a known content length.
        chunked_allowed: Chunked transfer may be used when the length is unknown.
        use_http2: The request goes out over HTTP/2, which never carries
            a Transfer-Encoding header.
    """

    requires_length: bool = False
    chunked_allowed: bool = False
    use_http2: bool = False

    @classmethod
    def for_protocol(
        cls,
        http_version: Union[HTTPVersion, str],
        requires_length: bool = False,
        chunked_allowed: bool = False,
    ) -> "TransferPolicy":
        """
        Create a policy whose HTTP/2 flag follows the negotiated protocol.

        Args:
            http_version: HTTPVersion member or its string value ("HTTP/2")
            requires_length: Whether the operation requires a content length
            chunked_allowed: Whether chunked transfer is permitted

        Returns:
            New TransferPolicy instance
        """
        version = HTTPVersion(http_version)
        return cls(
            requires_length=requires_length,
            chunked_allowed=chunked_allowed,
            use_http2=version is HTTPVersion.HTTP_2,
        )

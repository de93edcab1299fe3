"""
Custom exceptions for c_http_marshal.

This module defines the exception hierarchy raised while
marshalling streaming requests and handing them to a transport.
"""

from typing import Optional


class HTTPCoreError(Exception):
    """Base exception for all c_http_marshal errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class MissingLengthError(HTTPCoreError):
    """
    Raised when an operation requires a known content length
    and the request body did not declare one.
    """
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Missing length: {message}", cause)


class ProtocolError(HTTPCoreError):
    """Raised when a request cannot be expressed on the wire."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Protocol error: {message}", cause)


class StreamError(HTTPCoreError):
    """Raised when there's an error with request body reads."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Stream error: {message}", cause)

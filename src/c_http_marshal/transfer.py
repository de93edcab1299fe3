"""
Streaming transfer-encoding resolution.

Decides how a request with an incrementally produced body is framed on
the wire: an explicit Content-Length, chunked transfer, or no transfer
header at all (the transport decides). The decision is evaluated in a
fixed order, since the policy flags may conflict:

1. A declared length always wins and becomes Content-Length.
2. Otherwise, an operation that requires a length fails.
3. Otherwise, chunked transfer is used if allowed and not on HTTP/2.
4. Otherwise, the request is left for the transport to frame.
"""

import logging
from enum import Enum
from typing import Optional

from .exceptions import MissingLengthError
from .http_primitives import (
    CHUNKED,
    CONTENT_LENGTH,
    TRANSFER_ENCODING,
    FinishedRequest,
    RequestSkeleton,
)
from .policy import TransferPolicy
from .streams import StreamingBody

logger = logging.getLogger(__name__)

MISSING_LENGTH_MESSAGE = (
    "This operation requires a Content-Length header to be set. "
    "Please set the content length on the request body."
)


class TransferDecision(Enum):
    """Outcome of the transfer-encoding decision."""
    CONTENT_LENGTH = "content-length"
    CHUNKED = "chunked"
    DELEGATE = "delegate"


def _validate_length(declared_length: Optional[int]) -> None:
    if declared_length is None:
        return
    # bool is an int subclass but never a valid length
    if isinstance(declared_length, bool) or not isinstance(declared_length, int):
        raise ValueError(
            f"declared content length must be an int, got {type(declared_length).__name__}"
        )
    if declared_length < 0:
        raise ValueError(f"declared content length must be non-negative, got {declared_length}")


def decide_transfer(declared_length: Optional[int], policy: TransferPolicy) -> TransferDecision:
    """
    Pick the transfer strategy for a body.

    Args:
        declared_length: Length reported by the body, or None if unknown
        policy: Transfer flags for the operation

    Returns:
        The chosen TransferDecision

    Raises:
        MissingLengthError: If no length is known and the policy requires one
        ValueError: If the declared length is not a non-negative int
    """
    _validate_length(declared_length)

    if declared_length is not None:
        return TransferDecision.CONTENT_LENGTH

    if policy.requires_length:
        raise MissingLengthError(MISSING_LENGTH_MESSAGE)

    if policy.chunked_allowed and not policy.use_http2:
        return TransferDecision.CHUNKED

    return TransferDecision.DELEGATE


def apply_transfer_headers(
    skeleton: RequestSkeleton,
    declared_length: Optional[int],
    policy: TransferPolicy,
) -> TransferDecision:
    """
    Write the transfer headers for a decision onto a skeleton.

    Any Content-Length or Transfer-Encoding already present is dropped
    first, so the result carries at most one of them. On failure the
    skeleton is left untouched.
    """
    decision = decide_transfer(declared_length, policy)

    for name in (CONTENT_LENGTH, TRANSFER_ENCODING):
        if skeleton.remove_header(name):
            logger.debug(f"Dropped stale {name.decode()} header from marshalled request")

    if decision is TransferDecision.CONTENT_LENGTH:
        skeleton.put_header(CONTENT_LENGTH, str(declared_length))
    elif decision is TransferDecision.CHUNKED:
        skeleton.put_header(TRANSFER_ENCODING, CHUNKED)

    logger.debug(
        f"Transfer decision for {skeleton.method.decode()} {skeleton.path.decode()}: "
        f"{decision.value} (length={declared_length}, policy={policy})"
    )
    return decision


def resolve(
    skeleton: RequestSkeleton,
    body: StreamingBody,
    policy: TransferPolicy,
) -> FinishedRequest:
    """
    Add body transfer headers to a skeleton and finalize it.

    The body's length is queried exactly once; its bytes are never read.

    Args:
        skeleton: Request produced by the base marshaller
        body: Streaming body handle
        policy: Transfer flags for the operation

    Returns:
        The finished, immutable request

    Raises:
        MissingLengthError: If the body has no length and the policy requires one
    """
    apply_transfer_headers(skeleton, body.content_length(), policy)
    return skeleton.build()

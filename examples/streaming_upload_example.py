"""
Example usage of c_http_marshal.

Shows how the transfer headers of an upload change with the body
source and the transfer policy of the operation.
"""

import asyncio
from dataclasses import dataclass

from c_http_marshal import (
    AsyncRequestBody,
    FinishedRequest,
    HTTPVersion,
    MissingLengthError,
    RequestBody,
    StreamingRequestMarshaller,
    TransferPolicy,
    encode_request_head,
)


@dataclass
class UploadRequest:
    bucket: str
    key: str


def marshall_upload(request: UploadRequest) -> FinishedRequest:
    """Base marshaller: URL and non-body headers only."""
    return FinishedRequest.create(
        "PUT",
        f"https://{request.bucket}.storage.example.com/{request.key}",
        headers=[("Content-Type", "application/octet-stream")],
    )


async def compressed_chunks():
    """Simulate on-the-fly compression: size unknown upfront."""
    for _ in range(3):
        yield b"z" * 512
        await asyncio.sleep(0)


def show(title: str, request: FinishedRequest) -> None:
    print(f"=== {title} ===")
    print(encode_request_head(request).decode("latin-1"))


def main() -> None:
    upload = UploadRequest(bucket="backups", key="db.sql.gz")

    buffered = StreamingRequestMarshaller(marshall_upload, RequestBody(b"x" * 4096))
    show("Buffered body", buffered.marshall(upload))

    policy = TransferPolicy.for_protocol(HTTPVersion.HTTP_1_1, chunked_allowed=True)
    streamed = StreamingRequestMarshaller(
        marshall_upload, AsyncRequestBody(compressed_chunks()), policy
    )
    show("Compressed stream over HTTP/1.1", streamed.marshall(upload))

    strict = StreamingRequestMarshaller(
        marshall_upload,
        AsyncRequestBody(compressed_chunks()),
        TransferPolicy(requires_length=True),
    )
    try:
        strict.marshall(upload)
    except MissingLengthError as e:
        print(f"=== Length-required operation ===\n{e}")


if __name__ == "__main__":
    main()

from collections.abc import Iterator

from framewire.core.models.errors import EndOfStream, FrameIOError
from framewire.core.ports.stream import ByteReader, ByteWriter

# Errors a file-like object raises when it cannot serve a read/write.
# ValueError covers operations on closed files.
STREAM_ERRORS = (OSError, ValueError)


def iter_exact(
    stream: ByteReader,
    size: int,
    chunk_size: int,
    at_boundary: bool = False,
) -> Iterator[bytes]:
    """
    Yield chunks read from `stream` until exactly `size` bytes were
    produced. Partial reads are retried; a read returning no data before
    `size` bytes arrived raises FrameIOError.

    With `at_boundary`, running out of data before the first byte raises
    EndOfStream instead: the stream ended cleanly between two frames.
    """
    received = 0
    while received < size:
        want = min(chunk_size, size - received)
        try:
            chunk = stream.read(want)
        except STREAM_ERRORS as ex:
            raise FrameIOError(
                "Stream read failed", ex, expected=size, received=received
            ) from ex

        if chunk is None:
            raise FrameIOError(
                "Stream has no data ready (non-blocking stream)",
                expected=size,
                received=received,
            )

        if not chunk:
            if at_boundary and received == 0:
                raise EndOfStream(
                    "End of stream", expected=size, received=0
                )
            raise FrameIOError(
                f"Unexpected end of stream after {received} of {size} bytes",
                expected=size,
                received=received,
            )

        if len(chunk) > want:
            raise FrameIOError(
                f"Stream returned {len(chunk)} bytes for a {want} bytes read",
                expected=size,
                received=received,
            )

        received += len(chunk)
        yield chunk


def read_exact(
    stream: ByteReader,
    size: int,
    chunk_size: int,
    at_boundary: bool = False,
) -> bytes:
    """Read exactly `size` bytes from `stream`."""
    if size == 0:
        return b""

    buffer = bytearray()
    for chunk in iter_exact(stream, size, chunk_size, at_boundary):
        buffer.extend(chunk)
    return bytes(buffer)


def write_all(stream: ByteWriter, data: bytes) -> None:
    """Write every byte of `data` to `stream`, retrying partial writes."""
    view = memoryview(data)
    total = len(view)
    written = 0
    while written < total:
        try:
            n = stream.write(view[written:])
        except STREAM_ERRORS as ex:
            raise FrameIOError(
                f"Stream write failed after {written} of {total} bytes", ex
            ) from ex

        if n is None:
            return
        if n <= 0:
            raise FrameIOError(
                f"Stream accepted no data after {written} of {total} bytes"
            )
        written += n


def copy_exact(
    source: ByteReader,
    target: ByteWriter,
    size: int,
    chunk_size: int,
) -> None:
    """Copy exactly `size` bytes from `source` to `target`, chunk by chunk."""
    for chunk in iter_exact(source, size, chunk_size):
        write_all(target, chunk)

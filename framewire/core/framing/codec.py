from collections.abc import Iterator
from typing import Any, TypeVar, overload

from framewire.core.framing.payload import PayloadCodec
from framewire.core.helpers.io import copy_exact, read_exact, write_all
from framewire.core.models.config import FrameConfig
from framewire.core.models.errors import EndOfStream
from framewire.core.models.frame import HEADER_SIZE, Frame, pack_header, unpack_header
from framewire.core.ports.serializer import Serializer
from framewire.core.ports.stream import ByteReader, ByteWriter

T = TypeVar("T")


class FrameCodec(PayloadCodec):
    """
    Reads and writes length-prefixed frames on blocking byte streams.

    Every frame starts with an 8-byte little-endian unsigned length followed
    by exactly that many payload bytes, the Serializer's encoding of one
    value. Frames follow each other with no separator, so a reader positioned
    at a frame boundary always finds the next header.

    Each operation borrows the caller's stream for the duration of the call
    and keeps nothing between calls. Operations are neither atomic nor
    thread-safe with respect to a single stream: a failure in the middle of
    a write leaves a truncated frame behind, and concurrent callers on the
    same stream must serialize access themselves.

    Errors are raised as FrameIOError (stream failures, short reads) or
    FrameCodecError (serializer failures). A stream that is exhausted
    exactly at a frame boundary raises EndOfStream, a FrameIOError subclass.
    """
    def __init__(
        self,
        serializer: Serializer,
        config: FrameConfig | None = None,
    ) -> None:
        super().__init__(serializer, config, "core.framing.codec")

    def write_frame(self, stream: ByteWriter, payload: bytes) -> None:
        """Write `payload` as one frame: header, then the payload verbatim."""
        self.check_length(len(payload))
        write_all(stream, pack_header(len(payload)))
        write_all(stream, payload)
        self._logger.debug(f"Frame written ({len(payload)} bytes)")

    def write_value(self, stream: ByteWriter, value: Any) -> None:
        """
        Encode `value` and write it to `stream` as one frame.

        On success exactly `8 + len(payload)` bytes were written. Nothing is
        written when the value cannot be encoded or is over the size limit.
        """
        self.write_frame(stream, self.encode(value))

    def read_frame(self, stream: ByteReader) -> Frame:
        """Read one frame from `stream` without decoding its payload."""
        chunk_size = self._config.chunk_size
        header = read_exact(stream, HEADER_SIZE, chunk_size, at_boundary=True)
        length = unpack_header(header)
        self.check_length(length)
        payload = read_exact(stream, length, chunk_size)
        self._logger.debug(f"Frame read ({length} bytes)")
        return Frame(payload=payload)

    @overload
    def read_value(self, stream: ByteReader, into: None = None) -> Any: ...

    @overload
    def read_value(self, stream: ByteReader, into: type[T]) -> T: ...

    def read_value(self, stream: ByteReader, into: Any = None) -> Any:
        """
        Read one frame from `stream` and decode it, optionally into `into`.

        The stream is left positioned right after the frame. The payload is
        read in full before decoding starts, so a decode failure never
        leaves the stream in the middle of a frame.
        """
        frame = self.read_frame(stream)
        return self.decode(frame.payload, into)

    def iter_values(
        self,
        stream: ByteReader,
        into: Any = None,
    ) -> Iterator[Any]:
        """
        Yield every value of `stream` until it ends cleanly at a frame
        boundary. A truncated trailing frame still raises FrameIOError.
        """
        while True:
            try:
                frame = self.read_frame(stream)
            except EndOfStream:
                return
            yield self.decode(frame.payload, into)

    def iter_frames(self, stream: ByteReader) -> Iterator[Frame]:
        """Yield every raw frame of `stream` until a clean end of stream."""
        while True:
            try:
                frame = self.read_frame(stream)
            except EndOfStream:
                return
            yield frame

    def relay(self, source: ByteReader, target: ByteWriter) -> int:
        """
        Copy one frame from `source` to `target` byte for byte, without
        decoding it. The header is forwarded before the payload is read.

        Returns the payload length of the relayed frame.
        """
        chunk_size = self._config.chunk_size
        header = read_exact(source, HEADER_SIZE, chunk_size, at_boundary=True)
        length = unpack_header(header)
        self.check_length(length)
        write_all(target, header)
        copy_exact(source, target, length, chunk_size)
        self._logger.debug(f"Frame relayed ({length} bytes)")
        return length

import asyncio
from collections.abc import AsyncIterator
from typing import Any, TypeVar, overload

from framewire.core.framing.payload import PayloadCodec
from framewire.core.models.config import FrameConfig
from framewire.core.models.errors import EndOfStream, FrameIOError
from framewire.core.models.frame import HEADER_SIZE, Frame, pack_header, unpack_header
from framewire.core.ports.serializer import Serializer

T = TypeVar("T")


class AsyncFrameCodec(PayloadCodec):
    """
    asyncio counterpart of FrameCodec, working on StreamReader/StreamWriter
    pairs such as the ones returned by `asyncio.open_connection()`.

    The wire format and the error taxonomy are identical: a frame is an
    8-byte little-endian length followed by the payload, stream failures
    raise FrameIOError and serializer failures raise FrameCodecError.

    Every write is followed by `drain()`, so a slow peer applies
    backpressure to the caller. Cancellation is never intercepted.
    """
    def __init__(
        self,
        serializer: Serializer,
        config: FrameConfig | None = None,
    ) -> None:
        super().__init__(serializer, config, "core.framing.aio")

    async def write_frame(self, writer: asyncio.StreamWriter, payload: bytes) -> None:
        self.check_length(len(payload))
        await self._write(writer, pack_header(len(payload)) + payload)
        self._logger.debug(f"Frame written ({len(payload)} bytes)")

    async def write_value(self, writer: asyncio.StreamWriter, value: Any) -> None:
        await self.write_frame(writer, self.encode(value))

    async def read_frame(self, reader: asyncio.StreamReader) -> Frame:
        header = await self._read(reader, HEADER_SIZE, at_boundary=True)
        length = unpack_header(header)
        self.check_length(length)
        payload = bytearray()
        async for chunk in self._iter_exact(reader, length):
            payload.extend(chunk)
        self._logger.debug(f"Frame read ({length} bytes)")
        return Frame(payload=bytes(payload))

    @overload
    async def read_value(self, reader: asyncio.StreamReader, into: None = None) -> Any: ...

    @overload
    async def read_value(self, reader: asyncio.StreamReader, into: type[T]) -> T: ...

    async def read_value(self, reader: asyncio.StreamReader, into: Any = None) -> Any:
        frame = await self.read_frame(reader)
        return self.decode(frame.payload, into)

    async def iter_values(
        self,
        reader: asyncio.StreamReader,
        into: Any = None,
    ) -> AsyncIterator[Any]:
        while True:
            try:
                frame = await self.read_frame(reader)
            except EndOfStream:
                return
            yield self.decode(frame.payload, into)

    async def relay(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> int:
        header = await self._read(reader, HEADER_SIZE, at_boundary=True)
        length = unpack_header(header)
        self.check_length(length)
        await self._write(writer, header)
        async for chunk in self._iter_exact(reader, length):
            await self._write(writer, chunk)
        self._logger.debug(f"Frame relayed ({length} bytes)")
        return length

    async def _iter_exact(
        self,
        reader: asyncio.StreamReader,
        size: int,
    ) -> AsyncIterator[bytes]:
        chunk_size = self._config.chunk_size
        received = 0
        while received < size:
            want = min(chunk_size, size - received)
            try:
                chunk = await reader.readexactly(want)
            except asyncio.IncompleteReadError as ex:
                got = received + len(ex.partial)
                raise FrameIOError(
                    f"Unexpected end of stream after {got} of {size} bytes",
                    ex,
                    expected=size,
                    received=got,
                ) from ex
            except OSError as ex:
                raise FrameIOError(
                    "Stream read failed", ex, expected=size, received=received
                ) from ex
            received += len(chunk)
            yield chunk

    async def _read(
        self,
        reader: asyncio.StreamReader,
        size: int,
        at_boundary: bool = False,
    ) -> bytes:
        try:
            return await reader.readexactly(size)
        except asyncio.IncompleteReadError as ex:
            if at_boundary and not ex.partial:
                raise EndOfStream(
                    "End of stream", ex, expected=size, received=0
                ) from ex
            raise FrameIOError(
                f"Unexpected end of stream after {len(ex.partial)} of {size} bytes",
                ex,
                expected=size,
                received=len(ex.partial),
            ) from ex
        except OSError as ex:
            raise FrameIOError(
                "Stream read failed", ex, expected=size, received=0
            ) from ex

    @staticmethod
    async def _write(writer: asyncio.StreamWriter, data: bytes) -> None:
        try:
            writer.write(data)
            await writer.drain()
        except OSError as ex:
            raise FrameIOError("Stream write failed", ex) from ex

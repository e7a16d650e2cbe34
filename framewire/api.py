"""
Module-level entry points of framewire.

These functions use the process-wide MsgPack codec configured from
FRAMEWIRE_* settings. Build a FrameCodec / AsyncFrameCodec directly to use
another Serializer or configuration.

    with open("values.bin", "wb") as f:
        write_framed_value(f, {"id": 1})

    with open("values.bin", "rb") as f:
        for value in iter_framed_values(f):
            ...
"""
import asyncio
from collections.abc import AsyncIterator, Iterator
from typing import Any, TypeVar, overload

from framewire.bootstrap.deps import get_async_codec, get_codec
from framewire.core.framing.aio import AsyncFrameCodec
from framewire.core.framing.codec import FrameCodec
from framewire.core.models.config import FrameConfig
from framewire.core.models.errors import (
    EndOfStream,
    FrameCodecError,
    FrameDecodeError,
    FrameEncodeError,
    FrameError,
    FrameIOError,
    FrameTooLargeError,
)
from framewire.core.models.frame import HEADER_SIZE, Frame
from framewire.core.ports.stream import ByteReader, ByteWriter

T = TypeVar("T")

__all__ = [
    "AsyncFrameCodec",
    "EndOfStream",
    "Frame",
    "FrameCodec",
    "FrameCodecError",
    "FrameConfig",
    "FrameDecodeError",
    "FrameEncodeError",
    "FrameError",
    "FrameIOError",
    "FrameTooLargeError",
    "HEADER_SIZE",
    "iter_framed_values",
    "iter_framed_values_async",
    "read_framed_value",
    "read_framed_value_async",
    "relay_framed_value",
    "relay_framed_value_async",
    "write_framed_value",
    "write_framed_value_async",
]


def write_framed_value(stream: ByteWriter, value: Any) -> None:
    get_codec().write_value(stream, value)


@overload
def read_framed_value(stream: ByteReader, into: None = None) -> Any: ...


@overload
def read_framed_value(stream: ByteReader, into: type[T]) -> T: ...


def read_framed_value(stream: ByteReader, into: Any = None) -> Any:
    return get_codec().read_value(stream, into)


def relay_framed_value(source: ByteReader, target: ByteWriter) -> int:
    return get_codec().relay(source, target)


def iter_framed_values(stream: ByteReader, into: Any = None) -> Iterator[Any]:
    return get_codec().iter_values(stream, into)


async def write_framed_value_async(writer: asyncio.StreamWriter, value: Any) -> None:
    await get_async_codec().write_value(writer, value)


@overload
async def read_framed_value_async(reader: asyncio.StreamReader, into: None = None) -> Any: ...


@overload
async def read_framed_value_async(reader: asyncio.StreamReader, into: type[T]) -> T: ...


async def read_framed_value_async(reader: asyncio.StreamReader, into: Any = None) -> Any:
    return await get_async_codec().read_value(reader, into)


async def relay_framed_value_async(
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
) -> int:
    return await get_async_codec().relay(reader, writer)


def iter_framed_values_async(
    reader: asyncio.StreamReader,
    into: Any = None,
) -> AsyncIterator[Any]:
    return get_async_codec().iter_values(reader, into)

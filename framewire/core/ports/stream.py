from typing import Protocol


class ByteReader(Protocol):
    """
    Blocking source of raw bytes: binary files, `io.BytesIO`, pipes,
    `socket.makefile("rb")`.

    `read(n)` returns at most `n` bytes and blocks until at least one byte
    is available. An empty result means the stream is exhausted. Raw
    non-blocking streams may return None when no data is ready.
    """

    def read(self, size: int = -1, /) -> bytes | None:
        ...


class ByteWriter(Protocol):
    """
    Blocking sink of raw bytes. `write(data)` may accept only part of
    `data` and report how many bytes it took; callers must retry the rest.
    Writers that return None are taken to have accepted everything.
    """

    def write(self, data: bytes, /) -> int | None:
        ...

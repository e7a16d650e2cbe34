class FrameError(Exception):
    """
    Base class for every failure raised by the framing layer.

    The layer only ever raises two kinds of error: `FrameIOError` when the
    underlying stream fails, and `FrameCodecError` when the serializer
    fails. The original exception is chained as `__cause__` and kept in
    `cause` so callers can log or re-raise it.
    """
    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class FrameIOError(FrameError):
    """
    The stream could not deliver or accept the bytes of a frame: short
    read (truncation or end of stream), write failure, broken pipe,
    timeout or closed stream.

    For short reads `expected` and `received` hold the byte counts of the
    read that failed.
    """
    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.expected = expected
        self.received = received


class EndOfStream(FrameIOError):
    """
    No byte at all was available where the next frame header should start.

    This is the clean "no more frames" signal. It is still a
    `FrameIOError`, so code that treats any I/O failure alike keeps
    working unchanged.
    """


class FrameTooLargeError(FrameIOError):
    """A frame length exceeds the configured `max_frame_size`."""
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"Frame of {length} bytes exceeds the {limit} bytes limit"
        )
        self.length = length
        self.limit = limit


class FrameCodecError(FrameError):
    """The serializer failed to encode or decode a payload."""


class FrameEncodeError(FrameCodecError):
    """A value could not be encoded into payload bytes."""


class FrameDecodeError(FrameCodecError):
    """
    Payload bytes are not a valid encoding, contain trailing bytes, or do
    not match the requested target type.
    """

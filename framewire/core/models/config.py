from dataclasses import dataclass


@dataclass(frozen=True)
class FrameConfig:
    """
    Static configuration of a FrameCodec / AsyncFrameCodec.

    Both fields only bound resource usage; they never change the bytes
    that go on the wire.
    """
    max_frame_size: int | None = None
    """
    Largest payload length accepted on read and produced on write.
    None means any length representable in the 64-bit header.
    """

    chunk_size: int = 64 * 1024  # 64KB
    """
    Upper bound of a single read issued while collecting a payload, and of
    a single copy step while relaying one. Memory for a payload grows with
    the bytes actually received rather than with the declared length.
    """

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if self.max_frame_size is not None and self.max_frame_size < 0:
            raise ValueError("max_frame_size must be positive or None")

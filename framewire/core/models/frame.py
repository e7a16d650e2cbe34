import struct
from dataclasses import dataclass

# "<Q" = uint64 little-endian
HEADER = struct.Struct("<Q")
HEADER_SIZE: int = HEADER.size
MAX_LENGTH: int = 2 ** 64 - 1


def pack_header(length: int) -> bytes:
    """Encode a payload length as the 8-byte frame header."""
    if not 0 <= length <= MAX_LENGTH:
        raise ValueError(f"Frame length out of range: {length}")
    return HEADER.pack(length)


def unpack_header(header: bytes) -> int:
    """Decode the 8-byte frame header into the payload length."""
    if len(header) != HEADER_SIZE:
        raise ValueError(
            f"Frame header must be {HEADER_SIZE} bytes, got {len(header)}"
        )
    return HEADER.unpack(header)[0]


@dataclass(frozen=True, slots=True)
class Frame:
    """
    One length-prefixed unit of a stream:

        frame = length (u64 little-endian, 8 bytes) || payload (length bytes)

    The payload is kept opaque; turning it into a value is the job of the
    Serializer.
    """
    payload: bytes

    @property
    def length(self) -> int:
        return len(self.payload)

    @property
    def header(self) -> bytes:
        return pack_header(len(self.payload))

    @property
    def size(self) -> int:
        """Number of stream bytes occupied by the frame."""
        return HEADER_SIZE + len(self.payload)

    def to_bytes(self) -> bytes:
        return self.header + self.payload

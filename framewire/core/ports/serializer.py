from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for encoding/decoding the payload of a frame.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - self-delimiting is not required: the frame header carries the length
    - strict: trailing or missing bytes in `data` are an error
    """

    def serialize(self, message: Any) -> bytes:
        """Encode a Python object into the payload bytes of one frame."""

    def deserialize(self, data: bytes) -> Any:
        """Decode the payload bytes of one frame into a Python object."""

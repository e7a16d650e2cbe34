import dataclasses
from typing import Any

import msgpack

from framewire.core.ports.serializer import Serializer


class MsgPackSerializer(Serializer):
    """
    MsgPack-based implementation of the Serializer interface.

    - deterministic binary encoding
    - compact, self-describing
    - strict: a payload must hold exactly one encoded value

    Besides the msgpack native types, pydantic models, dataclass instances
    and objects exposing `to_dict()` are encoded as maps.
    """
    def __init__(self, strict_map_key: bool = False) -> None:
        self._strict_map_key = strict_map_key

    def serialize(self, message: Any) -> bytes:
        return msgpack.packb(message, use_bin_type=True, default=self._default)

    def deserialize(self, data: bytes) -> Any:
        return msgpack.unpackb(
            data,
            raw=False,
            strict_map_key=self._strict_map_key,
        )

    @staticmethod
    def _default(obj: Any) -> Any:
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="python")
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        raise TypeError(f"Cannot serialize object of type {type(obj).__name__}")

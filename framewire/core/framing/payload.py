import logging
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar, overload

from pydantic import TypeAdapter, ValidationError

from framewire.core.models.config import FrameConfig
from framewire.core.models.errors import (
    FrameDecodeError,
    FrameEncodeError,
    FrameTooLargeError,
)
from framewire.core.models.frame import MAX_LENGTH
from framewire.core.ports.serializer import Serializer

T = TypeVar("T")


@lru_cache(maxsize=256)
def _cached_adapter(into: Any) -> TypeAdapter[Any]:
    return TypeAdapter(into)


def get_adapter(into: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(into)
    except TypeError:
        # unhashable type expression
        return TypeAdapter(into)


def same_shape(original: Any, dumped: Any) -> bool:
    """
    Tell whether `dumped` holds the same scalars as `original`, allowing
    only container changes: sequences may switch between list and tuple,
    and mappings may gain keys filled from defaults.
    """
    if isinstance(dumped, Enum):
        dumped = dumped.value

    if isinstance(original, (list, tuple)):
        return (
            isinstance(dumped, (list, tuple))
            and len(original) == len(dumped)
            and all(same_shape(o, d) for o, d in zip(original, dumped))
        )

    if isinstance(original, dict):
        return isinstance(dumped, dict) and all(
            same_shape(v, dumped[k]) for k, v in original.items() if k in dumped
        )

    if type(original) is int and type(dumped) is float:
        return original == dumped

    return type(original) is type(dumped) and original == dumped


class PayloadCodec:
    """
    The payload half of a frame codec: turns values into payload bytes and
    back, and enforces the configured frame size limit.

    Decoding runs the Serializer first; when a target type is given the
    decoded value is then validated against it with a pydantic TypeAdapter.
    Validation is strict, except that containers may be reshaped: a list
    decodes into a tuple and a dict into a dataclass, but a "42" string never
    becomes an int. Either failure is reported as FrameDecodeError and no
    partial value ever escapes.
    """
    def __init__(
        self,
        serializer: Serializer,
        config: FrameConfig | None = None,
        logger_name: str = "core.framing.payload",
    ) -> None:
        self._serializer = serializer
        self._config = config or FrameConfig()
        self._logger = logging.getLogger(logger_name)

    @property
    def config(self) -> FrameConfig:
        return self._config

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    def encode(self, value: Any) -> bytes:
        try:
            payload = self._serializer.serialize(value)
        except Exception as ex:
            raise FrameEncodeError(
                f"Cannot encode value of type {type(value).__name__}", ex
            ) from ex

        if not isinstance(payload, (bytes, bytearray, memoryview)):
            raise FrameEncodeError(
                f"Serializer returned {type(payload).__name__}, expected bytes"
            )

        return bytes(payload)

    @overload
    def decode(self, payload: bytes, into: None = None) -> Any: ...

    @overload
    def decode(self, payload: bytes, into: type[T]) -> T: ...

    def decode(self, payload: bytes, into: Any = None) -> Any:
        try:
            value = self._serializer.deserialize(payload)
        except Exception as ex:
            raise FrameDecodeError(
                f"Malformed payload of {len(payload)} bytes", ex
            ) from ex

        if into is None:
            return value

        return self._validate(value, into)

    @staticmethod
    def _validate(value: Any, into: Any) -> Any:
        adapter = get_adapter(into)
        name = getattr(into, "__name__", into)
        try:
            return adapter.validate_python(value, strict=True)
        except ValidationError:
            pass

        # lax mode is only used to reshape containers (list -> tuple,
        # dict -> dataclass); scalars must come through unchanged
        try:
            result = adapter.validate_python(value)
        except ValidationError as ex:
            raise FrameDecodeError(f"Payload does not match {name!s}", ex) from ex

        if not same_shape(value, adapter.dump_python(result, mode="python")):
            raise FrameDecodeError(
                f"Payload does not match {name!s}: scalar value of another type"
            )
        return result

    def check_length(self, length: int) -> None:
        limit = self._config.max_frame_size
        if limit is None:
            limit = MAX_LENGTH
        if length > limit:
            self._logger.warning(
                f"Frame of {length} bytes exceeds the {limit} bytes limit"
            )
            raise FrameTooLargeError(length, limit)

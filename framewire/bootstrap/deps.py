import json
from functools import lru_cache

from pydantic import ValidationError

from framewire.bootstrap.config.settings import FramewireSettings
from framewire.core.framing.aio import AsyncFrameCodec
from framewire.core.framing.codec import FrameCodec
from framewire.core.ports.serializer import Serializer
from framewire.infra.msgpack_serializer import MsgPackSerializer


@lru_cache
def get_settings() -> FramewireSettings:
    try:
        return FramewireSettings()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


@lru_cache
def get_serializer() -> Serializer:
    return MsgPackSerializer()


@lru_cache
def get_codec() -> FrameCodec:
    return FrameCodec(
        serializer=get_serializer(),
        config=get_settings().to_config()
    )


@lru_cache
def get_async_codec() -> AsyncFrameCodec:
    return AsyncFrameCodec(
        serializer=get_serializer(),
        config=get_settings().to_config()
    )


def reset() -> None:
    """Drop every cached instance, so the next call re-reads the settings."""
    for factory in (get_settings, get_serializer, get_codec, get_async_codec):
        factory.cache_clear()

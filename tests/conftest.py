import io

import pytest

from framewire.bootstrap import deps
from framewire.bootstrap.config.loader import CONFIG_ENV
from framewire.core.framing.aio import AsyncFrameCodec
from framewire.core.framing.codec import FrameCodec
from framewire.core.models.config import FrameConfig
from framewire.infra.msgpack_serializer import MsgPackSerializer
from tests.fake.fake_serializer import RawSerializer


@pytest.fixture
def serializer():
    return MsgPackSerializer()


@pytest.fixture
def raw_serializer():
    return RawSerializer()


@pytest.fixture
def codec(serializer):
    return FrameCodec(serializer)


@pytest.fixture
def raw_codec(raw_serializer):
    return FrameCodec(raw_serializer, FrameConfig(chunk_size=4))


@pytest.fixture
def async_codec(serializer):
    return AsyncFrameCodec(serializer)


@pytest.fixture
def stream():
    return io.BytesIO()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("FRAMEWIRE_MAX_FRAME_SIZE", "FRAMEWIRE_CHUNK_SIZE", CONFIG_ENV):
        monkeypatch.delenv(name, raising=False)
    deps.reset()
    yield
    deps.reset()

import pytest
import yaml

from framewire.bootstrap import deps
from framewire.bootstrap.config.loader import CONFIG_ENV, get_configfile
from framewire.bootstrap.config.settings import FramewireSettings
from framewire.core.framing.aio import AsyncFrameCodec
from framewire.core.framing.codec import FrameCodec
from framewire.core.models.config import FrameConfig


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "framewire.yaml"
    file.write_text(yaml.dump({"max_frame_size": 1024, "chunk_size": 512}))
    return file


@pytest.mark.ut
def test_defaults():
    settings = FramewireSettings()

    assert settings.max_frame_size is None
    assert settings.chunk_size == 64 * 1024
    assert settings.to_config() == FrameConfig()


@pytest.mark.ut
def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FRAMEWIRE_MAX_FRAME_SIZE", "2048")
    monkeypatch.setenv("FRAMEWIRE_CHUNK_SIZE", "16")

    config = FramewireSettings().to_config()

    assert config == FrameConfig(max_frame_size=2048, chunk_size=16)


@pytest.mark.ut
def test_yaml_file(monkeypatch, config_file):
    monkeypatch.setenv(CONFIG_ENV, str(config_file))

    settings = FramewireSettings()

    assert settings.max_frame_size == 1024
    assert settings.chunk_size == 512


@pytest.mark.ut
def test_env_wins_over_yaml_file(monkeypatch, config_file):
    monkeypatch.setenv(CONFIG_ENV, str(config_file))
    monkeypatch.setenv("FRAMEWIRE_CHUNK_SIZE", "8")

    settings = FramewireSettings()

    assert settings.max_frame_size == 1024
    assert settings.chunk_size == 8


@pytest.mark.ut
def test_missing_config_file(monkeypatch, tmp_path):
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "missing.yaml"))

    with pytest.raises(SystemExit):
        get_configfile()


@pytest.mark.ut
def test_no_config_file(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)

    assert get_configfile() is None


@pytest.mark.ut
@pytest.mark.parametrize("name, value", [
    ("FRAMEWIRE_CHUNK_SIZE", "0"),
    ("FRAMEWIRE_MAX_FRAME_SIZE", "-1"),
    ("FRAMEWIRE_MAX_FRAME_SIZE", str(2 ** 64)),
])
def test_invalid_settings_exit_with_message(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(SystemExit) as exc_info:
        deps.get_settings()

    assert "Configuration validation failed" in str(exc_info.value)


@pytest.mark.ut
def test_deps_build_configured_codecs(monkeypatch):
    monkeypatch.setenv("FRAMEWIRE_MAX_FRAME_SIZE", "100")

    codec = deps.get_codec()
    async_codec = deps.get_async_codec()

    assert isinstance(codec, FrameCodec)
    assert isinstance(async_codec, AsyncFrameCodec)
    assert codec.config.max_frame_size == 100
    assert async_codec.config.max_frame_size == 100
    assert codec.serializer is async_codec.serializer
    assert deps.get_codec() is codec


@pytest.mark.ut
def test_deps_reset(monkeypatch):
    first = deps.get_codec()
    monkeypatch.setenv("FRAMEWIRE_CHUNK_SIZE", "32")

    deps.reset()

    assert deps.get_codec() is not first
    assert deps.get_codec().config.chunk_size == 32

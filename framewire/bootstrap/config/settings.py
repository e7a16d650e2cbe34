from typing import Annotated

from pydantic import Field, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from framewire.bootstrap.config.loader import get_configfile
from framewire.core.models.config import FrameConfig
from framewire.core.models.frame import MAX_LENGTH


class FramewireSettings(BaseSettings):
    """
    Runtime settings of the framing layer.

    Sources, highest priority first: init arguments, FRAMEWIRE_* environment
    variables, then the YAML file named by FRAMEWIRECONFIG (if any).
    """
    model_config = SettingsConfigDict(
        env_prefix="FRAMEWIRE_",
        extra="ignore"
    )

    max_frame_size: Annotated[
        int | None,
        Field(
            description=(
                "Largest payload length, in bytes, accepted when reading and\n"
                "produced when writing. Frames declaring a larger length are\n"
                "rejected before their payload is read. Leave unset to accept\n"
                "any length the 64-bit header can express."
            ),
            default=None
        )
    ]

    chunk_size: Annotated[
        int,
        Field(
            description=(
                "Maximum number of bytes requested from a stream in one read\n"
                "while collecting or relaying a payload."
            ),
            default=64 * 1024
        )
    ]

    @field_validator("max_frame_size")
    @classmethod
    def validate_max_frame_size(cls, v: int | None, _: ValidationInfo) -> int | None:
        if v is not None and not 0 < v <= MAX_LENGTH:
            raise ValueError(f"max_frame_size must be between 1 and {MAX_LENGTH}")
        return v

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int, _: ValidationInfo) -> int:
        if v <= 0:
            raise ValueError("chunk_size must be positive")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        file = get_configfile()
        if file is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=file),)
        return sources

    def to_config(self) -> FrameConfig:
        return FrameConfig(
            max_frame_size=self.max_frame_size,
            chunk_size=self.chunk_size,
        )

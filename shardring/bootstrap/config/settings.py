from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from typing import Annotated
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from shardring.bootstrap.config.loader import get_configfile


class RingSettings(BaseModel):
    replication_factor: Annotated[
        int,
        Field(
            description=(
                "Number of virtual nodes placed on the ring for each shard.\n"
                "Higher values spread keys more evenly across shards.\n"
                "Changing it re-routes existing short IDs to other shards."
            ),
            default=100,
            ge=1
        )
    ]


class ShardSettings(BaseModel):
    id: Annotated[
        int,
        Field(
            description=(
                "Stable identifier of the shard.\n"
                "It names the shard's virtual nodes on the ring and its storage\n"
                "directory, and must not change across restarts."
            ),
            ge=0
        )
    ]


class StorageSettings(BaseModel):
    data_dir: Annotated[
        Path,
        Field(
            description=(
                "Directory holding the shards' data, one 'shard-<id>' subdirectory\n"
                "per shard. It must be writable and persistent across restarts."
            ),
            default=Path("data")
        )
    ]


class ShortenerSettings(BaseModel):
    id_length: Annotated[
        int,
        Field(
            description="Number of characters of generated short IDs.",
            default=5,
            ge=1
        )
    ]

    max_attempts: Annotated[
        int,
        Field(
            description="How many short IDs are drawn before giving up on collisions.",
            default=3,
            ge=1
        )
    ]


class ShardRingConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHARDRING_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    ring: Annotated[
        RingSettings,
        Field(
            description="Consistent hashing ring configuration.",
            default_factory=RingSettings
        )
    ]

    shards: Annotated[
        list[ShardSettings],
        Field(
            description=(
                "Shards to route keys to.\n"
                "They are added to the ring in the listed order; keep that order\n"
                "stable, otherwise short IDs may resolve on the wrong shard."
            ),
            min_length=1
        )
    ]

    storage: Annotated[
        StorageSettings,
        Field(
            description="Storage backend configuration.",
            default_factory=StorageSettings
        )
    ]

    shortener: Annotated[
        ShortenerSettings,
        Field(
            description="Short ID generation.",
            default_factory=ShortenerSettings
        )
    ]

    @field_validator("shards")
    @classmethod
    def validate_unique_ids(cls, v: list[ShardSettings]) -> list[ShardSettings]:
        ids = [shard.id for shard in v]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Shard ids must be unique, got {ids}")
        return v

    @property
    def shard_ids(self) -> list[int]:
        return [shard.id for shard in self.shards]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),
        )

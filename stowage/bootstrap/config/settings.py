import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from typing import Annotated
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from stowage.bootstrap.config.loader import get_configfile


class StoreSettings(BaseModel):
    path: Annotated[
        Path | None,
        Field(
            description=(
                "Directory of the LMDB environment used to keep buffer images.\n"
                "When unset, no blob store is built and only file persistence\n"
                "is available."
            ),
            default=None
        )
    ]

    map_size: Annotated[
        int,
        Field(
            description="Maximum size of the LMDB memory map, in bytes.",
            default=1 << 30,
            gt=0
        )
    ]

    max_dbs: Annotated[
        int,
        Field(
            description="Maximum number of named LMDB databases.",
            default=8,
            gt=0
        )
    ]

    keyspace: Annotated[
        str,
        Field(
            description="Name of the LMDB database holding buffer images.",
            default="blobs",
            min_length=1
        )
    ]


class StowageSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOWAGE_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    trace: Annotated[
        bool,
        Field(
            description=(
                "Enable trace output on serializers built by the bootstrap.\n"
                "Trace lines are DEBUG records and never change the bytes."
            ),
            default=False
        )
    ]

    log_level: Annotated[
        str,
        Field(
            description="Logging verbosity: DEBUG, INFO, WARNING, ERROR or CRITICAL.",
            default="INFO"
        )
    ]

    logger_name: Annotated[
        str,
        Field(
            description="Name of the logger injected into serializers.",
            default="stowage"
        )
    ]

    store: Annotated[
        StoreSettings,
        Field(
            description="Blob store configuration.",
            default_factory=StoreSettings
        )
    ]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        file = get_configfile()
        if file is None:
            return init_settings, env_settings
        return init_settings, env_settings, YamlConfigSettingsSource(settings_cls, yaml_file=file)

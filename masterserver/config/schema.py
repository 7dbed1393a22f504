"""Configuration schema for the master server."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def _key(camel: str, snake: str) -> AliasChoices:
    # snake_case first so constructor overrides win over camelCase file/env keys
    return AliasChoices(snake, camel)


class Config(BaseSettings):
    """Master server settings.

    Sources, highest first: constructor arguments, environment variables,
    the JSON config file, defaults. Keys are the camelCase names used in
    ``config.json`` (``port``, ``updateRate``, ``expireTime``, ...); env
    names match case-insensitively.
    """

    model_config = SettingsConfigDict(
        json_file="config.json",
        populate_by_name=True,
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", validation_alias=_key("host", "host"))
    port: int = Field(default=3000, validation_alias=_key("port", "port"))
    update_rate: int = Field(default=1000, ge=1, validation_alias=_key("updateRate", "update_rate"))
    expire_time: float = Field(default=120, ge=0, validation_alias=_key("expireTime", "expire_time"))
    service_message: str = Field(
        default="TEST ANNOUNCEMENT", validation_alias=_key("serviceMessage", "service_message")
    )
    heartbeat_interval: int = Field(
        default=300000, validation_alias=_key("heartbeatInterval", "heartbeat_interval")
    )
    show_banner: bool = Field(default=True, validation_alias=_key("showBanner", "show_banner"))
    log_level: str = Field(default="INFO", validation_alias=_key("logLevel", "log_level"))

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, JsonConfigSettingsSource(settings_cls))

"""Application configuration and environment management."""
from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from whattimeisit.config.timezones import is_valid_zone


load_dotenv()


def _detect_timezone() -> str:
    tz_env = (
        os.environ.get("TZ")
        or os.environ.get("LOCAL_TIMEZONE")
    )
    if tz_env and is_valid_zone(tz_env):
        return tz_env

    try:
        import tzlocal

        local_tz = tzlocal.get_localzone_name()
    except Exception:
        return "UTC"
    if local_tz and is_valid_zone(local_tz):
        return local_tz
    return "UTC"


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="What time is it?", description="Page title")
    environment: str = Field(default="development", description="Runtime environment name")

    default_timezone: str = Field(
        default_factory=_detect_timezone,
        description="Olson timezone identifier treated as the viewer's local zone",
    )
    log_level: str = Field(default="INFO", description="Level for the application logger")

    host: str = Field(default="127.0.0.1", description="Interface the server binds to")
    port: int = Field(default=8000, description="Port the server listens on")

    source_url: str = Field(
        default="https://github.com/jshirley/whattimeisit",
        description="Footer link to the project source",
    )

    @field_validator("default_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        if not is_valid_zone(value):
            raise ValueError(f"Unknown timezone '{value}'")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value_upper = value.upper()
        if not isinstance(logging.getLevelName(value_upper), int):
            raise ValueError(f"Unknown log level '{value}'")
        return value_upper

    @field_validator("port")
    @classmethod
    def _validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("Port must be between 1 and 65535")
        return value


_ENV_MAPPING = {
    "APP_NAME": "app_name",
    "ENVIRONMENT": "environment",
    "DEFAULT_TIMEZONE": "default_timezone",
    "LOG_LEVEL": "log_level",
    "HOST": "host",
    "PORT": "port",
    "SOURCE_URL": "source_url",
}


def _load_settings() -> Settings:
    data: dict[str, object] = {}
    for env_name, field_name in _ENV_MAPPING.items():
        if env_name not in os.environ:
            continue
        data[field_name] = os.environ[env_name]
    return Settings(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return _load_settings()

"""
Application settings.

Values are read from environment variables (prefixed with OTHELLO_) and fall back to the defaults below.
"""

import os
from functools import lru_cache
from typing import Self

from pydantic import BaseModel, field_validator

ENV_PREFIX = "OTHELLO_"


class Settings(BaseModel):
    database_url: str = "sqlite:///othello.db"
    poll_interval_seconds: float = 1.0
    log_level: str = "INFO"
    sql_echo: bool = False

    @field_validator("poll_interval_seconds")
    @classmethod
    def validate_poll_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("poll interval must be a positive number of seconds")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Self:
        """Collect every field that has a matching OTHELLO_<FIELD> variable. pydantic does the type conversion."""
        environ = dict(os.environ) if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls(**values)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()

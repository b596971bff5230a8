"""
Logging Configuration.
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import Level


class LoggingSettings(BaseSettings):
    """Environment configuration for loggers built by ``from_settings``."""

    model_config = SettingsConfigDict(
        env_prefix="TOROLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: Level = Field(default=Level.NO_LEVEL, description="Minimum level name or number; empty accepts all")
    stream: Literal["stdout", "stderr"] = Field(default="stdout", description="Output stream")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        if isinstance(value, Level):
            return value
        return Level.parse(value)

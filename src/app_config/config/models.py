from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app_config.hooks.interfaces import Hook
from app_config.providers.interfaces import Provider


class FileRotationSettings(BaseModel):
    """
    Date-based rotation settings (daily).

    This maps cleanly to Python's standard library TimedRotatingFileHandler behavior.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: LogLevel = "WARNING"
    file: Optional[FileLoggingSettings] = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@dataclass(frozen=True, slots=True)
class Config:
    """The provider and ordered hooks built from one configuration document."""

    provider: Provider
    hooks: Sequence[Hook] = ()
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def close(self) -> None:
        self.provider.close()


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Inputs for the document loader.

    ``env_prefix`` selects environment variables that override string values in the
    document; ``dotenv_path`` names an optional .env file loaded beforehand.
    """

    path: str
    env_prefix: str = "APP_CONFIG__"
    dotenv_path: Optional[str] = None

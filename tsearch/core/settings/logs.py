"""Logging settings for the search compiler and its CLI."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Console logging configuration.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=WARNING, LOG_JSON=true,
    LOG_LOGGER_LEVELS='{"tsearch.core.database.search": "DEBUG"}'
    """

    service_name: str = Field(
        default="tsearch",
        description="Static `service` field of JSON log records",
    )

    level: LogLevel = Field(
        default="INFO",
        description="Root logger level",
    )

    json_logs: bool = Field(
        default=False,
        validation_alias=AliasChoices("json", "log_json"),
        description="Write one JSON object per record instead of plain text",
    )

    logger_levels: dict[str, LogLevel] = Field(
        default_factory=dict,
        description="Per-logger level overrides, e.g. DEBUG for the search package only",
    )

    capture_warnings: bool = Field(
        default=True,
        description="Route `warnings` module output through logging",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for configure_logging()."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "logger_levels": dict(self.logger_levels),
            "capture_warnings": self.capture_warnings,
        }

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        env_ignore_empty=True,
    )


__all__ = ["LogLevel", "LoggingSettings"]

"""Logging configuration primitives for structured logging."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

VALID_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def normalise_level(value: str) -> str:
    """Upper-case a level name, accepting ``warn`` as an alias of ``WARNING``."""

    level = value.strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level not in VALID_LEVELS:
        raise ValueError(f"unknown log level: {value!r}")
    return level


class LogConfig(BaseModel):
    """Configuration model used to initialise structured logging."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = "INFO"
    console_output: bool = True
    # When set, every record goes here; otherwise info to stdout, errors to stderr.
    console_stream: Any = None
    file_output: bool = False
    file_path: str | None = None
    extra: dict[str, Any] = {}

    @field_validator("level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return normalise_level(value)


__all__ = ["LogConfig", "VALID_LEVELS", "normalise_level"]

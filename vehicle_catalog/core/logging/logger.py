"""Structured JSON logging with run-level trace propagation."""

from __future__ import annotations

import json
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger
from loguru._logger import Logger as _LoguruLogger  # type: ignore[attr-defined]

from vehicle_catalog.core.logging.config import LogConfig

_TRACE_ID_VAR: ContextVar[str | None] = ContextVar("vehicle_catalog_trace_id", default=None)
_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("vehicle_catalog_log_context", default={})

_LEVEL_NAMES = {
    "TRACE": "debug",
    "DEBUG": "debug",
    "INFO": "info",
    "SUCCESS": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "error",
}
_ERROR_LEVEL_NO = 40


def _ensure_trace_id() -> str:
    trace_id = _TRACE_ID_VAR.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _TRACE_ID_VAR.set(trace_id)
    return trace_id


def _patch_record(record: dict[str, Any]) -> None:
    extra = record.setdefault("extra", {})
    if not extra.get("trace_id"):
        extra["trace_id"] = _ensure_trace_id()
    for key, value in _CONTEXT_VAR.get({}).items():
        extra.setdefault(key, value)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    level = record["level"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": _LEVEL_NAMES.get(level.name, level.name.lower()),
        "message": record["message"],
    }
    for key, value in record.get("extra", {}).items():
        payload.setdefault(key, value)
    exception = record.get("exception")
    if exception is not None and exception.value is not None:
        payload["exception"] = f"{exception.type.__name__}: {exception.value}"
    return payload


def render_line(record: dict[str, Any]) -> str:
    """Render one loguru record as a single JSON line."""

    return json.dumps(_format_payload(record), default=_json_default)


class _StreamJsonSink:
    """Sink writing structured JSON payloads to text streams."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        record = message.record
        stream = self._stream
        if stream is None:
            stream = sys.stderr if record["level"].no >= _ERROR_LEVEL_NO else sys.stdout
        stream.write(render_line(record))
        stream.write("\n")
        stream.flush()


class _FileJsonSink:
    """Sink appending JSON lines to a file path."""

    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(render_line(message.record))
            file.write("\n")


def _configure_from_config(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        handlers.append({"sink": _StreamJsonSink(config.console_stream), "level": config.level})
    if config.file_output and config.file_path:
        handlers.append({"sink": _FileJsonSink(config.file_path), "level": config.level})

    configure_kwargs: dict[str, Any] = {"handlers": handlers, "patcher": _patch_record}
    if config.extra:
        configure_kwargs["extra"] = config.extra
    logger.configure(**configure_kwargs)


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Configure structured logging with the provided level and options."""

    _configure_from_config(LogConfig(level=level, **kwargs))


class StructuredLogger:
    """Owns the process-wide loguru configuration."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        _configure_from_config(self.config)

    def configure(self, **kwargs: Any) -> None:
        """Update logger configuration at runtime."""

        self.config = LogConfig.model_validate({**self.config.model_dump(), **kwargs})
        _configure_from_config(self.config)


def get_logger(name: str | None = None) -> _LoguruLogger:
    """Return a logger bound to the component ``name``."""

    if name:
        return logger.bind(context=name)
    return logger


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Context manager that propagates trace ids and additional metadata."""

    previous_context = _CONTEXT_VAR.get({})
    context_token = _CONTEXT_VAR.set({**previous_context, **extra})

    active_trace = trace_id or uuid4().hex
    trace_token = _TRACE_ID_VAR.set(active_trace)

    try:
        yield active_trace
    finally:
        _TRACE_ID_VAR.reset(trace_token)
        _CONTEXT_VAR.reset(context_token)


__all__ = [
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
    "render_line",
]

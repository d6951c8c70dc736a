"""Structured logging for ingestion runs."""

from vehicle_catalog.core.logging.config import LogConfig
from vehicle_catalog.core.logging.logger import (
    StructuredLogger,
    configure_logging,
    get_logger,
    log_context,
    logger,
    render_line,
)

__all__ = [
    "LogConfig",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
    "render_line",
]

"""
Configuration management for vehicle-catalog.

Settings come from ``VEHICLE_CATALOG_*`` environment variables, an optional
``.env`` file, or a TOML file passed on the command line.
"""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vehicle_catalog.core.http_adapter import HttpConfig
from vehicle_catalog.core.logging.config import normalise_level
from vehicle_catalog.core.patterns.retry import RetryConfig

DEFAULT_NHTSA_BASE_URL = "https://vpic.nhtsa.dot.gov/api/vehicles"


class CatalogSettings(BaseSettings):
    """Process configuration for ingestion runs."""

    model_config = SettingsConfigDict(
        env_prefix="VEHICLE_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    nhtsa_base_url: str = Field(DEFAULT_NHTSA_BASE_URL, description="Base URL of the vPIC API")
    database_path: str = Field("vehicle_catalog.duckdb", description="DuckDB database file")
    log_level: str = Field("INFO", description="Minimum log level")

    http_timeout: float = Field(30.0, gt=0, description="Per-request timeout in seconds")
    max_retries: int = Field(3, ge=1, description="Attempts per fetch or upsert")
    retry_base_delay: float = Field(1.0, ge=0, description="First backoff delay in seconds")

    progress_interval: int = Field(100, ge=1, description="Makes between progress logs")
    summary_error_limit: int = Field(10, ge=0, description="Failures listed in the run summary")

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        return normalise_level(value)

    @classmethod
    def load_from_file(cls, config_path: Path) -> CatalogSettings:
        """Load settings from a TOML file; file values take precedence over the environment."""
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        return cls(**toml.load(config_path))

    def http_config(self) -> HttpConfig:
        return HttpConfig(base_url=self.nhtsa_base_url, timeout=self.http_timeout)

    def retry_config(self) -> RetryConfig:
        return RetryConfig(max_attempts=self.max_retries, base_delay=self.retry_base_delay)


__all__ = ["CatalogSettings", "DEFAULT_NHTSA_BASE_URL"]

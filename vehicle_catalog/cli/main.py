"""Main entry point for the vehicle-catalog command line interface."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from vehicle_catalog.core.config import CatalogSettings
from vehicle_catalog.core.logging import LogConfig, StructuredLogger

from .catalog import register as register_catalog_commands
from .constants import FAILURE_EXIT_CODE
from .ingest import register as register_ingest_commands
from .utils import emit_error


def create_app() -> typer.Typer:
    """Create a Typer application instance for vehicle-catalog."""

    app = typer.Typer(add_completion=False, help="Vehicle catalog ingestion")

    @app.callback()
    def main(
        ctx: typer.Context,
        config: Path | None = typer.Option(
            None,
            "--config",
            "-c",
            help="TOML settings file; overrides VEHICLE_CATALOG_* variables.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Minimum log level (debug, info, warn, error).",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        try:
            settings = _load_settings(config)
            if log_level is not None:
                settings = CatalogSettings(**{**settings.model_dump(), "log_level": log_level})
        except (FileNotFoundError, ValidationError) as exc:
            emit_error(str(exc), "INVALID_CONFIGURATION")
            raise typer.Exit(code=FAILURE_EXIT_CODE) from exc

        StructuredLogger(LogConfig(level=settings.log_level))
        ctx.obj["settings"] = settings

    register_ingest_commands(app)
    register_catalog_commands(app)
    return app


def _load_settings(config: Path | None) -> CatalogSettings:
    if config is not None:
        return CatalogSettings.load_from_file(config)
    return CatalogSettings()


app = create_app()

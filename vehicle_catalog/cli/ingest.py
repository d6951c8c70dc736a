"""The ``ingest`` command: one full pass over the upstream make catalog."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx  # noqa: TC002
import typer

from vehicle_catalog.core.data.ingestion import IngestionService
from vehicle_catalog.core.data.storage import (
    CatalogDuckDBFactory,
    DuckDBFactoryConfig,
    MakeRepository,
)
from vehicle_catalog.core.exceptions import CatalogError
from vehicle_catalog.core.http_adapter import HttpClient
from vehicle_catalog.core.logging import get_logger, log_context

from .constants import FAILURE_EXIT_CODE
from .utils import get_settings

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

    from vehicle_catalog.core.config import CatalogSettings
    from vehicle_catalog.core.data.ingestion import IngestionStats


def register(app: typer.Typer) -> None:
    """Register the ingest command on the provided application."""

    app.command("ingest")(ingest_command)


def get_transport() -> httpx.AsyncBaseTransport | None:
    """Factory hook for the HTTP transport; None uses the network."""

    return None


def get_connection_factory(settings: CatalogSettings) -> CatalogDuckDBFactory:
    """Factory hook for the DuckDB connection used by a run."""

    return CatalogDuckDBFactory(DuckDBFactoryConfig(database=settings.database_path))


async def run_ingestion(settings: CatalogSettings, conn: DuckDBPyConnection) -> IngestionStats:
    """Run one ingestion against ``conn`` using a fresh HTTP client."""

    async with HttpClient(settings.http_config(), transport=get_transport()) as client:
        service = IngestionService(
            client,
            MakeRepository(conn),
            settings,
            logger=get_logger("ingestion"),
        )
        return await service.run()


def ingest_command(ctx: typer.Context) -> None:
    """Fetch every make and its vehicle types and upsert them into DuckDB."""

    settings = get_settings(ctx)
    logger = get_logger("cli")
    conn: DuckDBPyConnection | None = None

    with log_context():
        try:
            conn = get_connection_factory(settings).create_connection()
            asyncio.run(run_ingestion(settings, conn))
        except CatalogError as error:
            # Already reported by the service as a fatal make list failure.
            raise typer.Exit(code=FAILURE_EXIT_CODE) from error
        except Exception as error:
            logger.error("Fatal error during ingestion", error=str(error))
            raise typer.Exit(code=FAILURE_EXIT_CODE) from error
        finally:
            if conn is not None:
                conn.close()


__all__ = ["get_connection_factory", "get_transport", "ingest_command", "register", "run_ingestion"]

"""Read-only lookups over ingested makes."""

from __future__ import annotations

import typer

from vehicle_catalog.core.data.storage import (
    CatalogDuckDBFactory,
    DuckDBFactoryConfig,
    MakeRepository,
)

from .constants import NOT_FOUND_EXIT_CODE
from .utils import emit_error, emit_json, get_settings


def register(app: typer.Typer) -> None:
    """Register the lookup commands on the provided application."""

    app.command("makes")(makes_command)
    app.command("make")(make_command)


def _factory(ctx: typer.Context) -> CatalogDuckDBFactory:
    settings = get_settings(ctx)
    return CatalogDuckDBFactory(DuckDBFactoryConfig(database=settings.database_path))


def makes_command(
    ctx: typer.Context,
    skip: int = typer.Option(0, "--skip", min=0, help="Number of makes to skip."),
    take: int | None = typer.Option(None, "--take", min=0, help="Maximum number of makes."),
    name: str | None = typer.Option(None, "--name", help="Case-insensitive name filter."),
) -> None:
    """List stored makes ordered by name, one JSON object per line."""

    with _factory(ctx).connection() as conn:
        repository = MakeRepository(conn)
        if name:
            makes = repository.search_by_name(name, skip=skip, take=take)
        else:
            makes = repository.find_many(skip=skip, take=take)
    for make in makes:
        emit_json(make)


def make_command(
    ctx: typer.Context,
    make_id: int = typer.Argument(..., help="Upstream make identifier."),
) -> None:
    """Show one stored make with its vehicle types."""

    with _factory(ctx).connection() as conn:
        make = MakeRepository(conn).find_by_make_id(make_id)
    if make is None:
        emit_error(f"Make {make_id} not found", "MAKE_NOT_FOUND", details={"make_id": make_id})
        raise typer.Exit(code=NOT_FOUND_EXIT_CODE)
    emit_json(make)


__all__ = ["make_command", "makes_command", "register"]

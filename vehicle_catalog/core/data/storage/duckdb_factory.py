"""Helpers for creating DuckDB connections for ingestion runs and tests."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import duckdb

from vehicle_catalog.core.data.storage.schema import ensure_schema

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from duckdb import DuckDBPyConnection

MEMORY_DATABASE = ":memory:"


@dataclass(frozen=True)
class DuckDBFactoryConfig:
    """Configuration applied to DuckDB connections produced by the factory."""

    database: str | Path = MEMORY_DATABASE
    read_only: bool = False
    create_schema: bool = True
    pragmas: Mapping[str, object] = field(default_factory=lambda: {"threads": 1})


class CatalogDuckDBFactory:
    """Factory that yields configured DuckDB connections."""

    def __init__(self, config: DuckDBFactoryConfig | None = None) -> None:
        self._config = config or DuckDBFactoryConfig()

    def create_connection(self) -> DuckDBPyConnection:
        """Create and return a configured DuckDB connection."""

        database = str(self._config.database)
        if database != MEMORY_DATABASE and not self._config.read_only:
            Path(database).parent.mkdir(parents=True, exist_ok=True)

        conn = duckdb.connect(database=database, read_only=self._config.read_only)
        self._apply_pragmas(conn)
        if self._config.create_schema and not self._config.read_only:
            ensure_schema(conn)
        return conn

    @contextmanager
    def connection(self) -> Iterator[DuckDBPyConnection]:
        """Context manager that yields a configured DuckDB connection."""

        conn = self.create_connection()
        try:
            yield conn
        finally:
            conn.close()

    def _apply_pragmas(self, conn: DuckDBPyConnection) -> None:
        for setting, value in self._config.pragmas.items():
            conn.execute(f"SET {setting}={value!r}")


__all__ = ["CatalogDuckDBFactory", "DuckDBFactoryConfig", "MEMORY_DATABASE"]

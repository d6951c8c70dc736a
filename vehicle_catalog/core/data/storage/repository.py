"""DuckDB repository for makes and their vehicle types.

``upsert_make_with_types`` is the only write the ingestion pipeline performs.
The read helpers back the command line lookups and are not used while
ingesting.
"""

from __future__ import annotations

from collections.abc import Sequence  # noqa: TC003
from dataclasses import dataclass
from typing import TYPE_CHECKING

import duckdb

from vehicle_catalog.core.exceptions import DatastoreError, is_connection_failure_message

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

    from vehicle_catalog.core.data.ingestion.models import Make, VehicleType


@dataclass(slots=True, frozen=True)
class StoredVehicleType:
    id: int
    type_id: int
    type_name: str
    make_id: int


@dataclass(slots=True, frozen=True)
class StoredMake:
    id: int
    make_id: int
    make_name: str
    vehicle_types: tuple[StoredVehicleType, ...] = ()


def _classify(make_id: int, exc: Exception) -> DatastoreError:
    message = str(exc)
    retryable = isinstance(exc, duckdb.ConnectionException) or is_connection_failure_message(message)
    return DatastoreError(
        f"Failed to upsert make {make_id}: {message}",
        retryable=retryable,
        details={"make_id": make_id, "cause": type(exc).__name__},
    )


def _page_clause(skip: int, take: int | None) -> str:
    if skip < 0 or (take is not None and take < 0):
        raise ValueError("skip and take must be non-negative")
    clause = f" LIMIT {int(take)}" if take is not None else ""
    if skip:
        clause += f" OFFSET {int(skip)}"
    return clause


class MakeRepository:
    """Make persistence over a single DuckDB connection."""

    def __init__(self, conn: DuckDBPyConnection):
        self.conn = conn

    def upsert_make_with_types(self, make: Make, vehicle_types: Sequence[VehicleType]) -> bool:
        """Create ``make`` with its vehicle types, or rename an existing make.

        Vehicle types are written only when the make is new; an existing make's
        vehicle types are left untouched.

        Returns:
            True if the make was created, False if it was updated

        Raises:
            DatastoreError: any storage failure, retryable when it looks like
                a connection problem
        """
        try:
            self.conn.execute("BEGIN TRANSACTION")
            try:
                created = self._write(make, vehicle_types)
                self.conn.execute("COMMIT")
            except Exception:
                self.conn.execute("ROLLBACK")
                raise
        except Exception as exc:
            raise _classify(make.make_id, exc) from exc
        return created

    def _write(self, make: Make, vehicle_types: Sequence[VehicleType]) -> bool:
        existing = self.conn.execute(
            "SELECT 1 FROM makes WHERE make_id = ?", [make.make_id]
        ).fetchone()
        if existing is not None:
            self.conn.execute(
                "UPDATE makes SET make_name = ?, updated_at = current_timestamp WHERE make_id = ?",
                [make.make_name, make.make_id],
            )
            return False

        self.conn.execute(
            "INSERT INTO makes (make_id, make_name) VALUES (?, ?)",
            [make.make_id, make.make_name],
        )
        if vehicle_types:
            self.conn.executemany(
                "INSERT INTO vehicle_types (type_id, type_name, make_id) VALUES (?, ?, ?)",
                [(vt.type_id, vt.type_name, make.make_id) for vt in vehicle_types],
            )
        return True

    def find_many(self, skip: int = 0, take: int | None = None) -> list[StoredMake]:
        """Makes ordered by name, with their vehicle types."""
        rows = self.conn.execute(
            "SELECT id, make_id, make_name FROM makes ORDER BY make_name, make_id"
            + _page_clause(skip, take)
        ).fetchall()
        return self._with_vehicle_types(rows)

    def find_by_make_id(self, make_id: int) -> StoredMake | None:
        rows = self.conn.execute(
            "SELECT id, make_id, make_name FROM makes WHERE make_id = ?", [make_id]
        ).fetchall()
        makes = self._with_vehicle_types(rows)
        return makes[0] if makes else None

    def search_by_name(self, name: str, skip: int = 0, take: int | None = None) -> list[StoredMake]:
        """Case-insensitive substring search on make names."""
        rows = self.conn.execute(
            "SELECT id, make_id, make_name FROM makes "
            "WHERE contains(lower(make_name), lower(?)) ORDER BY make_name, make_id"
            + _page_clause(skip, take),
            [name],
        ).fetchall()
        return self._with_vehicle_types(rows)

    def count(self) -> int:
        row = self.conn.execute("SELECT count(*) FROM makes").fetchone()
        return int(row[0]) if row else 0

    def find_vehicle_types(self, make_id: int) -> list[StoredVehicleType]:
        rows = self.conn.execute(
            "SELECT id, type_id, type_name, make_id FROM vehicle_types "
            "WHERE make_id = ? ORDER BY type_name, type_id",
            [make_id],
        ).fetchall()
        return [StoredVehicleType(*row) for row in rows]

    def _with_vehicle_types(self, rows: list[tuple]) -> list[StoredMake]:
        return [
            StoredMake(
                id=row[0],
                make_id=row[1],
                make_name=row[2],
                vehicle_types=tuple(self.find_vehicle_types(row[1])),
            )
            for row in rows
        ]


__all__ = ["MakeRepository", "StoredMake", "StoredVehicleType"]

"""Table definitions for persisted makes and vehicle types."""

from __future__ import annotations

from collections.abc import Sequence  # noqa: TC003
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection


@dataclass(frozen=True)
class ColumnDef:
    """Represents a DuckDB table column definition."""

    name: str
    data_type: str
    constraints: Sequence[str] = ()

    def render(self) -> str:
        parts = [self.name, self.data_type, *self.constraints]
        return " ".join(parts)


@dataclass(frozen=True)
class TableSchema:
    """Utility wrapper describing a DuckDB table schema."""

    name: str
    columns: Sequence[ColumnDef]
    primary_key: Sequence[str] = ()
    sequence: str | None = None

    def create_ddl(self) -> str:
        column_defs: list[str] = [column.render() for column in self.columns]
        if self.primary_key:
            pk_cols = ", ".join(self.primary_key)
            column_defs.append(f"PRIMARY KEY ({pk_cols})")
        columns_sql = ",\n                ".join(column_defs)
        return f"""
            CREATE TABLE IF NOT EXISTS {self.name} (
                {columns_sql}
            )
            """.strip()

    def ensure(self, conn: DuckDBPyConnection) -> None:
        """Create the surrogate key sequence and the table if they do not exist."""

        if self.sequence:
            conn.execute(f"CREATE SEQUENCE IF NOT EXISTS {self.sequence} START 1")
        conn.execute(self.create_ddl())


MAKES_TABLE = TableSchema(
    name="makes",
    columns=(
        ColumnDef("id", "INTEGER", ("DEFAULT nextval('makes_id_seq')",)),
        ColumnDef("make_id", "INTEGER", ("NOT NULL", "UNIQUE")),
        ColumnDef("make_name", "VARCHAR", ("NOT NULL",)),
        ColumnDef("created_at", "TIMESTAMP", ("DEFAULT current_timestamp",)),
        ColumnDef("updated_at", "TIMESTAMP", ("DEFAULT current_timestamp",)),
    ),
    primary_key=("id",),
    sequence="makes_id_seq",
)

VEHICLE_TYPES_TABLE = TableSchema(
    name="vehicle_types",
    columns=(
        ColumnDef("id", "INTEGER", ("DEFAULT nextval('vehicle_types_id_seq')",)),
        ColumnDef("type_id", "INTEGER", ("NOT NULL",)),
        ColumnDef("type_name", "VARCHAR", ("NOT NULL",)),
        # Owning make's natural key.
        ColumnDef("make_id", "INTEGER", ("NOT NULL",)),
        ColumnDef("created_at", "TIMESTAMP", ("DEFAULT current_timestamp",)),
    ),
    primary_key=("id",),
    sequence="vehicle_types_id_seq",
)

ALL_TABLES: tuple[TableSchema, ...] = (MAKES_TABLE, VEHICLE_TYPES_TABLE)


def ensure_schema(conn: DuckDBPyConnection) -> None:
    """Create every catalog table on ``conn``; safe to call repeatedly."""

    for table in ALL_TABLES:
        table.ensure(conn)


__all__ = [
    "ALL_TABLES",
    "ColumnDef",
    "MAKES_TABLE",
    "TableSchema",
    "VEHICLE_TYPES_TABLE",
    "ensure_schema",
]

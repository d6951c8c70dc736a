"""DuckDB storage for the vehicle catalog."""

from vehicle_catalog.core.data.storage.duckdb_factory import (
    CatalogDuckDBFactory,
    DuckDBFactoryConfig,
)
from vehicle_catalog.core.data.storage.repository import (
    MakeRepository,
    StoredMake,
    StoredVehicleType,
)
from vehicle_catalog.core.data.storage.schema import ensure_schema

__all__ = [
    "CatalogDuckDBFactory",
    "DuckDBFactoryConfig",
    "MakeRepository",
    "StoredMake",
    "StoredVehicleType",
    "ensure_schema",
]

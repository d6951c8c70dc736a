"""vehicle-catalog: ingest the NHTSA vPIC make and vehicle type catalog into DuckDB."""

__version__ = "0.1.0"

__all__ = ["__version__"]

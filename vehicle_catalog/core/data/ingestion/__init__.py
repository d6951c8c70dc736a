"""Make and vehicle type ingestion from the upstream XML feed."""

from __future__ import annotations

from vehicle_catalog.core.data.ingestion.models import (
    IngestionFailure,
    IngestionStats,
    Make,
    VehicleType,
)
from vehicle_catalog.core.data.ingestion.service import IngestionService
from vehicle_catalog.core.data.ingestion.validator import (
    parse_identifier,
    transform_make,
    transform_vehicle_type,
    validate_make_data,
    validate_vehicle_type_data,
)
from vehicle_catalog.core.data.ingestion.xml_decoder import as_record_list, dig, parse_xml

__all__ = [
    "IngestionFailure",
    "IngestionService",
    "IngestionStats",
    "Make",
    "VehicleType",
    "as_record_list",
    "dig",
    "parse_identifier",
    "parse_xml",
    "transform_make",
    "transform_vehicle_type",
    "validate_make_data",
    "validate_vehicle_type_data",
]

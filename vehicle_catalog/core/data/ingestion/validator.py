"""Shape checks and normalisation for raw catalog records.

Validation is a non-raising filter: a candidate that is not a mapping, or that
lacks either required field, is simply skipped by the caller. Transformation
runs only on validated candidates and raises ``TransformationError`` when a
present field carries an unusable value.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from vehicle_catalog.core.data.ingestion.models import (
    MAKE_ID_FIELD,
    MAKE_NAME_FIELD,
    VEHICLE_TYPE_ID_FIELD,
    VEHICLE_TYPE_NAME_FIELD,
    Make,
    VehicleType,
)
from vehicle_catalog.core.exceptions import TransformationError

# Leading optional sign and digits; trailing text such as ".0" is ignored.
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _has_fields(data: Any, id_field: str, name_field: str) -> bool:
    return (
        isinstance(data, Mapping)
        and data.get(id_field) is not None
        and data.get(name_field) is not None
    )


def validate_make_data(data: Any) -> bool:
    """Return True when ``data`` looks like a make record."""
    return _has_fields(data, MAKE_ID_FIELD, MAKE_NAME_FIELD)


def validate_vehicle_type_data(data: Any) -> bool:
    """Return True when ``data`` looks like a vehicle type record."""
    return _has_fields(data, VEHICLE_TYPE_ID_FIELD, VEHICLE_TYPE_NAME_FIELD)


def parse_identifier(value: Any) -> int | None:
    """Parse a base-10 integer prefix from ``value``; None when there is none."""
    if isinstance(value, bool):
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def _transform(raw: Mapping[str, Any], id_field: str, name_field: str) -> tuple[int, str]:
    raw_id = raw[id_field]
    identifier = parse_identifier(raw_id)
    if identifier is None:
        raise TransformationError(f"Invalid {id_field}: {raw_id}", details={"field": id_field})

    name = str(raw[name_field]).strip()
    if not name:
        raise TransformationError(
            f"Empty {name_field} for {id_field}: {raw_id}",
            details={"field": name_field},
        )
    return identifier, name


def transform_make(raw: Mapping[str, Any]) -> Make:
    """Convert a validated raw make into a :class:`Make`."""
    make_id, make_name = _transform(raw, MAKE_ID_FIELD, MAKE_NAME_FIELD)
    return Make(make_id=make_id, make_name=make_name)


def transform_vehicle_type(raw: Mapping[str, Any]) -> VehicleType:
    """Convert a validated raw vehicle type into a :class:`VehicleType`."""
    type_id, type_name = _transform(raw, VEHICLE_TYPE_ID_FIELD, VEHICLE_TYPE_NAME_FIELD)
    return VehicleType(type_id=type_id, type_name=type_name)


__all__ = [
    "parse_identifier",
    "transform_make",
    "transform_vehicle_type",
    "validate_make_data",
    "validate_vehicle_type_data",
]

"""Data models supporting the make/vehicle-type ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Field names used by the upstream XML feed.
MAKE_ID_FIELD = "Make_ID"
MAKE_NAME_FIELD = "Make_Name"
VEHICLE_TYPE_ID_FIELD = "VehicleTypeId"
VEHICLE_TYPE_NAME_FIELD = "VehicleTypeName"


@dataclass(slots=True, frozen=True)
class Make:
    """A validated vehicle manufacturer keyed by its upstream identifier."""

    make_id: int
    make_name: str


@dataclass(slots=True, frozen=True)
class VehicleType:
    """A validated vehicle category produced by one make."""

    type_id: int
    type_name: str


@dataclass(slots=True, frozen=True)
class IngestionFailure:
    make_id: int
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"make_id": self.make_id, "error": self.error}


@dataclass(slots=True)
class IngestionStats:
    """Counters for one ingestion run; discarded once the summary is logged."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    errors: list[IngestionFailure] = field(default_factory=list)

    def record_success(self) -> None:
        self.successful += 1

    def record_failure(self, make_id: int, error: str) -> None:
        self.failed += 1
        self.errors.append(IngestionFailure(make_id=make_id, error=error))

    @property
    def processed(self) -> int:
        return self.successful + self.failed

    def to_summary(self, error_limit: int = 10) -> dict[str, Any]:
        """Summary fields for the end-of-run log, capping detailed failures."""

        summary: dict[str, Any] = {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
        }
        if self.errors:
            summary["failed_makes"] = [failure.to_dict() for failure in self.errors[:error_limit]]
            summary["additional_failures"] = max(len(self.errors) - error_limit, 0)
        return summary


__all__ = [
    "IngestionFailure",
    "IngestionStats",
    "MAKE_ID_FIELD",
    "MAKE_NAME_FIELD",
    "Make",
    "VEHICLE_TYPE_ID_FIELD",
    "VEHICLE_TYPE_NAME_FIELD",
    "VehicleType",
]

"""Ingestion service that pulls makes and vehicle types and persists them."""

from __future__ import annotations

from collections.abc import Sequence  # noqa: TC003
from typing import TYPE_CHECKING, Any

from vehicle_catalog.core.data.ingestion.models import IngestionStats, Make, VehicleType
from vehicle_catalog.core.data.ingestion.validator import (
    transform_make,
    transform_vehicle_type,
    validate_make_data,
    validate_vehicle_type_data,
)
from vehicle_catalog.core.data.ingestion.xml_decoder import as_record_list, dig, parse_xml
from vehicle_catalog.core.exceptions import CatalogError, DatastoreError, TransformationError
from vehicle_catalog.core.logging import get_logger
from vehicle_catalog.core.patterns.retry import ExponentialBackoffRetry, RetryConfig, SleepFunc

if TYPE_CHECKING:
    from loguru import Logger

    from vehicle_catalog.core.config import CatalogSettings
    from vehicle_catalog.core.data.storage.repository import MakeRepository
    from vehicle_catalog.core.http_adapter import HttpClient

ALL_MAKES_PATH = "getallmakes"
VEHICLE_TYPES_PATH = "GetVehicleTypesForMakeId/{make_id}"
XML_FORMAT_PARAMS = {"format": "XML"}

ALL_MAKES_RESULTS = ("Response", "Results", "AllVehicleMakes")
VEHICLE_TYPES_RESULTS = ("Response", "Results", "VehicleTypesForMakeIds")


def _describe(exc: Exception) -> str:
    if isinstance(exc, CatalogError):
        return exc.message
    return str(exc) or type(exc).__name__


class IngestionService:
    """Runs one end-to-end ingestion of the make catalog.

    Makes are processed one at a time in feed order. A failure while handling
    one make is recorded in the run statistics and the run moves on; only a
    failure to obtain the make list aborts the run.
    """

    def __init__(
        self,
        client: HttpClient,
        repository: MakeRepository,
        settings: CatalogSettings,
        *,
        logger: Logger | None = None,
        retry_config: RetryConfig | None = None,
        sleep: SleepFunc | None = None,
    ):
        self.client = client
        self.repository = repository
        self.settings = settings
        self.logger = logger or get_logger("ingestion")
        self.retry_config = retry_config or settings.retry_config()
        self._sleep = sleep

    async def _with_retry(self, operation: Any, label: str) -> Any:
        policy = ExponentialBackoffRetry(self.retry_config, logger=self.logger, sleep=self._sleep)
        return await policy.execute(operation, label)

    async def _fetch_document(self, path: str, label: str) -> dict[str, Any]:
        async def fetch() -> str:
            return await self.client.get_text(path, params=XML_FORMAT_PARAMS)

        body = await self._with_retry(fetch, label)
        return parse_xml(body)

    async def fetch_all_makes(self) -> list[Make]:
        """Fetch, validate and normalise the full make list.

        Raises:
            CatalogError: the list could not be fetched or decoded
        """
        self.logger.info("Fetching all makes from NHTSA API")
        document = await self._fetch_document(ALL_MAKES_PATH, "fetchAllMakes")

        raw_makes = dig(document, *ALL_MAKES_RESULTS)
        if raw_makes is None or raw_makes == "":
            self.logger.warning("No makes found in API response")
            return []

        makes: list[Make] = []
        for raw in as_record_list(raw_makes):
            if not validate_make_data(raw):
                self.logger.warning("Skipping invalid make data", raw_data=raw)
                continue
            try:
                makes.append(transform_make(raw))
            except TransformationError as exc:
                self.logger.warning(
                    "Skipping make due to transformation error",
                    raw_data=raw,
                    error=exc.message,
                )

        self.logger.info("Fetched valid makes", count=len(makes))
        return makes

    async def fetch_vehicle_types(self, make_id: int) -> list[VehicleType]:
        """Fetch the vehicle types of one make; malformed entries are dropped."""
        document = await self._fetch_document(
            VEHICLE_TYPES_PATH.format(make_id=make_id),
            f"fetchVehicleTypes-{make_id}",
        )

        vehicle_types: list[VehicleType] = []
        for raw in as_record_list(dig(document, *VEHICLE_TYPES_RESULTS)):
            if not validate_vehicle_type_data(raw):
                continue
            try:
                vehicle_types.append(transform_vehicle_type(raw))
            except TransformationError:
                continue
        return vehicle_types

    async def persist_make(self, make: Make, vehicle_types: Sequence[VehicleType]) -> bool:
        """Upsert ``make`` with retries; returns True when the make was created."""

        async def upsert() -> bool:
            try:
                return self.repository.upsert_make_with_types(make, vehicle_types)
            except CatalogError:
                raise
            except Exception as exc:
                raise DatastoreError(
                    f"Failed to upsert make {make.make_id}: {exc}",
                    details={"make_id": make.make_id},
                ) from exc

        return await self._with_retry(upsert, f"upsertMake-{make.make_id}")

    async def _process_make(self, make: Make) -> None:
        vehicle_types = await self.fetch_vehicle_types(make.make_id)
        await self.persist_make(make, vehicle_types)

    async def run(self) -> IngestionStats:
        """Ingest every make and return the run statistics.

        Raises:
            CatalogError: the make list could not be obtained; the failure
                has already been logged
        """
        self.logger.info("Starting data ingestion")
        stats = IngestionStats()

        try:
            makes = await self.fetch_all_makes()
        except Exception as exc:
            self.logger.error("Fatal: Failed to fetch makes list", error=_describe(exc))
            if isinstance(exc, CatalogError):
                raise
            raise CatalogError(
                f"Failed to fetch makes list: {_describe(exc)}",
                "MAKE_LIST_ERROR",
            ) from exc

        stats.total = len(makes)
        interval = self.settings.progress_interval

        for make in makes:
            try:
                await self._process_make(make)
            except Exception as exc:
                error = _describe(exc)
                stats.record_failure(make.make_id, error)
                self.logger.error(
                    "Failed to process make",
                    make_id=make.make_id,
                    make_name=make.make_name,
                    error=error,
                )
            else:
                stats.record_success()

            if stats.processed % interval == 0:
                self.logger.info(
                    "Ingestion progress",
                    processed=stats.processed,
                    total=stats.total,
                    successful=stats.successful,
                    failed=stats.failed,
                )

        summary = stats.to_summary(self.settings.summary_error_limit)
        if stats.failed:
            self.logger.warning("Ingestion completed", **summary)
        else:
            self.logger.info("Ingestion completed", **summary)
        return stats


__all__ = ["IngestionService"]

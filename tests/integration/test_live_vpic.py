"""Smoke tests against the live vPIC API; run with --run-integration."""

import pytest

from vehicle_catalog.core.config import CatalogSettings
from vehicle_catalog.core.data.ingestion import IngestionService
from vehicle_catalog.core.data.storage import MakeRepository
from vehicle_catalog.core.http_adapter import HttpClient


@pytest.mark.integration
@pytest.mark.asyncio
async def test_fetch_makes_and_vehicle_types(memory_conn):
    settings = CatalogSettings()
    async with HttpClient(settings.http_config()) as client:
        service = IngestionService(client, MakeRepository(memory_conn), settings)

        makes = await service.fetch_all_makes()
        assert len(makes) > 100
        assert all(make.make_name for make in makes)

        vehicle_types = await service.fetch_vehicle_types(makes[0].make_id)
        assert all(vt.type_id > 0 for vt in vehicle_types)

"""Shared fixtures for the vehicle-catalog test suite."""

from __future__ import annotations

import io
import json
from collections.abc import Iterator
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
from loguru import logger

from vehicle_catalog.core.data.storage import CatalogDuckDBFactory
from vehicle_catalog.core.logging import LogConfig, StructuredLogger


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests that call the live vPIC API.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


class CapturedLogs:
    """JSON log lines written by the structured logger during one test."""

    def __init__(self, stream: io.StringIO) -> None:
        self._stream = stream

    @property
    def records(self) -> list[dict[str, Any]]:
        return [json.loads(line) for line in self._stream.getvalue().splitlines() if line]

    def messages(self, level: str | None = None) -> list[str]:
        return [r["message"] for r in self.records if level is None or r["level"] == level]

    def find(self, message: str) -> list[dict[str, Any]]:
        return [r for r in self.records if r["message"] == message]


@pytest.fixture
def captured_logs() -> Iterator[CapturedLogs]:
    stream = io.StringIO()
    StructuredLogger(LogConfig(level="DEBUG", console_stream=stream))
    yield CapturedLogs(stream)
    logger.remove()


@pytest.fixture
def memory_conn():
    with CatalogDuckDBFactory().connection() as conn:
        yield conn


@pytest.fixture
def fake_sleep() -> AsyncMock:
    return AsyncMock(return_value=None)


def makes_xml(*entries: tuple[str, str] | str) -> str:
    """Build a getallmakes response; a plain string entry is inserted verbatim."""

    body = []
    for entry in entries:
        if isinstance(entry, str):
            body.append(entry)
        else:
            make_id, make_name = entry
            body.append(
                f"<AllVehicleMakes><Make_ID>{make_id}</Make_ID>"
                f"<Make_Name>{make_name}</Make_Name></AllVehicleMakes>"
            )
    return f"<Response><Count>{len(entries)}</Count><Results>{''.join(body)}</Results></Response>"


def vehicle_types_xml(*entries: tuple[str, str]) -> str:
    body = "".join(
        f"<VehicleTypesForMakeIds><VehicleTypeId>{type_id}</VehicleTypeId>"
        f"<VehicleTypeName>{type_name}</VehicleTypeName></VehicleTypesForMakeIds>"
        for type_id, type_name in entries
    )
    return f"<Response><Count>{len(entries)}</Count><Results>{body}</Results></Response>"


def catalog_transport(
    makes: str,
    vehicle_types: dict[int, str] | None = None,
    calls: list[str] | None = None,
) -> httpx.MockTransport:
    """Mock vPIC endpoints serving ``makes`` and per-make vehicle type bodies."""

    vehicle_types = vehicle_types or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(str(request.url))
        path = request.url.path
        if path.endswith("/getallmakes"):
            return httpx.Response(200, text=makes)
        if "/GetVehicleTypesForMakeId/" in path:
            make_id = int(path.rsplit("/", 1)[-1])
            return httpx.Response(200, text=vehicle_types.get(make_id, vehicle_types_xml()))
        return httpx.Response(404, text="not found")

    return httpx.MockTransport(handler)

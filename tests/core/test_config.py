"""Tests for process settings."""

import pytest
from pydantic import ValidationError

from vehicle_catalog.core.config import DEFAULT_NHTSA_BASE_URL, CatalogSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("NHTSA_BASE_URL", "DATABASE_PATH", "LOG_LEVEL", "MAX_RETRIES", "HTTP_TIMEOUT"):
        monkeypatch.delenv(f"VEHICLE_CATALOG_{name}", raising=False)


class TestCatalogSettings:
    def test_defaults(self):
        settings = CatalogSettings()

        assert settings.nhtsa_base_url == DEFAULT_NHTSA_BASE_URL
        assert settings.database_path == "vehicle_catalog.duckdb"
        assert settings.log_level == "INFO"
        assert settings.max_retries == 3
        assert settings.retry_base_delay == 1.0
        assert settings.progress_interval == 100
        assert settings.summary_error_limit == 10

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("VEHICLE_CATALOG_NHTSA_BASE_URL", "http://localhost:8080/api")
        monkeypatch.setenv("VEHICLE_CATALOG_MAX_RETRIES", "5")
        monkeypatch.setenv("VEHICLE_CATALOG_LOG_LEVEL", "warn")

        settings = CatalogSettings()

        assert settings.nhtsa_base_url == "http://localhost:8080/api"
        assert settings.max_retries == 5
        assert settings.log_level == "WARNING"

    @pytest.mark.parametrize(
        "field,value",
        [("max_retries", 0), ("http_timeout", 0), ("progress_interval", 0), ("log_level", "loud")],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            CatalogSettings(**{field: value})

    def test_load_from_file_beats_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("VEHICLE_CATALOG_MAX_RETRIES", "7")
        config_file = tmp_path / "catalog.toml"
        config_file.write_text('max_retries = 2\ndatabase_path = "data/catalog.duckdb"\n', encoding="utf-8")

        settings = CatalogSettings.load_from_file(config_file)

        assert settings.max_retries == 2
        assert settings.database_path == "data/catalog.duckdb"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CatalogSettings.load_from_file(tmp_path / "missing.toml")

    def test_derived_configs(self):
        settings = CatalogSettings(max_retries=4, retry_base_delay=0.25, http_timeout=12)

        retry = settings.retry_config()
        http = settings.http_config()
        assert (retry.max_attempts, retry.base_delay) == (4, 0.25)
        assert http.base_url == DEFAULT_NHTSA_BASE_URL + "/"
        assert http.timeout == 12

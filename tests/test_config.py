"""Tests for configuration module."""

import json

import pytest
from pydantic import ValidationError

from anc_search import create_record_services
from anc_search.config import Settings, get_settings, reload_settings
from anc_search.models.forms import FormCodeNotConfiguredError


class TestSettingsValidation:
    """Test configuration validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.couchdb_url == "http://localhost:5984"
        assert settings.fti_index == "data_records"
        assert settings.lucene_conditional_limit == 1000
        assert settings.max_weeks_pregnant == 42
        assert settings.min_weeks_pregnant == 0
        assert settings.anc_forms["registration"] == "R"
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("COUCHDB_URL", "https://couch.example.org/")
        monkeypatch.setenv("LUCENE_CONDITIONAL_LIMIT", "250")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.couchdb_url == "https://couch.example.org"
        assert settings.lucene_conditional_limit == 250
        assert settings.log_level == "DEBUG"

    def test_form_codes_from_json(self, monkeypatch):
        monkeypatch.setenv("ANC_FORMS", json.dumps({"registration": "ORPT", "visit": "ANCV"}))

        form_codes = Settings(_env_file=None).form_code_map()

        assert form_codes.code_for("registration") == "ORPT"
        assert form_codes.code_for("visit") == "ANCV"
        with pytest.raises(FormCodeNotConfiguredError):
            form_codes.code_for("delivery")

    def test_blank_form_code_rejected(self, monkeypatch):
        monkeypatch.setenv("ANC_FORMS", json.dumps({"visit": " "}))

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "visit" in str(exc_info.value)

    @pytest.mark.parametrize("limit", ["0", "1025"])
    def test_conditional_limit_bounds(self, monkeypatch, limit):
        monkeypatch.setenv("LUCENE_CONDITIONAL_LIMIT", limit)

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "lucene_conditional_limit" in str(exc_info.value)

    def test_invalid_url(self, monkeypatch):
        monkeypatch.setenv("COUCHDB_URL", "couch:5984")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_week_window_order(self, monkeypatch):
        monkeypatch.setenv("MIN_WEEKS_PREGNANT", "10")
        monkeypatch.setenv("MAX_WEEKS_PREGNANT", "5")

        with pytest.raises(ValueError, match="min_weeks_pregnant"):
            Settings(_env_file=None)


class TestSettingsCache:
    """Test the global settings instance."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reload_settings(self, monkeypatch, reset_settings):
        before = get_settings()
        monkeypatch.setenv("FTI_INDEX", "reports")

        after = reload_settings()

        assert after is not before
        assert after.fti_index == "reports"


class TestCreateRecordServices:
    """Test service wiring from settings."""

    @pytest.mark.asyncio
    async def test_wiring(self, monkeypatch):
        monkeypatch.setenv("LUCENE_CONDITIONAL_LIMIT", "50")
        monkeypatch.setenv("FTI_INDEX", "reports")
        settings = Settings(_env_file=None)

        services = create_record_services(settings)
        try:
            assert services.client.path == "/medic/_fti/_design/medic/reports"
            assert services.record_queries.executor.conditional_limit == 50
            assert services.record_queries.executor.engine is services.client
            assert services.enrichment.record_queries is services.record_queries
            assert services.record_queries.get_form_code("flag") == "F"
        finally:
            await services.close()

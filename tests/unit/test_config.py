"""
Unit tests for ticker_finder.config module.

The autouse isolated_settings fixture gives every test an empty working
directory (no .env) and a cleared settings cache.
"""

import pytest
from pydantic import ValidationError

from ticker_finder.config import (
    Settings,
    get_fmp_api_key,
    get_settings,
    is_mock_mode,
)
from ticker_finder.constants import FMP_BASE_URL, MOCK_DELAY_SECONDS, REQUEST_PACING_SECONDS
from ticker_finder.errors import ConfigurationError


class TestSettingsDefaults:
    """Tests for values used when nothing is configured."""

    def test_defaults(self):
        settings = Settings()
        assert settings.fmp_api_key is None
        assert settings.fmp_base_url == FMP_BASE_URL
        assert settings.ticker_finder_mock is False
        assert settings.request_pacing_seconds == REQUEST_PACING_SECONDS
        assert settings.mock_delay_seconds == MOCK_DELAY_SECONDS
        assert settings.request_timeout is None

    def test_pacing_default_is_200ms(self):
        assert Settings().request_pacing_seconds == 0.2


class TestSettingsValidation:
    """Tests for field validators and constraints."""

    def test_base_url_trailing_slash_stripped(self):
        settings = Settings(fmp_base_url="  https://example.test/stable/  ")
        assert settings.fmp_base_url == "https://example.test/stable"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_api_key_is_none(self, value):
        assert Settings(fmp_api_key=value).fmp_api_key is None

    def test_api_key_is_trimmed(self):
        assert Settings(fmp_api_key="  abc123 ").fmp_api_key == "abc123"

    def test_negative_pacing_rejected(self):
        with pytest.raises(ValidationError):
            Settings(request_pacing_seconds=-0.1)

    def test_zero_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(request_timeout=0)


class TestEnvironment:
    """Tests for reading settings from the environment and .env."""

    def test_reads_env_vars(self, monkeypatch):
        monkeypatch.setenv("FMP_API_KEY", "env-key")
        monkeypatch.setenv("TICKER_FINDER_MOCK", "true")
        monkeypatch.setenv("REQUEST_PACING_SECONDS", "0.5")

        settings = Settings()

        assert settings.fmp_api_key == "env-key"
        assert settings.ticker_finder_mock is True
        assert settings.request_pacing_seconds == 0.5

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("FMP_API_KEY=file-key\nTICKER_FINDER_MOCK=1\n")

        settings = Settings()

        assert settings.fmp_api_key == "file-key"
        assert settings.ticker_finder_mock is True

    def test_unrelated_dotenv_entries_ignored(self, tmp_path):
        (tmp_path / ".env").write_text("NEO4J_URI=bolt://localhost:7687\n")
        assert Settings().fmp_api_key is None


class TestAccessors:
    """Tests for the cached accessor functions."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_get_fmp_api_key(self, monkeypatch):
        monkeypatch.setenv("FMP_API_KEY", "abc")
        assert get_fmp_api_key() == "abc"

    def test_get_fmp_api_key_missing_raises(self):
        with pytest.raises(ConfigurationError, match="FMP_API_KEY"):
            get_fmp_api_key()

    def test_is_mock_mode(self, monkeypatch):
        assert is_mock_mode() is False
        get_settings.cache_clear()
        monkeypatch.setenv("TICKER_FINDER_MOCK", "1")
        assert is_mock_mode() is True

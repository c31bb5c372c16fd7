"""
Configuration management for ticker_finder.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ticker_finder.constants import FMP_BASE_URL, MOCK_DELAY_SECONDS, REQUEST_PACING_SECONDS
from ticker_finder.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The mock flag is read here once and then handed to the resolver
    explicitly; nothing below the CLI reads the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Financial Modeling Prep Configuration
    fmp_api_key: str | None = Field(
        default=None,
        description="Financial Modeling Prep API key (required for live lookups)",
    )
    fmp_base_url: str = Field(
        default=FMP_BASE_URL,
        description="Base URL of the FMP stable API",
    )

    # Development Configuration
    ticker_finder_mock: bool = Field(
        default=False,
        description="Use simulated lookups instead of the live API",
    )

    # Request Pacing
    request_pacing_seconds: float = Field(
        default=REQUEST_PACING_SECONDS,
        ge=0.0,
        description="Delay between live lookups in a batch",
    )
    mock_delay_seconds: float = Field(
        default=MOCK_DELAY_SECONDS,
        ge=0.0,
        description="Simulated latency of a mock lookup",
    )
    request_timeout: float | None = Field(
        default=None,
        gt=0.0,
        description="HTTP timeout in seconds (None uses the client default)",
    )

    @field_validator("fmp_base_url", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace and trailing slashes from the base URL."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("fmp_api_key", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional fields."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def get_fmp_api_key() -> str:
    """Get FMP API key from settings."""
    key = get_settings().fmp_api_key
    if not key:
        raise ConfigurationError("FMP_API_KEY not set in environment or .env file")
    return key


def is_mock_mode() -> bool:
    """Whether lookups should be simulated (TICKER_FINDER_MOCK)."""
    return get_settings().ticker_finder_mock

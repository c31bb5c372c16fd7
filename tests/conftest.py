"""
Pytest configuration and shared fixtures for ticker_finder tests.
"""

import pytest

from ticker_finder.config import get_settings
from ticker_finder.models import CompanyMatch

SETTINGS_ENV_VARS = (
    "FMP_API_KEY",
    "FMP_BASE_URL",
    "TICKER_FINDER_MOCK",
    "REQUEST_PACING_SECONDS",
    "MOCK_DELAY_SECONDS",
    "REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """
    Run every test against a clean environment.

    Settings are cached and read .env from the working directory, so each
    test gets an empty cwd, no ticker_finder env vars, and a fresh cache.
    """
    monkeypatch.chdir(tmp_path)
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_match(
    symbol: str,
    name: str = "",
    currency: str = "USD",
    exchange_full_name: str = "NASDAQ Global Select",
    exchange: str = "NASDAQ",
) -> CompanyMatch:
    """Build a CompanyMatch with sensible defaults."""
    return CompanyMatch(
        symbol=symbol,
        name=name or symbol,
        currency=currency,
        exchange_full_name=exchange_full_name,
        exchange=exchange,
    )


class FakeResolver:
    """
    Scripted stand-in for FMPResolver.

    responses maps a query to the list of matches to return, or to an
    exception instance to raise. Unknown queries return no matches.
    """

    def __init__(self, responses: dict | None = None, mock: bool = False):
        self.mock = mock
        self.responses = responses or {}
        self.calls: list[tuple[str, str]] = []

    async def resolve(self, query: str, api_key: str) -> list[CompanyMatch]:
        self.calls.append((query, api_key))
        response = self.responses.get(query, [])
        if isinstance(response, Exception):
            raise response
        return list(response)

    def close(self) -> None:
        pass


@pytest.fixture
def fake_resolver():
    """Factory for FakeResolver instances."""
    return FakeResolver


@pytest.fixture
def match():
    """Factory for CompanyMatch instances."""
    return make_match

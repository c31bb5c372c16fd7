"""
Financial Modeling Prep name-search source.

Resolves one company name to the candidate listings FMP knows about. Runs in
one of two modes chosen at construction:

- live: a single GET to /stable/search-name, executed in a worker thread so
  the calling batch suspends while the request is in flight
- mock: no network at all; a deterministic match derived from the query
  after a short artificial delay (for development without spending quota)

A 429 response is reported as a sentinel match rather than an exception.
Transport and parse failures are raised for the caller to record.
"""

import asyncio
import logging
import re
from typing import Any
from urllib.parse import quote

import requests

from ticker_finder.config import Settings, get_settings
from ticker_finder.constants import (
    FMP_BASE_URL,
    FMP_SEARCH_NAME_PATH,
    HTTP_TOO_MANY_REQUESTS,
    MOCK_CURRENCY,
    MOCK_DELAY_SECONDS,
    MOCK_EXCHANGE,
    MOCK_EXCHANGE_FULL_NAME,
    MOCK_SYMBOL_LENGTH,
)
from ticker_finder.errors import ResolverParseError, ResolverTransportError
from ticker_finder.models import CompanyMatch
from ticker_finder.utils.security import redact_api_key

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "User-Agent": "ticker_finder script (https://financialmodelingprep.com)",
    "Accept": "application/json",
}


def build_search_url(query: str, api_key: str, base_url: str = FMP_BASE_URL) -> str:
    """
    Build the search-name URL with query and key percent-encoded.

    Args:
        query: Company name to search for
        api_key: FMP API key
        base_url: API root (default: FMP stable API)

    Returns:
        Fully encoded request URL
    """
    return (
        f"{base_url}{FMP_SEARCH_NAME_PATH}"
        f"?query={quote(query, safe='')}&apikey={quote(api_key, safe='')}"
    )


def mock_symbol(query: str) -> str:
    """First four characters of the query, upper-cased, whitespace removed."""
    return re.sub(r"\s", "", query[:MOCK_SYMBOL_LENGTH].upper())


def mock_match(query: str) -> CompanyMatch:
    """Deterministic stand-in for a live lookup of query."""
    return CompanyMatch(
        symbol=mock_symbol(query),
        name=query,
        currency=MOCK_CURRENCY,
        exchange_full_name=MOCK_EXCHANGE_FULL_NAME,
        exchange=MOCK_EXCHANGE,
    )


def parse_search_response(payload: Any, query: str, status_code: int = 200) -> list[CompanyMatch]:
    """
    Convert a decoded search-name body into matches.

    FMP answers errors (bad key, plan limits) with a JSON object instead of a
    list, so anything that is not a list of objects is a parse failure.

    Args:
        payload: Decoded JSON body
        query: The query that produced it (for error messages)
        status_code: HTTP status of the response (for error messages)

    Returns:
        List of CompanyMatch (empty when nothing matched)

    Raises:
        ResolverParseError: If the body does not have the expected shape
    """
    if not isinstance(payload, list):
        detail = ""
        if isinstance(payload, dict):
            detail = payload.get("Error Message") or payload.get("message") or ""
        message = f"Unexpected response from FMP (HTTP {status_code})"
        if detail:
            message = f"{message}: {detail}"
        raise ResolverParseError(redact_api_key(message), query=query)

    matches = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ResolverParseError(
                f"Unexpected item at position {index} in FMP response (HTTP {status_code})",
                query=query,
            )
        matches.append(CompanyMatch.from_api(item))
    return matches


class FMPResolver:
    """
    Name-to-ticker lookup against Financial Modeling Prep.

    Args:
        mock: Simulate lookups instead of calling the API
        session: Optional requests session (for connection pooling and tests)
        base_url: API root
        timeout: HTTP timeout in seconds (None leaves the requests default)
        mock_delay: Artificial latency of a simulated lookup in seconds

    Example:
        >>> resolver = FMPResolver(mock=True)
        >>> asyncio.run(resolver.resolve("Apple Inc", "demo"))[0].symbol
        'APPL'
    """

    def __init__(
        self,
        mock: bool = False,
        session: requests.Session | None = None,
        base_url: str = FMP_BASE_URL,
        timeout: float | None = None,
        mock_delay: float = MOCK_DELAY_SECONDS,
    ):
        self.mock = mock
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.mock_delay = mock_delay
        self._session = session

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        mock: bool | None = None,
        session: requests.Session | None = None,
    ) -> "FMPResolver":
        """
        Create a resolver from application settings.

        Args:
            settings: Settings to use (default: cached get_settings())
            mock: Override TICKER_FINDER_MOCK when not None
            session: Optional requests session

        Returns:
            Configured FMPResolver
        """
        if settings is None:
            settings = get_settings()
        return cls(
            mock=settings.ticker_finder_mock if mock is None else mock,
            session=session,
            base_url=settings.fmp_base_url,
            timeout=settings.request_timeout,
            mock_delay=settings.mock_delay_seconds,
        )

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(REQUEST_HEADERS)
        return self._session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    async def resolve(self, query: str, api_key: str) -> list[CompanyMatch]:
        """
        Look up one company name.

        Args:
            query: Trimmed, non-empty company name
            api_key: FMP API key, forwarded as-is

        Returns:
            Candidate matches in provider order; a single sentinel match when
            the provider rate-limited the request

        Raises:
            ResolverTransportError: If the request could not be completed
            ResolverParseError: If the response body is not a list of matches
        """
        try:
            url = build_search_url(query, api_key, self.base_url)
        except UnicodeError as e:
            raise ResolverTransportError(
                f"Cannot encode request for {query!r}: {e}", query=query
            ) from e

        if self.mock:
            logger.debug(f"Mock request: {redact_api_key(url)}")
            await asyncio.sleep(self.mock_delay)
            match = mock_match(query)
            logger.debug(f"Mock response for {query!r}: {match.symbol}")
            return [match]

        return await asyncio.to_thread(self._fetch, url, query)

    def _fetch(self, url: str, query: str) -> list[CompanyMatch]:
        try:
            response = self.session.get(url, headers=REQUEST_HEADERS, timeout=self.timeout)
        except (requests.RequestException, UnicodeError) as e:
            raise ResolverTransportError(
                redact_api_key(f"Request failed for {query!r}: {e}"), query=query
            ) from e

        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            logger.warning(f"FMP rate limit hit while searching {query!r}")
            return [CompanyMatch.rate_limited()]

        try:
            payload = response.json()
        except ValueError as e:
            raise ResolverParseError(
                f"Invalid JSON from FMP (HTTP {response.status_code}): {e}", query=query
            ) from e

        matches = parse_search_response(payload, query, response.status_code)
        logger.debug(f"FMP returned {len(matches)} candidates for {query!r}")
        return matches

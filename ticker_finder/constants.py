"""
Constants for ticker_finder package.

Centralizes magic numbers and configuration defaults.
"""

# Financial Modeling Prep API
FMP_BASE_URL = "https://financialmodelingprep.com/stable"
FMP_SEARCH_NAME_PATH = "/search-name"
FMP_FREE_TIER_DAILY_LIMIT = 250  # Free tier: 250 requests/day

# HTTP status the provider uses for quota exhaustion
HTTP_TOO_MANY_REQUESTS = 429

# Symbol of the synthetic match returned on 429
RATE_LIMIT_SENTINEL_SYMBOL = "TOO MANY REQUESTS"

# Delays (seconds)
REQUEST_PACING_SECONDS = 0.2  # between live lookups, never after the last one
MOCK_DELAY_SECONDS = 0.1  # simulated network latency in mock mode

# Mock match placeholders
MOCK_SYMBOL_LENGTH = 4
MOCK_CURRENCY = "USD"
MOCK_EXCHANGE_FULL_NAME = "NASDAQ Global Select"
MOCK_EXCHANGE = "NASDAQ"

# Currency kept by the U.S.-only filter
US_CURRENCY = "USD"

# Outcome messages
NO_RESULTS_ERROR = "No results found"
EMPTY_INPUT_ERROR = "Error: No company names provided"

# TSV output columns (order is part of the output format)
TSV_COLUMNS = (
    "query",
    "symbol",
    "name",
    "currency",
    "exchangeFullName",
    "exchange",
    "error",
)

"""
Ticker Finder - resolve company names to stock ticker symbols.

This package provides utilities for:
- Looking up company names against the Financial Modeling Prep search API
- Running sequential, rate-limit friendly batch lookups
- Filtering candidates to U.S. dollar listings
- Serializing results as tab-separated text for spreadsheets
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from ticker_finder.config import get_settings, is_mock_mode
from ticker_finder.models import BatchReport, CompanyMatch, OutcomeStatus, QueryOutcome
from ticker_finder.pipeline import BatchPipeline, parse_queries, run_batch
from ticker_finder.sources.fmp import FMPResolver

__all__ = [
    "__version__",
    # Config
    "get_settings",
    "is_mock_mode",
    # Models
    "CompanyMatch",
    "QueryOutcome",
    "OutcomeStatus",
    "BatchReport",
    # Lookup and batch
    "FMPResolver",
    "BatchPipeline",
    "parse_queries",
    "run_batch",
]

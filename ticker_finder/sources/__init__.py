"""Company search sources."""

from ticker_finder.sources.fmp import FMPResolver, build_search_url, mock_match

__all__ = [
    "FMPResolver",
    "build_search_url",
    "mock_match",
]

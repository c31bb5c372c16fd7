"""
Exception hierarchy for ticker_finder.

Resolver faults are caught at the batch pipeline's per-query boundary and
recorded on the row; everything else propagates to the caller.
"""


class TickerFinderError(Exception):
    """Base class for all ticker_finder errors."""


class ConfigurationError(TickerFinderError):
    """A required setting is missing or invalid."""


class EmptyQueryListError(TickerFinderError):
    """The input text contained no company names."""


class BatchInProgressError(TickerFinderError):
    """A batch was started while another one is still running."""


class ResolverError(TickerFinderError):
    """A single lookup failed."""

    def __init__(self, message: str, query: str | None = None):
        super().__init__(message)
        self.query = query


class ResolverTransportError(ResolverError):
    """The HTTP request could not be completed (DNS, connection, timeout)."""


class ResolverParseError(ResolverError):
    """The provider answered with a body that is not a list of matches."""

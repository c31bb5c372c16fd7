"""
Data models for ticker lookups.

These dataclasses represent a single candidate returned by the search
provider, the recorded outcome for one query, and the state and report of a
batch run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ticker_finder.constants import RATE_LIMIT_SENTINEL_SYMBOL


class OutcomeStatus(Enum):
    """How a query was resolved."""

    MATCHED = "matched"
    RATE_LIMITED = "rate_limited"  # Sentinel match from a 429 response
    FILTERED_OUT = "filtered_out"  # Provider had matches, none in the candidate pool
    NO_RESULTS = "no_results"
    TRANSPORT_ERROR = "transport_error"
    PARSE_ERROR = "parse_error"
    LOOKUP_ERROR = "lookup_error"  # Any other failure raised by the resolver

    @property
    def is_error(self) -> bool:
        return self in (
            OutcomeStatus.NO_RESULTS,
            OutcomeStatus.TRANSPORT_ERROR,
            OutcomeStatus.PARSE_ERROR,
            OutcomeStatus.LOOKUP_ERROR,
        )


@dataclass(frozen=True)
class CompanyMatch:
    """One candidate company from the name search."""

    symbol: str
    name: str
    currency: str
    exchange_full_name: str
    exchange: str

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "CompanyMatch":
        """
        Build a match from one element of the FMP search-name response.

        Missing or null fields become empty strings.

        Args:
            item: Dict with keys symbol, name, currency, exchangeFullName, exchange

        Returns:
            CompanyMatch instance
        """
        return cls(
            symbol=_text(item.get("symbol")),
            name=_text(item.get("name")),
            currency=_text(item.get("currency")),
            exchange_full_name=_text(item.get("exchangeFullName")),
            exchange=_text(item.get("exchange")),
        )

    @classmethod
    def rate_limited(cls) -> "CompanyMatch":
        """Synthetic match standing in for a rate-limited lookup."""
        return cls(
            symbol=RATE_LIMIT_SENTINEL_SYMBOL,
            name="",
            currency="",
            exchange_full_name="",
            exchange="",
        )

    @property
    def is_rate_limit_sentinel(self) -> bool:
        return self.symbol == RATE_LIMIT_SENTINEL_SYMBOL and not self.name


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class QueryOutcome:
    """Final record for one query, in input order."""

    query: str
    status: OutcomeStatus
    result: CompanyMatch | None = None
    error: str | None = None


@dataclass
class BatchState:
    """Outcomes accumulated by the running batch."""

    total: int = 0
    outcomes: list[QueryOutcome] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    @property
    def is_complete(self) -> bool:
        return self.processed == self.total

    def record(self, outcome: QueryOutcome) -> None:
        if self.processed >= self.total:
            raise ValueError(f"Batch already holds {self.total} outcomes")
        self.outcomes.append(outcome)


@dataclass(frozen=True)
class BatchReport:
    """What a batch run hands back to its caller."""

    output: str  # TSV table, or the error text when rejected
    status: str
    outcomes: tuple[QueryOutcome, ...] = ()
    rejected: bool = False

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

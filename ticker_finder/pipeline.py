"""
Batch resolution of company names to tickers.

Takes the raw multi-line text a user pasted (one company per line), looks
every name up in order, and turns the outcomes into a TSV table.

Lookups run strictly one at a time. FMP's free tier is small and bursts get
429s, and sequential processing keeps the "Searching i/n" progress honest.
Live lookups are separated by a fixed pause; mock lookups are not.

Failure handling:
- No names at all: the batch is rejected before any lookup
- One lookup failing (for any reason): recorded on that row, the batch
  carries on
- Rate limiting: shows up as a "TOO MANY REQUESTS" row, not as an error
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from ticker_finder.constants import (
    EMPTY_INPUT_ERROR,
    NO_RESULTS_ERROR,
    REQUEST_PACING_SECONDS,
    US_CURRENCY,
)
from ticker_finder.errors import (
    BatchInProgressError,
    EmptyQueryListError,
    ResolverError,
    ResolverParseError,
)
from ticker_finder.export.tsv import to_tsv
from ticker_finder.models import (
    BatchReport,
    BatchState,
    CompanyMatch,
    OutcomeStatus,
    QueryOutcome,
)
from ticker_finder.sources.fmp import FMPResolver

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def parse_queries(raw_text: str, strict: bool = False) -> list[str]:
    """
    Split pasted text into company-name queries.

    Lines are trimmed and blank lines dropped; order and duplicates are kept.

    Args:
        raw_text: Text with one company name per line
        strict: Raise instead of returning an empty list

    Returns:
        List of non-empty, trimmed queries

    Raises:
        EmptyQueryListError: If strict and no names were found
    """
    queries = [line.strip() for line in raw_text.splitlines()]
    queries = [q for q in queries if q]
    if strict and not queries:
        raise EmptyQueryListError("No company names provided")
    return queries


def select_match(matches: Sequence[CompanyMatch], us_only: bool) -> CompanyMatch | None:
    """
    Pick the representative match for a query.

    Args:
        matches: Raw candidates from the resolver
        us_only: Restrict the pool to USD listings (plus the rate-limit sentinel)

    Returns:
        First match of the candidate pool, or None if the pool is empty
    """
    if us_only:
        # The rate-limit sentinel carries no currency but must stay visible
        pool = [m for m in matches if m.currency == US_CURRENCY or m.is_rate_limit_sentinel]
    else:
        pool = list(matches)
    return pool[0] if pool else None


def progress_message(position: int, total: int, query: str) -> str:
    return f"Searching {position}/{total}: {query}"


def completion_message(total: int) -> str:
    return f"Complete! Found tickers for {total} companies."


def build_outcome(query: str, matches: Sequence[CompanyMatch], us_only: bool) -> QueryOutcome:
    """Turn a successful lookup into the row recorded for query."""
    if not matches:
        return QueryOutcome(
            query=query,
            status=OutcomeStatus.NO_RESULTS,
            error=NO_RESULTS_ERROR,
        )

    match = select_match(matches, us_only)
    if match is None:
        # Provider knew the name, but not as a USD listing. Left without an
        # error so the row reads as "filtered", not "failed".
        logger.info(f"No USD listing among {len(matches)} candidates for {query!r}")
        return QueryOutcome(query=query, status=OutcomeStatus.FILTERED_OUT)

    status = OutcomeStatus.RATE_LIMITED if match.is_rate_limit_sentinel else OutcomeStatus.MATCHED
    return QueryOutcome(query=query, status=status, result=match)


def failed_outcome(query: str, error: ResolverError) -> QueryOutcome:
    status = (
        OutcomeStatus.PARSE_ERROR
        if isinstance(error, ResolverParseError)
        else OutcomeStatus.TRANSPORT_ERROR
    )
    return QueryOutcome(query=query, status=status, error=str(error))


class BatchPipeline:
    """
    Sequential batch lookup with per-row failure isolation.

    One pipeline runs one batch at a time. Starting a new batch replaces the
    state of the previous one.

    Args:
        resolver: Lookup source (its mock flag also disables pacing)
        pacing: Seconds to wait between live lookups

    Example:
        >>> pipeline = BatchPipeline(FMPResolver(mock=True))
        >>> report = asyncio.run(pipeline.run("Apple Inc", api_key="demo"))
        >>> report.status
        'Complete! Found tickers for 1 companies.'
    """

    def __init__(self, resolver: FMPResolver, pacing: float = REQUEST_PACING_SECONDS):
        self.resolver = resolver
        self.pacing = pacing
        self._state = BatchState()
        self._running = False

    @property
    def state(self) -> BatchState:
        """Snapshot of the current (or last) batch."""
        return BatchState(total=self._state.total, outcomes=list(self._state.outcomes))

    @property
    def is_running(self) -> bool:
        return self._running

    async def run(
        self,
        raw_text: str,
        api_key: str,
        us_only: bool = True,
        on_progress: ProgressCallback | None = None,
    ) -> BatchReport:
        """
        Resolve every name in raw_text and serialize the outcomes.

        Args:
            raw_text: One company name per line
            api_key: FMP API key (forwarded to the resolver)
            us_only: Prefer USD listings when picking a match
            on_progress: Called with each progress message (a full replacement
                string, not an increment)

        Returns:
            BatchReport with the TSV table and final status message, or a
            rejected report when raw_text holds no names

        Raises:
            BatchInProgressError: If this pipeline is already running a batch
        """
        if self._running:
            raise BatchInProgressError("A batch is already running on this pipeline")

        try:
            queries = parse_queries(raw_text, strict=True)
        except EmptyQueryListError as e:
            logger.warning(f"Batch rejected: {e}")
            return BatchReport(output=EMPTY_INPUT_ERROR, status=str(e), rejected=True)

        self._running = True
        try:
            outcomes = await self._resolve_all(queries, api_key, us_only, on_progress)
        finally:
            self._running = False

        status = completion_message(len(queries))
        _notify(on_progress, status)
        logger.info(status)
        return BatchReport(output=to_tsv(outcomes), status=status, outcomes=tuple(outcomes))

    async def _resolve_all(
        self,
        queries: list[str],
        api_key: str,
        us_only: bool,
        on_progress: ProgressCallback | None,
    ) -> list[QueryOutcome]:
        self._state = BatchState(total=len(queries))
        state = self._state
        mode = "mock" if self.resolver.mock else "live"
        logger.info(f"Resolving {state.total} companies ({mode} mode, us_only={us_only})")

        for query in queries:
            _notify(on_progress, progress_message(state.processed + 1, state.total, query))

            try:
                matches = await self.resolver.resolve(query, api_key)
            except ResolverError as e:
                logger.warning(f"Lookup failed for {query!r}: {e}")
                outcome = failed_outcome(query, e)
            except Exception as e:
                logger.exception(f"Unexpected error looking up {query!r}")
                outcome = QueryOutcome(query=query, status=OutcomeStatus.LOOKUP_ERROR, error=str(e))
            else:
                outcome = build_outcome(query, matches, us_only)
            state.record(outcome)

            if not self.resolver.mock and state.processed < state.total:
                await asyncio.sleep(self.pacing)

        errors = sum(1 for o in state.outcomes if o.status.is_error)
        logger.debug(f"Batch finished: {state.processed} outcomes, {errors} errors")
        return list(state.outcomes)


async def run_batch(
    raw_text: str,
    api_key: str,
    resolver: FMPResolver,
    us_only: bool = True,
    on_progress: ProgressCallback | None = None,
    pacing: float = REQUEST_PACING_SECONDS,
) -> BatchReport:
    """Run a single batch on a fresh pipeline."""
    pipeline = BatchPipeline(resolver, pacing=pacing)
    return await pipeline.run(raw_text, api_key, us_only=us_only, on_progress=on_progress)


def _notify(on_progress: ProgressCallback | None, message: str) -> None:
    if on_progress is not None:
        on_progress(message)

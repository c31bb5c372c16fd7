#!/usr/bin/env python3
"""
Resolve a list of company names to stock tickers.

Reads company names (one per line, e.g. pasted from Excel), looks each one
up with the Financial Modeling Prep name search, and prints a tab-separated
table that can be pasted back into a spreadsheet.

Lookups run one at a time with a short pause between live requests. The
free FMP tier allows 250 requests/day, so large lists may hit the limit;
rate-limited rows show up with symbol "TOO MANY REQUESTS".

Usage:
    python scripts/find_tickers.py companies.txt                  # Dry-run (plan only)
    python scripts/find_tickers.py companies.txt --execute        # Look up tickers
    python scripts/find_tickers.py companies.txt --execute --mock # No API calls
    pbpaste | python scripts/find_tickers.py --execute -o tickers.tsv
"""

import argparse
import asyncio
import sys
from pathlib import Path

from ticker_finder.cli import (
    add_execute_argument,
    add_lookup_arguments,
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)
from ticker_finder.config import get_fmp_api_key, get_settings
from ticker_finder.constants import EMPTY_INPUT_ERROR, FMP_FREE_TIER_DAILY_LIMIT
from ticker_finder.errors import ConfigurationError
from ticker_finder.export.tsv import write_tsv
from ticker_finder.models import OutcomeStatus
from ticker_finder.pipeline import parse_queries, run_batch
from ticker_finder.sources.fmp import FMPResolver
from ticker_finder.utils.security import mask_secret
from ticker_finder.utils.tqdm_logging import TqdmProgressReporter

# Key passed to the resolver in mock mode, where it is never sent anywhere
MOCK_API_KEY = "mock"


def read_input(source: str) -> str:
    """Read company names from a file path, or stdin for "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def resolve_api_key(cli_key: str | None, mock: bool) -> str:
    """
    Pick the API key for this run.

    Falls back to FMP_API_KEY from settings, then to a placeholder in mock
    mode.

    Raises:
        ConfigurationError: If no key is available for a live run
    """
    key = (cli_key or "").strip()
    if key:
        return key
    try:
        return get_fmp_api_key()
    except ConfigurationError:
        if mock:
            return MOCK_API_KEY
        raise


def main(argv: list[str] | None = None) -> int:
    """Run the ticker lookup script."""
    parser = argparse.ArgumentParser(
        description="Convert company names to stock ticker symbols (Financial Modeling Prep)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_lookup_arguments(parser)
    add_execute_argument(parser)
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    args = parser.parse_args(argv)

    logger = setup_logging("find_tickers", execute=args.execute, verbose=args.verbose)
    settings = get_settings()
    mock = args.mock or settings.ticker_finder_mock
    us_only = not args.all_currencies

    try:
        raw_text = read_input(args.input)
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1

    queries = parse_queries(raw_text)
    if not queries:
        logger.error(EMPTY_INPUT_ERROR)
        return 1

    try:
        api_key = resolve_api_key(args.api_key, mock)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    if mock:
        logger.warning("Dev mode - using mock data (no API requests will be made)")
    elif len(queries) > FMP_FREE_TIER_DAILY_LIMIT:
        logger.warning(
            f"{len(queries)} lookups exceed the FMP free tier ({FMP_FREE_TIER_DAILY_LIMIT} "
            "requests/day); later rows may come back as TOO MANY REQUESTS"
        )

    if not args.execute:
        print_dry_run_header("Ticker Lookup", logger)
        per_query = settings.mock_delay_seconds if mock else settings.request_pacing_seconds
        logger.info(f"Companies: {len(queries)}")
        logger.info(f"Mode: {'mock' if mock else 'live'}")
        logger.info(f"U.S. only: {us_only}")
        logger.info(f"API key: {mask_secret(api_key)}")
        logger.info(f"API requests: {0 if mock else len(queries)}")
        logger.info(f"Minimum duration: ~{per_query * len(queries):.1f}s")
        for query in queries[:10]:
            logger.info(f"  {query}")
        if len(queries) > 10:
            logger.info(f"  ... and {len(queries) - 10} more")
        logger.info("Run with --execute to look up tickers")
        return 0

    print_execute_header("Ticker Lookup", logger)
    resolver = FMPResolver.from_settings(settings, mock=mock)
    try:
        with TqdmProgressReporter(len(queries), disable=args.no_progress) as progress:
            report = asyncio.run(
                run_batch(
                    raw_text,
                    api_key,
                    resolver,
                    us_only=us_only,
                    on_progress=progress,
                    pacing=settings.request_pacing_seconds,
                )
            )
            progress.finish(report.status)
    finally:
        resolver.close()

    if args.output:
        write_tsv(report.output, args.output)
    else:
        sys.stdout.write(report.output + "\n")

    logger.info(report.status)
    logger.info(f"  Matched: {report.count(OutcomeStatus.MATCHED)}")
    logger.info(f"  Filtered out (no USD listing): {report.count(OutcomeStatus.FILTERED_OUT)}")
    logger.info(f"  No results: {report.count(OutcomeStatus.NO_RESULTS)}")
    logger.info(f"  Rate limited: {report.count(OutcomeStatus.RATE_LIMITED)}")
    failed = sum(
        1 for o in report.outcomes if o.status.is_error and o.status is not OutcomeStatus.NO_RESULTS
    )
    logger.info(f"  Failed: {failed}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Argument parsing utilities for ticker_finder CLI.

Provides standard argument patterns used across scripts.
"""

from pathlib import Path


def add_execute_argument(parser):
    """
    Add standard --execute argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually run the lookups (default is dry-run: show the plan only)",
    )


def add_lookup_arguments(parser):
    """
    Add the inputs of a ticker lookup batch to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File with one company name per line (default: read stdin)",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="FMP API key (default: FMP_API_KEY from environment or .env)",
    )
    parser.add_argument(
        "--all-currencies",
        action="store_true",
        help="Keep non-USD listings (default: U.S. only)",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use simulated lookups instead of the live API (also: TICKER_FINDER_MOCK=1)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the TSV table to this file (default: stdout)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )

"""
CLI utilities for ticker_finder.

This package provides shared functionality for scripts:
- Logging setup
- Argument parsing
- Command entry points
"""

from ticker_finder.cli.args import add_execute_argument, add_lookup_arguments
from ticker_finder.cli.commands import run_find_tickers
from ticker_finder.cli.logging import (
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)

__all__ = [
    # Logging
    "setup_logging",
    "print_dry_run_header",
    "print_execute_header",
    # Arguments
    "add_execute_argument",
    "add_lookup_arguments",
    # Commands
    "run_find_tickers",
]

"""
Tab-separated output for batch outcomes.

The table is meant to be pasted straight into a spreadsheet: one header row,
one row per query in input order, tab between fields and a bare newline
between rows.

Values are written verbatim. A company name containing a tab or newline
would shift or split its row; search results are short plain-text names so
this is left as a known limitation.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ticker_finder.constants import TSV_COLUMNS
from ticker_finder.models import QueryOutcome

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"
ROW_SEPARATOR = "\n"


def outcome_to_row(outcome: QueryOutcome) -> list[str]:
    """Field values for one outcome, in TSV_COLUMNS order."""
    match = outcome.result
    return [
        outcome.query,
        match.symbol if match else "",
        match.name if match else "",
        match.currency if match else "",
        match.exchange_full_name if match else "",
        match.exchange if match else "",
        outcome.error or "",
    ]


def to_tsv(outcomes: Iterable[QueryOutcome]) -> str:
    """
    Serialize outcomes to a tab-separated table.

    Args:
        outcomes: Outcomes in the order they should appear

    Returns:
        Header row followed by one row per outcome (no trailing newline)
    """
    rows = [FIELD_SEPARATOR.join(TSV_COLUMNS)]
    for outcome in outcomes:
        rows.append(FIELD_SEPARATOR.join(outcome_to_row(outcome)))
    return ROW_SEPARATOR.join(rows)


def write_tsv(text: str, path: Path) -> Path:
    """Write a serialized table to path as UTF-8."""
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote {text.count(ROW_SEPARATOR)} rows to {path}")
    return path

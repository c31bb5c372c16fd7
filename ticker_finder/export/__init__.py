"""Output writers for batch results."""

from ticker_finder.export.tsv import outcome_to_row, to_tsv, write_tsv

__all__ = [
    "outcome_to_row",
    "to_tsv",
    "write_tsv",
]

"""
Unit tests for TSV serialization of batch outcomes.
"""

from ticker_finder.constants import TSV_COLUMNS
from ticker_finder.export.tsv import outcome_to_row, to_tsv, write_tsv
from ticker_finder.models import CompanyMatch, OutcomeStatus, QueryOutcome

HEADER = "query\tsymbol\tname\tcurrency\texchangeFullName\texchange\terror"


def _matched(query, match):
    return QueryOutcome(query=query, status=OutcomeStatus.MATCHED, result=match)


class TestOutcomeToRow:
    """Tests for outcome_to_row function."""

    def test_matched_row(self, match):
        row = outcome_to_row(_matched("Apple Inc", match("AAPL", name="Apple Inc.")))
        assert row == [
            "Apple Inc",
            "AAPL",
            "Apple Inc.",
            "USD",
            "NASDAQ Global Select",
            "NASDAQ",
            "",
        ]

    def test_error_row(self):
        outcome = QueryOutcome(
            query="Acme", status=OutcomeStatus.TRANSPORT_ERROR, error="Request failed"
        )
        assert outcome_to_row(outcome) == ["Acme", "", "", "", "", "", "Request failed"]

    def test_filtered_out_row_is_blank(self):
        outcome = QueryOutcome(query="Siemens", status=OutcomeStatus.FILTERED_OUT)
        assert outcome_to_row(outcome) == ["Siemens", "", "", "", "", "", ""]

    def test_row_width_matches_header(self, match):
        assert len(outcome_to_row(_matched("A", match("A")))) == len(TSV_COLUMNS)


class TestToTsv:
    """Tests for to_tsv function."""

    def test_header_only_for_no_outcomes(self):
        assert to_tsv([]) == HEADER

    def test_rows_in_order_without_trailing_newline(self, match):
        text = to_tsv(
            [
                _matched("Apple Inc", match("AAPL")),
                QueryOutcome(query="Nope", status=OutcomeStatus.NO_RESULTS, error="No results found"),
            ]
        )
        lines = text.split("\n")
        assert lines[0] == HEADER
        assert lines[1].startswith("Apple Inc\tAAPL\t")
        assert lines[2] == "Nope\t\t\t\t\t\tNo results found"
        assert not text.endswith("\n")

    def test_rate_limited_row(self):
        outcome = QueryOutcome(
            query="Apple",
            status=OutcomeStatus.RATE_LIMITED,
            result=CompanyMatch.rate_limited(),
        )
        assert to_tsv([outcome]).split("\n")[1] == "Apple\tTOO MANY REQUESTS\t\t\t\t\t"

    def test_values_written_verbatim(self, match):
        text = to_tsv([_matched("Ben & Jerry's", match("X", name="Ben & Jerry's \"Homemade\""))])
        assert 'Ben & Jerry\'s "Homemade"' in text


class TestWriteTsv:
    """Tests for write_tsv function."""

    def test_writes_utf8(self, tmp_path, match):
        text = to_tsv([_matched("Nestlé", match("NSRGY", name="Nestlé S.A."))])
        path = write_tsv(text, tmp_path / "tickers.tsv")

        assert path.read_text(encoding="utf-8") == text

    def test_creates_parent_directories(self, tmp_path):
        path = write_tsv(HEADER, tmp_path / "out" / "nested" / "tickers.tsv")
        assert path.exists()

    def test_accepts_string_path(self, tmp_path):
        path = write_tsv(HEADER, str(tmp_path / "tickers.tsv"))
        assert path.read_text(encoding="utf-8") == HEADER

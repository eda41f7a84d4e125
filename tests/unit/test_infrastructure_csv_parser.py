"""Unit tests for CsvParser.

Covers quoted fields, header/row arity tolerance, blank lines, BOM
handling, and a write-then-parse round trip with the stdlib csv writer.
"""

import csv
import io

import pytest

from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.result import Failure, Success
from t212_dashboard.domain.errors import CsvParseError
from t212_dashboard.infrastructure.providers.trading212.parsers import CsvParser


@pytest.fixture
def parser() -> CsvParser:
    return CsvParser()


class TestQuotedFields:
    def test_quoted_comma_and_doubled_quote(self, parser: CsvParser):
        result = parser.parse('x,y,z\n"a,b",c,"d""e"\n')

        assert isinstance(result, Success)
        assert result.value.rows == [{"x": "a,b", "y": "c", "z": 'd"e'}]
        assert result.value.skipped_rows == 0

    def test_header_cells_are_trimmed_and_values_kept_verbatim(
        self, parser: CsvParser
    ):
        result = parser.parse(' a , b \n  1 ," 2  "\n')

        assert isinstance(result, Success)
        assert result.value.header == ("a", "b")
        assert result.value.rows == [{"a": "  1 ", "b": " 2  "}]

    def test_quote_opened_mid_field_protects_comma(self, parser: CsvParser):
        result = parser.parse('x,y\nab"c,d"e,f\n')

        assert isinstance(result, Success)
        assert result.value.rows == [{"x": "abc,de", "y": "f"}]
        assert result.value.skipped_rows == 0

    def test_unterminated_quote_runs_to_end_of_line(self, parser: CsvParser):
        result = parser.parse('x,y\n1,"2,3\n')

        assert isinstance(result, Success)
        assert result.value.rows == [{"x": "1", "y": "2,3"}]

    def test_header_is_kept(self, parser: CsvParser):
        result = parser.parse("Action,Time,Total\nDeposit,2023-01-01 10:00:00,100\n")

        assert isinstance(result, Success)
        assert result.value.header == ("Action", "Time", "Total")


class TestArityTolerance:
    def test_short_row_is_padded(self, parser: CsvParser):
        result = parser.parse("a,b,c\n1,2\n")

        assert isinstance(result, Success)
        assert result.value.rows == [{"a": "1", "b": "2", "c": ""}]

    def test_long_row_is_truncated(self, parser: CsvParser):
        result = parser.parse("a,b,c\n1,2,3,4\n")

        assert isinstance(result, Success)
        assert result.value.rows == [{"a": "1", "b": "2", "c": "3"}]

    def test_row_two_fields_off_is_accepted(self, parser: CsvParser):
        result = parser.parse("a,b,c,d\n1,2\n")

        assert isinstance(result, Success)
        assert len(result.value.rows) == 1
        assert result.value.skipped_rows == 0

    def test_row_more_than_two_fields_off_is_skipped(self, parser: CsvParser):
        result = parser.parse("a,b,c,d,e\n1,2\n1,2,3,4,5\n")

        assert isinstance(result, Success)
        assert result.value.rows == [{"a": "1", "b": "2", "c": "3", "d": "4", "e": "5"}]
        assert result.value.skipped_rows == 1


class TestEdgeCases:
    def test_empty_text_yields_no_rows(self, parser: CsvParser):
        result = parser.parse("")

        assert isinstance(result, Success)
        assert result.value.rows == []
        assert result.value.header == ()

    def test_header_only_yields_no_rows(self, parser: CsvParser):
        result = parser.parse("a,b,c\n")

        assert isinstance(result, Success)
        assert result.value.rows == []
        assert result.value.header == ("a", "b", "c")

    def test_blank_lines_and_crlf_are_ignored(self, parser: CsvParser):
        result = parser.parse("a,b\r\n\r\n1,2\r\n   \r\n3,4\r\n")

        assert isinstance(result, Success)
        assert result.value.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_byte_order_mark_is_stripped(self, parser: CsvParser):
        result = parser.parse("\ufeffAction,Total\nDeposit,10\n")

        assert isinstance(result, Success)
        assert result.value.header == ("Action", "Total")

    def test_non_text_input_fails(self, parser: CsvParser):
        result = parser.parse(b"a,b\n1,2\n")  # type: ignore[arg-type]

        assert isinstance(result, Failure)
        assert isinstance(result.error, CsvParseError)
        assert result.error.code == ErrorCode.CSV_PARSE_FAILED


def test_written_csv_parses_back_to_same_rows(parser: CsvParser):
    rows = [
        {"Action": "Market buy", "Name": "Apple, Inc.", "Notes": 'said "hi"'},
        {"Action": "Deposit", "Name": "", "Notes": "plain"},
        {"Action": "Dividend (Dividend)", "Name": "Coca-Cola", "Notes": ","},
        {"Action": "Deposit", "Name": " Apple ", "Notes": "  , padded"},
        {"Action": " ", "Name": '" quoted "', "Notes": "trailing  "},
    ]
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=["Action", "Name", "Notes"])
    writer.writeheader()
    writer.writerows(rows)

    result = parser.parse(buffer.getvalue())

    assert isinstance(result, Success)
    assert result.value.rows == rows

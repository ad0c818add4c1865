"""Tests for CSV and JSON row parsing."""

import pytest

from tradejournal.domain.errors import OperationFailedError, ValidationError
from tradejournal.domain.parsing import parse_csv_text, parse_json_text, split_csv_line


class TestSplitCsvLine:
    """Tests for splitting a single CSV line."""

    def test_plain_fields_are_trimmed(self):
        assert split_csv_line(" EURUSD , buy ,1.5") == ["EURUSD", "buy", "1.5"]

    def test_delimiter_inside_quotes_is_kept(self):
        assert split_csv_line('EURUSD,"opened, then closed",1.5') == [
            "EURUSD",
            "opened, then closed",
            "1.5",
        ]

    def test_custom_delimiter(self):
        assert split_csv_line("EURUSD;buy;1,5", ";") == ["EURUSD", "buy", "1,5"]

    def test_empty_fields(self):
        assert split_csv_line("a,,c,") == ["a", "", "c", ""]


class TestParseCsvText:
    """Tests for parse_csv_text."""

    def test_header_and_rows(self):
        parsed = parse_csv_text("Symbol,Volume\nEURUSD,1\nGBPUSD,2\n")

        assert parsed.columns == ["Symbol", "Volume"]
        assert parsed.rows == [
            {"Symbol": "EURUSD", "Volume": "1"},
            {"Symbol": "GBPUSD", "Volume": "2"},
        ]
        assert parsed.row_numbers == [2, 3]
        assert len(parsed) == 2

    def test_crlf_line_endings(self):
        parsed = parse_csv_text("Symbol,Volume\r\nEURUSD,1\r\n")

        assert parsed.rows == [{"Symbol": "EURUSD", "Volume": "1"}]

    def test_blank_lines_are_discarded(self):
        parsed = parse_csv_text("Symbol\n\nEURUSD\n   \nGBPUSD\n")

        assert [row["Symbol"] for row in parsed.rows] == ["EURUSD", "GBPUSD"]
        assert parsed.row_numbers == [2, 3]

    def test_without_header(self):
        parsed = parse_csv_text("EURUSD,buy\nGBPUSD,sell,extra\n", has_header=False)

        assert parsed.columns == ["column_1", "column_2", "column_3"]
        assert parsed.rows[0] == {"column_1": "EURUSD", "column_2": "buy"}
        assert parsed.rows[1]["column_3"] == "extra"
        assert parsed.row_numbers == [1, 2]

    def test_short_row_only_has_present_columns(self):
        parsed = parse_csv_text("Symbol,Volume,Notes\nEURUSD,1\n")

        assert parsed.rows == [{"Symbol": "EURUSD", "Volume": "1"}]

    def test_header_only_has_no_rows(self):
        parsed = parse_csv_text("Symbol,Volume\n")

        assert parsed.columns == ["Symbol", "Volume"]
        assert len(parsed) == 0

    @pytest.mark.parametrize("text", ["", "\n\n", "   \n"])
    def test_empty_text_raises(self, text):
        with pytest.raises(ValidationError, match="empty"):
            parse_csv_text(text)

    @pytest.mark.parametrize("delimiter", ["", ";;", '"'])
    def test_invalid_delimiter_raises(self, delimiter):
        with pytest.raises(ValidationError, match="delimiter"):
            parse_csv_text("a,b\n1,2\n", delimiter=delimiter)


class TestParseJsonText:
    """Tests for parse_json_text."""

    def test_array_of_objects(self):
        parsed = parse_json_text('[{"symbol": "EURUSD", "volume": "1"}, {"symbol": "GBPUSD"}]')

        assert parsed.columns == ["symbol", "volume"]
        assert parsed.rows[0] == {"symbol": "EURUSD", "volume": "1"}
        assert parsed.rows[1] == {"symbol": "GBPUSD"}
        assert parsed.row_numbers == [1, 2]

    def test_numbers_keep_source_text(self):
        parsed = parse_json_text('[{"price": 1.30, "volume": 2, "big": 1e3}]')

        assert parsed.rows[0] == {"price": "1.30", "volume": "2", "big": "1e3"}

    def test_scalar_values_are_stringified(self):
        parsed = parse_json_text('[{"a": null, "b": true, "c": false, "d": [1, 2]}]')

        assert parsed.rows[0]["a"] == ""
        assert parsed.rows[0]["b"] == "true"
        assert parsed.rows[0]["c"] == "false"
        assert parsed.rows[0]["d"] == '["1", "2"]'

    def test_columns_are_union_in_first_seen_order(self):
        parsed = parse_json_text('[{"b": "1"}, {"a": "2", "b": "3"}, {"c": "4"}]')

        assert parsed.columns == ["b", "a", "c"]

    def test_invalid_json_raises(self):
        with pytest.raises(OperationFailedError, match="Invalid JSON"):
            parse_json_text("[{not json")

    @pytest.mark.parametrize("text", ["[]", '{"symbol": "EURUSD"}', '"text"'])
    def test_non_array_or_empty_raises(self, text):
        with pytest.raises(ValidationError):
            parse_json_text(text)

    def test_non_object_element_raises(self):
        with pytest.raises(OperationFailedError, match="Record 2"):
            parse_json_text('[{"symbol": "EURUSD"}, 42]')

"""Tests for column to canonical field mapping."""

import pytest

from tradejournal.domain import field_mapping as fields
from tradejournal.domain.errors import ValidationError


def test_default_mapping_is_read_only():
    """The default synonym table cannot be modified."""
    with pytest.raises(TypeError):
        fields.DEFAULT_FIELD_MAPPING["ticker"] = fields.SYMBOL


def test_default_mapping_targets_are_canonical():
    """Every default synonym maps to a canonical field."""
    assert set(fields.DEFAULT_FIELD_MAPPING.values()) <= fields.CANONICAL_FIELDS
    assert len(fields.DEFAULT_FIELD_MAPPING) == 30


def test_effective_mapping_uses_override():
    """A caller mapping replaces the defaults entirely."""
    override = {"Ticker": fields.SYMBOL}
    assert fields.effective_mapping(override) is override
    assert fields.effective_mapping(None) is fields.DEFAULT_FIELD_MAPPING
    assert fields.effective_mapping({}) is fields.DEFAULT_FIELD_MAPPING


def test_validate_mapping_rejects_unknown_field():
    """Mapping onto a non-canonical field is rejected."""
    with pytest.raises(ValidationError, match="Ticker"):
        fields.validate_mapping({"sym": "Ticker"})


def test_validate_mapping_accepts_partial_mapping():
    """A mapping without Symbol is valid; rows fail individually instead."""
    fields.validate_mapping({"qty": fields.VOLUME})


class TestResolveField:
    """Tests for resolving a canonical field from a row."""

    def test_lookup_ignores_case(self):
        row = fields.index_row({"SYMBOL": "EURUSD"})
        assert fields.resolve_field(row, fields.DEFAULT_FIELD_MAPPING, fields.SYMBOL) == "EURUSD"

    def test_lookup_ignores_underscores_and_spaces(self):
        row = fields.index_row({"EntryPrice": "1.2345", "Open Time": "2024-01-15"})
        mapping = fields.DEFAULT_FIELD_MAPPING

        assert fields.resolve_field(row, mapping, fields.ENTRY_PRICE) == "1.2345"
        assert fields.resolve_field(row, mapping, fields.ENTRY_TIME) == "2024-01-15"

    def test_missing_field_is_none(self):
        row = fields.index_row({"symbol": "EURUSD"})
        assert fields.resolve_field(row, fields.DEFAULT_FIELD_MAPPING, fields.VOLUME) is None

    def test_first_declared_entry_wins(self):
        """Declaration order of the mapping decides, not column order in the row."""
        row = fields.index_row({"price": "1.0", "open_price": "2.0", "entry_price": "3.0"})

        value = fields.resolve_field(row, fields.DEFAULT_FIELD_MAPPING, fields.ENTRY_PRICE)

        assert value == "3.0"

    def test_custom_mapping_order(self):
        mapping = {"close": fields.EXIT_PRICE, "last": fields.EXIT_PRICE}
        row = fields.index_row({"last": "9", "close": "8"})

        assert fields.resolve_field(row, mapping, fields.EXIT_PRICE) == "8"

    def test_first_of_equivalent_columns_wins(self):
        row = fields.index_row({"Entry Price": "1.0", "entry_price": "2.0", "ENTRYPRICE": "3.0"})

        value = fields.resolve_field(row, fields.DEFAULT_FIELD_MAPPING, fields.ENTRY_PRICE)

        assert value == "1.0"

    def test_empty_value_is_returned_as_present(self):
        row = fields.index_row({"symbol": ""})
        assert fields.resolve_field(row, fields.DEFAULT_FIELD_MAPPING, fields.SYMBOL) == ""


class TestSuggestMapping:
    """Tests for mapping suggestions on detected columns."""

    def test_known_columns_are_suggested(self):
        suggested = fields.suggest_mapping(["Symbol", "Type", "Lots", "Open Price", "Profit"])

        assert suggested == {
            "Symbol": fields.SYMBOL,
            "Type": fields.DIRECTION,
            "Lots": fields.VOLUME,
            "Open Price": fields.ENTRY_PRICE,
            "Profit": fields.PROFIT_LOSS,
        }

    def test_camel_case_columns_are_suggested(self):
        suggested = fields.suggest_mapping(["EntryPrice", "StopLoss", "TP"])

        assert suggested == {
            "EntryPrice": fields.ENTRY_PRICE,
            "StopLoss": fields.STOP_LOSS,
            "TP": fields.TAKE_PROFIT,
        }

    def test_unknown_columns_are_left_out(self):
        assert fields.suggest_mapping(["Ticket", "Magic"]) == {}


@pytest.mark.parametrize(
    "column, expected",
    [
        ("Open Price", "open_price"),
        ("  Close-Time ", "close_time"),
        ("SL", "sl"),
    ],
)
def test_normalize_column_name(column, expected):
    assert fields.normalize_column_name(column) == expected

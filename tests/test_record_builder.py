"""Tests for building trade records from raw rows."""

from datetime import datetime
from decimal import Decimal

import pytest

from tradejournal.domain.entities import ImportErrorKind, ImportOptions, TradeDirection
from tradejournal.domain.field_mapping import DEFAULT_FIELD_MAPPING
from tradejournal.domain.record_builder import apply_auto_tag, build_trade, parse_direction


NOW = datetime(2024, 3, 1, 12, 0, 0)


def build(row, mapping=DEFAULT_FIELD_MAPPING, options=None, row_number=2):
    return build_trade(row, mapping, 7, options or ImportOptions(), row_number, now=NOW)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("buy", TradeDirection.BUY),
        ("BUY LIMIT", TradeDirection.BUY),
        ("Long", TradeDirection.BUY),
        ("1", TradeDirection.BUY),
        ("sell", TradeDirection.SELL),
        ("short", TradeDirection.SELL),
        ("0", TradeDirection.SELL),
        ("", TradeDirection.BUY),
        (None, TradeDirection.BUY),
    ],
)
def test_parse_direction(value, expected):
    assert parse_direction(value) == expected


def test_full_row():
    """Every mapped field lands on the record."""
    outcome = build(
        {
            "symbol": "eurusd",
            "type": "sell",
            "lots": "0.5",
            "open_price": "1.1000",
            "close_price": "1.0950",
            "sl": "1.1050",
            "tp": "1.0900",
            "open_time": "2024-01-15 09:30:00",
            "close_time": "2024-01-15 11:00:00",
            "profit": "250.00",
            "commission": "-3.50",
            "swap": "-0.12",
            "comment": "news trade",
        }
    )

    assert outcome.ok
    record = outcome.record
    assert record.account_id == 7
    assert record.symbol == "EURUSD"
    assert record.direction == TradeDirection.SELL
    assert record.volume == Decimal("0.5")
    assert record.entry_price == Decimal("1.1000")
    assert record.exit_price == Decimal("1.0950")
    assert record.stop_loss == Decimal("1.1050")
    assert record.take_profit == Decimal("1.0900")
    assert record.entry_time == datetime(2024, 1, 15, 9, 30)
    assert record.exit_time == datetime(2024, 1, 15, 11, 0)
    assert record.profit_loss == Decimal("250.00")
    assert record.commission == Decimal("-3.50")
    assert record.swap == Decimal("-0.12")
    assert record.notes == "news trade"
    assert record.is_closed
    assert record.created_at is not None


def test_minimal_row_uses_defaults():
    outcome = build({"symbol": "GBPUSD"})

    record = outcome.record
    assert record.direction == TradeDirection.BUY
    assert record.volume == Decimal("0")
    assert record.entry_price == Decimal("0")
    assert record.exit_price is None
    assert record.exit_time is None
    assert record.commission == Decimal("0")
    assert record.swap == Decimal("0")
    assert record.notes is None
    assert record.entry_time == NOW
    assert not record.is_closed


@pytest.mark.parametrize("row", [{}, {"symbol": ""}, {"symbol": "   "}, {"volume": "1"}])
def test_missing_symbol_is_parse_error(row):
    outcome = build(row, row_number=5)

    assert not outcome.ok
    assert outcome.record is None
    assert outcome.error.kind == ImportErrorKind.PARSE_ERROR
    assert outcome.error.row_number == 5
    assert outcome.error.column_name == "Symbol"
    assert str(outcome.error) == "Row 5: Symbol not found"


def test_malformed_values_are_left_unset():
    """Only a missing Symbol fails a row; bad numbers and dates are ignored."""
    outcome = build(
        {
            "symbol": "XAUUSD",
            "volume": "lots",
            "entry_price": "n/a",
            "exit_price": "closed",
            "entry_time": "yesterday-ish",
            "exit_time": "never",
        }
    )

    assert outcome.ok
    record = outcome.record
    assert record.volume == Decimal("0")
    assert record.entry_price == Decimal("0")
    assert record.exit_price is None
    assert not record.is_closed
    assert record.entry_time == NOW
    assert record.exit_time is None


def test_exit_price_decides_closed():
    open_record = build({"symbol": "EURUSD", "exit_price": ""}).record
    closed_record = build({"symbol": "EURUSD", "exit_price": "1.2"}).record

    assert not open_record.is_closed
    assert closed_record.is_closed


def test_notes_are_kept_verbatim():
    record = build({"symbol": "EURUSD", "notes": "  spaced out  "}).record
    assert record.notes == "  spaced out  "


def test_date_format_is_tried_first():
    options = ImportOptions(date_format="%d/%m/%Y %H:%M")

    record = build({"symbol": "EURUSD", "time": "03/04/2024 10:15"}, options=options).record

    assert record.entry_time == datetime(2024, 4, 3, 10, 15)


def test_custom_mapping():
    mapping = {"Ticker": "Symbol", "Qty": "Volume"}

    record = build({"Ticker": "US30", "Qty": "2", "symbol": "ignored"}, mapping=mapping).record

    assert record.symbol == "US30"
    assert record.volume == Decimal("2")


def test_apply_auto_tag():
    record = build({"symbol": "EURUSD"}).record

    assert apply_auto_tag(record, None) is record
    tagged = apply_auto_tag(record, "mt5")
    assert tagged.tags == "mt5"
    assert apply_auto_tag(tagged, "london").tags == "mt5,london"

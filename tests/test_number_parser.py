"""Tests for number parsing."""

from decimal import Decimal

import pytest

from tradejournal.utils.number_parser import parse_decimal, try_parse_decimal


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1.2345", Decimal("1.2345")),
        ("  1.5 ", Decimal("1.5")),
        ("+1.5", Decimal("1.5")),
        ("-1.5", Decimal("-1.5")),
        ("1.5-", Decimal("-1.5")),
        ("1,234.56", Decimal("1234.56")),
        ("(12.50)", Decimal("-12.50")),
        ("$12.50", Decimal("12.50")),
        ("12.50 €", Decimal("12.50")),
        ("1.5e3", Decimal("1500")),
        ("0", Decimal("0")),
    ],
)
def test_parse_decimal(value, expected):
    assert parse_decimal(value) == expected


@pytest.mark.parametrize("value", ["", "   ", "abc", "1.2.3", "NaN", "Infinity", "1_000", "1_000.5"])
def test_parse_decimal_invalid(value):
    with pytest.raises(ValueError):
        parse_decimal(value)


def test_try_parse_decimal():
    assert try_parse_decimal("2.5") == Decimal("2.5")
    assert try_parse_decimal("oops") is None
    assert try_parse_decimal("") is None
    assert try_parse_decimal(None) is None

"""Utility functions for tradejournal."""

from tradejournal.utils.date_parser import parse_datetime, try_parse_datetime
from tradejournal.utils.number_parser import parse_decimal, try_parse_decimal
from tradejournal.utils.account_resolver import resolve_account

__all__ = [
    "parse_datetime",
    "try_parse_datetime",
    "parse_decimal",
    "try_parse_decimal",
    "resolve_account",
]

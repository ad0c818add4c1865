"""Mapping of source columns onto canonical trade fields."""

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from tradejournal.domain.errors import ValidationError


SYMBOL = "Symbol"
DIRECTION = "Direction"
VOLUME = "Volume"
ENTRY_PRICE = "EntryPrice"
EXIT_PRICE = "ExitPrice"
STOP_LOSS = "StopLoss"
TAKE_PROFIT = "TakeProfit"
ENTRY_TIME = "EntryTime"
EXIT_TIME = "ExitTime"
PROFIT_LOSS = "ProfitLoss"
COMMISSION = "Commission"
SWAP = "Swap"
NOTES = "Notes"

CANONICAL_FIELDS = frozenset(
    {
        SYMBOL,
        DIRECTION,
        VOLUME,
        ENTRY_PRICE,
        EXIT_PRICE,
        STOP_LOSS,
        TAKE_PROFIT,
        ENTRY_TIME,
        EXIT_TIME,
        PROFIT_LOSS,
        COMMISSION,
        SWAP,
        NOTES,
    }
)

# Source column synonym -> canonical field. Keys are lower case; order is
# the precedence used when several synonyms are present in one row.
DEFAULT_FIELD_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        "symbol": SYMBOL,
        "pair": SYMBOL,
        "instrument": SYMBOL,
        "direction": DIRECTION,
        "type": DIRECTION,
        "side": DIRECTION,
        "volume": VOLUME,
        "lots": VOLUME,
        "size": VOLUME,
        "entry_price": ENTRY_PRICE,
        "open_price": ENTRY_PRICE,
        "price": ENTRY_PRICE,
        "exit_price": EXIT_PRICE,
        "close_price": EXIT_PRICE,
        "stop_loss": STOP_LOSS,
        "sl": STOP_LOSS,
        "take_profit": TAKE_PROFIT,
        "tp": TAKE_PROFIT,
        "entry_time": ENTRY_TIME,
        "open_time": ENTRY_TIME,
        "time": ENTRY_TIME,
        "exit_time": EXIT_TIME,
        "close_time": EXIT_TIME,
        "profit": PROFIT_LOSS,
        "pnl": PROFIT_LOSS,
        "profit_loss": PROFIT_LOSS,
        "commission": COMMISSION,
        "swap": SWAP,
        "comment": NOTES,
        "notes": NOTES,
    }
)


def effective_mapping(column_mapping: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """Return the caller's mapping if given, otherwise the default synonym table."""
    if column_mapping:
        return column_mapping
    return DEFAULT_FIELD_MAPPING


def validate_mapping(mapping: Mapping[str, str]) -> None:
    """Check that every mapping target is a canonical field.

    Raises:
        ValidationError: If a target is not a canonical field name
    """
    invalid = sorted({target for target in mapping.values() if target not in CANONICAL_FIELDS})
    if invalid:
        raise ValidationError(
            f"Invalid field name(s) in column mapping: {', '.join(invalid)}. "
            f"Must be one of: {', '.join(sorted(CANONICAL_FIELDS))}"
        )


def normalize_column_name(column: str) -> str:
    """Lowercase a column name and turn spaces and hyphens into underscores."""
    return column.strip().lower().replace(" ", "_").replace("-", "_")


def suggest_mapping(columns: Iterable[str]) -> dict[str, str]:
    """Suggest canonical fields for detected columns.

    Only columns found in the default synonym table are included. A column
    such as "EntryPrice" matches "entry_price" as well.
    """
    suggestions = {}
    for column in columns:
        field_name = DEFAULT_FIELD_MAPPING.get(normalize_column_name(column))
        if field_name is None:
            field_name = _DEFAULTS_BY_KEY.get(column_key(column))
        if field_name is not None:
            suggestions[column] = field_name
    return suggestions


def column_key(column: str) -> str:
    """Comparison key for column names: case, spaces, hyphens and underscores are ignored."""
    return re.sub(r"[\s_\-]", "", column.lower())


def index_row(row: Mapping[str, str]) -> dict[str, str]:
    """Index a row by ``column_key`` for lookups with ``resolve_field``.

    When two columns share a key, the first one in the row is kept.
    """
    indexed: dict[str, str] = {}
    for key, value in row.items():
        indexed.setdefault(column_key(key), value)
    return indexed


def resolve_field(
    row: Mapping[str, str], mapping: Mapping[str, str], field_name: str
) -> Optional[str]:
    """Return the row value for ``field_name``, or None if no mapped column is present.

    The mapping is scanned in declaration order and the first entry that
    targets ``field_name`` and whose source column exists in the row wins,
    regardless of where that column sits in the row. ``row`` is expected to
    be indexed with ``index_row``.
    """
    for source, target in mapping.items():
        if target != field_name:
            continue
        key = column_key(source)
        if key in row:
            return row[key]
    return None


_DEFAULTS_BY_KEY = MappingProxyType(
    {column_key(source): target for source, target in DEFAULT_FIELD_MAPPING.items()}
)

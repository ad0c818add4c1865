"""Building canonical trade records from raw rows."""

from dataclasses import dataclass
from datetime import datetime, UTC
from decimal import Decimal
from typing import Mapping, Optional

from tradejournal.domain import field_mapping as fields
from tradejournal.domain.entities import (
    ImportErrorKind,
    ImportOptions,
    ImportRowError,
    TradeDirection,
    TradeRecord,
)
from tradejournal.utils.date_parser import try_parse_datetime
from tradejournal.utils.number_parser import try_parse_decimal


@dataclass(frozen=True)
class BuildOutcome:
    """Either a built record or the row error that prevented it."""

    record: Optional[TradeRecord] = None
    error: Optional[ImportRowError] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def parse_direction(value: Optional[str]) -> TradeDirection:
    """Map a raw direction value to a TradeDirection.

    Values containing "buy" or "long", and the literal "1", are buys. Any
    other non-empty value is a sell. A missing or empty value defaults to buy.
    """
    if value is None or not value.strip():
        return TradeDirection.BUY
    text = value.strip().lower()
    if "buy" in text or "long" in text or text == "1":
        return TradeDirection.BUY
    return TradeDirection.SELL


def build_trade(
    row: Mapping[str, str],
    mapping: Mapping[str, str],
    account_id: int,
    options: ImportOptions,
    row_number: int,
    now: Optional[datetime] = None,
) -> BuildOutcome:
    """Build a TradeRecord from one raw row.

    Only a missing Symbol fails the row. Any other malformed value leaves
    its field unset. Entry time falls back to ``now`` when it cannot be
    parsed; exit time stays unset.

    Args:
        row: Raw row, column name -> string value
        mapping: Effective source column -> canonical field mapping
        account_id: Account the trade belongs to
        options: Import options (date format)
        row_number: 1-based row number used in error reports
        now: Import time; defaults to the current local time

    Returns:
        BuildOutcome with either the record or an ImportRowError
    """
    try:
        return _build(row, mapping, account_id, options, row_number, now)
    except (ArithmeticError, ValueError, TypeError) as e:
        return BuildOutcome(
            error=ImportRowError(
                row_number=row_number,
                message=f"Could not process row: {e}",
                kind=ImportErrorKind.UNKNOWN,
            )
        )


def _build(
    row: Mapping[str, str],
    mapping: Mapping[str, str],
    account_id: int,
    options: ImportOptions,
    row_number: int,
    now: Optional[datetime],
) -> BuildOutcome:
    data = fields.index_row(row)

    def value_of(field_name: str) -> Optional[str]:
        return fields.resolve_field(data, mapping, field_name)

    symbol = (value_of(fields.SYMBOL) or "").strip().upper()
    if not symbol:
        return BuildOutcome(
            error=ImportRowError(
                row_number=row_number,
                message="Symbol not found",
                kind=ImportErrorKind.PARSE_ERROR,
                column_name=fields.SYMBOL,
                raw_value=value_of(fields.SYMBOL),
            )
        )

    def decimal_of(field_name: str) -> Optional[Decimal]:
        return try_parse_decimal(value_of(field_name))

    entry_time = try_parse_datetime(value_of(fields.ENTRY_TIME), options.date_format)
    if entry_time is None:
        entry_time = now or datetime.now()

    notes = value_of(fields.NOTES)

    return BuildOutcome(
        record=TradeRecord(
            account_id=account_id,
            symbol=symbol,
            direction=parse_direction(value_of(fields.DIRECTION)),
            volume=decimal_of(fields.VOLUME) or Decimal("0"),
            entry_price=decimal_of(fields.ENTRY_PRICE) or Decimal("0"),
            exit_price=decimal_of(fields.EXIT_PRICE),
            entry_time=entry_time,
            exit_time=try_parse_datetime(value_of(fields.EXIT_TIME), options.date_format),
            stop_loss=decimal_of(fields.STOP_LOSS),
            take_profit=decimal_of(fields.TAKE_PROFIT),
            profit_loss=decimal_of(fields.PROFIT_LOSS),
            commission=decimal_of(fields.COMMISSION) or Decimal("0"),
            swap=decimal_of(fields.SWAP) or Decimal("0"),
            notes=notes,
            created_at=datetime.now(UTC),
        )
    )


def apply_auto_tag(record: TradeRecord, tag: Optional[str]) -> TradeRecord:
    """Append ``tag`` to the record's tags when a tag is configured."""
    if not tag:
        return record
    return record.with_tag(tag)

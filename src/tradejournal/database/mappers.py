"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from datetime import datetime, UTC
from decimal import Decimal

from tradejournal.domain import entities as domain
from tradejournal.database.models import (
    Account as ORMAccount,
    Trade as ORMTrade,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        broker=orm_account.broker,
        created_at=orm_account.created_at,
    )


def trade_to_domain(orm_trade: ORMTrade) -> domain.TradeRecord:
    """Convert SQLAlchemy Trade model to domain TradeRecord entity."""
    return domain.TradeRecord(
        id=orm_trade.id,
        account_id=orm_trade.account_id,
        symbol=orm_trade.symbol,
        direction=domain.TradeDirection(orm_trade.direction),
        volume=orm_trade.volume if orm_trade.volume is not None else Decimal("0"),
        entry_price=orm_trade.entry_price if orm_trade.entry_price is not None else Decimal("0"),
        exit_price=orm_trade.exit_price,
        entry_time=orm_trade.entry_time,
        exit_time=orm_trade.exit_time,
        stop_loss=orm_trade.stop_loss,
        take_profit=orm_trade.take_profit,
        profit_loss=orm_trade.profit_loss,
        commission=orm_trade.commission if orm_trade.commission is not None else Decimal("0"),
        swap=orm_trade.swap if orm_trade.swap is not None else Decimal("0"),
        notes=orm_trade.notes,
        tags=orm_trade.tags,
        created_at=orm_trade.created_at,
    )


def trade_from_domain(record: domain.TradeRecord) -> ORMTrade:
    """Build a new SQLAlchemy Trade model from a domain TradeRecord."""
    return ORMTrade(
        account_id=record.account_id,
        symbol=record.symbol,
        direction=record.direction.value,
        volume=record.volume,
        entry_price=record.entry_price,
        exit_price=record.exit_price,
        entry_time=record.entry_time,
        exit_time=record.exit_time,
        stop_loss=record.stop_loss,
        take_profit=record.take_profit,
        profit_loss=record.profit_loss,
        commission=record.commission,
        swap=record.swap,
        is_closed=record.is_closed,
        notes=record.notes,
        tags=record.tags,
        created_at=record.created_at or datetime.now(UTC),
    )

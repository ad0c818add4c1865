"""Trade domain service."""

from typing import Optional
from tradejournal.database.base import Database
from tradejournal.domain.entities import TradeRecord
from tradejournal.domain.errors import NotFoundError, account_not_found


class TradeService:
    """Read access to stored trades."""

    def __init__(self, db: Database):
        """Initialize trade service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_trade(self, trade_id: int) -> Optional[TradeRecord]:
        """Get trade by ID.

        Args:
            trade_id: Trade ID

        Returns:
            Trade record or None if not found
        """
        return self.db.get_trade(trade_id)

    def list_trades(
        self,
        account_id: int,
        symbol: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[TradeRecord]:
        """List trades of an account, newest entry first.

        Args:
            account_id: Account ID
            symbol: Optional symbol filter (case-insensitive)
            limit: Optional maximum number of trades

        Returns:
            List of trade records

        Raises:
            NotFoundError: If the account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return self.db.list_trades(account_id=account_id, symbol=symbol, limit=limit)

"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from tradejournal.domain.entities import Account, Fingerprint, TradeRecord


class Database(ABC):
    """Abstract database interface for tradejournal.

    Trade writes are staged with ``add_trade`` and become durable only on
    ``commit``, so one import call is saved all at once or not at all.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, broker: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Trade operations
    @abstractmethod
    def add_trade(self, record: TradeRecord) -> None:
        """Stage a trade for the next commit."""
        pass

    @abstractmethod
    def trade_exists(self, fingerprint: Fingerprint) -> bool:
        """Check if a trade matching the fingerprint is stored."""
        pass

    @abstractmethod
    def commit(self) -> None:
        """Flush all staged trades atomically.

        Raises:
            OperationFailedError: If the staged trades could not be saved;
                nothing is saved in that case
        """
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Discard staged trades."""
        pass

    @abstractmethod
    def get_trade(self, trade_id: int) -> Optional[TradeRecord]:
        """Get trade by ID."""
        pass

    @abstractmethod
    def list_trades(
        self,
        account_id: Optional[int] = None,
        symbol: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[TradeRecord]:
        """List trades, newest entry first, with optional filters."""
        pass

    @abstractmethod
    def count_trades(self, account_id: int) -> int:
        """Count stored trades for an account."""
        pass

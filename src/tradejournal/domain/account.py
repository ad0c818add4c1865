"""Account domain service."""

from typing import Optional
from tradejournal.database.base import Database
from tradejournal.domain.entities import Account as AccountEntity
from tradejournal.domain.errors import (
    ConflictError,
    ValidationError,
    duplicate_account_name,
)


class AccountService:
    """Service for managing trading accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, broker: str) -> int:
        """Create a new account.

        Args:
            name: Account name
            broker: Broker name

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If account name already exists
        """
        if not name or not name.strip():
            raise ValidationError("Account name must not be empty")

        # Check if account with same name exists
        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        return self.db.create_account(name=name, broker=broker)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()

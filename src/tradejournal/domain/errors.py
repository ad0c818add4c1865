"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for operation-level domain errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. Each carries a short ``code``
    and optional ``details`` next to its message.
    """

    code = "Error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    code = "Validation"


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""

    code = "NotFound"


class OperationFailedError(DomainError):
    """An operation could not complete, such as unreadable input or a failed save."""

    code = "Failure"


class UnauthorizedError(DomainError):
    """Caller is not allowed to perform the operation.

    Nothing in this package raises it; it is the code embedding
    applications use for their own access checks.
    """

    code = "Unauthorized"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    code = "Conflict"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name that is already taken."""
    return f"Account with name '{name}' already exists"


def unsupported_format(extension: str) -> str:
    """Return message for a file extension the importer cannot read."""
    return f"Format '{extension or '(none)'}' is not supported"


def file_size_out_of_range(size: int, min_size: int, max_size: int) -> str:
    """Return message for a file whose size is outside the accepted bounds."""
    return f"File size {size} bytes is outside the allowed range ({min_size}, {max_size}]"

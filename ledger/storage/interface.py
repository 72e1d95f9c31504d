"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the store and query logic decoupled from the file format
2. Use in-memory storage for testing
3. Swap the flat files for something else later

The interface is intentionally small: the ledger only ever reads the
whole source at startup and appends one record at a time.
"""

from abc import ABC, abstractmethod

from ledger.models.transaction import Transaction, User


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction persistence.

    Persistence is append-only: existing records are never rewritten.
    """

    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """
        Read every well-formed transaction from the source.

        Malformed rows are skipped with a diagnostic.

        Raises:
            SourceNotFoundError: If the source does not exist
        """
        pass

    @abstractmethod
    def append_transaction(self, transaction: Transaction) -> None:
        """
        Append one transaction to the source.

        Raises:
            WriteError: If the record could not be written
        """
        pass


class ProfileStorageInterface(ABC):
    """Abstract interface for reading user profiles."""

    @abstractmethod
    def load_users(self) -> list[User]:
        """
        Read every well-formed user profile, in file order.

        Raises:
            SourceNotFoundError: If the source does not exist
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SourceNotFoundError(StorageError):
    """The file to load from does not exist."""
    pass


class WriteError(StorageError):
    """A record could not be appended."""
    pass


class RowParseError(ValueError):
    """A single row could not be parsed."""
    pass

"""In-memory stores: transactions and users."""

from ledger.store.transactions import TransactionStore
from ledger.store.users import (
    AuthenticationError,
    IncorrectPinError,
    InvalidUserIdError,
    UnknownUserError,
    UserDirectory,
)

__all__ = [
    "AuthenticationError",
    "IncorrectPinError",
    "InvalidUserIdError",
    "TransactionStore",
    "UnknownUserError",
    "UserDirectory",
]

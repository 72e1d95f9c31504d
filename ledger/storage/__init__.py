"""
Storage Services Package

Provides the row codec, abstract interfaces and the flat-file implementation.
"""

from ledger.storage.interface import (
    ProfileStorageInterface,
    RowParseError,
    SourceNotFoundError,
    StorageError,
    TransactionStorageInterface,
    WriteError,
)
from ledger.storage.codec import (
    parse_transaction_row,
    parse_user_row,
    serialize_transaction,
    serialize_user,
)
from ledger.storage.flat_file import (
    FlatFileProfileStorage,
    FlatFileTransactionStorage,
    InMemoryTransactionStorage,
)

__all__ = [
    # Interfaces
    "ProfileStorageInterface",
    "TransactionStorageInterface",
    # Exceptions
    "RowParseError",
    "SourceNotFoundError",
    "StorageError",
    "WriteError",
    # Codec
    "parse_transaction_row",
    "parse_user_row",
    "serialize_transaction",
    "serialize_user",
    # Flat file implementation
    "FlatFileProfileStorage",
    "FlatFileTransactionStorage",
    "InMemoryTransactionStorage",
]

"""
Transaction Store

The authoritative in-memory ledger.

GUARANTEES:
- Never holds two identity-equal records (see Transaction.identity_key),
  no matter how many times a source file is re-read
- Keeps insertion order (file order, then new entries)
- Safe to share between threads: reads get a snapshot, and a slow
  persist call never holds the lock
"""

import threading
from typing import Callable, Iterable, Optional

from ledger.models.transaction import Transaction


class TransactionStore:
    """Ordered, deduplicated collection of transactions."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._lock = threading.RLock()
        self._transactions: list[Transaction] = []
        self._seen: set[tuple] = set()
        self._pending: set[tuple] = set()
        for transaction in transactions or ():
            self.insert(transaction)

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    def contains(self, transaction: Transaction) -> bool:
        with self._lock:
            return transaction.identity_key in self._seen

    def insert(
        self,
        transaction: Transaction,
        persist: Optional[Callable[[Transaction], None]] = None,
    ) -> bool:
        """
        Add a transaction unless an identity-equal one is already stored.

        Args:
            transaction: The record to add
            persist: Called with the record before it is added. If it
                     raises, the record is NOT added and the error
                     propagates. Duplicates are never persisted.

        Returns:
            True if the record was added, False if it was a duplicate

        The key is reserved while persist runs, without holding the lock:
        readers are not blocked by a slow write, and an identity-equal
        insert during that time counts as a duplicate.
        """
        key = transaction.identity_key
        with self._lock:
            if key in self._seen or key in self._pending:
                return False
            if persist is None:
                self._commit(key, transaction)
                return True
            self._pending.add(key)

        committed = False
        try:
            persist(transaction)
            committed = True
        finally:
            with self._lock:
                self._pending.discard(key)
                if committed:
                    self._commit(key, transaction)
        return True

    def _commit(self, key: tuple, transaction: Transaction) -> None:
        self._seen.add(key)
        self._transactions.append(transaction)

    def insert_all(self, transactions: Iterable[Transaction]) -> int:
        """Insert many records; returns how many were new."""
        added = 0
        with self._lock:
            for transaction in transactions:
                if self.insert(transaction):
                    added += 1
        return added

    def all(self) -> tuple[Transaction, ...]:
        """Snapshot of every record in storage order."""
        with self._lock:
            return tuple(self._transactions)

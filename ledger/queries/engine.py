"""
Query Engine

DESIGN DECISION: Every query starts from what the session may see.
The visibility rule is applied first, inside the engine, on every path;
no filter parameter can widen it.

All results are sorted newest first by (date, time). The sort is stable,
so records with the same timestamp keep their storage order.
"""

import datetime as dt
from typing import Callable, Iterable, Optional, Union

from ledger.models.query import QueryResult, SearchField, SearchFilters, TransactionKind
from ledger.models.transaction import Transaction, User, to_cents
from ledger.queries.visibility import visible
from ledger.store.transactions import TransactionStore


def newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    return sorted(transactions, key=lambda t: (t.date, t.time), reverse=True)


def ordered_range(start: dt.date, end: dt.date) -> tuple[dt.date, dt.date]:
    """Swap reversed bounds."""
    if start > end:
        return end, start
    return start, end


def _contains(haystack: str, needle: Optional[str]) -> bool:
    if not needle:
        return True
    return needle.lower() in (haystack or "").lower()


class QueryEngine:
    """
    Filters and sorts the visible part of a TransactionStore.

    GUARANTEES:
    - Only returns records the session is allowed to see
    - Results are ordered newest first
    - An empty result is a normal outcome, never an error
    """

    def __init__(self, store: TransactionStore):
        self._store = store

    def visible_sorted(self, session: Optional[User]) -> list[Transaction]:
        return newest_first(visible(session, self._store.all()))

    def _select(
        self,
        session: Optional[User],
        predicate: Callable[[Transaction], bool],
    ) -> list[Transaction]:
        return [t for t in self.visible_sorted(session) if predicate(t)]

    def by_type(
        self,
        session: Optional[User],
        kind: Union[TransactionKind, str, None] = TransactionKind.ALL,
    ) -> list[Transaction]:
        """
        Ledger view by type.

        "credit" keeps payments (amount < 0), "debit" keeps deposits
        (amount > 0), anything else keeps everything. A zero amount is in
        neither narrowed view.
        """
        if not isinstance(kind, TransactionKind):
            kind = TransactionKind.parse(kind)

        if kind == TransactionKind.CREDIT:
            return self._select(session, lambda t: t.amount < 0)
        if kind == TransactionKind.DEBIT:
            return self._select(session, lambda t: t.amount > 0)
        return self.visible_sorted(session)

    def by_date_range(
        self,
        session: Optional[User],
        start: dt.date,
        end: dt.date,
    ) -> list[Transaction]:
        """Records dated start..end inclusive; reversed bounds are swapped."""
        start, end = ordered_range(start, end)
        return self._select(session, lambda t: start <= t.date <= end)

    def by_field_contains(
        self,
        session: Optional[User],
        field: Union[SearchField, str],
        needle: Optional[str],
    ) -> list[Transaction]:
        """
        Case-insensitive substring search on vendor or description.

        An empty needle matches everything.
        """
        if not isinstance(field, SearchField):
            field = SearchField(field.strip().lower())
        needle = needle.strip() if needle else None
        return self._select(
            session,
            lambda t: _contains(getattr(t, field.value), needle),
        )

    def search_by_vendor(self, session: Optional[User], needle: Optional[str]) -> list[Transaction]:
        return self.by_field_contains(session, SearchField.VENDOR, needle)

    def search_by_description(self, session: Optional[User], needle: Optional[str]) -> list[Transaction]:
        return self.by_field_contains(session, SearchField.DESCRIPTION, needle)

    def by_owner(self, session: Optional[User], owner_id: int) -> list[Transaction]:
        """One owner's records, as far as the session may see them."""
        return self._select(session, lambda t: t.owner_id == owner_id)

    def custom_search(
        self,
        session: Optional[User],
        filters: Optional[SearchFilters] = None,
    ) -> QueryResult:
        """
        All set filters must match (AND). Unset filters are ignored.

        The amount filter compares to the cent, like deduplication does.
        """
        filters = filters or SearchFilters()
        target_cents = to_cents(filters.amount) if filters.amount is not None else None

        def matches(t: Transaction) -> bool:
            if filters.start_date and t.date < filters.start_date:
                return False
            if filters.end_date and t.date > filters.end_date:
                return False
            if not _contains(t.description, filters.description):
                return False
            if not _contains(t.vendor, filters.vendor):
                return False
            if target_cents is not None and t.amount_cents != target_cents:
                return False
            return True

        return QueryResult(
            transactions=self._select(session, matches),
            query_description=f"Custom search: {filters.describe()}",
        )

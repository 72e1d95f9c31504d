"""Visibility rule: admins see everything, everyone else sees their own rows."""

from typing import Iterable, Optional

from ledger.models.transaction import Transaction, User


def can_view(session: Optional[User], transaction: Transaction) -> bool:
    if session is None:
        return False
    return session.is_admin or transaction.owner_id == session.id


def visible(
    session: Optional[User],
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """
    The subset of `transactions` the session may read, in input order.

    No session means nothing is visible.
    """
    if session is None:
        return []
    if session.is_admin:
        return list(transactions)
    return [t for t in transactions if t.owner_id == session.id]

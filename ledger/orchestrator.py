"""
Main Orchestrator for the Ledger

This module ties together all the components and defines the
end-to-end flows for:
1. Startup (profiles -> UserDirectory, transactions -> TransactionStore)
2. Login (id + PIN -> LedgerSession)
3. New entries (session -> Transaction -> file append -> store)
4. Queries (session -> visibility -> filters -> newest-first list)

DESIGN DECISION: There is no process-wide state. A `Ledger` is the shared
context built once at startup; a `LedgerSession` binds it to one
authenticated user and is what every front end talks to.

DURABLE WRITES: A new transaction is written to the file first and only
added to memory once the write succeeded. A failed write leaves the
in-memory ledger untouched, so memory never holds a record the file lacks.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Union

import structlog

from ledger.audit import AuditLogger
from ledger.config import LedgerSettings, get_settings
from ledger.models.query import QueryResult, SearchFilters, TransactionKind
from ledger.models.transaction import Transaction, User, to_cents
from ledger.queries.engine import QueryEngine
from ledger.queries.formatting import format_transaction
from ledger.queries.reports import DateRange, ReportKind, ReportPresets
from ledger.storage import (
    FlatFileProfileStorage,
    FlatFileTransactionStorage,
    ProfileStorageInterface,
    SourceNotFoundError,
    TransactionStorageInterface,
    WriteError,
)
from ledger.storage.codec import format_amount
from ledger.store import AuthenticationError, TransactionStore, UserDirectory


logger = structlog.get_logger(__name__)


class Ledger:
    """
    Shared ledger context.

    Owns the stores, the storage backends and the query components.
    Safe to share between sessions: the transaction store is locked.
    """

    def __init__(
        self,
        transaction_storage: TransactionStorageInterface,
        profile_storage: ProfileStorageInterface,
        store: Optional[TransactionStore] = None,
        directory: Optional[UserDirectory] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Optional[Callable[[], dt.date]] = None,
        now: Optional[Callable[[], dt.datetime]] = None,
    ):
        self._transaction_storage = transaction_storage
        self._profile_storage = profile_storage
        self.store = store if store is not None else TransactionStore()
        self.directory = directory if directory is not None else UserDirectory()
        self.audit_logger = audit_logger or AuditLogger()
        self._now = now or dt.datetime.now
        self.engine = QueryEngine(self.store)
        self.reports = ReportPresets(self.engine, today=today or (lambda: self._now().date()))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_users(self) -> int:
        """Replace the directory with the profile file's contents."""
        try:
            users = self._profile_storage.load_users()
        except SourceNotFoundError as e:
            logger.error("source_file_missing", source="profiles", error=str(e))
            users = []
        self.directory.load(users)
        return len(self.directory)

    def load_transactions(self) -> int:
        """
        Read the transaction file into the store.

        Re-reading is harmless: rows already in the store are ignored.

        Returns:
            Number of newly added records
        """
        try:
            transactions = self._transaction_storage.load_transactions()
        except SourceNotFoundError as e:
            logger.error("source_file_missing", source="transactions", error=str(e))
            return 0
        return self.store.insert_all(transactions)

    def load(self) -> int:
        """Load profiles then transactions. Missing files are not fatal."""
        users = self.load_users()
        added = self.load_transactions()
        self.audit_logger.log_ledger_loaded(
            users=users,
            transactions=len(self.store),
            added=added,
        )
        return added

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    def _session_for(self, user: User) -> "LedgerSession":
        self.audit_logger.log_user_authenticated(user.id, user.name, user.is_admin)
        return LedgerSession(self, user)

    def _audit_failure(self, error: AuthenticationError) -> None:
        self.audit_logger.log_authentication_failed(error.user_id, str(error))

    def login(self, user_id: Union[str, int], pin: str) -> "LedgerSession":
        """
        Non-interactive login.

        Raises:
            AuthenticationError: (or a subclass) if the pair does not match
        """
        try:
            user = self.directory.verify(user_id, pin)
        except AuthenticationError as e:
            self._audit_failure(e)
            raise
        return self._session_for(user)

    def authenticate(
        self,
        prompt: Callable[[str], str],
        notify: Callable[[str], None],
    ) -> "LedgerSession":
        """Interactive login; loops until a valid id + PIN pair is entered."""
        user = self.directory.authenticate(prompt, notify, on_failure=self._audit_failure)
        return self._session_for(user)

    def log_out(self, session: "LedgerSession") -> None:
        """End a session and re-read both files for the next user."""
        self.audit_logger.log_user_logged_out(session.user.id)
        session.close()
        self.load()

    # ------------------------------------------------------------------
    # New entries
    # ------------------------------------------------------------------

    def record_transaction(
        self,
        user: User,
        description: str,
        vendor: str,
        amount: Union[Decimal, str, float, int],
        deposit: bool,
    ) -> tuple[Transaction, bool, str]:
        """
        Create and store a new transaction for `user`.

        The sign is forced: deposits positive, payments negative.
        Date and time are taken from the clock, to the second.

        Returns:
            (transaction, saved, message)

        saved is False when the record was a duplicate or could not be
        written; in both cases the in-memory ledger is unchanged.

        Raises:
            ValueError: amount is not a number, or text contains '|'
        """
        value = parse_amount_input(amount)
        value = abs(value) if deposit else -abs(value)
        moment = self._now()

        transaction = Transaction(
            date=moment.date(),
            time=moment.time(),
            description=description,
            vendor=vendor,
            amount=value,
            owner_id=user.id,
        )
        label = "Deposit" if deposit else "Payment"
        amount_text = format_amount(transaction.amount)

        try:
            added = self.store.insert(
                transaction,
                persist=self._transaction_storage.append_transaction,
            )
        except WriteError as e:
            logger.error("append_failed", user_id=user.id, error=str(e))
            self.audit_logger.log_save_failed(user.id, str(e))
            return transaction, False, f"{label} was NOT saved: {e}"

        if not added:
            self.audit_logger.log_duplicate_ignored(user.id, transaction.vendor, amount_text)
            return transaction, False, f"{label} already recorded; nothing was added."

        self.audit_logger.log_transaction_recorded(user.id, transaction.vendor, amount_text)
        return transaction, True, f"{label} added successfully! (Amount: {transaction.amount_cents:,.2f})"


def parse_amount_input(amount: Union[Decimal, str, float, int]) -> Decimal:
    """
    Parse a user-entered amount.

    Raises:
        ValueError: Not a finite number, or too large to hold to the cent
    """
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip().replace(",", ""))
        except InvalidOperation:
            raise ValueError(f"Invalid number: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Invalid number: {amount!r}")
    to_cents(value)
    return value


class LedgerSession:
    """
    A Ledger bound to one authenticated user.

    Every query runs through the session's visibility; callers never
    pass the user explicitly.
    """

    def __init__(self, ledger: Ledger, user: User):
        self._ledger = ledger
        self._user: Optional[User] = user

    @property
    def user(self) -> User:
        if self._user is None:
            raise AuthenticationError("Session has been closed")
        return self._user

    @property
    def is_active(self) -> bool:
        return self._user is not None

    @property
    def is_admin(self) -> bool:
        return UserDirectory.is_admin(self._user)

    def close(self) -> None:
        self._user = None

    def _audit(self, description: str, results: list[Transaction]) -> list[Transaction]:
        self._ledger.audit_logger.log_query_executed(
            self._user.id if self._user else None,
            description,
            len(results),
        )
        return results

    # New entries

    def record_deposit(self, description: str, vendor: str, amount) -> tuple[Transaction, bool, str]:
        return self._ledger.record_transaction(self.user, description, vendor, amount, deposit=True)

    def record_payment(self, description: str, vendor: str, amount) -> tuple[Transaction, bool, str]:
        return self._ledger.record_transaction(self.user, description, vendor, amount, deposit=False)

    # Ledger views

    def by_type(self, kind: Union[TransactionKind, str, None] = TransactionKind.ALL) -> list[Transaction]:
        if not isinstance(kind, TransactionKind):
            kind = TransactionKind.parse(kind)
        return self._audit(
            f"By type: {kind.value}",
            self._ledger.engine.by_type(self._user, kind),
        )

    def all_transactions(self) -> list[Transaction]:
        return self.by_type(TransactionKind.ALL)

    def deposits(self) -> list[Transaction]:
        return self.by_type(TransactionKind.DEBIT)

    def payments(self) -> list[Transaction]:
        return self.by_type(TransactionKind.CREDIT)

    def by_date_range(self, start: dt.date, end: dt.date) -> list[Transaction]:
        return self._audit(
            f"Date range: {start} .. {end}",
            self._ledger.engine.by_date_range(self._user, start, end),
        )

    # What the web layer calls
    transactions_in_range = by_date_range

    def search_by_vendor(self, needle: Optional[str]) -> list[Transaction]:
        return self._audit(
            f"Vendor contains: {needle!r}",
            self._ledger.engine.search_by_vendor(self._user, needle),
        )

    def search_by_description(self, needle: Optional[str]) -> list[Transaction]:
        return self._audit(
            f"Description contains: {needle!r}",
            self._ledger.engine.search_by_description(self._user, needle),
        )

    def by_owner(self, owner_id: int) -> list[Transaction]:
        return self._audit(
            f"Owner: {owner_id}",
            self._ledger.engine.by_owner(self._user, owner_id),
        )

    def custom_search(self, filters: Optional[SearchFilters] = None) -> QueryResult:
        result = self._ledger.engine.custom_search(self._user, filters)
        self._audit(result.query_description, result.transactions)
        return result

    # Reports

    def report_range(self, kind: ReportKind) -> DateRange:
        return self._ledger.reports.date_range(kind)

    def report(self, kind: ReportKind) -> list[Transaction]:
        kind = ReportKind(kind)
        return self._audit(
            f"Report: {kind.label}",
            self._ledger.reports.run(self._user, kind),
        )

    @staticmethod
    def format_transaction(transaction: Transaction) -> str:
        return format_transaction(transaction)


def create_ledger(
    settings: Optional[LedgerSettings] = None,
    load: bool = True,
) -> Ledger:
    """
    Factory function to create the ledger from settings.

    Args:
        settings: Defaults to get_settings()
        load: Read both files immediately
    """
    settings = settings or get_settings()
    ledger = Ledger(
        transaction_storage=FlatFileTransactionStorage(settings.transactions_path),
        profile_storage=FlatFileProfileStorage(settings.profiles_path),
    )
    if load:
        ledger.load()
    return ledger

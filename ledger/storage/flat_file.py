"""
Flat File Storage Implementation

DESIGN DECISION: The ledger lives in two pipe-delimited text files because:
1. Users can open and read them in any editor or spreadsheet
2. No database setup required
3. Appending one line per transaction is all the persistence we need

TRADEOFFS:
- No transactions beyond a single append (we never rewrite the file)
- Whole-file reads at startup (fine for a personal ledger)
- Filtering happens in memory, not in storage

A bad row never stops a load: it is logged and skipped.
"""

from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ledger.models.transaction import Transaction, User
from ledger.storage.codec import (
    parse_transaction_row,
    parse_user_row,
    serialize_transaction,
)
from ledger.storage.interface import (
    ProfileStorageInterface,
    RowParseError,
    SourceNotFoundError,
    TransactionStorageInterface,
    WriteError,
)


logger = structlog.get_logger(__name__)

# A missing directory or a read-only file will not fix itself on retry.
PERMANENT_WRITE_ERRORS = (
    FileNotFoundError,
    IsADirectoryError,
    NotADirectoryError,
    PermissionError,
)

PathLike = Union[str, Path]


def _as_path(path: Optional[PathLike]) -> Optional[Path]:
    if path is None or str(path).strip() == "":
        return None
    return Path(path)


def _read_lines(path: Optional[Path], kind: str) -> list[str]:
    if path is None:
        raise SourceNotFoundError(f"No {kind} file configured")
    try:
        with path.open("r", encoding="utf-8") as handle:
            return handle.read().splitlines()
    except FileNotFoundError:
        raise SourceNotFoundError(f"{kind.capitalize()} file not found: {path}")
    except OSError as e:
        raise SourceNotFoundError(f"Could not read {kind} file {path}: {e}")


class FlatFileTransactionStorage(TransactionStorageInterface):
    """
    Transactions stored one per line in a pipe-delimited file.

    Rows are written with two-decimal amounts and second-precision times.
    """

    def __init__(self, path: Optional[PathLike]):
        self._path = _as_path(path)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def load_transactions(self) -> list[Transaction]:
        """Read all well-formed rows in file order."""
        transactions = []
        for line_number, line in enumerate(_read_lines(self._path, "transactions"), start=1):
            try:
                transaction = parse_transaction_row(line)
            except RowParseError as e:
                logger.warning(
                    "transaction_row_skipped",
                    path=str(self._path),
                    line_number=line_number,
                    reason=str(e),
                )
                continue
            if transaction is not None:
                transactions.append(transaction)
        return transactions

    def append_transaction(self, transaction: Transaction) -> None:
        """Append one row. Existing content is never touched."""
        if self._path is None:
            raise WriteError("Output file name is not set. Cannot write.")
        try:
            self._append_line(serialize_transaction(transaction))
        except OSError as e:
            raise WriteError(f"Could not write to {self._path}: {e}")

    @retry(
        retry=(
            retry_if_exception_type(OSError)
            & retry_if_not_exception_type(PERMANENT_WRITE_ERRORS)
        ),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _append_line(self, line: str) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


class FlatFileProfileStorage(ProfileStorageInterface):
    """User profiles stored one per line in a pipe-delimited file."""

    def __init__(self, path: Optional[PathLike]):
        self._path = _as_path(path)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def load_users(self) -> list[User]:
        users = []
        for line_number, line in enumerate(_read_lines(self._path, "profiles"), start=1):
            try:
                user = parse_user_row(line)
            except RowParseError as e:
                logger.warning(
                    "profile_row_skipped",
                    path=str(self._path),
                    line_number=line_number,
                    reason=str(e),
                )
                continue
            if user is not None:
                users.append(user)
        return users


class InMemoryTransactionStorage(TransactionStorageInterface):
    """
    Transaction storage backed by a list.

    Used by tests in place of a file.
    """

    def __init__(self, rows: Optional[list[str]] = None):
        self.rows: list[str] = list(rows or [])
        self.fail_writes = False

    def load_transactions(self) -> list[Transaction]:
        transactions = []
        for line in self.rows:
            try:
                transaction = parse_transaction_row(line)
            except RowParseError as e:
                logger.warning("transaction_row_skipped", reason=str(e))
                continue
            if transaction is not None:
                transactions.append(transaction)
        return transactions

    def append_transaction(self, transaction: Transaction) -> None:
        if self.fail_writes:
            raise WriteError("Writes are disabled")
        self.rows.append(serialize_transaction(transaction))

"""
Shared fixtures for the ledger tests.

The standard data set:
    user 1 (Alice)  2024-01-05  +50.00
    user 1 (Alice)  2024-02-10  -12.00
    user 2 (Bob)    2024-01-20  +30.00
User 9 is an admin.
"""

import datetime as dt
from decimal import Decimal

import pytest

from ledger.models import Transaction, User
from ledger.orchestrator import Ledger
from ledger.queries import QueryEngine
from ledger.storage import FlatFileProfileStorage, FlatFileTransactionStorage
from ledger.store import TransactionStore, UserDirectory


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""
    def _make(
        owner_id: int = 1,
        date: str = "2024-01-05",
        time: str = "10:00:00",
        description: str = "Coffee",
        vendor: str = "Starbucks",
        amount: str = "-4.25",
    ) -> Transaction:
        return Transaction(
            owner_id=owner_id,
            date=dt.date.fromisoformat(date),
            time=dt.time.fromisoformat(time),
            description=description,
            vendor=vendor,
            amount=Decimal(amount),
        )
    return _make


@pytest.fixture
def alice() -> User:
    return User(id=1, name="Alice", pin="1111")


@pytest.fixture
def bob() -> User:
    return User(id=2, name="Bob", pin="2222")


@pytest.fixture
def admin() -> User:
    return User(id=9, name="Admin", pin="0000", is_admin=True)


@pytest.fixture
def directory(alice, bob, admin) -> UserDirectory:
    return UserDirectory([alice, bob, admin])


@pytest.fixture
def scenario(make_transaction) -> list[Transaction]:
    return [
        make_transaction(owner_id=1, date="2024-01-05", description="Salary", vendor="ACME Corp", amount="50.00"),
        make_transaction(owner_id=1, date="2024-02-10", description="Groceries", vendor="FreshMart", amount="-12.00"),
        make_transaction(owner_id=2, date="2024-01-20", description="Refund", vendor="Amazon", amount="30.00"),
    ]


@pytest.fixture
def store(scenario) -> TransactionStore:
    return TransactionStore(scenario)


@pytest.fixture
def engine(store) -> QueryEngine:
    return QueryEngine(store)


PROFILES_FILE = """userid|name|pin|access
1|Alice|1111|false
2|Bob|2222
9|Admin|0000|TRUE
"""

TRANSACTIONS_FILE = """userid|date|time|description|vendor|amount
1|2024-01-05|10:00:00|Salary|ACME Corp|50.00
1|2024-02-10|10:00:00|Groceries|FreshMart|-12.00
not-a-number|2024-02-11|10:00:00|Broken|Row|1.00
2|2024-01-20|10:00:00|Refund|Amazon|30.00
"""


@pytest.fixture
def ledger_files(tmp_path):
    """(transactions_path, profiles_path) holding the standard data set."""
    transactions_path = tmp_path / "transactions.csv"
    profiles_path = tmp_path / "profiles.csv"
    transactions_path.write_text(TRANSACTIONS_FILE, encoding="utf-8")
    profiles_path.write_text(PROFILES_FILE, encoding="utf-8")
    return transactions_path, profiles_path


NOW = dt.datetime(2024, 2, 15, 9, 30, 0)


@pytest.fixture
def ledger(ledger_files) -> Ledger:
    """Ledger over the standard files, with the clock fixed at NOW."""
    transactions_path, profiles_path = ledger_files
    ledger = Ledger(
        FlatFileTransactionStorage(transactions_path),
        FlatFileProfileStorage(profiles_path),
        now=lambda: NOW,
    )
    ledger.load()
    return ledger

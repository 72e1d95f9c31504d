"""Tests for flat-file storage."""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from ledger.storage import (
    FlatFileProfileStorage,
    FlatFileTransactionStorage,
    InMemoryTransactionStorage,
    SourceNotFoundError,
    WriteError,
)


class TestFlatFileTransactionStorage:
    """Tests for the transaction file."""

    def test_loads_rows_in_file_order(self, ledger_files):
        """Test well-formed rows are returned in order."""
        transactions_path, _ = ledger_files
        transactions = FlatFileTransactionStorage(transactions_path).load_transactions()
        assert [t.description for t in transactions] == ["Salary", "Groceries", "Refund"]

    def test_bad_row_is_skipped_with_warning(self, ledger_files):
        """Test a malformed row is reported and skipped."""
        transactions_path, _ = ledger_files
        with capture_logs() as logs:
            transactions = FlatFileTransactionStorage(transactions_path).load_transactions()

        assert len(transactions) == 3
        skipped = [entry for entry in logs if entry["event"] == "transaction_row_skipped"]
        assert len(skipped) == 1
        assert skipped[0]["log_level"] == "warning"
        assert skipped[0]["line_number"] == 4

    def test_header_anywhere_is_skipped(self, tmp_path):
        """Test a repeated header in the middle of the file."""
        path = tmp_path / "transactions.csv"
        path.write_text(
            "1|2024-01-05|10:00:00|Salary|ACME Corp|50.00\n"
            "USERID|DATE|TIME|DESCRIPTION|VENDOR|AMOUNT\n"
            "\n"
            "1|2024-01-06|10:00:00|Lunch|Deli|-8.00\n",
            encoding="utf-8",
        )
        with capture_logs() as logs:
            transactions = FlatFileTransactionStorage(path).load_transactions()
        assert len(transactions) == 2
        assert logs == []

    def test_owner_id_header_is_skipped_silently(self, tmp_path):
        """Test the ownerId spelling of the header produces no warning."""
        path = tmp_path / "transactions.csv"
        path.write_text(
            "ownerId|date|time|description|vendor|amount\n"
            "1|2024-01-05|10:00:00|Salary|ACME Corp|50.00\n",
            encoding="utf-8",
        )
        with capture_logs() as logs:
            transactions = FlatFileTransactionStorage(path).load_transactions()
        assert len(transactions) == 1
        assert logs == []

    def test_oversized_amount_row_is_skipped(self, tmp_path):
        """Test a row whose amount cannot be held to the cent is skipped."""
        path = tmp_path / "transactions.csv"
        path.write_text(
            "1|2024-01-06|10:00:00|big|v|1e30\n"
            "1|2024-01-05|10:00:00|Salary|ACME Corp|50.00\n",
            encoding="utf-8",
        )
        with capture_logs() as logs:
            transactions = FlatFileTransactionStorage(path).load_transactions()
        assert [t.description for t in transactions] == ["Salary"]
        skipped = [entry for entry in logs if entry["event"] == "transaction_row_skipped"]
        assert len(skipped) == 1
        assert skipped[0]["line_number"] == 1

    def test_missing_file_raises(self, tmp_path):
        """Test a missing source is reported as SourceNotFoundError."""
        storage = FlatFileTransactionStorage(tmp_path / "missing.csv")
        with pytest.raises(SourceNotFoundError):
            storage.load_transactions()

    def test_unset_path_raises_on_load(self):
        """Test an unconfigured path cannot be read."""
        with pytest.raises(SourceNotFoundError):
            FlatFileTransactionStorage(None).load_transactions()

    def test_append_keeps_existing_content(self, ledger_files, make_transaction):
        """Test appending never truncates the file."""
        transactions_path, _ = ledger_files
        before = transactions_path.read_text(encoding="utf-8")

        storage = FlatFileTransactionStorage(transactions_path)
        storage.append_transaction(make_transaction(owner_id=1, date="2024-03-01", amount="-4.25"))

        after = transactions_path.read_text(encoding="utf-8")
        assert after.startswith(before)
        assert after.endswith("1|2024-03-01|10:00:00|Coffee|Starbucks|-4.25\n")

    def test_appended_row_loads_back(self, tmp_path, make_transaction):
        """Test an appended record is read back as the same record."""
        path = tmp_path / "transactions.csv"
        storage = FlatFileTransactionStorage(path)
        original = make_transaction(amount="12.5")
        storage.append_transaction(original)

        loaded = storage.load_transactions()
        assert len(loaded) == 1
        assert loaded[0].identity_key == original.identity_key
        assert loaded[0].amount == Decimal("12.50")

    def test_append_to_missing_directory_raises(self, tmp_path, make_transaction):
        """Test an unwritable location is reported as WriteError."""
        storage = FlatFileTransactionStorage(tmp_path / "no-such-dir" / "transactions.csv")
        with pytest.raises(WriteError):
            storage.append_transaction(make_transaction())

    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_append_without_path_raises(self, path, make_transaction):
        """Test an unset output path is reported as WriteError."""
        with pytest.raises(WriteError, match="not set"):
            FlatFileTransactionStorage(path).append_transaction(make_transaction())


class TestFlatFileProfileStorage:
    """Tests for the profile file."""

    def test_loads_profiles(self, ledger_files):
        """Test admin flags and optional access column."""
        _, profiles_path = ledger_files
        users = FlatFileProfileStorage(profiles_path).load_users()
        assert [(u.id, u.name, u.is_admin) for u in users] == [
            (1, "Alice", False),
            (2, "Bob", False),
            (9, "Admin", True),
        ]

    def test_bad_profile_row_is_skipped(self, tmp_path):
        """Test short rows are reported and skipped."""
        path = tmp_path / "profiles.csv"
        path.write_text("1|Alice|1111\nbroken\n", encoding="utf-8")
        with capture_logs() as logs:
            users = FlatFileProfileStorage(path).load_users()
        assert [u.id for u in users] == [1]
        assert [entry["event"] for entry in logs] == ["profile_row_skipped"]

    def test_missing_profiles_raise(self, tmp_path):
        """Test a missing profile file."""
        with pytest.raises(SourceNotFoundError):
            FlatFileProfileStorage(tmp_path / "missing.csv").load_users()


class TestInMemoryTransactionStorage:
    """Tests for the list-backed storage."""

    def test_round_trip(self, make_transaction):
        """Test append then load."""
        storage = InMemoryTransactionStorage()
        storage.append_transaction(make_transaction())
        assert len(storage.load_transactions()) == 1

    def test_fail_writes(self, make_transaction):
        """Test simulated write failures."""
        storage = InMemoryTransactionStorage()
        storage.fail_writes = True
        with pytest.raises(WriteError):
            storage.append_transaction(make_transaction())
        assert storage.rows == []

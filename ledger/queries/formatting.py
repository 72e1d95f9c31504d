"""Display formats for a single transaction."""

from ledger.models.transaction import Transaction, to_cents
from ledger.storage.codec import TIME_FORMAT


def format_transaction(transaction: Transaction) -> str:
    """
    One display line, as served to the web front end.

    2025-01-15 | Coffee                         | STARBUCKS          |      -3.45 | CREDIT | 08:15:09
    """
    return (
        f"{transaction.date.isoformat()} | "
        f"{transaction.description:<30} | "
        f"{transaction.vendor:<18} | "
        f"{to_cents(transaction.amount):>10.2f} | "
        f"{transaction.transaction_type.value.upper():<6} | "
        f"{transaction.time.strftime(TIME_FORMAT)}"
    )


def format_table_row(transaction: Transaction) -> str:
    """Fixed-width console row: date, description, vendor, amount, type, time."""
    return (
        f"{transaction.date.isoformat():<10}  "
        f"{transaction.description[:30]:<30}  "
        f"{transaction.vendor[:20]:<30}  "
        f"{to_cents(transaction.amount):>30,.2f}  "
        f"{transaction.transaction_type.value:<12}  "
        f"{transaction.time.strftime(TIME_FORMAT):<12}"
    )


TABLE_HEADER = (
    f"{'Date':<10}  {'Description':<30}  {'Vendor':<30}  "
    f"{'Amount':>30}  {'Type':<12}  {'Time':<12}"
)

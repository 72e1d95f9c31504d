"""
Row Codec for the pipe-delimited ledger files

Transaction file (one record per line):
    userid|date|time|description|vendor|amount
    3|2024-03-01|09:15:00|Coffee|Starbucks|-4.25

Profile file:
    userid|name|pin|access
    3|Jordan|4455|false

Header rows are recognized wherever they appear in a file, case-insensitively.
The first transaction column may be spelled userid or ownerId.
The parsers raise RowParseError for bad rows; the caller decides whether a
bad row is skipped (it always is, when loading).
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import ValidationError

from ledger.models.transaction import Transaction, User, to_cents
from ledger.storage.interface import RowParseError


DELIMITER = "|"
TIME_FORMAT = "%H:%M:%S"

TRANSACTION_COLUMNS = ["userid", "date", "time", "description", "vendor", "amount"]
PROFILE_COLUMNS = ["userid", "name", "pin", "access"]
# Accepted spellings of the first transaction column in a header row
OWNER_COLUMN_ALIASES = {"userid", "ownerid"}


def split_row(line: str) -> list[str]:
    """Split on the delimiter and trim every field. Empty fields are kept."""
    return [field.strip() for field in line.strip().split(DELIMITER)]


def _matches_header(fields: list[str], columns: list[str], minimum: int) -> bool:
    if len(fields) < minimum:
        return False
    return all(
        field.lower() == column
        for field, column in zip(fields, columns)
    )


def is_transaction_header(fields: list[str]) -> bool:
    if fields and fields[0].lower() in OWNER_COLUMN_ALIASES:
        fields = [TRANSACTION_COLUMNS[0]] + fields[1:]
    return _matches_header(fields, TRANSACTION_COLUMNS, len(TRANSACTION_COLUMNS))


def is_profile_header(fields: list[str]) -> bool:
    # access is optional, so a three-column header counts too
    return _matches_header(fields, PROFILE_COLUMNS, 3)


def parse_time(value: str) -> dt.time:
    return dt.datetime.strptime(value, TIME_FORMAT).time()


def parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise RowParseError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise RowParseError(f"Invalid amount: {value!r}")
    try:
        to_cents(amount)
    except ValueError:
        raise RowParseError(f"Amount out of range: {value!r}")
    return amount


def parse_transaction_row(line: str) -> Optional[Transaction]:
    """
    Parse one transaction row.

    Returns None for blank lines and header rows.

    Raises:
        RowParseError: Wrong field count or a field that does not parse
    """
    if not line.strip():
        return None

    fields = split_row(line)
    if is_transaction_header(fields):
        return None

    if len(fields) != len(TRANSACTION_COLUMNS):
        raise RowParseError(
            f"Expected {len(TRANSACTION_COLUMNS)} fields "
            f"({DELIMITER.join(TRANSACTION_COLUMNS)}), got {len(fields)}"
        )

    owner, date_text, time_text, description, vendor, amount_text = fields
    try:
        return Transaction(
            owner_id=int(owner),
            date=dt.date.fromisoformat(date_text),
            time=parse_time(time_text),
            description=description,
            vendor=vendor,
            amount=parse_amount(amount_text),
        )
    except RowParseError:
        raise
    except (ValueError, ValidationError) as e:
        raise RowParseError(f"Bad data: {e}")


def parse_user_row(line: str) -> Optional[User]:
    """
    Parse one profile row.

    A fourth field sets the admin flag: "true" in any case means admin,
    any other text means regular user.

    Returns None for blank lines and header rows.

    Raises:
        RowParseError: Fewer than three fields or a non-numeric id
    """
    if not line.strip():
        return None

    fields = split_row(line)
    if is_profile_header(fields):
        return None

    if len(fields) < 3:
        raise RowParseError(
            f"Expected at least 3 fields (userid|name|pin), got {len(fields)}"
        )

    is_admin = len(fields) >= 4 and fields[3].lower() == "true"
    try:
        return User(
            id=int(fields[0]),
            name=fields[1],
            pin=fields[2],
            is_admin=is_admin,
        )
    except (ValueError, ValidationError) as e:
        raise RowParseError(f"Bad data: {e}")


def format_amount(amount: Decimal) -> str:
    """Two decimal places, no grouping."""
    return str(to_cents(amount))


def serialize_transaction(transaction: Transaction) -> str:
    """Render a transaction as one row (no trailing newline)."""
    return DELIMITER.join([
        str(transaction.owner_id),
        transaction.date.isoformat(),
        transaction.time.strftime(TIME_FORMAT),
        transaction.description,
        transaction.vendor,
        format_amount(transaction.amount),
    ])


def serialize_user(user: User) -> str:
    """Render a profile as one row (no trailing newline)."""
    return DELIMITER.join([
        str(user.id),
        user.name,
        user.pin,
        "true" if user.is_admin else "false",
    ])

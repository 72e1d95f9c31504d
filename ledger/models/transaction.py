"""
Core Data Models for the Ledger

These models define the schemas for everything the ledger stores:
1. Transaction - one dated money movement owned by a user
2. User - an account holder with a PIN and an admin flag

DESIGN DECISION: Transactions are frozen. There is no edit or delete
operation anywhere in the system, so an instance never changes after it
is created (either parsed from the file or entered by a user).

Sign convention (kept from the ledger file format):
- amount > 0  -> deposit, type "debit"
- amount < 0  -> payment, type "credit"
- amount == 0 -> classified as "debit"
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    """
    Round an amount to the nearest cent (half away from zero).

    Raises:
        ValueError: The amount is not finite or has too many digits
                    to be held to the cent
    """
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount out of range: {amount}")


class TransactionType(str, Enum):
    """
    Derived transaction type.

    NOTE: The names follow the ledger's own convention, which is the
    reverse of accounting usage: deposits are "debit", payments "credit".
    """
    DEBIT = "debit"    # deposit, amount >= 0
    CREDIT = "credit"  # payment, amount < 0


class Transaction(BaseModel):
    """
    A single money movement.

    Identity for deduplication is (owner_id, date, time, description,
    vendor, amount rounded to the cent) - see `identity_key`.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    date: dt.date = Field(
        ...,
        description="Calendar date of the movement"
    )
    time: dt.time = Field(
        ...,
        description="Wall-clock time, second precision"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )
    vendor: str = Field(
        default="",
        description="Counterparty name"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount; negative for payments"
    )
    owner_id: int = Field(
        ...,
        description="ID of the user who made the transaction"
    )

    @field_validator('time')
    @classmethod
    def truncate_to_seconds(cls, v: dt.time) -> dt.time:
        """Drop sub-second precision."""
        return v.replace(microsecond=0)

    @field_validator('description', 'vendor')
    @classmethod
    def single_line_field(cls, v: str) -> str:
        """Text must fit in one pipe-delimited row."""
        if "|" in v or "\n" in v or "\r" in v:
            raise ValueError("Text fields cannot contain '|' or line breaks")
        return v

    @field_validator('amount')
    @classmethod
    def require_finite_amount(cls, v: Decimal) -> Decimal:
        """NaN and infinities are not money."""
        if not v.is_finite():
            raise ValueError(f"Amount must be a finite number, got {v}")
        to_cents(v)
        return v

    @property
    def transaction_type(self) -> TransactionType:
        """credit iff amount < 0, otherwise debit."""
        if self.amount < 0:
            return TransactionType.CREDIT
        return TransactionType.DEBIT

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_payment(self) -> bool:
        return self.amount < 0

    @property
    def amount_cents(self) -> Decimal:
        return to_cents(self.amount)

    @property
    def identity_key(self) -> tuple:
        """Composite key used by the store to reject re-inserted rows."""
        return (
            self.owner_id,
            self.date,
            self.time,
            self.description,
            self.vendor,
            self.amount_cents,
        )


def same_record(first: Transaction, second: Transaction) -> bool:
    """
    True if two transactions describe the same ledger record.

    Plain model equality compares the raw amount; this compares it to
    the cent, so 4.25 and 4.2500001 are the same record.
    """
    return first.identity_key == second.identity_key


class User(BaseModel):
    """
    An account holder.

    The PIN is an opaque string compared by exact match. It is kept out of
    the model's repr so it never ends up in logs.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: int = Field(
        ...,
        description="Unique user id"
    )
    name: str = Field(
        ...,
        description="Display name"
    )
    pin: str = Field(
        ...,
        repr=False,
        description="PIN, compared verbatim"
    )
    is_admin: bool = Field(
        default=False,
        description="Admins can see every user's transactions"
    )

    def verify_pin(self, pin: str) -> bool:
        """Exact string comparison, no normalization beyond trimming."""
        return self.pin == pin.strip()

    @property
    def display_name(self) -> str:
        return f"{self.name} (admin)" if self.is_admin else self.name

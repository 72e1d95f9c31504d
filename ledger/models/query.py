"""
Query Models

StructuredQuery-style inputs and outputs for the query engine.

DESIGN DECISION: Search filters come straight from people typing into a
console or a web form. Blank or unparseable values do NOT raise - they
mean "filter not applied". This keeps the search forgiving while the
engine itself only ever sees clean, typed values.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ledger.models.transaction import Transaction, to_cents


class TransactionKind(str, Enum):
    """Type selector for the ledger views."""
    CREDIT = "credit"  # payments
    DEBIT = "debit"    # deposits
    ALL = "all"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TransactionKind":
        """Case-insensitive; anything unrecognized means ALL."""
        if value is None:
            return cls.ALL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.ALL


class SearchField(str, Enum):
    """Text fields that support substring search."""
    VENDOR = "vendor"
    DESCRIPTION = "description"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SearchFilters(BaseModel):
    """
    Conjunctive filters for a custom search.

    Every filter is optional. Unset filters match everything.
    """

    start_date: Optional[dt.date] = Field(
        default=None,
        description="Inclusive lower bound on the transaction date"
    )
    end_date: Optional[dt.date] = Field(
        default=None,
        description="Inclusive upper bound on the transaction date"
    )
    description: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of the description"
    )
    vendor: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of the vendor"
    )
    amount: Optional[Decimal] = Field(
        default=None,
        description="Exact amount, compared to the cent"
    )

    @field_validator('start_date', 'end_date', mode='before')
    @classmethod
    def lenient_date(cls, v: Any) -> Any:
        """Unparseable dates drop the filter instead of failing."""
        v = _blank_to_none(v)
        if isinstance(v, str):
            try:
                return dt.date.fromisoformat(v.strip())
            except ValueError:
                return None
        return v

    @field_validator('description', 'vendor', mode='before')
    @classmethod
    def lenient_text(cls, v: Any) -> Any:
        v = _blank_to_none(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator('amount', mode='before')
    @classmethod
    def lenient_amount(cls, v: Any) -> Any:
        """Unparseable amounts drop the filter instead of failing."""
        v = _blank_to_none(v)
        if isinstance(v, str):
            try:
                v = Decimal(v.strip())
            except InvalidOperation:
                return None
        if isinstance(v, Decimal):
            try:
                to_cents(v)
            except ValueError:
                return None
        return v

    @model_validator(mode='after')
    def order_date_bounds(self) -> 'SearchFilters':
        """A reversed range is swapped, never rejected."""
        if self.start_date and self.end_date and self.start_date > self.end_date:
            self.start_date, self.end_date = self.end_date, self.start_date
        return self

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.start_date,
                self.end_date,
                self.description,
                self.vendor,
                self.amount,
            )
        )

    def describe(self) -> str:
        """Human-readable summary of the active filters."""
        parts = []
        if self.start_date:
            parts.append(f"from {self.start_date.isoformat()}")
        if self.end_date:
            parts.append(f"until {self.end_date.isoformat()}")
        if self.description:
            parts.append(f"description contains '{self.description}'")
        if self.vendor:
            parts.append(f"vendor contains '{self.vendor}'")
        if self.amount is not None:
            parts.append(f"amount = {self.amount:.2f}")
        return " | ".join(parts) if parts else "no filters"


class QueryResult(BaseModel):
    """
    Result of a query.

    `data_found` is the "no match" signal: an empty result is a normal
    outcome, not an error.
    """

    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Matching transactions, newest first"
    )
    query_description: str = Field(
        ...,
        description="Human-readable description of what was queried"
    )

    @property
    def result_count(self) -> int:
        return len(self.transactions)

    @property
    def data_found(self) -> bool:
        return bool(self.transactions)

"""
Data Models Package

This package contains all Pydantic models used by the ledger.
All data flowing through the system must conform to these schemas.
"""

from ledger.models.transaction import (
    CENT,
    Transaction,
    TransactionType,
    User,
    same_record,
    to_cents,
)
from ledger.models.query import (
    QueryResult,
    SearchField,
    SearchFilters,
    TransactionKind,
)
from ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CENT",
    "Transaction",
    "TransactionType",
    "User",
    "same_record",
    "to_cents",
    # Query models
    "QueryResult",
    "SearchField",
    "SearchFilters",
    "TransactionKind",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

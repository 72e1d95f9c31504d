"""
Audit Models for the Ledger

Every significant action in the system is logged for audit purposes:
who logged in, who recorded what, which writes failed, which queries ran.

DESIGN DECISION: Audit events are append-only log records. They describe
what happened; they never drive behaviour.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Session
    USER_AUTHENTICATED = "user_authenticated"
    AUTHENTICATION_FAILED = "authentication_failed"
    USER_LOGGED_OUT = "user_logged_out"

    # Loading
    LEDGER_LOADED = "ledger_loaded"

    # New entries
    TRANSACTION_RECORDED = "transaction_recorded"
    DUPLICATE_TRANSACTION_IGNORED = "duplicate_transaction_ignored"
    TRANSACTION_SAVE_FAILED = "transaction_save_failed"

    # Queries
    QUERY_EXECUTED = "query_executed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO
    user_id: Optional[int] = Field(
        default=None,
        description="Session user the event belongs to, if any"
    )
    description: str = Field(
        ...,
        max_length=500,
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "user_id": self.user_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_recorded(user_id=3, ...)
    """

    @staticmethod
    def user_authenticated(user_id: int, name: str, is_admin: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_AUTHENTICATED,
            user_id=user_id,
            description=f"User {name} logged in"[:500],
            details={"is_admin": is_admin},
            is_user_action=True,
        )

    @staticmethod
    def authentication_failed(user_id: Optional[int], reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AUTHENTICATION_FAILED,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            description="Login attempt rejected",
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def user_logged_out(user_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_OUT,
            user_id=user_id,
            description="User logged out",
            is_user_action=True,
        )

    @staticmethod
    def ledger_loaded(users: int, transactions: int, added: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description="Profiles and transactions loaded",
            details={
                "users": users,
                "transactions": transactions,
                "added": added,
            },
        )

    @staticmethod
    def transaction_recorded(user_id: int, vendor: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            user_id=user_id,
            description=f"Transaction recorded: {amount} ({vendor})"[:500],
            details={"vendor": vendor, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def duplicate_ignored(user_id: int, vendor: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DUPLICATE_TRANSACTION_IGNORED,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            description="Identical transaction already in the ledger",
            details={"vendor": vendor, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def save_failed(user_id: int, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            user_id=user_id,
            description="Transaction could not be written to the ledger file",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def query_executed(
        user_id: Optional[int],
        query: str,
        result_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_EXECUTED,
            severity=AuditSeverity.DEBUG,
            user_id=user_id,
            description=query[:500],
            details={"result_count": result_count},
        )

"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of logins and new entries
2. Debugging capability for bad rows and failed writes

The audit logger:
- Logs locally through structlog
- Gracefully handles failures (never crashes the app if logging fails)
"""

import logging
import sys
from typing import Optional

import structlog

from ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Called once at startup by the console and web entry points.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger=None):
        self._logger = logger or structlog.get_logger("ledger.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event at the level matching its severity.

        Returns False if the event could not be logged.
        """
        log_dict = event.to_log_dict()
        event_name = log_dict.pop("event_type")

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error(event_name, **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning(event_name, **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug(event_name, **log_dict)
            else:
                self._logger.info(event_name, **log_dict)
        except Exception as e:
            # Log failure but don't raise
            print(f"WARNING: Failed to write audit event: {e}", file=sys.stderr)
            return False

        return True

    def log_user_authenticated(self, user_id: int, name: str, is_admin: bool) -> None:
        self.log(AuditEventBuilder.user_authenticated(user_id, name, is_admin))

    def log_authentication_failed(self, user_id: Optional[int], reason: str) -> None:
        self.log(AuditEventBuilder.authentication_failed(user_id, reason))

    def log_user_logged_out(self, user_id: int) -> None:
        self.log(AuditEventBuilder.user_logged_out(user_id))

    def log_ledger_loaded(self, users: int, transactions: int, added: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(users, transactions, added))

    def log_transaction_recorded(self, user_id: int, vendor: str, amount: str) -> None:
        self.log(AuditEventBuilder.transaction_recorded(user_id, vendor, amount))

    def log_duplicate_ignored(self, user_id: int, vendor: str, amount: str) -> None:
        self.log(AuditEventBuilder.duplicate_ignored(user_id, vendor, amount))

    def log_save_failed(self, user_id: int, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(user_id, error_message))

    def log_query_executed(
        self,
        user_id: Optional[int],
        query: str,
        result_count: int,
    ) -> None:
        self.log(AuditEventBuilder.query_executed(user_id, query, result_count))

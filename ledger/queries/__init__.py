"""Query execution package."""

from ledger.queries.engine import QueryEngine, newest_first, ordered_range
from ledger.queries.formatting import TABLE_HEADER, format_table_row, format_transaction
from ledger.queries.reports import DateRange, ReportKind, ReportPresets
from ledger.queries.visibility import can_view, visible

__all__ = [
    "DateRange",
    "QueryEngine",
    "ReportKind",
    "ReportPresets",
    "TABLE_HEADER",
    "can_view",
    "format_table_row",
    "format_transaction",
    "newest_first",
    "ordered_range",
    "visible",
]

"""
Report Presets

Canonical date ranges relative to "today", each run through
QueryEngine.by_date_range:

    month to date    first of this month .. today
    previous month   first .. last day of last month
    year to date     Jan 1 .. today
    previous year    Jan 1 .. Dec 31 of last year
"""

import calendar
import datetime as dt
from enum import Enum
from typing import Callable, NamedTuple, Optional

from ledger.models.transaction import Transaction, User
from ledger.queries.engine import QueryEngine


class DateRange(NamedTuple):
    start: dt.date
    end: dt.date


class ReportKind(str, Enum):
    MONTH_TO_DATE = "month_to_date"
    PREVIOUS_MONTH = "previous_month"
    YEAR_TO_DATE = "year_to_date"
    PREVIOUS_YEAR = "previous_year"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


def month_to_date(today: dt.date) -> DateRange:
    return DateRange(today.replace(day=1), today)


def previous_month(today: dt.date) -> DateRange:
    year, month = (today.year - 1, 12) if today.month == 1 else (today.year, today.month - 1)
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(dt.date(year, month, 1), dt.date(year, month, last_day))


def year_to_date(today: dt.date) -> DateRange:
    return DateRange(dt.date(today.year, 1, 1), today)


def previous_year(today: dt.date) -> DateRange:
    year = today.year - 1
    return DateRange(dt.date(year, 1, 1), dt.date(year, 12, 31))


RANGE_BUILDERS: dict[ReportKind, Callable[[dt.date], DateRange]] = {
    ReportKind.MONTH_TO_DATE: month_to_date,
    ReportKind.PREVIOUS_MONTH: previous_month,
    ReportKind.YEAR_TO_DATE: year_to_date,
    ReportKind.PREVIOUS_YEAR: previous_year,
}


class ReportPresets:
    """Runs the preset reports for a session."""

    def __init__(
        self,
        engine: QueryEngine,
        today: Optional[Callable[[], dt.date]] = None,
    ):
        self._engine = engine
        self._today = today or dt.date.today

    def date_range(self, kind: ReportKind) -> DateRange:
        return RANGE_BUILDERS[ReportKind(kind)](self._today())

    def run(self, session: Optional[User], kind: ReportKind) -> list[Transaction]:
        start, end = self.date_range(kind)
        return self._engine.by_date_range(session, start, end)

    def month_to_date(self, session: Optional[User]) -> list[Transaction]:
        return self.run(session, ReportKind.MONTH_TO_DATE)

    def previous_month(self, session: Optional[User]) -> list[Transaction]:
        return self.run(session, ReportKind.PREVIOUS_MONTH)

    def year_to_date(self, session: Optional[User]) -> list[Transaction]:
        return self.run(session, ReportKind.YEAR_TO_DATE)

    def previous_year(self, session: Optional[User]) -> list[Transaction]:
        return self.run(session, ReportKind.PREVIOUS_YEAR)

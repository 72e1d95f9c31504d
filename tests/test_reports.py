"""Tests for report date ranges."""

import datetime as dt

import pytest

from ledger.queries import DateRange, ReportKind, ReportPresets
from ledger.queries.reports import month_to_date, previous_month, previous_year, year_to_date


class TestRanges:
    """Tests for the preset range builders."""

    def test_month_to_date(self):
        """Test first of the month through today."""
        assert month_to_date(dt.date(2024, 3, 15)) == DateRange(dt.date(2024, 3, 1), dt.date(2024, 3, 15))

    def test_previous_month_leap_february(self):
        """Test February ends on the 29th in a leap year."""
        assert previous_month(dt.date(2024, 3, 15)) == DateRange(dt.date(2024, 2, 1), dt.date(2024, 2, 29))

    def test_previous_month_rolls_over_year(self):
        """Test January looks back to December of last year."""
        assert previous_month(dt.date(2024, 1, 10)) == DateRange(dt.date(2023, 12, 1), dt.date(2023, 12, 31))

    def test_year_to_date(self):
        """Test January first through today."""
        assert year_to_date(dt.date(2024, 3, 15)) == DateRange(dt.date(2024, 1, 1), dt.date(2024, 3, 15))

    def test_previous_year(self):
        """Test the whole of last year."""
        assert previous_year(dt.date(2024, 3, 15)) == DateRange(dt.date(2023, 1, 1), dt.date(2023, 12, 31))

    def test_labels(self):
        """Test human-readable report names."""
        assert ReportKind.MONTH_TO_DATE.label == "Month To Date"


class TestReportPresets:
    """Tests for running presets against the engine."""

    @pytest.fixture
    def presets(self, engine):
        return ReportPresets(engine, today=lambda: dt.date(2024, 2, 15))

    def test_date_range_uses_injected_today(self, presets):
        """Test the clock is injectable."""
        assert presets.date_range(ReportKind.PREVIOUS_MONTH) == DateRange(dt.date(2024, 1, 1), dt.date(2024, 1, 31))

    def test_month_to_date(self, presets, admin):
        """Test this month's records."""
        assert [t.description for t in presets.month_to_date(admin)] == ["Groceries"]

    def test_previous_month(self, presets, admin):
        """Test last month's records."""
        assert [t.description for t in presets.previous_month(admin)] == ["Refund", "Salary"]

    def test_year_to_date_respects_visibility(self, presets, alice):
        """Test a user only sees their own rows in a report."""
        assert [t.description for t in presets.year_to_date(alice)] == ["Groceries", "Salary"]

    def test_previous_year_is_empty(self, presets, admin):
        """Test a range with no records."""
        assert presets.previous_year(admin) == []

    def test_run_accepts_value(self, presets, admin):
        """Test kinds given by value."""
        assert presets.run(admin, "month_to_date") == presets.month_to_date(admin)

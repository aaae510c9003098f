"""Unit tests for schedulegrid.domain.week_window."""

from datetime import date, datetime

import pytest

from schedulegrid.domain.week_window import (
    WeekWindow,
    build_week_window,
    format_week_label,
    week_start,
)

pytestmark = pytest.mark.unit


class TestWeekStart:
    def test_midweek_day(self):
        assert week_start(date(2026, 3, 11)) == date(2026, 3, 8)

    def test_sunday_is_its_own_start(self):
        assert week_start(date(2026, 3, 8)) == date(2026, 3, 8)

    def test_saturday(self):
        assert week_start(datetime(2026, 3, 14, 23, 0)) == date(2026, 3, 8)


class TestBuildWeekWindow:
    def test_current_week(self):
        window = build_week_window(date(2026, 3, 11))

        assert window.start == date(2026, 3, 8)
        assert window.end == date(2026, 3, 14)
        assert len(window.days) == 7
        assert window.label == "Mar 8 - 14, 2026"
        assert window.date_keys[0] == "2026-03-08"

    def test_positive_offset(self):
        window = build_week_window(date(2026, 3, 11), week_offset=1)
        assert (window.start, window.end) == (date(2026, 3, 15), date(2026, 3, 21))

    def test_negative_offset(self):
        window = build_week_window(date(2026, 3, 11), week_offset=-2)
        assert window.start == date(2026, 2, 22)

    def test_contains(self):
        window = build_week_window(date(2026, 3, 11))
        assert window.contains(date(2026, 3, 8))
        assert window.contains(datetime(2026, 3, 14, 22, 0))
        assert not window.contains(date(2026, 3, 15))

    def test_explicit_days_are_kept(self):
        window = WeekWindow(start=date(2026, 3, 8), days=(date(2026, 3, 8), date(2026, 3, 9)))
        assert window.end == date(2026, 3, 9)


class TestWeekLabel:
    def test_same_month(self):
        assert format_week_label(date(2026, 1, 18), date(2026, 1, 24)) == "Jan 18 - 24, 2026"

    def test_spanning_months(self):
        window = build_week_window(date(2026, 4, 1))
        assert window.label == "Mar 29 - Apr 4, 2026"

    def test_spanning_years_uses_end_year(self):
        window = build_week_window(date(2025, 12, 31))
        assert window.label == "Dec 28 - Jan 3, 2026"

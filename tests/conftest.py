"""Shared fixtures for schedulegrid tests."""

from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

import pytest

from schedulegrid.calendar.models import BlockOrigin, TimeBlock


@pytest.fixture
def week_days() -> list[date]:
    """The Sunday-to-Saturday week of 2026-03-08 (2026-03-09 is a Monday)."""
    start = date(2026, 3, 8)
    return [start + timedelta(days=i) for i in range(7)]


@pytest.fixture
def make_block() -> Callable[..., TimeBlock]:
    """Factory for TimeBlock instances with sensible defaults."""

    def _make(block_id: str, start_minute: int, end_minute: int, **overrides: Any) -> TimeBlock:
        fields: dict[str, Any] = {
            "id": block_id,
            "start_minute": start_minute,
            "end_minute": end_minute,
            "title": f"Event {block_id}",
            "owner_label": "You",
            "owner_key": "user-1",
            "is_org": False,
            "origin": BlockOrigin.CALENDAR,
        }
        fields.update(overrides)
        return TimeBlock(**fields)

    return _make


@pytest.fixture
def schedule_row() -> Callable[..., dict[str, Any]]:
    """Factory for raw schedule rows as the data layer supplies them."""

    def _make(**overrides: Any) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": "s1",
            "user_id": "user-1",
            "title": "Organic Chemistry",
            "start_date": "2026-03-01",
            "end_date": None,
            "start_time": "09:00",
            "end_time": "10:30",
            "occurrence_type": "weekly",
            "day_of_week": [1, 3],
            "day_of_month": None,
            "users": {"name": "Alex Rivera", "email": "alex@example.com"},
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def calendar_event() -> Callable[..., dict[str, Any]]:
    """Factory for raw calendar event rows."""

    def _make(**overrides: Any) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": "e1",
            "user_id": "user-1",
            "title": "Dentist",
            "start_at": "2026-03-10T14:00:00",
            "end_at": "2026-03-10T15:30:00",
            "all_day": False,
            "users": {"name": "Alex Rivera", "email": "alex@example.com"},
            "origin": "calendar",
        }
        row.update(overrides)
        return row

    return _make


def pytest_configure(config: Any) -> None:
    """Register markers used across the suite."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")

"""Hour-by-hour busy map used to shade the availability grid.

Each cell is keyed by ``(date_key, hour)`` and lists who is busy during
that hour. A person appears at most once per cell no matter how many of
their events overlap it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Union

from schedulegrid.calendar.civil_dates import format_date_key
from schedulegrid.calendar.models import CalendarEventRow, ScheduleRow
from schedulegrid.calendar.recurrence import applies_to_day
from schedulegrid.domain.block_extraction import (
    GRID_END_HOUR,
    GRID_START_HOUR,
    all_day_last_day,
    coerce_rows,
    timed_event_end,
)
from schedulegrid.domain.week_window import WeekWindow

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


class GridMode(str, Enum):
    """Whose availability the grid shows."""

    PERSONAL = "personal"
    TEAM = "team"


class AvailabilityLevel(str, Enum):
    """Shading bucket for one grid cell."""

    NONE = "none"
    FREE = "free"
    BUSY = "busy"
    ALL = "all"
    MOST = "most"
    HALF = "half"
    SOME = "some"
    FEW = "few"


@dataclass(frozen=True)
class ConflictInfo:
    """Someone who is busy during a grid hour."""

    owner_key: str
    owner_label: str
    title: str
    is_org: bool = False


ConflictGrid = dict[tuple[str, int], list[ConflictInfo]]


def fallback_owner_label(mode: Union[GridMode, str]) -> str:
    return "You" if GridMode(mode) is GridMode.PERSONAL else "Unknown"


class _ConflictCollector:
    def __init__(self) -> None:
        self.grid: ConflictGrid = {}

    def add_hours(self, day: date, start_hour: int, end_hour: int, conflict: ConflictInfo) -> None:
        date_key = format_date_key(day)
        for hour in range(max(start_hour, GRID_START_HOUR), min(end_hour, GRID_END_HOUR)):
            cell = self.grid.setdefault((date_key, hour), [])
            if not any(item.owner_key == conflict.owner_key for item in cell):
                cell.append(conflict)


def build_conflict_grid(
    schedules: Iterable[Union[ScheduleRow, Mapping[str, Any]]],
    calendar_events: Iterable[Union[CalendarEventRow, Mapping[str, Any]]],
    window: WeekWindow,
    mode: Union[GridMode, str] = GridMode.PERSONAL,
) -> ConflictGrid:
    """Map each busy ``(date_key, hour)`` cell in the window to the people busy then."""
    fallback = fallback_owner_label(mode)
    collector = _ConflictCollector()

    for schedule in coerce_rows(schedules, ScheduleRow):
        rule = schedule.rule
        conflict = ConflictInfo(
            owner_key=schedule.user_id,
            owner_label=schedule.owner_label(fallback),
            title=schedule.title,
        )
        # Whole hours only: a 9:00-10:30 class marks the 9 o'clock hour
        start_hour = schedule.start_minute // 60
        end_hour = schedule.end_minute // 60
        for day in window.days:
            if applies_to_day(rule, day, schedule.start_date):
                collector.add_hours(day, start_hour, end_hour, conflict)

    for event in coerce_rows(calendar_events, CalendarEventRow):
        conflict = ConflictInfo(
            owner_key=event.owner_key,
            owner_label=event.owner_label(fallback),
            title=event.display_title,
            is_org=event.is_org,
        )
        start_day = event.start_at.date()

        if event.all_day:
            last_day = all_day_last_day(event)
            for day in window.days:
                if start_day <= day <= last_day:
                    collector.add_hours(day, GRID_START_HOUR, GRID_END_HOUR, conflict)
            continue

        end = timed_event_end(event)
        end_day = end.date()
        for day in window.days:
            if not start_day <= day <= end_day:
                continue
            start_hour = event.start_at.hour if day == start_day else 0
            if day == end_day:
                end_hour = end.hour + (1 if end.minute > 0 else 0)
            else:
                end_hour = HOURS_PER_DAY
            collector.add_hours(day, start_hour, end_hour, conflict)

    logger.debug("Conflict grid has %d busy cell(s) for week %s", len(collector.grid), window.label)
    return collector.grid


def available_count(grid: ConflictGrid, date_key: str, hour: int, total_members: int) -> int:
    """Members free during the given hour.

    An organization schedule in the cell blocks the whole team.
    """
    cell = grid.get((date_key, hour), [])
    busy = total_members if any(item.is_org for item in cell) else len(cell)
    return max(total_members - busy, 0)


def availability_level(
    available: int, total: int, mode: Union[GridMode, str] = GridMode.TEAM
) -> AvailabilityLevel:
    """Bucket an available/total ratio for shading.

    Personal grids are binary; team grids step down through quarters.
    """
    if total == 0:
        return AvailabilityLevel.NONE
    ratio = available / total

    if GridMode(mode) is GridMode.PERSONAL:
        return AvailabilityLevel.FREE if ratio >= 1 else AvailabilityLevel.BUSY

    if ratio >= 1:
        return AvailabilityLevel.ALL
    if ratio >= 0.75:
        return AvailabilityLevel.MOST
    if ratio >= 0.5:
        return AvailabilityLevel.HALF
    if ratio >= 0.25:
        return AvailabilityLevel.SOME
    return AvailabilityLevel.FEW

"""Convert schedules and calendar events into per-day time blocks.

Blocks are keyed by ``YYYY-MM-DD`` and clamped to the visible grid window.
A block that ends up empty after clamping is dropped rather than kept with
zero height.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timedelta
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from schedulegrid.calendar.civil_dates import (
    MINUTES_PER_DAY,
    DateLike,
    format_date_key,
    minute_of_day,
    start_of_day,
)
from schedulegrid.calendar.models import (
    BlockOrigin,
    CalendarEventRow,
    ScheduleRow,
    TimeBlock,
)
from schedulegrid.calendar.recurrence import applies_to_day

logger = logging.getLogger(__name__)

GRID_START_HOUR = 6
GRID_END_HOUR = 22  # 10pm
GRID_START_MINUTE = GRID_START_HOUR * 60
GRID_END_MINUTE = GRID_END_HOUR * 60
DEFAULT_EVENT_DURATION_MINUTES = 60

RowT = TypeVar("RowT", bound=BaseModel)


def clamp_to_grid(start_minute: int, end_minute: int) -> Optional[tuple[int, int]]:
    """Truncate an interval to the grid window, or None when nothing is left."""
    start = max(start_minute, GRID_START_MINUTE)
    end = min(end_minute, GRID_END_MINUTE)
    if start >= end:
        return None
    return start, end


def coerce_rows(rows: Iterable[Union[RowT, Mapping[str, Any]]], model: type[RowT]) -> list[RowT]:
    """Validate raw rows into ``model`` instances, skipping rows that fail."""
    parsed: list[RowT] = []
    for row in rows:
        if isinstance(row, model):
            parsed.append(row)
            continue
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            row_id = row.get("id") if isinstance(row, Mapping) else None
            logger.warning(
                "Skipping invalid %s row %r: %d validation error(s)",
                model.__name__,
                row_id,
                exc.error_count(),
            )
    return parsed


def unique_days(days: Iterable[DateLike]) -> list[date]:
    """Normalize visible days to civil dates, dropping duplicates but keeping order."""
    seen: set[date] = set()
    result: list[date] = []
    for value in days:
        day = start_of_day(value)
        if day not in seen:
            seen.add(day)
            result.append(day)
    return result


def all_day_last_day(row: CalendarEventRow) -> date:
    """Inclusive last day of an all-day event.

    All-day feeds end at the following midnight, so an end exactly at
    00:00 on a later day belongs to the day before.
    """
    start_day = row.start_at.date()
    end = row.end_at if row.end_at is not None else row.start_at
    end_day = end.date()
    if end.hour == 0 and end.minute == 0 and end_day > start_day:
        return end_day - timedelta(days=1)
    return end_day


def timed_event_end(row: CalendarEventRow) -> datetime:
    """End timestamp of a timed event, defaulting to one hour after its start."""
    if row.end_at is not None:
        return row.end_at
    return row.start_at + timedelta(minutes=DEFAULT_EVENT_DURATION_MINUTES)


class BlockCollector:
    """Accumulates clamped blocks per date key."""

    def __init__(self) -> None:
        self.blocks: dict[str, list[TimeBlock]] = {}
        self.dropped = 0

    def add(self, date_key: str, start_minute: int, end_minute: int, **fields: Any) -> None:
        clamped = clamp_to_grid(start_minute, end_minute)
        if clamped is None:
            self.dropped += 1
            logger.debug(
                "Dropping block %s on %s outside grid (%d..%d)",
                fields.get("id"),
                date_key,
                start_minute,
                end_minute,
            )
            return
        block = TimeBlock(start_minute=clamped[0], end_minute=clamped[1], **fields)
        self.blocks.setdefault(date_key, []).append(block)


def _add_schedule_blocks(
    collector: BlockCollector, schedule: ScheduleRow, days: Sequence[date], fallback_name: str
) -> None:
    rule = schedule.rule
    owner_label = schedule.owner_label(fallback_name)
    for day in days:
        if not applies_to_day(rule, day, schedule.start_date):
            continue
        date_key = format_date_key(day)
        collector.add(
            date_key,
            schedule.start_minute,
            schedule.end_minute,
            id=f"sched-{schedule.id or schedule.user_id}-{date_key}",
            title=schedule.title,
            owner_label=owner_label,
            owner_key=schedule.user_id,
            is_org=False,
            origin=BlockOrigin.ACADEMIC,
        )


def _add_event_blocks(
    collector: BlockCollector, event: CalendarEventRow, days: Sequence[date], fallback_name: str
) -> None:
    common = {
        "title": event.display_title,
        "owner_label": event.owner_label(fallback_name),
        "owner_key": event.owner_key,
        "is_org": event.is_org,
        "origin": BlockOrigin.RECURRING_SCHEDULE if event.is_org else BlockOrigin.CALENDAR,
    }
    start_day = event.start_at.date()

    if event.all_day:
        last_day = all_day_last_day(event)
        for day in days:
            if start_day <= day <= last_day:
                date_key = format_date_key(day)
                collector.add(
                    date_key, GRID_START_MINUTE, GRID_END_MINUTE, id=f"cal-{event.id}-{date_key}", **common
                )
        return

    end = timed_event_end(event)
    end_day = end.date()
    for day in days:
        if not start_day <= day <= end_day:
            continue
        date_key = format_date_key(day)
        day_start = minute_of_day(event.start_at) if day == start_day else 0
        day_end = minute_of_day(end) if day == end_day else MINUTES_PER_DAY
        collector.add(date_key, day_start, day_end, id=f"cal-{event.id}-{date_key}", **common)


def extract_blocks(
    schedules: Iterable[Union[ScheduleRow, Mapping[str, Any]]],
    calendar_events: Iterable[Union[CalendarEventRow, Mapping[str, Any]]],
    visible_days: Iterable[DateLike],
    fallback_name: str = "You",
) -> dict[str, list[TimeBlock]]:
    """Compute time blocks for each visible day.

    Args:
        schedules: Recurring schedule rows (models or raw mappings)
        calendar_events: Calendar feed rows (models or raw mappings)
        visible_days: Days currently shown on the grid
        fallback_name: Owner label when a row has no user name or email

    Returns:
        Mapping of date key to the blocks on that day. Days without blocks
        are absent.
    """
    days = unique_days(visible_days)
    collector = BlockCollector()

    schedule_rows = coerce_rows(schedules, ScheduleRow)
    for schedule in schedule_rows:
        _add_schedule_blocks(collector, schedule, days, fallback_name)

    event_rows = coerce_rows(calendar_events, CalendarEventRow)
    for event in event_rows:
        _add_event_blocks(collector, event, days, fallback_name)

    logger.debug(
        "Extracted %d block(s) over %d day(s) from %d schedule(s) and %d event(s); %d dropped",
        sum(len(day_blocks) for day_blocks in collector.blocks.values()),
        len(days),
        len(schedule_rows),
        len(event_rows),
        collector.dropped,
    )
    return collector.blocks

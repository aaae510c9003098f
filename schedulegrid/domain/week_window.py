"""Sunday-based week windows for the availability grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from schedulegrid.calendar.civil_dates import DateLike, format_date_key, start_of_day, weekday_number

DAYS_PER_WEEK = 7
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def week_start(value: DateLike) -> date:
    """The Sunday on or before the given day."""
    day = start_of_day(value)
    return day - timedelta(days=weekday_number(day))


def format_week_label(start: date, end: date) -> str:
    """Label such as ``Jan 19 - 25, 2026`` or ``Jan 26 - Feb 1, 2026``."""
    start_month = start.strftime("%b")
    if start.month == end.month:
        return f"{start_month} {start.day} - {end.day}, {end.year}"
    return f"{start_month} {start.day} - {end.strftime('%b')} {end.day}, {end.year}"


@dataclass(frozen=True)
class WeekWindow:
    """Seven consecutive days starting on a Sunday."""

    start: date
    days: tuple[date, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.days:
            object.__setattr__(
                self, "days", tuple(self.start + timedelta(days=i) for i in range(DAYS_PER_WEEK))
            )

    @property
    def end(self) -> date:
        return self.days[-1]

    @property
    def label(self) -> str:
        return format_week_label(self.start, self.end)

    @property
    def date_keys(self) -> list[str]:
        return [format_date_key(day) for day in self.days]

    def contains(self, value: DateLike) -> bool:
        return self.start <= start_of_day(value) <= self.end


def build_week_window(today: DateLike, week_offset: int = 0) -> WeekWindow:
    """Window for the week containing ``today``, shifted by ``week_offset`` weeks."""
    start = week_start(today) + timedelta(weeks=week_offset)
    return WeekWindow(start=start)

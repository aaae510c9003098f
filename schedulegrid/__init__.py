"""schedulegrid - recurrence expansion and availability grid layout.

Pure, synchronous transformations of in-memory schedule and calendar rows:
expand recurring rules into occurrences, cut events into per-day blocks, and
lay overlapping blocks out side by side.
"""

__version__ = "0.1.0"

from schedulegrid.calendar.civil_dates import (
    days_in_month,
    format_date_key,
    parse_civil_date,
    start_of_day,
)
from schedulegrid.calendar.models import (
    BlockOrigin,
    CalendarEventRow,
    OccurrenceInstance,
    OccurrenceType,
    PositionedBlock,
    RecurrenceRule,
    ScheduleRow,
    TimeBlock,
)
from schedulegrid.calendar.recurrence import (
    DAILY_INSTANCE_CAP,
    DEFAULT_DAILY_HORIZON_MONTHS,
    MONTHLY_INSTANCE_CAP,
    WEEKLY_INSTANCE_CAP,
    applies_to_day,
    count_occurrences,
    expand_recurrence,
)
from schedulegrid.domain.block_extraction import (
    GRID_END_HOUR,
    GRID_END_MINUTE,
    GRID_START_HOUR,
    GRID_START_MINUTE,
    extract_blocks,
)
from schedulegrid.domain.overlap_layout import layout_days, resolve_overlaps
from schedulegrid.domain.week_view import WeekView, build_week_view
from schedulegrid.domain.week_window import WeekWindow, build_week_window
from schedulegrid.exceptions import CivilDateParseError, InvalidAnchorError, ScheduleGridError

"""Data models for recurrence expansion and availability grid layout."""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .civil_dates import (
    MINUTES_PER_DAY,
    parse_civil_date,
    parse_time_of_day,
    parse_timestamp,
)


class OccurrenceType(str, Enum):
    """Recognized recurrence kinds. Anything else expands to nothing."""

    SINGLE = "single"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class BlockOrigin(str, Enum):
    """Where a time block came from."""

    CALENDAR = "calendar"
    RECURRING_SCHEDULE = "schedule"
    ACADEMIC = "academic"


def _coerce_days_of_week(value: Any) -> Optional[tuple[int, ...]]:
    """Accept a single weekday or a collection of weekdays (0=Sunday..6=Saturday)."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        days: tuple[int, ...] = (value,)
    elif isinstance(value, (list, tuple, set, frozenset)):
        try:
            days = tuple(int(day) for day in value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"day_of_week values must be integers, got {value!r}") from exc
    else:
        raise ValueError(f"day_of_week must be an int or a list of ints, got {value!r}")
    for day in days:
        if not 0 <= day <= 6:
            raise ValueError(f"day_of_week values must be within 0..6, got {day}")
    # An empty set behaves like an absent one: fall back to the anchor's weekday
    return days or None


def _coerce_civil_date(value: Any) -> Any:
    if isinstance(value, str):
        return parse_civil_date(value)
    if isinstance(value, datetime):
        return value.date()
    return value


class RecurrenceRule(BaseModel):
    """How a single anchor event repeats. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    occurrence_type: str = Field(..., description="single, daily, weekly or monthly")
    day_of_week: Optional[tuple[int, ...]] = Field(
        default=None, description="Weekdays for weekly rules (0=Sunday..6=Saturday)"
    )
    day_of_month: Optional[int] = Field(
        default=None, ge=1, le=31, description="Day of month for monthly rules"
    )
    recurrence_end_date: Optional[date] = Field(
        default=None, description="Inclusive last civil date of the series"
    )

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _validate_day_of_week(cls, value: Any) -> Optional[tuple[int, ...]]:
        return _coerce_days_of_week(value)

    @field_validator("recurrence_end_date", mode="before")
    @classmethod
    def _validate_end_date(cls, value: Any) -> Any:
        return _coerce_civil_date(value)

    @property
    def is_recognized(self) -> bool:
        """True when the occurrence type is one the engines understand."""
        return self.occurrence_type in {member.value for member in OccurrenceType}


class OccurrenceInstance(BaseModel):
    """One concrete materialization of a recurring anchor event."""

    model_config = ConfigDict(frozen=True)

    start_date: datetime
    end_date: Optional[datetime] = None
    recurrence_index: int = Field(..., ge=0)

    @property
    def duration(self) -> Optional[timedelta]:
        if self.end_date is None:
            return None
        return self.end_date - self.start_date

    @field_serializer("start_date")
    def serialize_start(self, dt: datetime) -> str:
        """Serialize the start timestamp to ISO format."""
        return dt.isoformat()

    @field_serializer("end_date", when_used="unless-none")
    def serialize_end(self, dt: datetime) -> str:
        """Serialize the end timestamp to ISO format."""
        return dt.isoformat()


class UserSummary(BaseModel):
    """Display details of the user that owns a schedule or calendar event."""

    name: Optional[str] = None
    email: Optional[str] = None

    def display_name(self, fallback: str = "You") -> str:
        return self.name or self.email or fallback


class ScheduleRow(BaseModel):
    """A recurring academic or organization schedule entry."""

    id: Optional[str] = None
    user_id: str
    title: str
    start_date: date
    end_date: Optional[date] = None
    start_time: str = Field(..., description="Wall-clock start, HH:MM")
    end_time: str = Field(..., description="Wall-clock end, HH:MM")
    occurrence_type: str
    day_of_week: Optional[tuple[int, ...]] = None
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    users: Optional[UserSummary] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _validate_dates(cls, value: Any) -> Any:
        return _coerce_civil_date(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_times(cls, value: str) -> str:
        parse_time_of_day(value)
        return value

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _validate_day_of_week(cls, value: Any) -> Optional[tuple[int, ...]]:
        return _coerce_days_of_week(value)

    @property
    def start_minute(self) -> int:
        return parse_time_of_day(self.start_time)

    @property
    def end_minute(self) -> int:
        return parse_time_of_day(self.end_time)

    @property
    def rule(self) -> RecurrenceRule:
        """The recurrence rule this row describes, bounded by its end date."""
        return RecurrenceRule(
            occurrence_type=self.occurrence_type,
            day_of_week=self.day_of_week,
            day_of_month=self.day_of_month,
            recurrence_end_date=self.end_date,
        )

    def owner_label(self, fallback: str = "You") -> str:
        if self.users is None:
            return fallback
        return self.users.display_name(fallback)


class CalendarEventRow(BaseModel):
    """A personal or organization calendar-feed event."""

    id: str
    user_id: str
    title: Optional[str] = None
    start_at: datetime
    end_at: Optional[datetime] = None
    all_day: Optional[bool] = None
    users: Optional[UserSummary] = None
    origin: Optional[str] = Field(default=None, description="calendar or schedule")

    @field_validator("start_at", "end_at", mode="before")
    @classmethod
    def _validate_timestamps(cls, value: Any) -> Any:
        if value is None:
            return None
        try:
            return parse_timestamp(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @property
    def is_org(self) -> bool:
        """Organization-originated events are tagged with the schedule origin."""
        return self.origin == BlockOrigin.RECURRING_SCHEDULE.value

    @property
    def owner_key(self) -> str:
        return f"org:{self.id}" if self.is_org else self.user_id

    def owner_label(self, fallback: str = "You") -> str:
        if self.is_org:
            return "Org schedule"
        if self.users is None:
            return fallback
        return self.users.display_name(fallback)

    @property
    def display_title(self) -> str:
        if self.title:
            return self.title
        return "Org schedule" if self.is_org else "Calendar event"


class TimeBlock(BaseModel):
    """A day-scoped interval in minutes since midnight."""

    model_config = ConfigDict(use_enum_values=True)

    id: str
    start_minute: int
    end_minute: int
    title: str
    owner_label: str
    owner_key: str = Field(..., description="Display grouping identity, not used for overlap")
    is_org: bool = False
    origin: BlockOrigin

    @model_validator(mode="after")
    def _check_bounds(self) -> "TimeBlock":
        if not 0 <= self.start_minute < self.end_minute <= MINUTES_PER_DAY:
            raise ValueError(
                f"Block {self.id} must satisfy 0 <= start < end <= {MINUTES_PER_DAY}, "
                f"got {self.start_minute}..{self.end_minute}"
            )
        return self

    @property
    def duration_minutes(self) -> int:
        return self.end_minute - self.start_minute

    def overlaps(self, other: "TimeBlock") -> bool:
        """Half-open interval overlap test."""
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute


class PositionedBlock(TimeBlock):
    """A time block with its side-by-side column assignment."""

    column: int = Field(..., ge=0)
    total_columns: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _check_column(self) -> "PositionedBlock":
        if self.column >= self.total_columns:
            raise ValueError(
                f"Block {self.id} column {self.column} exceeds total columns {self.total_columns}"
            )
        return self

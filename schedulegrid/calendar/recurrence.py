"""Recurrence expansion for daily, weekly and monthly schedules.

Expansion is a pure, bounded transformation: every branch stops at a hard
instance cap, so output size never depends on how far away the end date is.
Day matching lives in ``applies_to_day`` and is shared with block extraction
so the two can never disagree about whether a rule lands on a given day.
"""

import logging
from collections.abc import Iterator, Mapping
from datetime import date, timedelta
from typing import Any, Optional, Union

from dateutil.relativedelta import relativedelta

from ..exceptions import InvalidAnchorError
from .civil_dates import (
    TimestampLike,
    clamp_day_of_month,
    days_in_month,
    parse_timestamp,
    weekday_number,
)
from .models import OccurrenceInstance, OccurrenceType, RecurrenceRule

logger = logging.getLogger(__name__)

DAILY_INSTANCE_CAP = 180
WEEKLY_INSTANCE_CAP = 52
MONTHLY_INSTANCE_CAP = 12
DEFAULT_DAILY_HORIZON_MONTHS = 6
DEFAULT_DAILY_HORIZON = relativedelta(months=DEFAULT_DAILY_HORIZON_MONTHS)

RuleLike = Union[RecurrenceRule, Mapping[str, Any]]


def effective_days_of_week(rule: RecurrenceRule, anchor_date: date) -> frozenset[int]:
    """Weekdays a weekly rule fires on; the anchor's own weekday when unset."""
    if rule.day_of_week:
        return frozenset(rule.day_of_week)
    return frozenset((weekday_number(anchor_date),))


def effective_day_of_month(rule: RecurrenceRule, anchor_date: date) -> int:
    """Day of month a monthly rule fires on; the anchor's own day when unset."""
    return rule.day_of_month if rule.day_of_month is not None else anchor_date.day


def applies_to_day(rule: RecurrenceRule, day: date, anchor_date: date) -> bool:
    """Decide whether ``rule`` anchored on ``anchor_date`` has an occurrence on ``day``.

    A day qualifies when it is on/after the anchor date, on/before the rule's
    inclusive end date (if any), and matches the occurrence type. Monthly
    rules clamp their day to the month length, so day 31 matches Feb 28/29.
    """
    if day < anchor_date:
        return False
    if rule.recurrence_end_date is not None and day > rule.recurrence_end_date:
        return False

    kind = rule.occurrence_type
    if kind == OccurrenceType.SINGLE.value:
        return day == anchor_date
    if kind == OccurrenceType.DAILY.value:
        return True
    if kind == OccurrenceType.WEEKLY.value:
        return weekday_number(day) in effective_days_of_week(rule, anchor_date)
    if kind == OccurrenceType.MONTHLY.value:
        wanted = effective_day_of_month(rule, anchor_date)
        return day.day == min(wanted, days_in_month(day.year, day.month))
    return False


def _walk_days(
    rule: RecurrenceRule, anchor_date: date, last_day: Optional[date], cap: int
) -> Iterator[date]:
    """Walk forward one day at a time from the anchor, yielding matching days."""
    day = anchor_date
    emitted = 0
    while emitted < cap and (last_day is None or day <= last_day):
        if applies_to_day(rule, day, anchor_date):
            yield day
            emitted += 1
        day += timedelta(days=1)


def _monthly_days(rule: RecurrenceRule, anchor_date: date) -> Iterator[date]:
    """Yield one clamped day per month starting with the anchor's month."""
    wanted = effective_day_of_month(rule, anchor_date)
    first_month = anchor_date.replace(day=1)
    emitted = 0
    offset = 0
    while emitted < MONTHLY_INSTANCE_CAP:
        month = first_month + relativedelta(months=offset)
        offset += 1
        candidate = clamp_day_of_month(month.year, month.month, wanted)
        if rule.recurrence_end_date is not None and candidate > rule.recurrence_end_date:
            break
        # Skips only a target that falls before the anchor inside its first month
        if applies_to_day(rule, candidate, anchor_date):
            yield candidate
            emitted += 1


def _occurrence_days(rule: RecurrenceRule, anchor_date: date) -> Iterator[date]:
    kind = rule.occurrence_type
    if kind == OccurrenceType.SINGLE.value:
        return iter((anchor_date,))
    if kind == OccurrenceType.DAILY.value:
        last_day = rule.recurrence_end_date or anchor_date + DEFAULT_DAILY_HORIZON
        return _walk_days(rule, anchor_date, last_day, DAILY_INSTANCE_CAP)
    if kind == OccurrenceType.WEEKLY.value:
        # Without an end date the instance cap is the only bound
        return _walk_days(rule, anchor_date, rule.recurrence_end_date, WEEKLY_INSTANCE_CAP)
    if kind == OccurrenceType.MONTHLY.value:
        return _monthly_days(rule, anchor_date)
    return iter(())


def _coerce_rule(rule: RuleLike) -> RecurrenceRule:
    if isinstance(rule, RecurrenceRule):
        return rule
    return RecurrenceRule.model_validate(dict(rule))


def expand_recurrence(
    anchor_start: Optional[TimestampLike],
    anchor_end: Optional[TimestampLike],
    rule: RuleLike,
) -> list[OccurrenceInstance]:
    """Expand an anchor event into its concrete occurrence instances.

    Args:
        anchor_start: Start of the first occurrence (datetime or ISO-8601 string)
        anchor_end: Optional end of the first occurrence
        rule: Recurrence rule, or a mapping with the rule's fields

    Returns:
        Occurrences in chronological order with ``recurrence_index`` 0, 1, 2, ...
        Each keeps the anchor's time-of-day and duration. Unrecognized
        occurrence types yield an empty list.

    Raises:
        InvalidAnchorError: If the anchor start is missing or the end is not after it
    """
    if anchor_start is None:
        raise InvalidAnchorError("Recurrence anchor requires a start timestamp")

    start = parse_timestamp(anchor_start)
    end = parse_timestamp(anchor_end) if anchor_end is not None else None
    if end is not None and end <= start:
        raise InvalidAnchorError(f"Anchor end {end.isoformat()} is not after start {start.isoformat()}")

    parsed_rule = _coerce_rule(rule)
    duration: Optional[timedelta] = end - start if end is not None else None

    if not parsed_rule.is_recognized:
        logger.debug("Unrecognized occurrence type %r; nothing to expand", parsed_rule.occurrence_type)
        return []

    instances: list[OccurrenceInstance] = []
    for index, day in enumerate(_occurrence_days(parsed_rule, start.date())):
        occurrence_start = start.replace(year=day.year, month=day.month, day=day.day)
        instances.append(
            OccurrenceInstance(
                start_date=occurrence_start,
                end_date=occurrence_start + duration if duration is not None else None,
                recurrence_index=index,
            )
        )

    logger.debug(
        "Expanded %s rule anchored at %s into %d instance(s)",
        parsed_rule.occurrence_type,
        start.isoformat(),
        len(instances),
    )
    return instances


def count_occurrences(
    anchor_start: Optional[TimestampLike],
    anchor_end: Optional[TimestampLike],
    rule: RuleLike,
) -> int:
    """Number of instances a rule would create, for previews before saving."""
    return len(expand_recurrence(anchor_start, anchor_end, rule))


def occurrence_dates(instances: list[OccurrenceInstance]) -> list[date]:
    """Civil dates of the given instances, in order."""
    return [instance.start_date.date() for instance in instances]

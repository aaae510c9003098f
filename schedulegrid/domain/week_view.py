"""Assemble everything the availability grid needs for one week."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from schedulegrid.calendar.civil_dates import DateLike
from schedulegrid.calendar.models import CalendarEventRow, PositionedBlock, ScheduleRow
from schedulegrid.config_loader import Config
from schedulegrid.domain.block_extraction import coerce_rows, extract_blocks
from schedulegrid.domain.conflict_grid import (
    ConflictGrid,
    GridMode,
    build_conflict_grid,
    fallback_owner_label,
)
from schedulegrid.domain.overlap_layout import layout_days
from schedulegrid.domain.week_window import WeekWindow, build_week_window

logger = logging.getLogger(__name__)


@dataclass
class WeekView:
    """Positioned blocks and busy cells for one displayed week."""

    window: WeekWindow
    blocks_by_day: dict[str, list[PositionedBlock]] = field(default_factory=dict)
    conflicts: ConflictGrid = field(default_factory=dict)

    def blocks_for(self, date_key: str) -> list[PositionedBlock]:
        return self.blocks_by_day.get(date_key, [])

    @property
    def block_count(self) -> int:
        return sum(len(blocks) for blocks in self.blocks_by_day.values())


def build_week_view(
    schedules: Iterable[Union[ScheduleRow, Mapping[str, Any]]],
    calendar_events: Iterable[Union[CalendarEventRow, Mapping[str, Any]]],
    today: DateLike,
    week_offset: Optional[int] = None,
    config: Optional[Config] = None,
) -> WeekView:
    """Build the week containing ``today`` (shifted by ``week_offset`` weeks).

    ``week_offset`` defaults to the configured offset. Rows are validated
    once and shared by block extraction and the conflict grid.
    """
    cfg = config or Config()
    offset = cfg.week_offset if week_offset is None else week_offset
    window = build_week_window(today, offset)

    schedule_rows = coerce_rows(schedules, ScheduleRow)
    event_rows = coerce_rows(calendar_events, CalendarEventRow)

    blocks = extract_blocks(
        schedule_rows, event_rows, window.days, fallback_name=fallback_owner_label(cfg.mode)
    )
    view = WeekView(
        window=window,
        blocks_by_day=layout_days(blocks),
        conflicts=build_conflict_grid(schedule_rows, event_rows, window, cfg.mode),
    )
    logger.info(
        "Built %s week view for %s: %d block(s), %d busy cell(s)",
        GridMode(cfg.mode).value,
        window.label,
        view.block_count,
        len(view.conflicts),
    )
    return view

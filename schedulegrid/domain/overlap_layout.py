"""Side-by-side column layout for overlapping blocks within one day."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from schedulegrid.calendar.models import PositionedBlock, TimeBlock

logger = logging.getLogger(__name__)


def sort_blocks(blocks: Iterable[TimeBlock]) -> list[TimeBlock]:
    """Order by start, then longer blocks first so they claim column 0."""
    return sorted(blocks, key=lambda block: (block.start_minute, -block.duration_minutes))


def group_overlaps(sorted_blocks: list[TimeBlock]) -> list[list[TimeBlock]]:
    """Split start-sorted blocks into groups chained together by overlap.

    A block joins the current group while it starts before the latest end
    seen so far in that group; otherwise it opens a new group.
    """
    groups: list[list[TimeBlock]] = []
    current: list[TimeBlock] = []
    group_end = -1

    for block in sorted_blocks:
        if not current or block.start_minute < group_end:
            current.append(block)
            group_end = max(group_end, block.end_minute)
        else:
            groups.append(current)
            current = [block]
            group_end = block.end_minute
    if current:
        groups.append(current)
    return groups


def assign_columns(group: list[TimeBlock]) -> list[list[TimeBlock]]:
    """Greedy packing: each block goes into the first column that is free by its start."""
    columns: list[list[TimeBlock]] = []
    for block in group:
        for column in columns:
            if column[-1].end_minute <= block.start_minute:
                column.append(block)
                break
        else:
            columns.append([block])
    return columns


def resolve_overlaps(blocks: Iterable[TimeBlock]) -> list[PositionedBlock]:
    """Assign every block of a single day a column so overlapping blocks never share one.

    Every block in an overlap group reports the group's column count as
    ``total_columns``. Output is ordered by group, then column.
    """
    sorted_blocks = sort_blocks(blocks)
    if not sorted_blocks:
        return []

    result: list[PositionedBlock] = []
    groups = group_overlaps(sorted_blocks)
    for group in groups:
        columns = assign_columns(group)
        total_columns = len(columns)
        for column_index, column in enumerate(columns):
            for block in column:
                result.append(
                    PositionedBlock(
                        **block.model_dump(exclude={"column", "total_columns"}),
                        column=column_index,
                        total_columns=total_columns,
                    )
                )

    logger.debug(
        "Laid out %d block(s) in %d overlap group(s), widest group %d column(s)",
        len(result),
        len(groups),
        max((block.total_columns for block in result), default=0),
    )
    return result


def layout_days(blocks_by_day: Mapping[str, Iterable[TimeBlock]]) -> dict[str, list[PositionedBlock]]:
    """Run ``resolve_overlaps`` independently for every day."""
    return {date_key: resolve_overlaps(day_blocks) for date_key, day_blocks in blocks_by_day.items()}

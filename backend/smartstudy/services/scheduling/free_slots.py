"""Complement of merged busy blocks inside the day's active window."""
from __future__ import annotations

from typing import List, Optional, Sequence

from smartstudy.services.scheduling.types import BusyBlock, FreeSlot


def _preceding_title(blocks: Sequence[BusyBlock], minute: int) -> Optional[str]:
    previous = [block for block in blocks if block.end <= minute]
    if not previous:
        return None
    return max(previous, key=lambda block: block.end).title


def find_free_slots(
    busy: Sequence[BusyBlock],
    *,
    day_start: int,
    day_end: int,
    min_gap: int,
) -> List[FreeSlot]:
    """
    Walk the busy blocks in start order and emit every gap of at least ``min_gap``
    minutes between ``day_start`` and ``day_end``.

    Each slot records the title of the block right after it and of the nearest block
    that ended at or before its start.
    """
    threshold = max(min_gap, 1)
    blocks = sorted(busy, key=lambda block: block.start)
    slots: List[FreeSlot] = []
    cursor = day_start

    for block in blocks:
        if cursor >= day_end:
            break
        gap_end = min(block.start, day_end)
        if gap_end - cursor >= threshold:
            slots.append(
                FreeSlot(
                    start=cursor,
                    end=gap_end,
                    preceding_title=_preceding_title(blocks, cursor),
                    following_title=block.title if gap_end == block.start else None,
                )
            )
        cursor = max(cursor, block.end)

    if day_end - cursor >= threshold:
        slots.append(
            FreeSlot(
                start=cursor,
                end=day_end,
                preceding_title=_preceding_title(blocks, cursor),
                following_title=None,
            )
        )
    return slots


def total_free_minutes(slots: Sequence[FreeSlot]) -> int:
    return sum(slot.duration_minutes for slot in slots)

"""Turn fixed commitments into buffered, merged busy intervals."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from smartstudy.services.scheduling.classification import classify_activity
from smartstudy.services.scheduling.config import MealWindow, SchedulingConfig
from smartstudy.services.scheduling.timeutils import clamp
from smartstudy.services.scheduling.types import (
    LAST_MINUTE,
    ActivityKind,
    BusyBlock,
    ExistingTask,
    FixedCommitment,
)

logger = logging.getLogger(__name__)


def _busy_block(
    start: int,
    end: int,
    *,
    title: str,
    kind: ActivityKind,
    auto_generated: bool = False,
) -> Optional[BusyBlock]:
    start = clamp(start, 0, LAST_MINUTE)
    end = clamp(end, 0, LAST_MINUTE)
    if start >= end:
        return None
    return BusyBlock(start=start, end=end, title=title, kind=kind, auto_generated=auto_generated)


def buffer_commitments(commitments: Iterable[FixedCommitment], config: SchedulingConfig) -> List[BusyBlock]:
    """Widen each commitment by the buffer configured for its activity kind."""
    blocks: List[BusyBlock] = []
    for item in commitments:
        if item.end <= item.start:
            logger.debug("Ignoring empty commitment %r (%s-%s)", item.title, item.start, item.end)
            continue
        kind = classify_activity(item.title, item.kind, keywords=config.activity_keywords)
        rule = config.buffer_for(kind)
        block = _busy_block(item.start - rule.before, item.end + rule.after, title=item.title, kind=kind)
        if block is not None:
            blocks.append(block)
    return blocks


def _conflicts(window: MealWindow, commitments: Sequence[FixedCommitment]) -> bool:
    # Compares unbuffered commitment times.
    return any(item.start < window.end and item.end > window.start for item in commitments)


def synthesize_meal_blocks(commitments: Sequence[FixedCommitment], config: SchedulingConfig) -> List[BusyBlock]:
    """Add the configured meal windows that no commitment already covers."""
    blocks: List[BusyBlock] = []
    pad = config.meal_buffer_minutes
    for window in config.meal_windows:
        if _conflicts(window, commitments):
            continue
        block = _busy_block(
            window.start - pad,
            window.end + pad,
            title=window.title,
            kind=ActivityKind.MEAL,
            auto_generated=True,
        )
        if block is not None:
            blocks.append(block)
    return blocks


def merge_busy_blocks(blocks: Iterable[BusyBlock]) -> List[BusyBlock]:
    """
    Merge overlapping or touching blocks.

    A merged run keeps the first block's title and kind. The output is sorted and
    strictly separated, so merging it again returns an equal list.
    """
    merged: List[BusyBlock] = []
    for block in sorted(blocks, key=lambda item: item.start):
        if merged and block.start <= merged[-1].end:
            last = merged[-1]
            if block.end > last.end:
                merged[-1] = replace(last, end=block.end)
            continue
        merged.append(block)
    return merged


def normalize_commitments(commitments: Sequence[FixedCommitment], config: SchedulingConfig) -> List[BusyBlock]:
    commitments = list(commitments)
    blocks = buffer_commitments(commitments, config)
    if config.synthesize_meal_windows:
        meals = synthesize_meal_blocks(commitments, config)
        if meals:
            logger.debug("Synthesized meal windows: %s", [meal.title for meal in meals])
        blocks.extend(meals)
    return merge_busy_blocks(blocks)


def task_busy_blocks(tasks: Iterable[ExistingTask], config: SchedulingConfig) -> List[BusyBlock]:
    """Busy intervals for the task-generation variant: buffered tasks plus protected windows."""
    pad = config.task_buffer_minutes
    blocks: List[BusyBlock] = []
    for task in tasks:
        if task.end <= task.start:
            continue
        kind = classify_activity(task.title, keywords=config.activity_keywords)
        block = _busy_block(task.start - pad, task.end + pad, title=task.title, kind=kind)
        if block is not None:
            blocks.append(block)
    for window in config.protected_windows:
        block = _busy_block(window.start, window.end, title=window.title, kind=ActivityKind.MEAL)
        if block is not None:
            blocks.append(block)
    return merge_busy_blocks(blocks)

"""Greedy placement of template sessions into the best-scoring free slots."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence, Tuple

from smartstudy.services.scheduling.config import SchedulingConfig
from smartstudy.services.scheduling.scoring import select_best_slot
from smartstudy.services.scheduling.templates import resolve_template
from smartstudy.services.scheduling.types import FreeSlot, GeneratedSession, LearningGoal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllocationResult:
    sessions: Tuple[GeneratedSession, ...]
    remaining_slots: Tuple[FreeSlot, ...]
    unmet_minutes: Dict[str, int] = field(default_factory=dict)


def suggested_break_minutes(duration: int) -> int:
    if duration >= 90:
        return 15
    if duration >= 60:
        return 10
    return 5


def consume_slot(pool: List[FreeSlot], index: int, used: int, min_remainder: int) -> None:
    """Advance the slot at ``index`` past ``used`` minutes, or drop it if too little is left."""
    slot = pool[index]
    if slot.duration_minutes - used >= max(min_remainder, 1):
        pool[index] = replace(slot, start=slot.start + used)
    else:
        del pool[index]


def allocate_goals(
    goals: Sequence[LearningGoal],
    slots: Sequence[FreeSlot],
    config: SchedulingConfig,
) -> AllocationResult:
    """
    Place each goal's template sessions, in the order the goals are given.

    Goals must already be sorted by descending priority; they are not re-sorted here.
    A goal stops receiving sessions when its target is met, its template is exhausted,
    no slot can hold its minimum session, or the next session would fall below it.
    """
    pool: List[FreeSlot] = list(slots)
    keywords = tuple(config.activity_keywords)
    sessions: List[GeneratedSession] = []
    unmet: Dict[str, int] = {}

    for goal in goals:
        remaining = max(0, goal.target_minutes)
        template = resolve_template(goal.subject, config.templates)

        for entry in template:
            if remaining <= 0 or not pool:
                break
            index = select_best_slot(goal, pool, keywords=keywords)
            if index is None:
                break
            slot = pool[index]
            duration = min(entry.duration, remaining, slot.duration_minutes, goal.session_length.max)
            if duration < goal.session_length.min:
                break

            sessions.append(
                GeneratedSession(
                    learning_goal_id=goal.id,
                    subject=goal.subject,
                    topic=entry.topic,
                    order=entry.order,
                    start=slot.start,
                    end=slot.start + duration,
                    priority=goal.priority,
                    category=goal.category,
                    color=goal.color,
                    icon=goal.icon,
                    context_before=slot.preceding_title,
                    context_after=slot.following_title,
                    suggested_break_minutes=suggested_break_minutes(duration),
                )
            )
            consume_slot(pool, index, duration, config.min_slot_remainder_minutes)
            remaining -= duration

        if remaining > 0:
            unmet[goal.id] = remaining
            logger.debug("Goal %s under-served by %s min", goal.id, remaining)

    sessions.sort(key=lambda session: session.start)
    return AllocationResult(sessions=tuple(sessions), remaining_slots=tuple(pool), unmet_minutes=unmet)

"""Single-day pipelines: goal scheduling and protected-window task generation."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from smartstudy.services.scheduling.allocator import allocate_goals
from smartstudy.services.scheduling.config import SchedulingConfig
from smartstudy.services.scheduling.focus_policy import place_sessions
from smartstudy.services.scheduling.free_slots import find_free_slots, total_free_minutes
from smartstudy.services.scheduling.intervals import normalize_commitments, task_busy_blocks
from smartstudy.services.scheduling.partitioner import partition_sessions, planned_session_count
from smartstudy.services.scheduling.types import (
    DailyPlan,
    ExistingTask,
    FixedCommitment,
    FocusPlan,
    LearningGoal,
)

logger = logging.getLogger(__name__)


def plan_day(
    target_date: date,
    commitments: Sequence[FixedCommitment],
    goals: Sequence[LearningGoal],
    config: SchedulingConfig,
) -> DailyPlan:
    """Compute one day's study plan from its fixed commitments and priority-ordered goals."""
    busy = normalize_commitments(commitments, config)
    slots = find_free_slots(
        busy,
        day_start=config.day_start,
        day_end=config.day_end,
        min_gap=config.min_free_slot_minutes,
    )
    logger.debug(
        "%s: %s busy blocks, %s free slots (%s min)",
        target_date.isoformat(),
        len(busy),
        len(slots),
        total_free_minutes(slots),
    )
    if not slots or not goals:
        return DailyPlan(date=target_date)

    result = allocate_goals(goals, slots, config)
    return DailyPlan(date=target_date, sessions=result.sessions)


def plan_goal_day(
    goal: LearningGoal,
    existing_tasks: Iterable[ExistingTask],
    weekday: int,
    config: SchedulingConfig,
) -> FocusPlan:
    """Partition and place one goal's sessions around the tasks already on ``weekday``."""
    day_tasks = [task for task in existing_tasks if weekday in task.weekdays]
    busy = task_busy_blocks(day_tasks, config)
    slots = find_free_slots(
        busy,
        day_start=config.day_start,
        day_end=config.day_end,
        min_gap=config.min_free_slot_minutes,
    )
    target = max(0, goal.target_minutes)
    count = planned_session_count(target, total_free_minutes(slots), config.study)
    sessions = partition_sessions(target, count, config.study)
    return place_sessions(sessions, slots, config.study)

"""Split a goal's daily target into balanced, 5-minute-stepped sessions."""
from __future__ import annotations

import logging
import math
from typing import List

from smartstudy.services.scheduling.config import StudyConfig
from smartstudy.services.scheduling.timeutils import clamp, round_to_step
from smartstudy.services.scheduling.types import PlannedSession

logger = logging.getLogger(__name__)

STEP = 5
SINGLE_SESSION_FLOOR = 15


def _sessions(durations: List[int]) -> List[PlannedSession]:
    last = len(durations) - 1
    return [
        PlannedSession(order=index + 1, duration=duration, needs_break=index < last)
        for index, duration in enumerate(durations)
    ]


def partition_sessions(target_minutes: int, count: int, config: StudyConfig) -> List[PlannedSession]:
    """
    Return ``count`` sessions whose durations sum to ``target_minutes`` where the
    ``[min_session_length, max_session_length]`` bounds allow it. Durations move in
    5-minute steps, so a target off that grid is met from below (78 -> 75).

    Reconciliation after clamping is best-effort and capped at
    ``max_adjust_rounds`` passes over the sessions; any residual is logged.
    """
    if target_minutes <= 0:
        durations = [config.default_session_length] * max(1, count)
        return _sessions([d for d in durations if d >= SINGLE_SESSION_FLOOR])

    if count <= 1:
        duration = clamp(round_to_step(target_minutes, STEP), SINGLE_SESSION_FLOOR, config.max_session_length)
        return _sessions([duration])

    lower, upper = config.min_session_length, config.max_session_length
    base = (target_minutes // count // STEP) * STEP
    remainder = max(0, target_minutes - base * count)

    durations: List[int] = []
    for _ in range(count):
        duration = base
        if remainder >= STEP:
            duration += STEP
            remainder -= STEP
        durations.append(clamp(duration, lower, upper))

    total = sum(durations)
    if total != target_minutes:
        step = -STEP if total > target_minutes else STEP
        attempts = 0
        limit = count * config.max_adjust_rounds
        while attempts < limit:
            # The sum never ends above the target when the bounds allow it.
            if step > 0 and total + step > target_minutes:
                break
            if step < 0 and total <= target_minutes:
                break
            index = attempts % count
            nudged = durations[index] + step
            if lower <= nudged <= upper:
                durations[index] = nudged
                total += step
            attempts += 1
        if total != target_minutes:
            logger.debug(
                "Partition of %s min into %s sessions left residual %s min",
                target_minutes,
                count,
                target_minutes - total,
            )

    return _sessions(durations)


def planned_session_count(target_minutes: int, total_free_minutes: int, config: StudyConfig) -> int:
    """Estimate how many sessions fit the day's free capacity and the goal's target."""
    approx_block = (
        config.prep_buffer_minutes
        + config.default_session_length
        + config.wrap_buffer_minutes
        + config.break_minutes
    )
    capacity = max(1, total_free_minutes // max(50, approx_block))
    wanted = max(config.min_sessions_per_day, math.ceil(target_minutes / config.default_session_length))
    planned = min(config.max_sessions_per_day, wanted, capacity)
    if 0 < target_minutes <= 30:
        planned = 1
    return planned

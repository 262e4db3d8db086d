"""Rank candidate free slots for a learning goal."""
from __future__ import annotations

from typing import Dict, Optional, Sequence

from smartstudy.services.scheduling.classification import KeywordTable, is_meal
from smartstudy.services.scheduling.timeutils import time_of_day
from smartstudy.services.scheduling.types import FreeSlot, LearningGoal, Priority

PRIORITY_BONUS: Dict[Priority, int] = {
    Priority.HIGH: 30,
    Priority.MEDIUM: 20,
    Priority.LOW: 10,
}
DURATION_WEIGHT = 100
PREFERRED_TIME_BONUS = 50
AFTER_MEAL_BONUS = 20
BEFORE_MEAL_PENALTY = 10


def score_slot(goal: LearningGoal, slot: FreeSlot, *, keywords: KeywordTable) -> float:
    preferred = max(1, goal.session_length.preferred)
    score = DURATION_WEIGHT * min(slot.duration_minutes, preferred) / preferred
    if time_of_day(slot.start) in goal.preferred_time_slots:
        score += PREFERRED_TIME_BONUS
    score += PRIORITY_BONUS.get(goal.priority, 0)
    if is_meal(slot.preceding_title, keywords=keywords):
        score += AFTER_MEAL_BONUS
    if is_meal(slot.following_title, keywords=keywords):
        score -= BEFORE_MEAL_PENALTY
    return score


def select_best_slot(
    goal: LearningGoal,
    slots: Sequence[FreeSlot],
    *,
    keywords: KeywordTable,
) -> Optional[int]:
    """Index of the highest-scoring slot long enough for the goal's minimum session."""
    keywords = tuple(keywords)
    best_index: Optional[int] = None
    best_score = 0.0
    for index, slot in enumerate(slots):
        if slot.duration_minutes < goal.session_length.min:
            continue
        score = score_slot(goal, slot, keywords=keywords)
        # Strict comparison keeps the earliest slot on ties.
        if best_index is None or score > best_score:
            best_index, best_score = index, score
    return best_index

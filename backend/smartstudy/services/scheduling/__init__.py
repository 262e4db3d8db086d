"""Pure day-schedule allocation engine."""

from smartstudy.services.scheduling.config import SchedulingConfig, StudyConfig
from smartstudy.services.scheduling.pipeline import plan_day, plan_goal_day
from smartstudy.services.scheduling.types import (
    ActivityKind,
    BreakBlock,
    BreakKind,
    BusyBlock,
    DailyPlan,
    ExistingTask,
    FixedCommitment,
    FocusPlan,
    FreeSlot,
    GeneratedSession,
    LearningGoal,
    Priority,
    SessionLength,
    TimeOfDay,
)
from smartstudy.services.scheduling.weekly import plan_range, plan_remaining_week

__all__ = [
    "ActivityKind",
    "BreakBlock",
    "BreakKind",
    "BusyBlock",
    "DailyPlan",
    "ExistingTask",
    "FixedCommitment",
    "FocusPlan",
    "FreeSlot",
    "GeneratedSession",
    "LearningGoal",
    "Priority",
    "SchedulingConfig",
    "SessionLength",
    "StudyConfig",
    "TimeOfDay",
    "plan_day",
    "plan_goal_day",
    "plan_range",
    "plan_remaining_week",
]

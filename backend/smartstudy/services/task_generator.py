"""Turn a learning goal into recurring weekly tasks around the user's existing ones."""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from smartstudy.core.config import settings
from smartstudy.core.context import plan_scope
from smartstudy.db.models.learning_goal import LearningGoal as LearningGoalRow
from smartstudy.db.models.task import Task
from smartstudy.observability.metrics import log_metric
from smartstudy.observability.tracing import trace
from smartstudy.services.collaborators import (
    SqlExistingTaskSource,
    SqlTaskSink,
    TaskRecord,
    goal_from_row,
)
from smartstudy.services.errors import LearningGoalNotFoundError
from smartstudy.services.scheduling.config import SchedulingConfig
from smartstudy.services.scheduling.pipeline import plan_goal_day
from smartstudy.services.scheduling.timeutils import minutes_to_time
from smartstudy.services.scheduling.types import BreakKind, FocusPlan, LearningGoal
from smartstudy.services.scheduling.weekly import plan_remaining_week

logger = logging.getLogger(__name__)

DEFAULT_STUDY_COLOR = "#10B981"
MACRO_BREAK_COLOR = "#64748b"
MICRO_BREAK_COLOR = "#6B7280"


def build_task_records(
    user_id: UUID,
    goal: LearningGoal,
    weekday: int,
    plan: FocusPlan,
) -> List[TaskRecord]:
    """Serialize one day's placed sessions and breaks as task records, in time order."""
    goal_id = UUID(goal.id)
    records: List[TaskRecord] = []
    for block in plan.study_blocks:
        records.append(
            TaskRecord(
                user_id=user_id,
                title=f"{goal.subject} - Session {block.order}",
                note=f"Auto-generated from learning goal: {goal.subject}",
                weekdays=[weekday],
                start=minutes_to_time(block.start),
                end=minutes_to_time(block.end),
                color=goal.color or DEFAULT_STUDY_COLOR,
                learning_goal_id=goal_id,
            )
        )
    for block in plan.breaks:
        macro = block.kind is BreakKind.MACRO
        records.append(
            TaskRecord(
                user_id=user_id,
                title="Long break" if macro else "Short break",
                note=block.reason if macro else f"Break after {goal.subject}",
                weekdays=[weekday],
                start=minutes_to_time(block.start),
                end=minutes_to_time(block.end),
                color=MACRO_BREAK_COLOR if macro else MICRO_BREAK_COLOR,
                learning_goal_id=goal_id,
            )
        )
    records.sort(key=lambda record: record.start)
    return records


def _load_goal(db: Session, user_id: UUID, goal_id: UUID) -> LearningGoalRow:
    row = db.get(LearningGoalRow, goal_id)
    if row is None or row.user_id != user_id:
        raise LearningGoalNotFoundError(goal_id)
    return row


def generate_tasks_for_goal(
    db: Session,
    user_id: UUID,
    goal_id: UUID,
    *,
    today: date | None = None,
    config: Optional[SchedulingConfig] = None,
    request_id: str | None = None,
) -> List[Task]:
    """
    Place the goal's sessions on today's weekday and every later weekday through Saturday.

    Earlier weekdays are left untouched so regeneration yields a rolling plan from now on.
    """
    row = _load_goal(db, user_id, goal_id)
    goal = goal_from_row(row)
    config = config or SchedulingConfig.task_generation(settings)
    today = today or date.today()

    with plan_scope(user_id, today), trace(
        "tasks.generate",
        metadata={"learning_goal_id": str(goal_id), "today": today.isoformat()},
        user_id=str(user_id),
        request_id=request_id,
    ):
        existing = SqlExistingTaskSource(db).for_user(user_id)
        per_day = plan_remaining_week(today, lambda weekday: plan_goal_day(goal, existing, weekday, config))
        records: List[TaskRecord] = []
        for weekday, plan in per_day.items():
            records.extend(build_task_records(user_id, goal, weekday, plan))
        tasks = SqlTaskSink(db).insert_many(records) if records else []
        if not records:
            db.commit()

    logger.info("Generated %s tasks for goal %s over %s days", len(tasks), goal_id, len(per_day))
    log_metric("tasks.generate.count", len(tasks), metadata={"user_id": str(user_id)})
    return tasks


def remove_auto_generated_tasks(db: Session, user_id: UUID, goal_id: UUID) -> int:
    _load_goal(db, user_id, goal_id)
    removed = SqlTaskSink(db).remove_auto_generated(goal_id)
    db.commit()
    logger.info("Removed %s generated tasks for goal %s", removed, goal_id)
    return removed


def update_tasks_for_goal(
    db: Session,
    user_id: UUID,
    goal_id: UUID,
    *,
    today: date | None = None,
    config: Optional[SchedulingConfig] = None,
    request_id: str | None = None,
) -> List[Task]:
    """Replace the goal's generated tasks with a freshly computed set."""
    _load_goal(db, user_id, goal_id)
    removed = SqlTaskSink(db).remove_auto_generated(goal_id)
    logger.debug("Cleared %s previously generated tasks for goal %s", removed, goal_id)
    return generate_tasks_for_goal(db, user_id, goal_id, today=today, config=config, request_id=request_id)

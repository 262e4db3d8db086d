"""Read/write contracts around the engine and their SQLAlchemy implementations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from threading import Lock
from typing import Iterable, List, Optional, Protocol, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from smartstudy.db.models.fixed_schedule import FixedSchedule
from smartstudy.db.models.generated_schedule import GeneratedSchedule
from smartstudy.db.models.learning_goal import LearningGoal as LearningGoalRow
from smartstudy.db.models.task import Task
from smartstudy.services.scheduling.timeutils import time_to_minutes
from smartstudy.services.scheduling.types import (
    BreakBlock,
    ExistingTask,
    FixedCommitment,
    GeneratedSession,
    LearningGoal,
    Priority,
    SessionLength,
    TimeOfDay,
)

logger = logging.getLogger(__name__)

PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass
class TaskRecord:
    user_id: UUID
    title: str
    note: str
    weekdays: List[int]
    start: str
    end: str
    color: Optional[str]
    learning_goal_id: Optional[UUID]
    is_active: bool = True
    is_auto_generated: bool = True


class FixedCommitmentSource(Protocol):
    def for_weekday(self, user_id: UUID, weekday: int) -> List[FixedCommitment]:  # pragma: no cover - protocol
        ...


class ActiveGoalSource(Protocol):
    def by_priority_desc(self, user_id: UUID) -> List[LearningGoal]:  # pragma: no cover - protocol
        """Active goals only, already sorted high → low priority."""
        ...


class ExistingTaskSource(Protocol):
    def for_user(self, user_id: UUID) -> List[ExistingTask]:  # pragma: no cover - protocol
        ...


class PlanSink(Protocol):
    def replace(
        self,
        user_id: UUID,
        day: date,
        sessions: Sequence[GeneratedSession],
        breaks: Sequence[BreakBlock],
    ) -> None:  # pragma: no cover - protocol
        ...


class TaskSink(Protocol):
    def insert_many(self, records: Sequence[TaskRecord]) -> List[Task]:  # pragma: no cover - protocol
        ...


# ---------------------------------------------------------------------------
# Row conversion
# ---------------------------------------------------------------------------

def _parse_priority(value: Optional[str]) -> Priority:
    try:
        return Priority((value or "").lower())
    except ValueError:
        return Priority.MEDIUM


def _parse_time_slots(values: Optional[Iterable[str]]) -> frozenset:
    slots = set()
    for value in values or []:
        try:
            slots.add(TimeOfDay(value))
        except ValueError:
            logger.debug("Ignoring unknown preferred time slot %r", value)
    return frozenset(slots)


def goal_from_row(row: LearningGoalRow) -> LearningGoal:
    return LearningGoal(
        id=str(row.id),
        subject=row.subject,
        target_minutes=max(0, round((row.target_hours_per_day or 0) * 60)),
        priority=_parse_priority(row.priority),
        session_length=SessionLength(
            min=row.session_min,
            max=row.session_max,
            preferred=row.session_preferred,
        ),
        preferred_time_slots=_parse_time_slots(row.preferred_time_slots),
        color=row.color,
        icon=row.icon,
        category=row.category,
    )


# ---------------------------------------------------------------------------
# SQLAlchemy sources
# ---------------------------------------------------------------------------

class SqlFixedCommitmentSource:
    def __init__(self, db: Session) -> None:
        self.db = db

    def for_weekday(self, user_id: UUID, weekday: int) -> List[FixedCommitment]:
        rows = (
            self.db.query(FixedSchedule)
            .filter(FixedSchedule.user_id == user_id)
            .order_by(FixedSchedule.start_minute.asc())
            .all()
        )
        return [
            FixedCommitment(title=row.title, start=row.start_minute, end=row.end_minute, kind=row.type)
            for row in rows
            if weekday in (row.weekdays or [])
        ]


class SqlActiveGoalSource:
    def __init__(self, db: Session) -> None:
        self.db = db

    def by_priority_desc(self, user_id: UUID) -> List[LearningGoal]:
        rows = (
            self.db.query(LearningGoalRow)
            .filter(LearningGoalRow.user_id == user_id, LearningGoalRow.is_active.is_(True))
            .order_by(LearningGoalRow.created_at.asc(), LearningGoalRow.id.asc())
            .all()
        )
        goals = [goal_from_row(row) for row in rows]
        # Stable: equal priorities keep creation order.
        return sorted(goals, key=lambda goal: PRIORITY_RANK[goal.priority])


class SqlExistingTaskSource:
    def __init__(self, db: Session) -> None:
        self.db = db

    def for_user(self, user_id: UUID) -> List[ExistingTask]:
        rows = self.db.query(Task).filter(Task.user_id == user_id, Task.is_active.is_(True)).all()
        tasks: List[ExistingTask] = []
        for row in rows:
            try:
                start, end = time_to_minutes(row.start_time), time_to_minutes(row.end_time)
            except ValueError:
                logger.warning("Skipping task %s with malformed time range %s-%s", row.id, row.start_time, row.end_time)
                continue
            tasks.append(ExistingTask(weekdays=frozenset(row.weekdays or []), start=start, end=end, title=row.title))
        return tasks


# ---------------------------------------------------------------------------
# SQLAlchemy sinks
# ---------------------------------------------------------------------------

_PLAN_LOCK_STRIPES = 64
_plan_locks = [Lock() for _ in range(_PLAN_LOCK_STRIPES)]


def plan_write_lock(user_id: UUID, day: date) -> Lock:
    """Process-local lock serializing plan writes for one (user, date)."""
    return _plan_locks[hash((str(user_id), day.isoformat())) % _PLAN_LOCK_STRIPES]


class SqlPlanSink:
    def __init__(self, db: Session) -> None:
        self.db = db

    def replace(
        self,
        user_id: UUID,
        day: date,
        sessions: Sequence[GeneratedSession],
        breaks: Sequence[BreakBlock],
    ) -> None:
        """Delete the stored plan for (user, day) and insert the new rows in one commit."""
        with plan_write_lock(user_id, day):
            try:
                (
                    self.db.query(GeneratedSchedule)
                    .filter(GeneratedSchedule.user_id == user_id, GeneratedSchedule.date == day)
                    .delete(synchronize_session=False)
                )
                self.db.flush()
                for session in sessions:
                    self.db.add(
                        GeneratedSchedule(
                            user_id=user_id,
                            date=day,
                            entry_type="session",
                            learning_goal_id=UUID(session.learning_goal_id),
                            start_minute=session.start,
                            end_minute=session.end,
                            duration_min=session.duration_minutes,
                            status="scheduled",
                            session_topic=session.topic,
                            session_order=session.order,
                            context_before=session.context_before,
                            context_after=session.context_after,
                            suggested_break_min=session.suggested_break_minutes,
                        )
                    )
                for block in breaks:
                    self.db.add(
                        GeneratedSchedule(
                            user_id=user_id,
                            date=day,
                            entry_type="break",
                            start_minute=block.start,
                            end_minute=block.end,
                            duration_min=block.duration_minutes,
                            status="scheduled",
                            break_kind=block.kind.value,
                            reason=block.reason,
                        )
                    )
                self.db.commit()
            except Exception:
                self.db.rollback()
                logger.error("Plan write failed for %s on %s; stored plan must be regenerated", user_id, day)
                raise


class SqlTaskSink:
    def __init__(self, db: Session) -> None:
        self.db = db

    def insert_many(self, records: Sequence[TaskRecord]) -> List[Task]:
        tasks = [
            Task(
                user_id=record.user_id,
                learning_goal_id=record.learning_goal_id,
                title=record.title,
                note=record.note,
                weekdays=list(record.weekdays),
                start_time=record.start,
                end_time=record.end,
                color=record.color,
                is_active=record.is_active,
                is_auto_generated=record.is_auto_generated,
            )
            for record in records
        ]
        try:
            self.db.add_all(tasks)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for task in tasks:
            self.db.refresh(task)
        return tasks

    def remove_auto_generated(self, learning_goal_id: UUID) -> int:
        """Delete a goal's generated tasks; the caller commits."""
        removed = (
            self.db.query(Task)
            .filter(Task.learning_goal_id == learning_goal_id, Task.is_auto_generated.is_(True))
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return removed

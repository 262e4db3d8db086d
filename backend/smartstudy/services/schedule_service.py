"""Daily and weekly study-plan generation with persistence."""
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from smartstudy.core.config import settings
from smartstudy.core.context import plan_scope
from smartstudy.db.models.generated_schedule import GeneratedSchedule
from smartstudy.observability.metrics import log_plan_metrics
from smartstudy.observability.tracing import trace
from smartstudy.services.collaborators import (
    ActiveGoalSource,
    FixedCommitmentSource,
    PlanSink,
    SqlActiveGoalSource,
    SqlFixedCommitmentSource,
    SqlPlanSink,
)
from smartstudy.services.scheduling.config import SchedulingConfig
from smartstudy.services.scheduling.pipeline import plan_day
from smartstudy.services.scheduling.timeutils import weekday_index
from smartstudy.services.scheduling.types import DailyPlan
from smartstudy.services.scheduling.weekly import plan_range
from smartstudy.services.user_service import require_user

logger = logging.getLogger(__name__)


class DailyScheduler:
    """
    Runs the daily pipeline for one user at a time.

    Commitments and goals are read once per day before any slot finding, and the
    resulting plan is handed to the sink exactly once. Source and sink errors
    propagate untouched; a failed write leaves that day's stored plan undefined
    until it is regenerated.
    """

    def __init__(
        self,
        commitments: FixedCommitmentSource,
        goals: ActiveGoalSource,
        sink: PlanSink,
        config: SchedulingConfig,
    ) -> None:
        self.commitments = commitments
        self.goals = goals
        self.sink = sink
        self.config = config

    def generate_daily(self, user_id: UUID, target_date: date, *, request_id: str | None = None) -> DailyPlan:
        with plan_scope(user_id, target_date), trace(
            "schedule.daily",
            metadata={"date": target_date.isoformat()},
            user_id=str(user_id),
            request_id=request_id,
        ):
            day_commitments = self.commitments.for_weekday(user_id, weekday_index(target_date))
            goals = self.goals.by_priority_desc(user_id)
            plan = plan_day(target_date, day_commitments, goals, self.config)
            self.sink.replace(user_id, target_date, plan.sessions, plan.breaks)
            logger.info(
                "Stored plan: %s sessions, %s min across %s goals",
                len(plan.sessions),
                plan.total_study_minutes,
                len(goals),
            )
        log_plan_metrics("schedule.daily", plan, metadata={"user_id": str(user_id)})
        return plan

    def generate_weekly(
        self,
        user_id: UUID,
        start_date: date,
        days: int = 7,
        *,
        request_id: str | None = None,
    ) -> Dict[str, DailyPlan]:
        return plan_range(
            start_date,
            days,
            lambda day: self.generate_daily(user_id, day, request_id=request_id),
        )


def build_daily_scheduler(db: Session, config: Optional[SchedulingConfig] = None) -> DailyScheduler:
    return DailyScheduler(
        commitments=SqlFixedCommitmentSource(db),
        goals=SqlActiveGoalSource(db),
        sink=SqlPlanSink(db),
        config=config or SchedulingConfig.from_settings(settings),
    )


def generate_daily_schedule(
    db: Session,
    user_id: UUID,
    target_date: date | None = None,
    *,
    config: Optional[SchedulingConfig] = None,
    request_id: str | None = None,
) -> DailyPlan:
    require_user(db, user_id)
    scheduler = build_daily_scheduler(db, config)
    return scheduler.generate_daily(user_id, target_date or date.today(), request_id=request_id)


def generate_weekly_schedule(
    db: Session,
    user_id: UUID,
    start_date: date | None = None,
    days: int | None = None,
    *,
    config: Optional[SchedulingConfig] = None,
    request_id: str | None = None,
) -> Dict[str, DailyPlan]:
    require_user(db, user_id)
    scheduler = build_daily_scheduler(db, config)
    return scheduler.generate_weekly(
        user_id,
        start_date or date.today(),
        settings.schedule_horizon_days if days is None else days,
        request_id=request_id,
    )


def load_daily_schedule(db: Session, user_id: UUID, target_date: date) -> List[GeneratedSchedule]:
    """Stored plan rows for (user, date), in start order."""
    return (
        db.query(GeneratedSchedule)
        .filter(GeneratedSchedule.user_id == user_id, GeneratedSchedule.date == target_date)
        .order_by(GeneratedSchedule.start_minute.asc())
        .all()
    )

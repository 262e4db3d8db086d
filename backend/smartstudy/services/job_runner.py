"""Batch regeneration of study plans for every user with active goals."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from smartstudy.core.config import settings
from smartstudy.db.models.learning_goal import LearningGoal
from smartstudy.services.schedule_service import build_daily_scheduler
from smartstudy.services.scheduling.config import SchedulingConfig

logger = logging.getLogger(__name__)


@dataclass
class JobRunResult:
    users_processed: int
    days_written: int
    failures: List[UUID] = field(default_factory=list)


def _active_user_ids(db: Session) -> List[UUID]:
    rows = (
        db.query(LearningGoal.user_id)
        .filter(LearningGoal.is_active.is_(True))
        .distinct()
        .all()
    )
    return [row[0] for row in rows]


def _normalize_user_ids(user_ids: Optional[Iterable[UUID]], db: Session) -> List[UUID]:
    if user_ids is None:
        return _active_user_ids(db)
    return list(dict.fromkeys(user_ids))


def run_weekly_schedule_for_user(
    db: Session,
    user_id: UUID,
    *,
    start_date: date | None = None,
    days: int | None = None,
    config: Optional[SchedulingConfig] = None,
) -> int:
    scheduler = build_daily_scheduler(db, config)
    plans = scheduler.generate_weekly(
        user_id,
        start_date or date.today(),
        settings.schedule_horizon_days if days is None else days,
    )
    return len(plans)


def run_weekly_schedule_for_all_users(
    db: Session,
    *,
    user_ids: Optional[Iterable[UUID]] = None,
    start_date: date | None = None,
    days: int | None = None,
    config: Optional[SchedulingConfig] = None,
) -> JobRunResult:
    """Regenerate each user's rolling plan; a failing user is logged and skipped."""
    ids = _normalize_user_ids(user_ids, db)
    result = JobRunResult(users_processed=0, days_written=0)
    for uid in ids:
        try:
            written = run_weekly_schedule_for_user(db, uid, start_date=start_date, days=days, config=config)
        except Exception:
            logger.exception("Weekly schedule job failed for user %s", uid)
            db.rollback()
            result.failures.append(uid)
            continue
        result.users_processed += 1
        result.days_written += written
    return result

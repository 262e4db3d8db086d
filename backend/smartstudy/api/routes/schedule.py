"""Study plan generation and retrieval routes."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from smartstudy.api.schemas.schedule import (
    DailySchedulePayload,
    DailyScheduleRequest,
    DailyScheduleResponse,
    ScheduleEntryPayload,
    WeeklyScheduleRequest,
    WeeklyScheduleResponse,
)
from smartstudy.db.deps import get_db
from smartstudy.db.models.generated_schedule import GeneratedSchedule
from smartstudy.db.models.learning_goal import LearningGoal
from smartstudy.observability.metrics import log_metric
from smartstudy.observability.tracing import trace
from smartstudy.services.schedule_service import (
    generate_daily_schedule,
    generate_weekly_schedule,
    load_daily_schedule,
)
from smartstudy.services.scheduling.timeutils import minutes_to_time
from smartstudy.services.scheduling.types import BreakBlock, DailyPlan, GeneratedSession

router = APIRouter()


@router.post("/schedule/daily", response_model=DailyScheduleResponse, tags=["schedule"])
def create_daily_schedule(
    payload: DailyScheduleRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> DailyScheduleResponse:
    """Compute and store the plan for one day, replacing any earlier plan for that date."""
    request_id = getattr(http_request.state, "request_id", None)
    start_time = datetime.now(timezone.utc)

    try:
        plan = generate_daily_schedule(db, payload.user_id, payload.date, request_id=request_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    latency_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
    log_metric("schedule.daily.latency_ms", latency_ms, metadata={"user_id": str(payload.user_id)})

    body = _plan_payload(plan)
    return DailyScheduleResponse(user_id=payload.user_id, request_id=request_id or "", **body.model_dump())


@router.post("/schedule/weekly", response_model=WeeklyScheduleResponse, tags=["schedule"])
def create_weekly_schedule(
    payload: WeeklyScheduleRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> WeeklyScheduleResponse:
    request_id = getattr(http_request.state, "request_id", None)

    try:
        plans = generate_weekly_schedule(
            db,
            payload.user_id,
            payload.start_date,
            payload.days,
            request_id=request_id,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    log_metric("schedule.weekly.days", len(plans), metadata={"user_id": str(payload.user_id)})
    return WeeklyScheduleResponse(
        user_id=payload.user_id,
        days={key: _plan_payload(plan) for key, plan in plans.items()},
        request_id=request_id or "",
    )


@router.get("/schedule", response_model=DailyScheduleResponse, tags=["schedule"])
def get_schedule(
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the plan"),
    day: Optional[date] = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
) -> DailyScheduleResponse:
    """Return the stored plan for a date; an empty plan if none was generated."""
    request_id = getattr(http_request.state, "request_id", None)
    target = day or date.today()

    with trace(
        "schedule.get",
        metadata={"date": target.isoformat()},
        user_id=str(user_id),
        request_id=request_id,
    ):
        rows = load_daily_schedule(db, user_id, target)
        subjects = _subjects_for(db, rows)

    entries = [_row_entry(row, subjects) for row in rows]
    total = sum(row.duration_min for row in rows if row.entry_type == "session")
    log_metric("schedule.get.entries", len(entries), metadata={"user_id": str(user_id)})

    return DailyScheduleResponse(
        user_id=user_id,
        date=target,
        entries=entries,
        total_study_minutes=total,
        request_id=request_id or "",
    )


def _plan_payload(plan: DailyPlan) -> DailySchedulePayload:
    entries: List[ScheduleEntryPayload] = []
    for entry in plan.entries:
        if isinstance(entry, GeneratedSession):
            entries.append(
                ScheduleEntryPayload(
                    entry_type="session",
                    start_time=minutes_to_time(entry.start),
                    end_time=minutes_to_time(entry.end),
                    duration_min=entry.duration_minutes,
                    learning_goal_id=UUID(entry.learning_goal_id),
                    subject=entry.subject,
                    session_topic=entry.topic,
                    session_order=entry.order,
                    context_before=entry.context_before,
                    context_after=entry.context_after,
                    suggested_break_min=entry.suggested_break_minutes,
                )
            )
        elif isinstance(entry, BreakBlock):
            entries.append(
                ScheduleEntryPayload(
                    entry_type="break",
                    start_time=minutes_to_time(entry.start),
                    end_time=minutes_to_time(entry.end),
                    duration_min=entry.duration_minutes,
                    break_kind=entry.kind.value,
                    reason=entry.reason,
                )
            )
    return DailySchedulePayload(date=plan.date, entries=entries, total_study_minutes=plan.total_study_minutes)


def _subjects_for(db: Session, rows: List[GeneratedSchedule]) -> Dict[UUID, str]:
    goal_ids = {row.learning_goal_id for row in rows if row.learning_goal_id is not None}
    if not goal_ids:
        return {}
    goals = db.query(LearningGoal).filter(LearningGoal.id.in_(goal_ids)).all()
    return {goal.id: goal.subject for goal in goals}


def _row_entry(row: GeneratedSchedule, subjects: Dict[UUID, str]) -> ScheduleEntryPayload:
    return ScheduleEntryPayload(
        entry_type=row.entry_type,
        start_time=minutes_to_time(row.start_minute),
        end_time=minutes_to_time(row.end_minute),
        duration_min=row.duration_min,
        learning_goal_id=row.learning_goal_id,
        subject=subjects.get(row.learning_goal_id) if row.learning_goal_id else None,
        session_topic=row.session_topic,
        session_order=row.session_order,
        context_before=row.context_before,
        context_after=row.context_after,
        suggested_break_min=row.suggested_break_min,
        break_kind=row.break_kind,
        reason=row.reason,
    )

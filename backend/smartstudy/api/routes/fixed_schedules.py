"""Fixed schedule (recurring commitment) API routes."""
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from smartstudy.api.schemas.fixed_schedule import FixedScheduleCreateRequest, FixedScheduleSummary
from smartstudy.db.deps import get_db
from smartstudy.db.models.fixed_schedule import FixedSchedule
from smartstudy.observability.metrics import log_metric
from smartstudy.observability.tracing import trace
from smartstudy.services.scheduling.timeutils import minutes_to_time, time_to_minutes
from smartstudy.services.user_service import get_or_create_user

router = APIRouter()


@router.post(
    "/fixed-schedules",
    response_model=FixedScheduleSummary,
    status_code=status.HTTP_201_CREATED,
    tags=["fixed-schedules"],
)
def create_fixed_schedule(
    payload: FixedScheduleCreateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> FixedScheduleSummary:
    request_id = getattr(http_request.state, "request_id", None)

    with trace(
        "fixed_schedule.create",
        metadata={"title": payload.title, "weekdays": payload.weekdays},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        get_or_create_user(db, payload.user_id)
        entry = FixedSchedule(
            user_id=payload.user_id,
            title=payload.title.strip(),
            type=payload.type,
            weekdays=payload.weekdays,
            start_minute=time_to_minutes(payload.start_time),
            end_minute=time_to_minutes(payload.end_time),
        )
        try:
            db.add(entry)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(entry)

    log_metric("fixed_schedule.create.success", 1, metadata={"user_id": str(payload.user_id)})
    return _serialize(entry)


@router.get("/fixed-schedules", response_model=List[FixedScheduleSummary], tags=["fixed-schedules"])
def list_fixed_schedules(
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the commitments"),
    weekday: Optional[int] = Query(default=None, ge=0, le=6, description="0=Sunday .. 6=Saturday"),
    db: Session = Depends(get_db),
) -> List[FixedScheduleSummary]:
    request_id = getattr(http_request.state, "request_id", None)

    with trace("fixed_schedule.list", metadata={"weekday": weekday}, user_id=str(user_id), request_id=request_id):
        rows = (
            db.query(FixedSchedule)
            .filter(FixedSchedule.user_id == user_id)
            .order_by(FixedSchedule.start_minute.asc())
            .all()
        )
        if weekday is not None:
            rows = [row for row in rows if weekday in (row.weekdays or [])]

    log_metric("fixed_schedule.list.count", len(rows), metadata={"user_id": str(user_id)})
    return [_serialize(row) for row in rows]


def _serialize(entry: FixedSchedule) -> FixedScheduleSummary:
    return FixedScheduleSummary(
        id=entry.id,
        title=entry.title,
        type=entry.type,
        weekdays=list(entry.weekdays or []),
        start_time=minutes_to_time(entry.start_minute),
        end_time=minutes_to_time(entry.end_minute),
    )

"""Task listing API routes."""
from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import asc
from sqlalchemy.orm import Session

from smartstudy.api.schemas.task import TaskSummary
from smartstudy.db.deps import get_db
from smartstudy.db.models.task import Task
from smartstudy.observability.metrics import log_metric
from smartstudy.observability.tracing import trace

router = APIRouter()


@router.get("/tasks", response_model=List[TaskSummary], tags=["tasks"])
def list_tasks(
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the tasks"),
    weekday: Optional[int] = Query(default=None, ge=0, le=6, description="0=Sunday .. 6=Saturday"),
    learning_goal_id: Optional[UUID] = Query(default=None),
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
) -> List[TaskSummary]:
    """List a user's recurring tasks, optionally narrowed to a weekday or goal."""
    request_id = getattr(http_request.state, "request_id", None)

    metadata: Dict[str, Any] = {
        "route": "/tasks",
        "weekday": weekday,
        "learning_goal_id": str(learning_goal_id) if learning_goal_id else None,
    }

    with trace("task.list", metadata=metadata, user_id=str(user_id), request_id=request_id):
        query = db.query(Task).filter(Task.user_id == user_id)
        if not include_inactive:
            query = query.filter(Task.is_active.is_(True))
        if learning_goal_id is not None:
            query = query.filter(Task.learning_goal_id == learning_goal_id)
        tasks = query.order_by(asc(Task.start_time), asc(Task.created_at)).all()
        if weekday is not None:
            tasks = [task for task in tasks if weekday in (task.weekdays or [])]

    log_metric("task.list.count", len(tasks), metadata={"user_id": str(user_id)})
    return [serialize_task(task) for task in tasks]


def serialize_task(task: Task) -> TaskSummary:
    return TaskSummary(
        id=task.id,
        learning_goal_id=task.learning_goal_id,
        title=task.title,
        note=task.note,
        weekdays=list(task.weekdays or []),
        start_time=task.start_time,
        end_time=task.end_time,
        color=task.color,
        is_active=bool(task.is_active),
        is_auto_generated=bool(task.is_auto_generated),
    )

"""Learning goal API routes, including goal-driven task generation."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from smartstudy.api.routes.task import serialize_task
from smartstudy.api.schemas.learning_goal import (
    LearningGoalCreateRequest,
    LearningGoalSummary,
    SessionLengthPayload,
)
from smartstudy.api.schemas.task import (
    TaskGenerationRequest,
    TaskGenerationResponse,
    TaskRemovalResponse,
)
from smartstudy.db.deps import get_db
from smartstudy.db.models.learning_goal import LearningGoal
from smartstudy.observability.metrics import log_metric
from smartstudy.observability.tracing import trace
from smartstudy.services.task_generator import (
    generate_tasks_for_goal,
    remove_auto_generated_tasks,
    update_tasks_for_goal,
)
from smartstudy.services.user_service import get_or_create_user

router = APIRouter()


@router.post(
    "/learning-goals",
    response_model=LearningGoalSummary,
    status_code=status.HTTP_201_CREATED,
    tags=["learning-goals"],
)
def create_learning_goal(
    payload: LearningGoalCreateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> LearningGoalSummary:
    request_id = getattr(http_request.state, "request_id", None)

    with trace(
        "learning_goal.create",
        metadata={"subject": payload.subject, "priority": payload.priority},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        get_or_create_user(db, payload.user_id)
        goal = LearningGoal(
            user_id=payload.user_id,
            subject=payload.subject.strip(),
            description=payload.description,
            target_hours_per_day=payload.target_hours_per_day,
            priority=payload.priority,
            session_min=payload.session_length.min,
            session_max=payload.session_length.max,
            session_preferred=payload.session_length.preferred,
            preferred_time_slots=list(dict.fromkeys(payload.preferred_time_slots)),
            color=payload.color,
            icon=payload.icon,
            category=payload.category,
        )
        try:
            db.add(goal)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(goal)

    log_metric("learning_goal.create.success", 1, metadata={"user_id": str(payload.user_id)})
    return serialize_goal(goal)


@router.get("/learning-goals", response_model=List[LearningGoalSummary], tags=["learning-goals"])
def list_learning_goals(
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the goals"),
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
) -> List[LearningGoalSummary]:
    request_id = getattr(http_request.state, "request_id", None)

    with trace("learning_goal.list", user_id=str(user_id), request_id=request_id):
        query = db.query(LearningGoal).filter(LearningGoal.user_id == user_id)
        if not include_inactive:
            query = query.filter(LearningGoal.is_active.is_(True))
        goals = query.order_by(LearningGoal.created_at.asc(), LearningGoal.id.asc()).all()

    log_metric("learning_goal.list.count", len(goals), metadata={"user_id": str(user_id)})
    return [serialize_goal(goal) for goal in goals]


@router.post(
    "/learning-goals/{goal_id}/tasks",
    response_model=TaskGenerationResponse,
    tags=["learning-goals"],
)
def generate_goal_tasks(
    goal_id: UUID,
    payload: TaskGenerationRequest,
    http_request: Request,
    replace: bool = Query(False, description="Remove previously generated tasks first"),
    db: Session = Depends(get_db),
) -> TaskGenerationResponse:
    """Place the goal's sessions into the rest of the current week as recurring tasks."""
    request_id = getattr(http_request.state, "request_id", None)
    start_time = datetime.now(timezone.utc)

    runner = update_tasks_for_goal if replace else generate_tasks_for_goal
    try:
        tasks = runner(db, payload.user_id, goal_id, request_id=request_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    latency_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
    log_metric("tasks.generate.latency_ms", latency_ms, metadata={"learning_goal_id": str(goal_id)})

    return TaskGenerationResponse(
        learning_goal_id=goal_id,
        tasks=[serialize_task(task) for task in tasks],
        request_id=request_id or "",
    )


@router.delete(
    "/learning-goals/{goal_id}/tasks",
    response_model=TaskRemovalResponse,
    tags=["learning-goals"],
)
def delete_goal_tasks(
    goal_id: UUID,
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the goal"),
    db: Session = Depends(get_db),
) -> TaskRemovalResponse:
    request_id = getattr(http_request.state, "request_id", None)

    try:
        with trace(
            "tasks.remove",
            metadata={"learning_goal_id": str(goal_id)},
            user_id=str(user_id),
            request_id=request_id,
        ):
            removed = remove_auto_generated_tasks(db, user_id, goal_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    log_metric("tasks.remove.count", removed, metadata={"user_id": str(user_id)})
    return TaskRemovalResponse(learning_goal_id=goal_id, removed=removed, request_id=request_id or "")


def serialize_goal(goal: LearningGoal) -> LearningGoalSummary:
    return LearningGoalSummary(
        id=goal.id,
        user_id=goal.user_id,
        subject=goal.subject,
        description=goal.description,
        target_hours_per_day=goal.target_hours_per_day,
        priority=goal.priority,
        session_length=SessionLengthPayload(
            min=goal.session_min,
            max=goal.session_max,
            preferred=goal.session_preferred,
        ),
        preferred_time_slots=list(goal.preferred_time_slots or []),
        color=goal.color,
        icon=goal.icon,
        category=goal.category,
        is_active=bool(goal.is_active),
        created_at=goal.created_at,
    )

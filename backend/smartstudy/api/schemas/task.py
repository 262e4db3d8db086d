"""Schemas for recurring tasks and goal-driven task generation."""
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class TaskSummary(BaseModel):
    id: UUID
    learning_goal_id: Optional[UUID]
    title: str
    note: Optional[str]
    weekdays: List[int]
    start_time: str
    end_time: str
    color: Optional[str]
    is_active: bool
    is_auto_generated: bool


class TaskGenerationRequest(BaseModel):
    user_id: UUID


class TaskGenerationResponse(BaseModel):
    learning_goal_id: UUID
    tasks: List[TaskSummary]
    request_id: str


class TaskRemovalResponse(BaseModel):
    learning_goal_id: UUID
    removed: int
    request_id: str

"""Schemas for learning goals."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

PriorityLiteral = Literal["high", "medium", "low"]
TimeSlotLiteral = Literal["early-morning", "morning", "afternoon", "evening", "night"]


class SessionLengthPayload(BaseModel):
    min: int = Field(30, ge=5, le=480)
    max: int = Field(120, ge=5, le=480)
    preferred: int = Field(60, ge=5, le=480)

    @model_validator(mode="after")
    def _ordered(self) -> "SessionLengthPayload":
        if not (self.min <= self.preferred <= self.max):
            raise ValueError("session_length must satisfy min <= preferred <= max")
        return self


class LearningGoalCreateRequest(BaseModel):
    user_id: UUID
    subject: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    target_hours_per_day: float = Field(..., ge=0.25, le=8)
    priority: PriorityLiteral = "medium"
    session_length: SessionLengthPayload = Field(default_factory=SessionLengthPayload)
    preferred_time_slots: List[TimeSlotLiteral] = Field(default_factory=list)
    color: Optional[str] = Field(default=None, max_length=20)
    icon: Optional[str] = Field(default=None, max_length=50)
    category: Optional[str] = Field(default=None, max_length=50)


class LearningGoalSummary(BaseModel):
    id: UUID
    user_id: UUID
    subject: str
    description: Optional[str]
    target_hours_per_day: float
    priority: str
    session_length: SessionLengthPayload
    preferred_time_slots: List[str]
    color: Optional[str]
    icon: Optional[str]
    category: Optional[str]
    is_active: bool
    created_at: datetime

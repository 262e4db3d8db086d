"""Schemas for generated daily and weekly study plans."""
from __future__ import annotations

import datetime as dt
from typing import Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class DailyScheduleRequest(BaseModel):
    user_id: UUID
    date: Optional[dt.date] = None


class WeeklyScheduleRequest(BaseModel):
    user_id: UUID
    start_date: Optional[dt.date] = None
    days: int = Field(7, ge=1, le=31)


class ScheduleEntryPayload(BaseModel):
    entry_type: Literal["session", "break"]
    start_time: str
    end_time: str
    duration_min: int
    learning_goal_id: Optional[UUID] = None
    subject: Optional[str] = None
    session_topic: Optional[str] = None
    session_order: Optional[int] = None
    context_before: Optional[str] = None
    context_after: Optional[str] = None
    suggested_break_min: Optional[int] = None
    break_kind: Optional[Literal["micro", "macro"]] = None
    reason: Optional[str] = None


class DailySchedulePayload(BaseModel):
    date: dt.date
    entries: List[ScheduleEntryPayload]
    total_study_minutes: int


class DailyScheduleResponse(DailySchedulePayload):
    user_id: UUID
    request_id: str


class WeeklyScheduleResponse(BaseModel):
    user_id: UUID
    days: Dict[str, DailySchedulePayload]
    request_id: str

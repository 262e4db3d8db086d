"""Schemas for fixed (recurring) commitments."""
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class FixedScheduleCreateRequest(BaseModel):
    user_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    type: Optional[str] = Field(default=None, max_length=50)
    weekdays: List[int] = Field(..., min_length=1, description="0=Sunday .. 6=Saturday")
    start_time: str = Field(..., pattern=HHMM_PATTERN)
    end_time: str = Field(..., pattern=HHMM_PATTERN)

    @field_validator("weekdays")
    @classmethod
    def _weekdays_in_range(cls, value: List[int]) -> List[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("weekdays must be between 0 (Sunday) and 6 (Saturday)")
        return sorted(set(value))

    @model_validator(mode="after")
    def _start_before_end(self) -> "FixedScheduleCreateRequest":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be earlier than end_time")
        return self


class FixedScheduleSummary(BaseModel):
    id: UUID
    title: str
    type: Optional[str]
    weekdays: List[int]
    start_time: str
    end_time: str

"""FixedSchedule ORM model: recurring busy commitments."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID

from smartstudy.db.base import Base
from smartstudy.db.types import WeekdayList


class FixedSchedule(Base):
    __tablename__ = "fixed_schedules"
    __table_args__ = (
        Index("ix_fixed_schedules_user_id", "user_id"),
        CheckConstraint("start_minute >= 0 AND end_minute <= 1439 AND start_minute < end_minute", name="ck_fixed_schedules_range"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    type = Column(String(length=50), nullable=True)
    weekdays = Column(WeekdayList, nullable=False, default=list)
    start_minute = Column(Integer, nullable=False)
    end_minute = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

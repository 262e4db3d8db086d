"""GeneratedSchedule ORM model: one row per planned session or break."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text, func, text as sa_text
from sqlalchemy.dialects.postgresql import UUID

from smartstudy.db.base import Base


class GeneratedSchedule(Base):
    __tablename__ = "generated_schedules"
    __table_args__ = (Index("ix_generated_schedules_user_date", "user_id", "date"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    entry_type = Column(String(length=10), nullable=False, default="session", server_default=sa_text("'session'"))
    learning_goal_id = Column(
        UUID(as_uuid=True),
        ForeignKey("learning_goals.id", ondelete="CASCADE"),
        nullable=True,
    )
    start_minute = Column(Integer, nullable=False)
    end_minute = Column(Integer, nullable=False)
    duration_min = Column(Integer, nullable=False)
    status = Column(String(length=20), nullable=False, default="scheduled", server_default=sa_text("'scheduled'"))
    session_topic = Column(Text, nullable=True)
    session_order = Column(Integer, nullable=True)
    context_before = Column(Text, nullable=True)
    context_after = Column(Text, nullable=True)
    suggested_break_min = Column(Integer, nullable=True)
    break_kind = Column(String(length=10), nullable=True)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

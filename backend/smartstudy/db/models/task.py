"""Task ORM model: weekly recurring time blocks, manual or generated from a goal."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, func, text as sa_text
from sqlalchemy.dialects.postgresql import UUID

from smartstudy.db.base import Base
from smartstudy.db.types import WeekdayList


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_id", "user_id"),
        Index("ix_tasks_learning_goal_id", "learning_goal_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    learning_goal_id = Column(
        UUID(as_uuid=True),
        ForeignKey("learning_goals.id", ondelete="SET NULL"),
        nullable=True,
    )
    title = Column(Text, nullable=False)
    note = Column(Text, nullable=True)
    weekdays = Column(WeekdayList, nullable=False, default=list)
    # "HH:MM" 24-hour strings.
    start_time = Column(String(length=5), nullable=False)
    end_time = Column(String(length=5), nullable=False)
    color = Column(String(length=20), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=sa_text("true"))
    is_auto_generated = Column(Boolean, nullable=False, default=False, server_default=sa_text("false"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

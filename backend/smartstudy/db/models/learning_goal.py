"""LearningGoal ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, func, text as sa_text
from sqlalchemy.dialects.postgresql import UUID

from smartstudy.db.base import Base
from smartstudy.db.types import JSONBCompat


class LearningGoal(Base):
    __tablename__ = "learning_goals"
    __table_args__ = (Index("ix_learning_goals_user_id", "user_id"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    subject = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    target_hours_per_day = Column(Float, nullable=False)
    priority = Column(String(length=10), nullable=False, default="medium", server_default=sa_text("'medium'"))
    session_min = Column(Integer, nullable=False, default=30, server_default=sa_text("30"))
    session_max = Column(Integer, nullable=False, default=120, server_default=sa_text("120"))
    session_preferred = Column(Integer, nullable=False, default=60, server_default=sa_text("60"))
    preferred_time_slots = Column(JSONBCompat, nullable=False, default=list)
    color = Column(String(length=20), nullable=True)
    icon = Column(String(length=50), nullable=True)
    category = Column(String(length=50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=sa_text("true"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

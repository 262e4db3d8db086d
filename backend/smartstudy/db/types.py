"""Database column type helpers."""
from __future__ import annotations

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON, TypeDecorator


class JSONBCompat(TypeDecorator):
    """JSONB that falls back to native JSON on dialects like SQLite (for tests)."""

    impl = JSONB
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":  # pragma: no cover - dialect specific
            return dialect.type_descriptor(JSON())
        return dialect.type_descriptor(JSONB())


class WeekdayList(JSONBCompat):
    """Sorted, de-duplicated weekday indexes (0=Sunday .. 6=Saturday) stored as JSON."""

    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        days = sorted({int(day) for day in value})
        if any(day < 0 or day > 6 for day in days):
            raise ValueError(f"Weekday out of range in {days}")
        return days

    def process_result_value(self, value, dialect):
        if value is None:
            return []
        return [int(day) for day in value]

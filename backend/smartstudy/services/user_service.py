"""Helpers for working with users."""
from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smartstudy.db.models.user import User
from smartstudy.services.errors import UserNotFoundError


def get_or_create_user(db: Session, user_id: UUID) -> User:
    """Fetch an existing user or create a new row, tolerating a concurrent insert."""
    user = db.get(User, user_id)
    if user:
        return user

    user = User(id=user_id)
    db.add(user)
    try:
        db.flush()
        return user
    except IntegrityError:
        db.rollback()
        existing = db.get(User, user_id)
        if existing:
            return existing
        raise


def require_user(db: Session, user_id: UUID) -> User:
    """Return the user or raise UserNotFoundError; planning never creates users."""
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user

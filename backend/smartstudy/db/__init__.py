"""Database utilities and models."""

from smartstudy.db.base import Base
from smartstudy.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]

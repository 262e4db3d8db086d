"""Lightweight metrics helpers."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from smartstudy.observability import tracing
from smartstudy.services.scheduling.types import DailyPlan

logger = logging.getLogger(__name__)


def log_metric(name: str, value: float | int, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Record a metric as a short Opik trace when tracing is enabled."""
    payload: Dict[str, Any] = {"value": value}
    if metadata:
        payload.update(metadata)
    with tracing.trace(f"metric:{name}", metadata=payload):
        pass


def log_plan_metrics(prefix: str, plan: DailyPlan, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Emit the size of a computed plan: sessions, breaks and study minutes."""
    base = {"date": plan.date.isoformat(), **(metadata or {})}
    log_metric(f"{prefix}.sessions", len(plan.sessions), metadata=base)
    log_metric(f"{prefix}.breaks", len(plan.breaks), metadata=base)
    log_metric(f"{prefix}.study_minutes", plan.total_study_minutes, metadata=base)
    logger.debug("%s: %s sessions, %s min", prefix, len(plan.sessions), plan.total_study_minutes)

"""Repeat the single-day pipelines over a range of days."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Dict, Iterator, List, TypeVar

from smartstudy.services.scheduling.timeutils import weekday_index

T = TypeVar("T")


def iter_dates(start_date: date, days: int) -> Iterator[date]:
    for offset in range(max(0, days)):
        yield start_date + timedelta(days=offset)


def plan_range(start_date: date, days: int, plan_for: Callable[[date], T]) -> Dict[str, T]:
    """Run ``plan_for`` once per date in ``[start_date, start_date + days)``, keyed by ISO date."""
    return {day.isoformat(): plan_for(day) for day in iter_dates(start_date, days)}


def remaining_weekdays(today: date) -> List[int]:
    """Weekday indexes (0=Sunday) from today through Saturday."""
    return list(range(weekday_index(today), 7))


def plan_remaining_week(today: date, plan_for: Callable[[int], T]) -> Dict[int, T]:
    return {weekday: plan_for(weekday) for weekday in remaining_weekdays(today)}

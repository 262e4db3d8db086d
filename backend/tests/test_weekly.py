from __future__ import annotations

from datetime import date

from smartstudy.services.scheduling.weekly import (
    iter_dates,
    plan_range,
    plan_remaining_week,
    remaining_weekdays,
)


def test_plan_range_keys_by_iso_date() -> None:
    result = plan_range(date(2024, 1, 30), 3, lambda day: day.day)
    assert result == {"2024-01-30": 30, "2024-01-31": 31, "2024-02-01": 1}


def test_plan_range_with_no_days_is_empty() -> None:
    assert plan_range(date(2024, 1, 1), 0, lambda day: day) == {}
    assert list(iter_dates(date(2024, 1, 1), -2)) == []


def test_remaining_weekdays_run_through_saturday() -> None:
    assert remaining_weekdays(date(2024, 1, 10)) == [3, 4, 5, 6]  # Wednesday
    assert remaining_weekdays(date(2024, 1, 13)) == [6]  # Saturday
    assert remaining_weekdays(date(2024, 1, 7)) == list(range(7))  # Sunday


def test_plan_remaining_week_calls_once_per_weekday() -> None:
    calls: list[int] = []

    def plan_for(weekday: int) -> str:
        calls.append(weekday)
        return f"day-{weekday}"

    result = plan_remaining_week(date(2024, 1, 12), plan_for)  # Friday

    assert calls == [5, 6]
    assert result == {5: "day-5", 6: "day-6"}

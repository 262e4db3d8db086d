from __future__ import annotations

from datetime import date

import pytest

from smartstudy.services.scheduling.timeutils import (
    minutes_to_time,
    round_to_step,
    time_of_day,
    time_to_minutes,
    weekday_index,
)
from smartstudy.services.scheduling.types import TimeOfDay


def test_time_string_round_trip_boundaries() -> None:
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("9:05") == 545
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(1439) == "23:59"


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "", "1230"])
def test_time_to_minutes_rejects_malformed(value: str) -> None:
    with pytest.raises(ValueError):
        time_to_minutes(value)


def test_minutes_to_time_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        minutes_to_time(1440)
    with pytest.raises(ValueError):
        minutes_to_time(-1)


def test_weekday_index_starts_on_sunday() -> None:
    assert weekday_index(date(2024, 1, 7)) == 0  # Sunday
    assert weekday_index(date(2024, 1, 8)) == 1
    assert weekday_index(date(2024, 1, 13)) == 6  # Saturday


@pytest.mark.parametrize(
    "minute, expected",
    [
        (5 * 60, TimeOfDay.EARLY_MORNING),
        (8 * 60, TimeOfDay.MORNING),
        (12 * 60 + 30, TimeOfDay.AFTERNOON),
        (17 * 60 + 15, TimeOfDay.EVENING),
        (21 * 60, TimeOfDay.NIGHT),
        (2 * 60, TimeOfDay.NIGHT),
    ],
)
def test_time_of_day_buckets(minute: int, expected: TimeOfDay) -> None:
    assert time_of_day(minute) is expected


def test_round_to_step_rounds_half_up() -> None:
    assert round_to_step(20) == 20
    assert round_to_step(22) == 20
    assert round_to_step(22.5) == 25
    assert round_to_step(23) == 25

from __future__ import annotations

import pytest

from smartstudy.services.scheduling.config import StudyConfig
from smartstudy.services.scheduling.partitioner import partition_sessions, planned_session_count


@pytest.fixture()
def study() -> StudyConfig:
    return StudyConfig()


def _durations(sessions) -> list[int]:
    return [session.duration for session in sessions]


def test_short_target_is_one_rounded_session(study: StudyConfig) -> None:
    count = planned_session_count(20, 600, study)
    sessions = partition_sessions(20, count, study)

    assert count == 1
    assert _durations(sessions) == [20]
    assert sessions[0].needs_break is False


def test_single_session_never_drops_below_floor(study: StudyConfig) -> None:
    assert _durations(partition_sessions(10, 1, study)) == [15]
    assert _durations(partition_sessions(200, 1, study)) == [study.max_session_length]


@pytest.mark.parametrize(
    "target, count, expected",
    [
        (120, 2, [60, 60]),
        (125, 3, [45, 40, 40]),
        (90, 2, [45, 45]),
        (60, 2, [30, 30]),
    ],
)
def test_balanced_split_hits_target(study: StudyConfig, target: int, count: int, expected: list[int]) -> None:
    sessions = partition_sessions(target, count, study)
    assert _durations(sessions) == expected
    assert sum(_durations(sessions)) == target


@pytest.mark.parametrize(
    "target, count, expected",
    [
        # 1.3 h goal.
        (78, 2, [40, 35]),
        (79, 2, [40, 35]),
        (101, 2, [50, 50]),
        (134, 3, [45, 45, 40]),
    ],
)
def test_off_grid_target_is_never_exceeded(study: StudyConfig, target: int, count: int, expected: list[int]) -> None:
    durations = _durations(partition_sessions(target, count, study))
    assert durations == expected
    assert target - 5 < sum(durations) <= target


def test_clamped_split_keeps_session_bounds(study: StudyConfig) -> None:
    # 50 / 3 -> base 15, clamped up to the 30 minimum; the bounds win over the target.
    sessions = partition_sessions(50, 3, study)
    durations = _durations(sessions)

    assert durations == [30, 30, 30]
    assert all(study.min_session_length <= d <= study.max_session_length for d in durations)
    assert all(d % 5 == 0 for d in durations)


def test_unreachable_target_stays_within_bounds(study: StudyConfig) -> None:
    sessions = partition_sessions(300, 2, study)
    assert _durations(sessions) == [90, 90]


def test_zero_target_uses_default_length(study: StudyConfig) -> None:
    assert _durations(partition_sessions(0, 3, study)) == [45, 45, 45]
    assert _durations(partition_sessions(-30, 0, study)) == [45]


def test_only_last_session_skips_break(study: StudyConfig) -> None:
    sessions = partition_sessions(135, 3, study)
    assert [session.needs_break for session in sessions] == [True, True, False]
    assert [session.order for session in sessions] == [1, 2, 3]


def test_planned_count_respects_capacity_and_caps(study: StudyConfig) -> None:
    assert planned_session_count(120, 600, study) == 3
    assert planned_session_count(600, 100, study) == 1
    assert planned_session_count(8 * 60, 1000, study) == study.max_sessions_per_day
    assert planned_session_count(0, 600, study) == study.min_sessions_per_day

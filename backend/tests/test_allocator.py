from __future__ import annotations

from datetime import date

from smartstudy.services.scheduling.allocator import (
    allocate_goals,
    consume_slot,
    suggested_break_minutes,
)
from smartstudy.services.scheduling.config import SchedulingConfig
from smartstudy.services.scheduling.pipeline import plan_day
from smartstudy.services.scheduling.types import (
    FixedCommitment,
    FreeSlot,
    LearningGoal,
    Priority,
    SessionLength,
    TimeOfDay,
)


def _hm(hours: int, minutes: int = 0) -> int:
    return hours * 60 + minutes


def _goal(goal_id: str, subject: str, target: int, **overrides) -> LearningGoal:
    values = dict(
        id=goal_id,
        subject=subject,
        target_minutes=target,
        session_length=SessionLength(min=30, max=90, preferred=60),
    )
    values.update(overrides)
    return LearningGoal(**values)


CONFIG = SchedulingConfig(synthesize_meal_windows=False)
MONDAY = date(2024, 1, 8)


def _assert_well_formed(plan, goals) -> None:
    sessions = sorted(plan.sessions, key=lambda session: session.start)
    for first, second in zip(sessions, sessions[1:]):
        assert first.end <= second.start
    by_goal = {goal.id: goal for goal in goals}
    for session in sessions:
        goal = by_goal[session.learning_goal_id]
        assert goal.session_length.min <= session.duration_minutes <= goal.session_length.max
        assert CONFIG.day_start <= session.start and session.end <= CONFIG.day_end
    for goal in goals:
        placed = sum(s.duration_minutes for s in sessions if s.learning_goal_id == goal.id)
        assert placed <= goal.target_minutes


def test_react_goal_lands_after_work() -> None:
    # Both slots around work fill a 60-minute session, so without the evening
    # preference they tie and the 06:00 slot wins. Durations follow the react
    # template's first two entries (45, then 60), not an even 60/60 split.
    goal = _goal("react-1", "react", 120, preferred_time_slots=frozenset({TimeOfDay.EVENING}))
    commitments = [FixedCommitment("Work", _hm(9), _hm(17), "work")]

    plan = plan_day(MONDAY, commitments, [goal], CONFIG)

    assert [(s.topic, s.start, s.end) for s in plan.sessions] == [
        ("Components & JSX", _hm(17, 15), _hm(18)),
        ("State & Props", _hm(18), _hm(19)),
    ]
    assert all(s.context_before == "Work" for s in plan.sessions)
    assert [s.suggested_break_minutes for s in plan.sessions] == [5, 10]
    assert plan.breaks == ()
    _assert_well_formed(plan, [goal])


def test_react_goal_without_preference_takes_the_morning() -> None:
    goal = _goal("react-1", "react", 120)
    commitments = [FixedCommitment("Work", _hm(9), _hm(17), "work")]

    plan = plan_day(MONDAY, commitments, [goal], CONFIG)

    assert plan.sessions[0].topic == "Components & JSX"
    assert plan.sessions[0].start == _hm(6)
    assert plan.sessions[0].context_after == "Work"
    _assert_well_formed(plan, [goal])


def test_goals_are_served_in_given_order() -> None:
    slots = [FreeSlot(start=_hm(18), end=_hm(19))]
    first = _goal("a", "python", 45, priority=Priority.LOW)
    second = _goal("b", "english", 60, priority=Priority.HIGH)

    result = allocate_goals([first, second], slots, CONFIG)

    assert [s.learning_goal_id for s in result.sessions] == ["a"]
    assert result.remaining_slots == ()
    assert result.unmet_minutes == {"b": 60}


def test_goal_stops_when_next_session_would_fall_below_minimum() -> None:
    slots = [FreeSlot(start=_hm(6), end=_hm(12))]
    goal = _goal("py", "python", 70)

    result = allocate_goals([goal], slots, CONFIG)

    # 45-minute template session, then only 25 minutes of target remain.
    assert [s.duration_minutes for s in result.sessions] == [45]
    assert result.unmet_minutes == {"py": 25}


def test_no_slot_fits_minimum_yields_empty_plan() -> None:
    slots = [FreeSlot(start=_hm(6), end=_hm(6, 20))]
    goal = _goal("g", "react", 60)

    result = allocate_goals([goal], slots, CONFIG)

    assert result.sessions == ()
    assert result.unmet_minutes == {"g": 60}


def test_zero_or_negative_target_produces_no_sessions() -> None:
    slots = [FreeSlot(start=_hm(6), end=_hm(12))]
    result = allocate_goals([_goal("g", "react", -15)], slots, CONFIG)
    assert result.sessions == ()
    assert result.unmet_minutes == {}


def test_several_goals_share_the_day_without_overlap() -> None:
    goals = [
        _goal("ielts", "IELTS", 150, priority=Priority.HIGH, session_length=SessionLength(30, 75, 45)),
        _goal("js", "javascript", 120),
        _goal("misc", "Pottery", 90, priority=Priority.LOW),
    ]
    commitments = [
        FixedCommitment("Class", _hm(8), _hm(11), "study"),
        FixedCommitment("Part-time job", _hm(13), _hm(16), "job"),
    ]

    plan = plan_day(MONDAY, commitments, goals, SchedulingConfig())

    assert plan.sessions
    assert [s.start for s in plan.sessions] == sorted(s.start for s in plan.sessions)
    _assert_well_formed(plan, goals)


def test_full_day_yields_empty_plan() -> None:
    commitments = [FixedCommitment("Trip", _hm(5), _hm(23, 30))]
    plan = plan_day(MONDAY, commitments, [_goal("g", "react", 60)], CONFIG)
    assert plan.sessions == ()
    assert plan.total_study_minutes == 0


def test_consume_slot_shrinks_or_drops() -> None:
    pool = [FreeSlot(start=_hm(9), end=_hm(11), preceding_title="Gym")]

    consume_slot(pool, 0, 60, 30)
    assert (pool[0].start, pool[0].end, pool[0].preceding_title) == (_hm(10), _hm(11), "Gym")

    consume_slot(pool, 0, 40, 30)
    assert pool == []


def test_suggested_break_scales_with_duration() -> None:
    assert suggested_break_minutes(45) == 5
    assert suggested_break_minutes(60) == 10
    assert suggested_break_minutes(90) == 15

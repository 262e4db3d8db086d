from __future__ import annotations

from smartstudy.services.scheduling.config import SchedulingConfig, StudyConfig
from smartstudy.services.scheduling.focus_policy import (
    MACRO_AFTER_RUN,
    MACRO_FOCUS_LIMIT,
    MICRO_BETWEEN,
    place_sessions,
)
from smartstudy.services.scheduling.pipeline import plan_goal_day
from smartstudy.services.scheduling.types import (
    BreakKind,
    ExistingTask,
    FreeSlot,
    LearningGoal,
    PlannedSession,
    SessionLength,
)


def _hm(hours: int, minutes: int = 0) -> int:
    return hours * 60 + minutes


def _spans(blocks) -> list[tuple[int, int]]:
    return [(block.start, block.end) for block in blocks]


def test_focus_ceiling_forces_macro_break_between_long_sessions() -> None:
    sessions = [PlannedSession(order=1, duration=90, needs_break=True), PlannedSession(order=2, duration=90)]
    slots = [FreeSlot(start=_hm(6), end=_hm(7, 40)), FreeSlot(start=_hm(8), end=_hm(12))]

    plan = place_sessions(sessions, slots, StudyConfig())

    assert _spans(plan.study_blocks) == [(_hm(6, 5), _hm(7, 35)), (_hm(8, 25), _hm(9, 55))]
    assert [(b.kind, b.start, b.end, b.reason) for b in plan.breaks] == [
        (BreakKind.MACRO, _hm(8), _hm(8, 20), MACRO_FOCUS_LIMIT),
    ]
    assert plan.unplaced == ()


def test_micro_breaks_then_macro_after_run() -> None:
    sessions = [
        PlannedSession(order=1, duration=45, needs_break=True),
        PlannedSession(order=2, duration=45, needs_break=True),
        PlannedSession(order=3, duration=45),
    ]
    slots = [FreeSlot(start=_hm(6), end=_hm(12))]

    plan = place_sessions(sessions, slots, StudyConfig())

    assert _spans(plan.study_blocks) == [
        (_hm(6, 5), _hm(6, 50)),
        (_hm(7, 10), _hm(7, 55)),
        (_hm(8, 35), _hm(9, 20)),
    ]
    assert [(b.kind, b.reason) for b in plan.breaks] == [
        (BreakKind.MICRO, MICRO_BETWEEN),
        (BreakKind.MICRO, MICRO_BETWEEN),
        (BreakKind.MACRO, MACRO_AFTER_RUN),
    ]
    assert _spans(plan.breaks) == [(_hm(6, 55), _hm(7, 5)), (_hm(8), _hm(8, 10)), (_hm(8, 10), _hm(8, 30))]


def test_one_slot_holds_several_sessions_before_the_next_is_used() -> None:
    sessions = [
        PlannedSession(order=1, duration=45, needs_break=True),
        PlannedSession(order=2, duration=45),
    ]
    slots = [FreeSlot(start=_hm(6), end=_hm(12)), FreeSlot(start=_hm(14), end=_hm(18))]

    plan = place_sessions(sessions, slots, StudyConfig())

    assert _spans(plan.study_blocks) == [(_hm(6, 5), _hm(6, 50)), (_hm(7, 10), _hm(7, 55))]
    assert all(block.end <= _hm(12) for block in plan.entries)


def test_session_moves_to_later_slot_when_buffers_do_not_fit() -> None:
    sessions = [PlannedSession(order=1, duration=60)]
    slots = [FreeSlot(start=_hm(6), end=_hm(7, 5)), FreeSlot(start=_hm(9), end=_hm(10, 30))]

    plan = place_sessions(sessions, slots, StudyConfig())

    assert _spans(plan.study_blocks) == [(_hm(9, 5), _hm(10, 5))]


def test_sessions_without_room_are_reported_unplaced() -> None:
    sessions = [PlannedSession(order=1, duration=60, needs_break=True), PlannedSession(order=2, duration=60)]
    slots = [FreeSlot(start=_hm(6), end=_hm(7, 20))]

    plan = place_sessions(sessions, slots, StudyConfig())

    assert len(plan.study_blocks) == 1
    assert [session.order for session in plan.unplaced] == [2]


def test_entries_never_overlap() -> None:
    sessions = [PlannedSession(order=i, duration=60, needs_break=i < 5) for i in range(1, 6)]
    slots = [FreeSlot(start=_hm(6), end=_hm(11)), FreeSlot(start=_hm(13), end=_hm(18))]

    plan = place_sessions(sessions, slots, StudyConfig())

    entries = plan.entries
    for first, second in zip(entries, entries[1:]):
        assert first.end <= second.start


def _python_goal(target: int) -> LearningGoal:
    return LearningGoal(
        id="00000000-0000-0000-0000-000000000001",
        subject="Python",
        target_minutes=target,
        session_length=SessionLength(min=30, max=120, preferred=60),
    )


def test_goal_day_on_empty_weekday() -> None:
    plan = plan_goal_day(_python_goal(90), [], 1, SchedulingConfig.task_generation())

    assert _spans(plan.study_blocks) == [(_hm(6, 5), _hm(6, 50)), (_hm(7, 10), _hm(7, 55))]
    assert [b.kind for b in plan.breaks] == [BreakKind.MICRO]


def test_goal_day_works_around_tasks_for_that_weekday_only() -> None:
    tasks = [
        ExistingTask(weekdays=frozenset({1}), start=_hm(6), end=_hm(8), title="Gym"),
        ExistingTask(weekdays=frozenset({2}), start=_hm(8), end=_hm(12), title="Shift"),
    ]

    plan = plan_goal_day(_python_goal(90), tasks, 1, SchedulingConfig.task_generation())

    assert _spans(plan.study_blocks) == [(_hm(8, 20), _hm(9, 5)), (_hm(9, 25), _hm(10, 10))]


def test_goal_day_never_touches_protected_windows() -> None:
    tasks = [ExistingTask(weekdays=frozenset({3}), start=_hm(6), end=_hm(11, 45), title="Work")]

    plan = plan_goal_day(_python_goal(240), tasks, 3, SchedulingConfig.task_generation())

    for entry in plan.entries:
        assert not (entry.start < _hm(13) and entry.end > _hm(12))
        assert not (entry.start < _hm(19) and entry.end > _hm(18))
        assert entry.end <= _hm(22)

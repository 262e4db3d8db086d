from __future__ import annotations

from smartstudy.services.scheduling.config import MealWindow, SchedulingConfig
from smartstudy.services.scheduling.intervals import (
    buffer_commitments,
    merge_busy_blocks,
    normalize_commitments,
    synthesize_meal_blocks,
    task_busy_blocks,
)
from smartstudy.services.scheduling.types import ActivityKind, BusyBlock, ExistingTask, FixedCommitment


def _hm(hours: int, minutes: int = 0) -> int:
    return hours * 60 + minutes


def test_buffers_follow_activity_kind() -> None:
    config = SchedulingConfig()
    blocks = buffer_commitments(
        [
            FixedCommitment("Work", _hm(9), _hm(17), "work"),
            FixedCommitment("Lunch", _hm(12), _hm(13)),
            FixedCommitment("Gym", _hm(19), _hm(20)),
        ],
        config,
    )
    spans = [(block.title, block.start, block.end, block.kind) for block in blocks]
    assert spans == [
        ("Work", _hm(8, 45), _hm(17, 15), ActivityKind.WORK),
        ("Lunch", _hm(11, 30), _hm(13, 45), ActivityKind.MEAL),
        ("Gym", _hm(18, 50), _hm(20, 10), ActivityKind.PERSONAL),
    ]


def test_buffers_clamp_to_day_and_skip_empty_commitments() -> None:
    config = SchedulingConfig()
    blocks = buffer_commitments(
        [
            FixedCommitment("Night shift", _hm(0, 5), _hm(1)),
            FixedCommitment("Late call", _hm(23, 30), _hm(23, 55), "work"),
            FixedCommitment("Broken", _hm(10), _hm(10)),
        ],
        config,
    )
    assert [(block.start, block.end) for block in blocks] == [(0, _hm(1, 15)), (_hm(23, 15), 1439)]


def test_literature_class_keeps_study_buffers() -> None:
    config = SchedulingConfig()
    blocks = buffer_commitments([FixedCommitment("Học văn", _hm(9), _hm(10), "study")], config)

    assert [(block.start, block.end, block.kind) for block in blocks] == [
        (_hm(8, 45), _hm(10, 15), ActivityKind.STUDY)
    ]


def test_meal_window_synthesized_when_uncovered() -> None:
    config = SchedulingConfig()
    busy = normalize_commitments([], config)

    lunch = [block for block in busy if block.title == "Lunch"]
    assert len(lunch) == 1
    assert (lunch[0].start, lunch[0].end) == (_hm(11, 45), _hm(13, 15))
    assert lunch[0].kind is ActivityKind.MEAL
    assert lunch[0].auto_generated is True


def test_meal_conflict_uses_unbuffered_times() -> None:
    config = SchedulingConfig()
    # Buffered, this commitment reaches into the lunch hour; unbuffered it does not.
    adjacent = [FixedCommitment("Seminar", _hm(13), _hm(14), "study")]
    overlapping = [FixedCommitment("Seminar", _hm(12, 30), _hm(13, 30), "study")]

    assert "Lunch" in [block.title for block in synthesize_meal_blocks(adjacent, config)]
    assert "Lunch" not in [block.title for block in synthesize_meal_blocks(overlapping, config)]


def test_meal_synthesis_can_be_disabled() -> None:
    config = SchedulingConfig(synthesize_meal_windows=False)
    assert normalize_commitments([], config) == []


def test_merge_keeps_first_title_and_is_idempotent() -> None:
    blocks = [
        BusyBlock(start=_hm(14), end=_hm(15), title="Review", kind=ActivityKind.STUDY),
        BusyBlock(start=_hm(9), end=_hm(11), title="Work", kind=ActivityKind.WORK),
        BusyBlock(start=_hm(10), end=_hm(12), title="Call", kind=ActivityKind.WORK),
        BusyBlock(start=_hm(12), end=_hm(12, 30), title="Walk", kind=ActivityKind.PERSONAL),
    ]

    merged = merge_busy_blocks(blocks)

    assert [(block.title, block.start, block.end) for block in merged] == [
        ("Work", _hm(9), _hm(12, 30)),
        ("Review", _hm(14), _hm(15)),
    ]
    assert merge_busy_blocks(merged) == merged


def test_merge_swallows_contained_block() -> None:
    blocks = [
        BusyBlock(start=_hm(8), end=_hm(18), title="Work"),
        BusyBlock(start=_hm(12), end=_hm(13), title="Lunch"),
    ]
    merged = merge_busy_blocks(blocks)
    assert [(block.title, block.start, block.end) for block in merged] == [("Work", _hm(8), _hm(18))]


def test_task_busy_blocks_add_protected_windows_unbuffered() -> None:
    config = SchedulingConfig.task_generation()
    tasks = [ExistingTask(weekdays=frozenset({1}), start=_hm(9), end=_hm(10), title="Standup")]

    busy = task_busy_blocks(tasks, config)

    assert [(block.title, block.start, block.end) for block in busy] == [
        ("Standup", _hm(8, 45), _hm(10, 15)),
        ("Lunch", _hm(12), _hm(13)),
        ("Dinner", _hm(18), _hm(19)),
    ]


def test_task_busy_blocks_merge_with_protected_window() -> None:
    config = SchedulingConfig.task_generation().with_overrides(
        protected_windows=(MealWindow("Lunch", _hm(12), _hm(13)),)
    )
    tasks = [ExistingTask(weekdays=frozenset({1}), start=_hm(13), end=_hm(14), title="Reading")]

    busy = task_busy_blocks(tasks, config)

    assert [(block.title, block.start, block.end) for block in busy] == [("Lunch", _hm(12), _hm(14, 15))]

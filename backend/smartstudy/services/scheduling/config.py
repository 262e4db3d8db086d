"""Immutable configuration passed into every scheduling computation."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Tuple

from smartstudy.services.scheduling.types import ActivityKind, SessionTemplateEntry

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from smartstudy.core.config import Settings


@dataclass(frozen=True)
class BufferRule:
    before: int
    after: int


@dataclass(frozen=True)
class MealWindow:
    title: str
    start: int
    end: int


@dataclass(frozen=True)
class StudyConfig:
    default_session_length: int = 45
    break_minutes: int = 10
    max_sessions_per_day: int = 6
    min_sessions_per_day: int = 1
    min_session_length: int = 30
    max_session_length: int = 90
    max_continuous_minutes: int = 120
    prep_buffer_minutes: int = 5
    wrap_buffer_minutes: int = 5
    macro_break_minutes: int = 20
    macro_break_after_sessions: int = 2
    # Partitioner reconciliation passes per session before giving up.
    max_adjust_rounds: int = 10


def _template(*entries: Tuple[str, int]) -> Tuple[SessionTemplateEntry, ...]:
    return tuple(
        SessionTemplateEntry(topic=topic, duration=duration, order=index)
        for index, (topic, duration) in enumerate(entries, start=1)
    )


DEFAULT_TEMPLATE_KEY = "default"

DEFAULT_TEMPLATES: Mapping[str, Tuple[SessionTemplateEntry, ...]] = MappingProxyType(
    {
        "javascript": _template(
            ("Syntax & Basics", 45),
            ("Functions & Objects", 60),
            ("DOM Manipulation", 50),
            ("Async Programming", 70),
            ("Practice Projects", 90),
        ),
        "react": _template(
            ("Components & JSX", 45),
            ("State & Props", 60),
            ("Hooks", 75),
            ("Routing", 45),
            ("State Management", 90),
        ),
        "python": _template(
            ("Syntax & Data Types", 45),
            ("Control Flow", 50),
            ("Functions & Modules", 60),
            ("OOP Concepts", 75),
            ("Libraries & Projects", 90),
        ),
        "english": _template(
            ("Vocabulary Building", 30),
            ("Grammar Practice", 45),
            ("Listening Skills", 40),
            ("Speaking Practice", 50),
            ("Writing Exercise", 60),
        ),
        "ielts": _template(
            ("Reading Strategies", 60),
            ("Listening Practice", 45),
            ("Writing Task 1", 50),
            ("Writing Task 2", 70),
            ("Speaking Mock Test", 40),
        ),
        DEFAULT_TEMPLATE_KEY: _template(
            ("Foundation", 45),
            ("Core Concepts", 60),
            ("Practice", 50),
            ("Advanced Topics", 75),
            ("Application", 90),
        ),
    }
)

DEFAULT_BUFFERS: Mapping[ActivityKind, BufferRule] = MappingProxyType(
    {
        ActivityKind.MEAL: BufferRule(before=30, after=45),
        ActivityKind.WORK: BufferRule(before=15, after=15),
        ActivityKind.STUDY: BufferRule(before=15, after=15),
        ActivityKind.PERSONAL: BufferRule(before=10, after=10),
        ActivityKind.DEFAULT: BufferRule(before=15, after=15),
    }
)

# Checked in order; the first kind with a keyword appearing as a whole word in the title wins.
DEFAULT_ACTIVITY_KEYWORDS: Tuple[Tuple[ActivityKind, Tuple[str, ...]], ...] = (
    (ActivityKind.MEAL, ("meal", "breakfast", "lunch", "dinner", "brunch", "ăn", "cơm", "bữa")),
    (ActivityKind.WORK, ("work", "meeting", "office", "shift", "làm việc")),
    (ActivityKind.STUDY, ("study", "class", "lecture", "school", "học")),
    (ActivityKind.PERSONAL, ("personal", "gym", "workout", "exercise", "commute", "errand")),
)

DEFAULT_MEAL_WINDOWS: Tuple[MealWindow, ...] = (
    MealWindow(title="Breakfast", start=7 * 60, end=8 * 60),
    MealWindow(title="Lunch", start=12 * 60, end=13 * 60),
    MealWindow(title="Dinner", start=18 * 60, end=19 * 60),
)


@dataclass(frozen=True)
class SchedulingConfig:
    day_start: int = 6 * 60
    day_end: int = 23 * 60
    min_free_slot_minutes: int = 30
    # Slots left with less than this after a session are dropped from the pool.
    min_slot_remainder_minutes: int = 30
    buffers: Mapping[ActivityKind, BufferRule] = field(default_factory=lambda: DEFAULT_BUFFERS)
    synthesize_meal_windows: bool = True
    meal_windows: Tuple[MealWindow, ...] = DEFAULT_MEAL_WINDOWS
    meal_buffer_minutes: int = 15
    protected_windows: Tuple[MealWindow, ...] = ()
    task_buffer_minutes: int = 15
    templates: Mapping[str, Tuple[SessionTemplateEntry, ...]] = field(default_factory=lambda: DEFAULT_TEMPLATES)
    activity_keywords: Tuple[Tuple[ActivityKind, Tuple[str, ...]], ...] = DEFAULT_ACTIVITY_KEYWORDS
    study: StudyConfig = field(default_factory=StudyConfig)

    def __post_init__(self) -> None:
        if not (0 <= self.day_start < self.day_end < 24 * 60):
            raise ValueError(f"Invalid day bounds {self.day_start}-{self.day_end}")
        if DEFAULT_TEMPLATE_KEY not in self.templates:
            raise ValueError("Template registry must define a 'default' template")

    def buffer_for(self, kind: ActivityKind) -> BufferRule:
        return self.buffers.get(kind) or self.buffers.get(ActivityKind.DEFAULT) or BufferRule(0, 0)

    def with_overrides(self, **changes) -> "SchedulingConfig":
        return replace(self, **changes)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SchedulingConfig":
        """Daily goal-scheduling profile."""
        return cls(
            day_start=settings.day_start_minute,
            day_end=settings.day_end_minute,
            min_free_slot_minutes=settings.min_free_slot_minutes,
            synthesize_meal_windows=settings.synthesize_meal_windows,
        )

    @classmethod
    def task_generation(cls, settings: "Settings | None" = None) -> "SchedulingConfig":
        """Protected-window profile used when turning a goal into weekly tasks."""
        day_start = settings.day_start_minute if settings else 6 * 60
        day_end = settings.task_day_end_minute if settings else 22 * 60
        min_gap = settings.task_min_free_slot_minutes if settings else 45
        return cls(
            day_start=day_start,
            day_end=day_end,
            min_free_slot_minutes=min_gap,
            synthesize_meal_windows=False,
            protected_windows=(
                MealWindow(title="Lunch", start=12 * 60, end=13 * 60),
                MealWindow(title="Dinner", start=18 * 60, end=19 * 60),
            ),
        )

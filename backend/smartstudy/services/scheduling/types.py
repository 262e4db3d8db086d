"""Value types shared by the scheduling engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple, Union

MINUTES_PER_DAY = 1440
LAST_MINUTE = MINUTES_PER_DAY - 1


class ActivityKind(str, Enum):
    MEAL = "meal"
    WORK = "work"
    STUDY = "study"
    PERSONAL = "personal"
    DEFAULT = "default"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TimeOfDay(str, Enum):
    EARLY_MORNING = "early-morning"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class BreakKind(str, Enum):
    MICRO = "micro"
    MACRO = "macro"


@dataclass(frozen=True)
class TimeInterval:
    """Half-open span of minutes-of-day, ``0 <= start < end <= 1439``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not (0 <= self.start < self.end <= LAST_MINUTE):
            raise ValueError(f"Invalid interval {self.start}-{self.end}")

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start



@dataclass(frozen=True)
class FixedCommitment:
    """Raw busy entry as read from the user's fixed schedule."""

    title: str
    start: int
    end: int
    kind: Optional[str] = None


@dataclass(frozen=True)
class BusyBlock(TimeInterval):
    title: str = ""
    kind: ActivityKind = ActivityKind.DEFAULT
    auto_generated: bool = False


@dataclass(frozen=True)
class FreeSlot(TimeInterval):
    preceding_title: Optional[str] = None
    following_title: Optional[str] = None


@dataclass(frozen=True)
class SessionLength:
    min: int
    max: int
    preferred: int


@dataclass(frozen=True)
class LearningGoal:
    """Read-only view of an active learning goal handed to the engine."""

    id: str
    subject: str
    target_minutes: int
    priority: Priority = Priority.MEDIUM
    session_length: SessionLength = SessionLength(min=30, max=120, preferred=60)
    preferred_time_slots: FrozenSet[TimeOfDay] = frozenset()
    color: Optional[str] = None
    icon: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class SessionTemplateEntry:
    topic: str
    duration: int
    order: int


@dataclass(frozen=True)
class PlannedSession:
    """A partitioned slice of a goal's daily target, not yet placed."""

    order: int
    duration: int
    needs_break: bool = False


@dataclass(frozen=True)
class GeneratedSession:
    learning_goal_id: str
    subject: str
    topic: str
    order: int
    start: int
    end: int
    priority: Priority = Priority.MEDIUM
    category: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    context_before: Optional[str] = None
    context_after: Optional[str] = None
    suggested_break_minutes: int = 5

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class BreakBlock(TimeInterval):
    kind: BreakKind = BreakKind.MICRO
    reason: str = ""


@dataclass(frozen=True)
class StudyBlock(TimeInterval):
    """Session placed by the focus/break policy (task-generation variant)."""

    order: int = 1


@dataclass(frozen=True)
class ExistingTask:
    weekdays: FrozenSet[int]
    start: int
    end: int
    title: str = ""


PlanEntry = Union[GeneratedSession, BreakBlock]


@dataclass(frozen=True)
class DailyPlan:
    date: date
    sessions: Tuple[GeneratedSession, ...] = ()
    breaks: Tuple[BreakBlock, ...] = ()

    @property
    def entries(self) -> List[PlanEntry]:
        combined: List[PlanEntry] = [*self.sessions, *self.breaks]
        return sorted(combined, key=lambda entry: entry.start)

    @property
    def total_study_minutes(self) -> int:
        return sum(session.duration_minutes for session in self.sessions)


@dataclass(frozen=True)
class FocusPlan:
    study_blocks: Tuple[StudyBlock, ...] = ()
    breaks: Tuple[BreakBlock, ...] = ()
    unplaced: Tuple[PlannedSession, ...] = field(default=())

    @property
    def entries(self) -> List[TimeInterval]:
        combined: List[TimeInterval] = [*self.study_blocks, *self.breaks]
        return sorted(combined, key=lambda entry: entry.start)

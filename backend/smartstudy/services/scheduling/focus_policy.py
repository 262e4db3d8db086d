"""Continuous-focus and break policy for the task-generation pipeline."""
from __future__ import annotations

import logging
from typing import List, Sequence

from smartstudy.services.scheduling.config import StudyConfig
from smartstudy.services.scheduling.types import (
    BreakBlock,
    BreakKind,
    FocusPlan,
    FreeSlot,
    PlannedSession,
    StudyBlock,
)

logger = logging.getLogger(__name__)

MACRO_AFTER_RUN = "Recovery after consecutive sessions"
MACRO_FOCUS_LIMIT = "Recovery before the next session"
MICRO_BETWEEN = "Short break between sessions"


class _FocusState:
    def __init__(self) -> None:
        self.continuous_minutes = 0
        self.sessions_since_macro = 0
        self.breaks: List[BreakBlock] = []

    def macro_break(self, start: int, minutes: int, reason: str) -> int:
        self.breaks.append(BreakBlock(start=start, end=start + minutes, kind=BreakKind.MACRO, reason=reason))
        self.continuous_minutes = 0
        self.sessions_since_macro = 0
        return start + minutes


def place_sessions(
    sessions: Sequence[PlannedSession],
    slots: Sequence[FreeSlot],
    config: StudyConfig,
) -> FocusPlan:
    """
    Lay sessions out across slots in time order.

    A slot keeps taking sessions while room remains, so one slot may hold several
    sessions with their breaks; the next slot is used only once the current one is full.

    Each study block is wrapped in prep/wrap buffers that consume slot time but do not
    count as focus. A macro break precedes a session once ``macro_break_after_sessions``
    sessions ran since the last one, or when the session would push continuous focus past
    ``max_continuous_minutes``; if that break cannot fit, the session moves to a later slot.
    A micro break follows any session with a successor still pending, room permitting.
    """
    state = _FocusState()
    placed: List[StudyBlock] = []
    macro = config.macro_break_minutes
    micro = config.break_minutes
    index = 0

    for slot in sorted(slots, key=lambda item: item.start):
        if index >= len(sessions):
            break
        cursor = slot.start

        while index < len(sessions):
            session = sessions[index]
            if (
                macro > 0
                and state.sessions_since_macro >= config.macro_break_after_sessions
                and cursor + macro <= slot.end
            ):
                cursor = state.macro_break(cursor, macro, MACRO_AFTER_RUN)

            required = config.prep_buffer_minutes + session.duration + config.wrap_buffer_minutes
            if cursor + required > slot.end:
                break

            if state.continuous_minutes > 0 and state.continuous_minutes + session.duration > config.max_continuous_minutes:
                if macro > 0 and cursor + macro + required <= slot.end:
                    cursor = state.macro_break(cursor, macro, MACRO_FOCUS_LIMIT)
                else:
                    break

            study_start = cursor + config.prep_buffer_minutes
            study_end = study_start + session.duration
            placed.append(StudyBlock(start=study_start, end=study_end, order=session.order))
            cursor = study_end + config.wrap_buffer_minutes

            if session.needs_break and micro > 0 and cursor + micro <= slot.end:
                state.breaks.append(
                    BreakBlock(start=cursor, end=cursor + micro, kind=BreakKind.MICRO, reason=MICRO_BETWEEN)
                )
                cursor += micro
                state.continuous_minutes = 0
            else:
                state.continuous_minutes += session.duration
            state.sessions_since_macro += 1
            index += 1

    unplaced = tuple(sessions[index:])
    if unplaced:
        logger.debug("%s of %s sessions could not be placed", len(unplaced), len(sessions))
    return FocusPlan(study_blocks=tuple(placed), breaks=tuple(state.breaks), unplaced=unplaced)

"""Map free-text activity titles and declared types onto ActivityKind."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Tuple

from smartstudy.services.scheduling.types import ActivityKind

KeywordTable = Iterable[Tuple[ActivityKind, Tuple[str, ...]]]

# Declared types from the fixed schedule that map onto a kind under another name.
_DECLARED_ALIASES = {
    "class": ActivityKind.STUDY,
    "lecture": ActivityKind.STUDY,
    "job": ActivityKind.WORK,
    "food": ActivityKind.MEAL,
}


def _declared_kind(declared: Optional[str]) -> Optional[ActivityKind]:
    if not declared:
        return None
    key = declared.strip().lower()
    if key in _DECLARED_ALIASES:
        return _DECLARED_ALIASES[key]
    try:
        kind = ActivityKind(key)
    except ValueError:
        return None
    return None if kind is ActivityKind.DEFAULT else kind


@lru_cache(maxsize=256)
def _keyword_pattern(token: str) -> Pattern[str]:
    # Whole words only: "ăn" must not match inside "văn" or "năng".
    return re.compile(r"(?<!\w)" + re.escape(token.lower()) + r"(?!\w)")


def _keyword_kind(title: str, keywords: KeywordTable) -> Optional[ActivityKind]:
    lowered = title.lower()
    for kind, tokens in keywords:
        if any(_keyword_pattern(token).search(lowered) for token in tokens):
            return kind
    return None


def classify_activity(
    title: Optional[str],
    declared: Optional[str] = None,
    *,
    keywords: KeywordTable,
) -> ActivityKind:
    """
    Resolve the kind of a busy activity.

    A known, non-default declared type wins ("Lunch meeting" declared ``work`` is work).
    Otherwise the title keywords decide, meals first ("Lunch meeting" with no type is a
    meal), then ``DEFAULT``. Keywords match whole words only.
    """
    declared_kind = _declared_kind(declared)
    if declared_kind is not None:
        return declared_kind
    return _keyword_kind(title or "", tuple(keywords)) or ActivityKind.DEFAULT


def is_meal(title: Optional[str], *, keywords: KeywordTable) -> bool:
    if not title:
        return False
    return _keyword_kind(title, keywords) is ActivityKind.MEAL

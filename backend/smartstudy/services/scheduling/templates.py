"""Subject → ordered topic breakdown lookup."""
from __future__ import annotations

from typing import Mapping, Tuple

from smartstudy.services.scheduling.config import DEFAULT_TEMPLATE_KEY
from smartstudy.services.scheduling.types import SessionTemplateEntry

Template = Tuple[SessionTemplateEntry, ...]


def normalize_subject(subject: str | None) -> str:
    return "".join((subject or "").lower().split())


def resolve_template(subject: str | None, registry: Mapping[str, Template]) -> Template:
    """Exact key, then the first key contained in (or containing) the subject, then default."""
    key = normalize_subject(subject)
    if key:
        if key in registry:
            return registry[key]
        for name, template in registry.items():
            if name == DEFAULT_TEMPLATE_KEY:
                continue
            if name in key or key in name:
                return template
    return registry[DEFAULT_TEMPLATE_KEY]

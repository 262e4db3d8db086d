"""Tests ensuring observability wiring is safe by default."""
from __future__ import annotations

import importlib
import logging

from smartstudy.core.context import get_plan_scope, plan_scope
from smartstudy.core.logging import RequestIdFilter


def test_app_import_succeeds_when_opik_is_disabled(monkeypatch) -> None:
    monkeypatch.setenv("OPIK_ENABLED", "false")
    monkeypatch.delenv("OPIK_API_KEY", raising=False)

    import smartstudy.core.config as core_config
    import smartstudy.observability.client as client_module
    import smartstudy.main as main_module

    importlib.reload(core_config)
    importlib.reload(client_module)
    reloaded_app = importlib.reload(main_module)

    assert hasattr(reloaded_app, "app")


def test_plan_scope_tags_log_records() -> None:
    record = logging.LogRecord("smartstudy.services.scheduling", logging.INFO, __file__, 1, "msg", None, None)
    log_filter = RequestIdFilter()

    with plan_scope("user-1", "2024-01-08") as scope:
        assert scope == "user-1/2024-01-08"
        assert get_plan_scope() == scope
        log_filter.filter(record)

    assert record.plan_scope == "user-1/2024-01-08"
    assert get_plan_scope() is None

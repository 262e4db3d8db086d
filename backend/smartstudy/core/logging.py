"""Centralized logging configuration."""
from __future__ import annotations

import logging
from logging.config import dictConfig

from smartstudy.core.context import get_plan_scope, get_request_id

ENGINE_LOGGER = "smartstudy.services.scheduling"


class RequestIdFilter(logging.Filter):
    """Add request_id and plan_scope attributes to log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - minimal logic
        record.request_id = get_request_id() or "-"
        record.plan_scope = get_plan_scope() or "-"
        return True


def configure_logging(*, log_level: str = "INFO", engine_log_level: str | None = None) -> None:
    """Configure application logging once at startup."""
    if getattr(configure_logging, "_configured", False):
        return

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(plan_scope)s | %(message)s",
                }
            },
            "filters": {
                "request_id": {
                    "()": "smartstudy.core.logging.RequestIdFilter",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": "DEBUG",
                    "filters": ["request_id"],
                }
            },
            "loggers": {
                ENGINE_LOGGER: {"level": engine_log_level or log_level},
            },
            "root": {
                "handlers": ["console"],
                "level": log_level,
            },
        }
    )

    logging.getLogger(__name__).debug("Logging configured at %s (engine=%s)", log_level, engine_log_level or log_level)
    setattr(configure_logging, "_configured", True)

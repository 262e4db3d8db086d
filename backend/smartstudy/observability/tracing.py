"""Tracing utilities wrapping Opik."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from smartstudy.core.context import get_plan_scope, get_request_id
from smartstudy.observability.client import get_opik_client

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from opik.api_objects.trace.trace_client import Trace

logger = logging.getLogger(__name__)


def trace_metadata(
    metadata: Optional[Dict[str, Any]] = None,
    user_id: Optional[str] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Drop empty values and attach the ambient request id and plan scope."""
    payload = {key: value for key, value in (metadata or {}).items() if value is not None}
    if user_id:
        payload.setdefault("user_id", str(user_id))
    request_id = request_id or get_request_id()
    if request_id:
        payload.setdefault("request_id", request_id)
    scope = get_plan_scope()
    if scope:
        payload.setdefault("plan_scope", scope)
    return payload


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    user_id: Optional[str] = None,
    request_id: Optional[str] = None,
) -> Iterator[Optional["Trace"]]:
    """
    Open an Opik trace around a unit of scheduling work.

    When Opik is disabled the context yields None. Exceptions raised inside the
    block are attached to the trace and re-raised unchanged.
    """
    client = get_opik_client()
    if client is None:
        yield None
        return

    opik_trace: Optional["Trace"] = None
    try:
        opik_trace = client.trace(name=name, metadata=trace_metadata(metadata, user_id, request_id) or None)
    except Exception as exc:  # pragma: no cover - exporter failure
        logger.debug("Unable to start Opik trace %s: %s", name, exc)

    try:
        yield opik_trace
    except Exception as exc:
        if opik_trace is not None:
            try:
                opik_trace.update(error_info={"exception_type": type(exc).__name__, "message": str(exc)})
            except Exception:  # pragma: no cover
                logger.debug("Failed to attach error info to Opik trace %s", name, exc_info=True)
        raise
    finally:
        if opik_trace is not None:
            try:
                opik_trace.end()
            except Exception:  # pragma: no cover
                logger.debug("Failed to close Opik trace %s cleanly", name, exc_info=True)

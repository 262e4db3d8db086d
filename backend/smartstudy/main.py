"""Main FastAPI application for the SmartStudy backend."""
from fastapi import FastAPI, Request

from smartstudy.api.routes.fixed_schedules import router as fixed_schedules_router
from smartstudy.api.routes.learning_goals import router as learning_goals_router
from smartstudy.api.routes.schedule import router as schedule_router
from smartstudy.api.routes.task import router as task_router
from smartstudy.core.config import settings
from smartstudy.core.logging import configure_logging
from smartstudy.core.middleware import RequestIDMiddleware
from smartstudy.observability.client import init_opik
from smartstudy.observability.tracing import trace

configure_logging(log_level=settings.log_level, engine_log_level=settings.engine_log_level)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestIDMiddleware)
app.include_router(learning_goals_router)
app.include_router(fixed_schedules_router)
app.include_router(schedule_router)
app.include_router(task_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}

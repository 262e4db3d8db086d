"""Dedicated APScheduler worker process."""
from __future__ import annotations

import logging
import signal
import threading

from apscheduler.schedulers.background import BackgroundScheduler

from smartstudy.core.config import settings
from smartstudy.core.logging import configure_logging
from smartstudy.db.session import SessionLocal
from smartstudy.services.job_runner import run_weekly_schedule_for_all_users


logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging(log_level=settings.log_level, engine_log_level=settings.engine_log_level)
    logger.info("Scheduler worker starting (enabled=%s)", settings.scheduler_enabled)

    scheduler = BackgroundScheduler(timezone=settings.scheduler_timezone)

    if settings.scheduler_enabled:
        register_jobs(scheduler)
        scheduler.start()
        if settings.jobs_run_on_startup:
            logger.info("Running schedule job once on startup")
            run_schedule_job()
    else:
        logger.warning("Scheduler disabled via config; worker will idle")

    stop_event = threading.Event()

    def shutdown(signum, frame):  # pragma: no cover - signal handler
        logger.info("Scheduler worker shutting down (signal=%s)", signum)
        if scheduler.running:
            scheduler.shutdown(wait=False)
        stop_event.set()

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    try:
        stop_event.wait()
    except KeyboardInterrupt:  # pragma: no cover - manual stop
        shutdown(signal.SIGINT, None)


def register_jobs(scheduler: BackgroundScheduler) -> None:
    scheduler.add_job(
        run_schedule_job,
        trigger="cron",
        hour=settings.nightly_job_hour,
        minute=settings.nightly_job_minute,
        id="nightly_schedule_job",
        replace_existing=True,
    )
    logger.info(
        "Registered nightly schedule job (time=%02d:%02d %s, horizon=%s days)",
        settings.nightly_job_hour,
        settings.nightly_job_minute,
        settings.scheduler_timezone,
        settings.schedule_horizon_days,
    )


def run_schedule_job() -> None:
    session = SessionLocal()
    try:
        result = run_weekly_schedule_for_all_users(session)
        logger.info(
            "Nightly schedule job complete: users=%s, days=%s, failures=%s",
            result.users_processed,
            result.days_written,
            len(result.failures),
        )
    except Exception:  # pragma: no cover - logged for the operator
        logger.exception("Nightly schedule job failed")
    finally:
        session.close()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()

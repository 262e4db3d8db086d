"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "SmartStudy Backend"
    debug: bool = False
    log_level: str = "INFO"
    engine_log_level: str | None = None
    database_url: str = "postgresql+psycopg2://smartstudy@localhost:5432/smartstudy"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "smartstudy"
    scheduler_enabled: bool = False
    scheduler_timezone: str = "UTC"
    nightly_job_hour: int = 2
    nightly_job_minute: int = 0
    jobs_run_on_startup: bool = False
    schedule_horizon_days: int = 7
    day_start_minute: int = 6 * 60
    day_end_minute: int = 23 * 60
    task_day_end_minute: int = 22 * 60
    min_free_slot_minutes: int = 30
    task_min_free_slot_minutes: int = 45
    synthesize_meal_windows: bool = True


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()

# /app/core/config.py

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "School Core Backend"
    DATABASE_URL: str = "sqlite:///./school.db"
    LOG_LEVEL: str = "INFO"
    AUTO_CREATE_TABLES: bool = True

    # --- Workflow Policies ---
    # "strict" rejects past-due work on assignments that forbid it,
    # "lenient" accepts it and only flags the submission as late.
    LATE_SUBMISSION_POLICY: Literal["strict", "lenient"] = "strict"
    ALLOW_REGRADE: bool = True
    ENFORCE_SINGLE_LEAD_TEACHER: bool = False
    ENFORCE_UNIQUE_PREFECT_POSITION: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()

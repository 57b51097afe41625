"""
Application settings using Pydantic BaseSettings.
"""

from typing import Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Workforce Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Document collections
    JOBS_COLLECTION: str = "jobs"
    TECHNICIANS_COLLECTION: str = "users"
    ASSIGNMENTS_COLLECTION: str = "job_assignments"

    # Queries
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    PROXIMITY_MAX_RESULTS: int = 10
    PROXIMITY_CANDIDATE_MULTIPLIER: int = 3
    LONG_RUNNING_JOB_HOURS: int = 24

    # Recommendations
    RECOMMENDATION_MAX_RESULTS: int = 10
    RECOMMENDATION_CANDIDATE_MULTIPLIER: int = 2

    # Input handling
    SANITIZE_MAX_LENGTH: int = 1000

    # Workload
    WORKLOAD_TIMEZONE: str = "UTC"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        if isinstance(v, str):
            return v
        # Build from individual components if DATABASE_URL is not provided
        values = info.data
        user = values.get("POSTGRES_USER") or "workforce_user"
        password = values.get("POSTGRES_PASSWORD") or "workforce_pass"
        host = values.get("POSTGRES_SERVER") or "localhost"
        db = values.get("POSTGRES_DB") or "workforce_engine"
        return f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator(
        "DEFAULT_PAGE_SIZE",
        "MAX_PAGE_SIZE",
        "PROXIMITY_MAX_RESULTS",
        "PROXIMITY_CANDIDATE_MULTIPLIER",
        "RECOMMENDATION_MAX_RESULTS",
        "RECOMMENDATION_CANDIDATE_MULTIPLIER",
        "SANITIZE_MAX_LENGTH",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be greater than 0")
        return v

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()

"""
StaffMind Configuration Management

Uses Pydantic Settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # =========================================================================
    # APPLICATION
    # =========================================================================
    APP_NAME: str = "StaffMind"
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "info"
    VERSION: str = "0.1.0"

    # =========================================================================
    # API SERVER
    # =========================================================================
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:3000"

    # =========================================================================
    # ALLOCATION STORE
    # =========================================================================
    # Empty means the in-memory store is used.
    DATABASE_URL: str = ""
    DATABASE_POOL_SIZE: int = 5

    # =========================================================================
    # ALLOCATION ENGINE
    # =========================================================================
    MIN_AVAILABILITY_FLOOR: float = 20.0
    PRODUCTIVE_HOURS_PER_DAY: int = 6
    MAX_TEAM_SIZE: int = 4
    PLANNING_HORIZON_HOURS: float = 160.0
    RELIEF_FACTOR: float = 0.85
    DEFAULT_FORECAST_WEEKS: int = 4

    # =========================================================================
    # ADVISORY (LLM narrative enrichment)
    # =========================================================================
    ADVISORY_ENABLED: bool = False
    ADVISORY_TIMEOUT_SECONDS: float = 10.0
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"

    # =========================================================================
    # OBSERVABILITY
    # =========================================================================
    METRICS_ENABLED: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()

"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Multi-sport training analytics engine."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["Training Analytics maintainers"]

    DEBUG: bool = False

    # Database (read-only training log)
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "postgres"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Trend bucketing
    TREND_BUCKET_COUNT: int = 6
    DAILY_BUCKET_MAX_DAYS: int = 7

    # Skill map
    SKILL_MAP_MAX_SELECTIONS: int = 6

    # Exercise matching
    STRICT_MAX_EDIT_DISTANCE: int = 1

    # Exercise catalog
    MOST_LOGGED_LIMIT: int = 10

    # Store boundary (seconds, None = no timeout)
    STORE_TIMEOUT_SECONDS: Optional[float] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")


# Global settings instance
settings = Settings()

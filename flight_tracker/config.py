"""
Configuration management using Pydantic Settings.
Loads environment variables with validation and type checking.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="FlightPriceTracker", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Emit console logs as JSON")
    log_file: str | None = Field(default=None, description="Optional rotating log file path")
    environment: str = Field(default="development", description="Environment name")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./flight_tracker.db",
        description="SQLAlchemy async connection URL",
    )
    create_tables_on_startup: bool = Field(
        default=True, description="Create missing tables when the API starts"
    )

    # Analytics
    timezone: str = Field(
        default="Europe/Zurich", description="Civil time zone used for local bucketing"
    )
    default_bucket_days: int = Field(
        default=1, description="Default days-to-departure bucket width"
    )
    max_flex_days: int = Field(
        default=30, description="Largest flexibility window accepted by the API"
    )

    # Security
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        description="Allowed CORS origins (comma-separated)",
    )

    @field_validator("default_bucket_days", "max_flex_days")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject non-positive window sizes."""
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def get_allowed_origins_list(self) -> List[str]:
        """Get list of allowed origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid re-reading environment variables.
    """
    return Settings()


# Global settings instance
settings = get_settings()

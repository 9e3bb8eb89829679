# =============================================================================
# HEALTH MONITOR BACKEND - CONFIGURATION
# =============================================================================
"""
Configuration management using Pydantic Settings.
Handles environment variables, badge windows, external APIs and encryption key.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite:///data/health_monitor.db",
        alias="DATABASE_URL"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security - AES-256 requires 32 bytes (256 bits)
    encryption_key: str = Field(
        default="health_monitor_default_key_32b!!",  # 32 chars, flagged at startup
        alias="ENCRYPTION_KEY"
    )

    # CORS - comma-separated list of extra origins
    cors_origins: str = Field(default="", alias="CORS_ORIGINS")

    # Air quality (OpenWeatherMap)
    air_quality_api_key: str = Field(default="demo_key", alias="AIR_QUALITY_API_KEY")
    air_quality_base_url: str = Field(
        default="http://api.openweathermap.org/data/2.5/air_pollution",
        alias="AIR_QUALITY_BASE_URL"
    )

    # History windows
    # Never below the 30-report wellness_master window
    badge_history_window: int = Field(default=30, ge=30, alias="BADGE_HISTORY_WINDOW")
    default_history_limit: int = Field(default=3, alias="DEFAULT_HISTORY_LIMIT")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def database_path(self) -> str:
        """Filesystem path extracted from the sqlite URL."""
        return self.database_url.replace("sqlite:///", "")

    @property
    def allowed_origins(self) -> list[str]:
        """
        Origins allowed by CORS.

        Local dev servers are always allowed; extra origins come from
        CORS_ORIGINS.
        """
        origins = [
            "http://localhost:3000",
            "http://localhost:5173",
        ]
        origins.extend(o.strip() for o in self.cors_origins.split(",") if o.strip())
        return origins


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance for dependency injection."""
    return Settings()

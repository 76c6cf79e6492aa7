"""
SiteCMS Backend: Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for a single-process deployment
    that keeps its data file and uploads next to the working directory.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path to data file>
    database_url: str = Field(
        default="sqlite+aiosqlite:///./database.db",
        description="Async SQLAlchemy URL of the embedded data file",
    )

    # ── File Storage ──────────────────────────────────────────────────────
    # Uploaded files are written here and served back from /uploads/<name>
    upload_dir: str = Field(default="./uploads")

    # Upper bound for a single blocking disk operation (write or listing)
    io_timeout_seconds: float = Field(default=30.0, gt=0, le=600)

    # ── Frontend Serving ──────────────────────────────────────────────────
    # development: API only (the asset bundler runs as its own process)
    # production:  the built frontend in static_dir is served at "/"
    app_env: str = Field(default="development")
    static_dir: str = Field(default="./dist")

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Ensures the mode flag is one of the two supported modes."""
        lower = v.lower()
        if lower not in {"development", "production"}:
            raise ValueError(f"Invalid app_env '{v}'. Must be 'development' or 'production'")
        return lower

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by the property below)
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # UPLOAD_DIR and upload_dir both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()

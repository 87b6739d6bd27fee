"""
Configuration management using Pydantic settings.
Handles the database URL, connection pool sizing and logging level from environment variables.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Data access layer settings with environment variable support."""

    # Application configuration; app_name is reported to the server as application_name
    app_name: str = "lightbnb"
    debug: bool = False
    log_level: str = "INFO"

    # Database configuration; built from the components below when unset
    database_url: Optional[str] = None

    postgres_db: str = "lightbnb"
    postgres_user: str = "vagrant"
    postgres_password: str = "123"
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    # Connection pool configuration
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600
    pool_pre_ping: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and validate the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def build_database_url(self):
        """Build database URL from components if not provided directly."""
        if not self.database_url:
            self.database_url = (
                f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        elif self.database_url.startswith("postgresql://"):
            # Ensure async driver is used
            self.database_url = self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the process lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()

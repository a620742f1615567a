"""Application configuration management using Pydantic Settings.

This module loads and validates environment variables using Pydantic Settings.
All configuration is loaded from environment variables or a .env file.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        database_url: Database connection string
        database_pool_size: Number of connections to maintain in pool
        database_max_overflow: Maximum overflow connections beyond pool_size
        environment: Application environment (development, staging, production)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        provisioning_catalog: Name of the catalog file used for new teams
        telemetry_disabled: Skip usage events entirely when True
        telemetry_host: PostHog instance that receives usage events
        telemetry_api_key: Project key sent with every usage event
        telemetry_distinct_id: Anonymous identifier for this installation
        allowed_origins: List of allowed CORS origins
    """

    # Database Configuration
    database_url: str = Field(
        description="Database connection string"
    )
    database_pool_size: int = Field(
        default=5,
        description="Number of database connections in pool"
    )
    database_max_overflow: int = Field(
        default=10,
        description="Maximum overflow connections beyond pool size"
    )

    # Application Configuration
    environment: str = Field(
        default="development",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    provisioning_catalog: str = Field(
        default="default",
        description="Catalog of default resources for new teams"
    )

    # Telemetry Configuration
    telemetry_disabled: bool = Field(
        default=False,
        description="Disable anonymous usage events"
    )
    telemetry_host: str = Field(
        default="https://eu.posthog.com",
        description="PostHog host for usage events"
    )
    telemetry_api_key: str = Field(
        default="",
        description="PostHog project API key; usage events are skipped when empty"
    )
    telemetry_distinct_id: str = Field(
        default="anonymous",
        description="Anonymous installation identifier"
    )

    # Security Configuration
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        description="Comma-separated list of allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed = {"development", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v_upper

    @field_validator("telemetry_host")
    @classmethod
    def validate_telemetry_host(cls, v: str) -> str:
        """Validate the PostHog host is an HTTP(S) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Telemetry host must start with http:// or https://")
        return v

    def get_allowed_origins_list(self) -> List[str]:
        """Parse allowed_origins string into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def telemetry_enabled(self) -> bool:
        """Check if usage events should be sent."""
        return not self.telemetry_disabled and bool(self.telemetry_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings singleton

    Note:
        Uses lru_cache to ensure settings are only loaded once
        and shared across the application.
    """
    return Settings()

"""
Application configuration using Pydantic settings.

This module contains all configuration settings for the application,
loaded from environment variables with sensible defaults.
"""

import os
import secrets
from typing import Optional

from pydantic import Field, SecretStr, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EXECUTION_MODES = ("development", "testing", "production")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden with environment variables.
    Secrets are kept as SecretStr so they never show up in reprs or logs.
    """

    # API Configuration
    PROJECT_NAME: str = "Weather Auth API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    PORT: int = 8000

    # Session tokens
    JWT_SECRET: SecretStr = Field(
        default_factory=lambda: SecretStr(secrets.token_urlsafe(32)),
        description="Secret for signing session tokens. MUST be set via JWT_SECRET in production!"
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 1 day

    # Database Configuration
    DATABASE_NAME: str = "weather"
    SQLALCHEMY_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("ENVIRONMENT", mode="before")
    @classmethod
    def check_environment(cls, v: str) -> str:
        """Normalize the execution mode and reject unknown ones."""
        mode = str(v).strip().lower()
        if mode not in EXECUTION_MODES:
            raise ValueError(f"ENVIRONMENT must be one of {', '.join(EXECUTION_MODES)}, got {v!r}")
        return mode

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        """Assemble database connection string from the storage identifier."""
        if isinstance(v, str) and v:
            return v

        # Check for DATABASE_URL (Render/Railway/Heroku style)
        database_url = os.getenv("DATABASE_URL")
        if database_url:
            if database_url.startswith("postgres://"):
                database_url = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
            elif database_url.startswith("postgresql://"):
                database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return database_url

        db_name = info.data.get("DATABASE_NAME") or "weather"
        return f"sqlite+aiosqlite:///{db_name}.db"

    # External providers
    WEATHER_API_KEY: SecretStr = SecretStr("")
    GEOLOCATION_API_URL: str = "https://ipapi.co"
    WEATHER_API_URL: str = "https://api.weatherapi.com/v1"
    GEOLOCATION_TIMEOUT: float = 5.0  # seconds
    WEATHER_TIMEOUT: float = 5.0  # seconds

    # Public address used in place of local callers outside production
    PLACEHOLDER_IP: str = "78.160.0.1"

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "5/minute"
    REGISTER_RATE_LIMIT: str = "10/hour"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def require_production_secrets(self) -> "Settings":
        """Refuse to start in production without explicitly configured secrets."""
        if self.ENVIRONMENT == "production":
            if "JWT_SECRET" not in self.model_fields_set or not self.JWT_SECRET.get_secret_value():
                raise ValueError("JWT_SECRET must be set in production")
            if not self.WEATHER_API_KEY.get_secret_value():
                raise ValueError("WEATHER_API_KEY must be set in production")
        return self

    @property
    def IS_PRODUCTION(self) -> bool:
        return self.ENVIRONMENT == "production"


# Create global settings instance
settings = Settings()

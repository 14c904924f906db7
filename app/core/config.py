# python
# app/core/config.py
"""Configuration settings for the Taskboard API.

Uses Pydantic BaseSettings for environment variable management.
"""
import secrets
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentEnum(str, Enum):
    development = "development"
    testing = "testing"
    staging = "staging"
    production = "production"


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormatEnum(str, Enum):
    simple = "simple"
    json = "json"


class Settings(BaseSettings):
    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Application Settings =====
    app_name: str = Field(default="Taskboard API", description="Application name")
    environment: EnvironmentEnum = Field(
        default=EnvironmentEnum.development, description="Environment type"
    )
    debug: bool = Field(default=False, description="Debug mode")
    version: str = Field(default="1.0.0", description="Application version")

    # ===== Security Settings =====
    secret_key: str = Field(
        default_factory=lambda: secrets.token_urlsafe(32),
        description="Secret key for JWT encoding",
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_days: int = Field(default=7, description="Credential lifetime in days")
    auth_cookie_name: str = Field(default="auth_token", description="Credential cookie name")
    bcrypt_rounds: int = Field(default=12, description="bcrypt work factor")

    # ===== Database Settings =====
    database_url: str | None = Field(default=None, description="Database connection URL")
    db_pool_size: int = Field(default=20, description="Database connection pool size")
    db_max_overflow: int = Field(default=0, description="Database max overflow connections")
    db_connect_retries: int = Field(default=5, description="Connection attempts at start-up")
    db_retry_max_wait: int = Field(default=10, description="Max seconds between connection attempts")

    # Test database URL
    test_database_url: str | None = Field(default=None, description="Test database URL")

    # ===== Route Guard =====
    protected_paths: str = Field(
        default="/dashboard", description="Path prefixes requiring a credential (comma-separated)"
    )
    auth_paths: str = Field(
        default="/login,/register",
        description="Path prefixes only for anonymous visitors (comma-separated)",
    )
    login_path: str = Field(default="/login", description="Where anonymous visitors are sent")
    dashboard_path: str = Field(default="/dashboard", description="Where signed-in visitors are sent")

    # ===== Aggregation =====
    activity_feed_default_limit: int = Field(default=20, description="Default activity feed size")
    activity_feed_max_limit: int = Field(default=100, description="Largest activity feed size")
    upcoming_deadline_days: int = Field(default=7, description="Window for upcoming deadlines")

    # ===== CORS Settings =====
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
        description="Allowed CORS origins (comma-separated)",
    )

    # ===== Monitoring & Logging =====
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO, description="Logging level")
    log_format: LogFormatEnum = Field(default=LogFormatEnum.simple, description="Log format")

    # ===== Server Settings =====
    host: str = Field(default="127.0.0.1", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")

    @staticmethod
    def _split(value: str) -> list[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return self._split(self.allowed_origins)

    @property
    def protected_paths_list(self) -> list[str]:
        return self._split(self.protected_paths)

    @property
    def auth_paths_list(self) -> list[str]:
        return self._split(self.auth_paths)

    # ===== Computed Properties =====
    @property
    def is_development(self) -> bool:
        return self.environment == EnvironmentEnum.development

    @property
    def is_production(self) -> bool:
        return self.environment == EnvironmentEnum.production

    @property
    def is_testing(self) -> bool:
        return self.environment == EnvironmentEnum.testing

    @property
    def access_token_max_age(self) -> int:
        """Credential lifetime in seconds, shared by the token and its cookie."""
        return self.access_token_expire_days * 24 * 60 * 60

    @property
    def effective_database_url(self) -> str | None:
        if self.is_testing and self.test_database_url:
            return self.test_database_url
        return self.database_url

    # ===== Validation Methods =====
    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        if v and isinstance(v, str):
            lv = v.lower()
            if lv in ["dev", "develop"]:
                return "development"
            if lv in ["prod"]:
                return "production"
            if lv in ["test"]:
                return "testing"
            return lv
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        if v < 4 or v > 16:
            raise ValueError("bcrypt rounds must be between 4 and 16")
        return v

    @field_validator("access_token_expire_days")
    @classmethod
    def validate_token_lifetime(cls, v):
        if v < 1:
            raise ValueError("Credential lifetime must be at least one day")
        return v

    @field_validator("activity_feed_default_limit", "activity_feed_max_limit")
    @classmethod
    def validate_feed_limit(cls, v):
        if v < 1:
            raise ValueError("Activity feed limits must be positive")
        return v


settings = Settings()


class ConfigValidator:
    @staticmethod
    def validate_required_settings():
        errors = []
        if not settings.effective_database_url:
            errors.append("DATABASE_URL is required")
        if settings.is_production and "secret_key" not in settings.model_fields_set:
            errors.append("SECRET_KEY must be set in production")
        if settings.is_production and settings.debug:
            errors.append("DEBUG must be disabled in production")
        if settings.activity_feed_default_limit > settings.activity_feed_max_limit:
            errors.append("ACTIVITY_FEED_DEFAULT_LIMIT exceeds ACTIVITY_FEED_MAX_LIMIT")
        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

    @staticmethod
    def get_feature_status() -> dict:
        return {
            "secure_cookies": settings.is_production,
            "route_guard": bool(settings.protected_paths_list),
            "log_format": settings.log_format.value,
            "environment": settings.environment.value,
        }


__all__ = [
    "settings",
    "Settings",
    "ConfigValidator",
    "EnvironmentEnum",
    "LogLevelEnum",
    "LogFormatEnum",
]

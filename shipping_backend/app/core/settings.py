"""
Application settings with validation using pydantic-settings.
Validates all required environment variables at startup.
"""
import socket
from decimal import Decimal
from urllib.parse import quote_plus
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _resolve_db_host(host: str) -> str:
    """Resolve DB host to IP so asyncpg avoids getaddrinfo in asyncio context (e.g. in Docker)."""
    if not host or host in ("localhost", "127.0.0.1"):
        return host
    try:
        return socket.gethostbyname(host)
    except socket.gaierror:
        return host


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database configuration
    DB_USER: str = Field(..., description="PostgreSQL username")
    DB_PASSWORD: str = Field(..., description="PostgreSQL password")
    DB_NAME: str = Field(..., description="PostgreSQL database name")
    DB_HOST: str = Field(default="localhost", description="PostgreSQL host")
    DB_PORT: str = Field(default="5432", description="PostgreSQL port")

    # Database pool configuration
    DB_POOL_SIZE: int = Field(default=20, description="Database connection pool size")
    DB_MAX_OVERFLOW: int = Field(default=40, description="Database max overflow connections")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database connection recycle time (seconds)")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Seconds to wait for a pooled connection")

    # CORS configuration
    ALLOWED_ORIGINS: str = Field(default="", description="Comma-separated list of allowed CORS origins")

    # Environment
    ENVIRONMENT: str = Field(default="production", description="Environment: development or production")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Shipping fallbacks (estimate mode only)
    DEFAULT_SHIPPING_COST: Decimal = Field(default=Decimal("20.00"), description="Cost quoted when no rate applies")
    DEFAULT_ZONE_LABEL: str = Field(default="Envío nacional", description="Zone label for districts without a zone")
    DEFAULT_ESTIMATED_DAYS: str = Field(default="5-7 días", description="Estimate for districts without a zone")
    ZONE_DEFAULT_ESTIMATED_DAYS: str = Field(default="3-5 días", description="Estimate for zones without active rates")
    ESTIMATE_FALLBACK_ON_FAILURE: bool = Field(
        default=True,
        description="Quote the system default instead of failing when the store is unavailable",
    )

    # Input validation
    DISTRICT_CODE_PATTERN: str = Field(default=r"^\d{6}$", description="Regex a district code must match (UBIGEO)")

    # Public API throttling
    PUBLIC_RATE_LIMIT: str = Field(default="120/minute", description="slowapi limit for public shipping endpoints")

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        if v not in ("development", "production"):
            raise ValueError("ENVIRONMENT must be 'development' or 'production'")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("DEFAULT_SHIPPING_COST")
    @classmethod
    def validate_default_cost(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("DEFAULT_SHIPPING_COST must not be negative")
        return v

    def validate_production_settings(self) -> list[str]:
        """
        Validate that all required settings are present in production.
        Returns list of missing settings.
        """
        errors = []

        if self.ENVIRONMENT == "production":
            if not self.ALLOWED_ORIGINS:
                errors.append("ALLOWED_ORIGINS is required in production")
            if not self.DB_PASSWORD:
                errors.append("DB_PASSWORD is required in production")

        return errors

    @property
    def db_url(self) -> str:
        """Get database URL. Resolve host to IP so connections work in Docker/async context."""
        host = _resolve_db_host(self.DB_HOST)
        password = quote_plus(self.DB_PASSWORD)
        return f"postgresql+asyncpg://{self.DB_USER}:{password}@{host}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == "production"

    @property
    def allowed_origins_list(self) -> list[str]:
        """Get list of allowed CORS origins."""
        if not self.ALLOWED_ORIGINS:
            return []
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
        errors = _settings.validate_production_settings()
        if errors:
            error_msg = "Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            raise ValueError(error_msg)
    return _settings

"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_LOCALES: tuple[str, ...] = ("en", "ja", "zh")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./identity.db",
        description="SQLAlchemy async connection string (postgresql+asyncpg or sqlite+aiosqlite)",
    )
    database_pool_timeout: float = Field(
        default=30.0,
        description="Seconds to wait for a pooled connection before giving up",
        gt=0,
    )

    # JWT
    jwt_secret_key: str = Field(min_length=32, description="Secret key for signing JWTs (minimum 32 characters)")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_issuer: str = Field(default="https://identity-api.local/issuer", description="Issuer claim for tokens")
    jwt_token_expire_hours: int = Field(
        default=24,
        description="Bearer token lifetime in hours",
        gt=0,
    )

    # Password hashing
    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt work factor (log2 of the iteration count)",
        ge=4,
        le=31,
    )

    # Localization
    default_locale: str = Field(
        default="en",
        description="Locale used when the request does not select a supported one",
    )

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SUPPORTED_LOCALES:
            msg = f"default_locale must be one of {', '.join(SUPPORTED_LOCALES)}"
            raise ValueError(msg)
        return v

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_prefix: str = Field(
        default="",
        description="Optional URL prefix mounted in front of every route (e.g. /api)",
    )
    trusted_proxy_headers: str = Field(
        default="X-Forwarded-For,X-Real-IP",
        description="Comma-separated list of HTTP headers to check for real client IP, in priority order",
    )

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            msg = "api_prefix must start with '/'"
            raise ValueError(msg)
        return v

    @property
    def trusted_proxy_header_list(self) -> list[str]:
        """Parse trusted proxy headers string into a list."""
        if not self.trusted_proxy_headers.strip():
            return []
        return [h.strip() for h in self.trusted_proxy_headers.split(",") if h.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]

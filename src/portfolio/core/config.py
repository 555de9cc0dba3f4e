from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Portfolio API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False
    csp: str = (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "img-src 'self' data: https:; "
        "frame-ancestors 'none'"
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./portfolio.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False
    run_migrations_on_startup: bool = False

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rate limiting (slowapi limit strings)
    rate_limit_default: str = "100/15minutes"
    rate_limit_auth: str = "5/15minutes"

    # Static files
    uploads_dir: str = "uploads"

    # Metrics
    metrics_api_key: str | None = None

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, credentials are allowed on CORS requests."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"

    @property
    def access_token_expires_in(self) -> str:
        """Human readable token lifetime, e.g. ``24h`` or ``30m``."""
        minutes = self.access_token_expire_minutes
        if minutes % 60 == 0:
            return f"{minutes // 60}h"
        return f"{minutes}m"


@lru_cache
def get_settings() -> Settings:
    return Settings()

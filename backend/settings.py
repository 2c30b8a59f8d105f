"""
Environment-driven configuration for the strength progress API.

Every knob is a typed field on Settings; values come from environment
variables (case-insensitive) or a local .env file. Routers receive the
cached instance through api.deps.get_settings, tests construct their own
with `Settings(_env_file=None, ...)`.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "staging", "production", "test")


class Settings(BaseSettings):
    """Typed configuration for the record engine, timeline cache and rest timer."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Runtime
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description=f"One of {', '.join(ENVIRONMENTS)}",
    )
    log_level: str = Field(default="INFO", description="Root logger level")
    cors_allowed_origins: str = Field(
        default="",
        description="Extra CORS origins, comma separated",
    )

    # -------------------------------------------------------------------------
    # Progress analytics
    # -------------------------------------------------------------------------
    timeline_cache_ttl_seconds: float = Field(
        default=300,
        gt=0,
        description="Lifetime of cached history, breakthroughs and PR timeline",
    )
    stale_record_days: int = Field(
        default=14,
        ge=1,
        description="Records older than this are flagged as stale",
    )

    # -------------------------------------------------------------------------
    # Rest timer
    # -------------------------------------------------------------------------
    default_rest_seconds: int = Field(
        default=90,
        ge=30,
        le=300,
        description="Rest suggestion for exercises without a known rest profile",
    )
    auto_start_rest_timer: bool = Field(
        default=False,
        description="Start the countdown as soon as rest is offered",
    )

    # -------------------------------------------------------------------------
    # Error tracking
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(default=None, description="Sentry DSN; unset disables Sentry")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        env = v.lower()
        if env not in ENVIRONMENTS:
            raise ValueError(f"Unknown environment '{v}', expected one of {ENVIRONMENTS}")
        return env

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        # getLevelName returns a string for names it does not know
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    Call get_settings.cache_clear() after changing the environment in tests.
    """
    return Settings()

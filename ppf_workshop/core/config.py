"""Configuration module for the PPF workshop application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from ppf_workshop.core.exceptions import ConfigurationError

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None or not value.strip():
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    SUPABASE_URL: str | None
    SUPABASE_ANON_KEY: str | None
    AUTH_TIMEOUT_SECONDS: float
    AUTH_CACHE_TTL_SECONDS: int
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    CORS_ORIGINS: tuple[str, ...]
    LOG_LEVEL: str
    LOG_FILE: str
    SEED_DEFAULTS: bool

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def identity_provider_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME=os.getenv("APP_NAME", "PPF Workshop"),
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./ppf_workshop.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        SUPABASE_URL=os.getenv("SUPABASE_URL") or os.getenv("VITE_SUPABASE_URL"),
        SUPABASE_ANON_KEY=os.getenv("SUPABASE_ANON_KEY") or os.getenv("VITE_SUPABASE_ANON_KEY"),
        AUTH_TIMEOUT_SECONDS=float(os.getenv("AUTH_TIMEOUT_SECONDS", "5")),
        AUTH_CACHE_TTL_SECONDS=int(os.getenv("AUTH_CACHE_TTL_SECONDS", "0")),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=int(os.getenv("API_PORT", "8000")),
        API_PREFIX=os.getenv("API_PREFIX", "/api"),
        CORS_ORIGINS=_as_list(os.getenv("CORS_ORIGINS"), default=("*",)),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
        SEED_DEFAULTS=_as_bool(os.getenv("SEED_DEFAULTS"), default=True),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.AUTH_TIMEOUT_SECONDS <= 0:
        raise ConfigurationError("AUTH_TIMEOUT_SECONDS must be > 0.")
    if config.AUTH_CACHE_TTL_SECONDS < 0:
        raise ConfigurationError("AUTH_CACHE_TTL_SECONDS must be >= 0.")
    if config.API_PREFIX and not config.API_PREFIX.startswith("/"):
        raise ConfigurationError("API_PREFIX must start with '/'.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.SUPABASE_URL and urlparse(config.SUPABASE_URL).scheme not in {"http", "https"}:
        raise ConfigurationError("SUPABASE_URL must be an http(s) URL.")
    if config.is_production and not config.identity_provider_configured:
        raise ConfigurationError("Production requires SUPABASE_URL and SUPABASE_ANON_KEY.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)

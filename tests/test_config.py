from __future__ import annotations

import pytest

from ppf_workshop.core.config import get_config
from ppf_workshop.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    for name in ("DATABASE_URL", "SUPABASE_URL", "SUPABASE_ANON_KEY", "VITE_SUPABASE_URL",
                 "VITE_SUPABASE_ANON_KEY", "API_PREFIX", "LOG_LEVEL", "CORS_ORIGINS", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_development_defaults():
    cfg = get_config("development")
    assert cfg.DEBUG is True
    assert cfg.API_PREFIX == "/api"
    assert cfg.CORS_ORIGINS == ("*",)
    assert cfg.DATABASE_URL.startswith("sqlite")
    assert cfg.identity_provider_configured is False


def test_vite_variables_are_accepted(monkeypatch):
    monkeypatch.setenv("VITE_SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("VITE_SUPABASE_ANON_KEY", "anon")
    assert get_config("development").identity_provider_configured is True


def test_cors_origins_are_split(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.test, https://b.test")
    assert get_config("development").CORS_ORIGINS == ("https://a.test", "https://b.test")


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("DATABASE_URL", "mysql://root@localhost/ppf"),
        ("API_PREFIX", "api"),
        ("LOG_LEVEL", "chatty"),
        ("SUPABASE_URL", "ftp://example"),
    ],
)
def test_invalid_settings_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        get_config("development")


def test_production_requires_identity_provider():
    with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
        get_config("production")

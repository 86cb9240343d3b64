"""Tests for environment-sourced settings."""

import pytest

from shopbot.core.config import load_settings
from shopbot.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BOT_TOKEN", "STORE_URL", "CACHE_FILE", "CACHE_TTL_MINUTES", "LOG_LEVEL",
                 "REFRESH_INTERVAL_MINUTES", "FETCH_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_missing_bot_token_is_config_error():
    with pytest.raises(ConfigError) as exc_info:
        load_settings(_env_file=None)

    assert "BOT_TOKEN" in str(exc_info.value)


def test_blank_bot_token_is_config_error(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "   ")

    with pytest.raises(ConfigError):
        load_settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")

    settings = load_settings(_env_file=None)

    assert settings.FETCH_TIMEOUT == 15.0
    assert settings.CACHE_FILE == "data/catalog_cache.json"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.refresh_interval_minutes == settings.CACHE_TTL_MINUTES


def test_env_values(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("STORE_URL", "https://shop.example.com/")
    monkeypatch.setenv("CACHE_TTL_MINUTES", "15")
    monkeypatch.setenv("REFRESH_INTERVAL_MINUTES", "60")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings(_env_file=None)

    assert settings.STORE_URL == "https://shop.example.com/"
    assert settings.CACHE_TTL_MINUTES == 15
    assert settings.refresh_interval_minutes == 60
    assert settings.LOG_LEVEL == "DEBUG"


def test_non_positive_ttl_rejected(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("CACHE_TTL_MINUTES", "0")

    with pytest.raises(ConfigError):
        load_settings(_env_file=None)

"""Unit tests for configuration helpers."""

from __future__ import annotations

import pytest

from studiosite.core.config import (
    DEV_JWT_SECRET_KEY,
    DEV_SECRET_KEY,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    ensure_production_secrets,
    get_config,
)


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("Yes", True), ("off", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("FEATURE_X", raw)
    assert env_bool("FEATURE_X") is expected


def test_env_int_ignores_junk(monkeypatch):
    monkeypatch.setenv("WORKERS", "many")
    assert env_int("WORKERS", 4) == 4
    monkeypatch.setenv("WORKERS", " 8 ")
    assert env_int("WORKERS", 4) == 8


@pytest.mark.parametrize(
    ("name", "cls"),
    [("production", ProductionConfig), ("TESTING", TestingConfig), ("unknown", DevelopmentConfig)],
)
def test_get_config(monkeypatch, name, cls):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is cls


def test_production_refuses_placeholder_secrets():
    with pytest.raises(RuntimeError, match="JWT_SECRET_KEY"):
        ensure_production_secrets({"SECRET_KEY": "real", "JWT_SECRET_KEY": DEV_JWT_SECRET_KEY})
    with pytest.raises(RuntimeError, match="SECRET_KEY"):
        ensure_production_secrets({"SECRET_KEY": DEV_SECRET_KEY, "JWT_SECRET_KEY": "real"})
    ensure_production_secrets({"SECRET_KEY": "real", "JWT_SECRET_KEY": "also-real"})

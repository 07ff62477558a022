"""Tests for environment-driven configuration."""

from __future__ import annotations

from datetime import datetime

import pytest

from streakchain.config import BaseConfig, TestConfig


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in (
        "STREAKCHAIN_DEV_MODE",
        "STREAKCHAIN_TIMEZONE",
        "STREAKCHAIN_WINDOW_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STREAKCHAIN_DATA_DIR", str(tmp_path / "instance"))
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == (tmp_path / "instance").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.DEV_MODE is True
    assert config.TIMEZONE is None
    assert config.WINDOW_LENGTH == 7
    assert config.timezone() is None


@pytest.mark.parametrize("raw, expected", [("1", True), ("yes", True), ("off", False), ("0", False)])
def test_dev_mode_flag(clean_env, raw, expected):
    clean_env.setenv("STREAKCHAIN_DEV_MODE", raw)
    assert BaseConfig().DEV_MODE is expected


def test_window_length_from_env(clean_env):
    clean_env.setenv("STREAKCHAIN_WINDOW_LENGTH", "14")
    assert BaseConfig().WINDOW_LENGTH == 14


@pytest.mark.parametrize("raw", ["seven", "-1"])
def test_invalid_window_length(clean_env, raw):
    clean_env.setenv("STREAKCHAIN_WINDOW_LENGTH", raw)
    with pytest.raises(ValueError):
        BaseConfig()


def test_configured_timezone(clean_env):
    clean_env.setenv("STREAKCHAIN_TIMEZONE", "America/Los_Angeles")
    config = BaseConfig()

    assert str(config.timezone()) == "America/Los_Angeles"
    assert config.now().tzinfo is config.timezone()


def test_unknown_timezone_raises(clean_env):
    clean_env.setenv("STREAKCHAIN_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(ValueError):
        BaseConfig().timezone()


def test_now_without_timezone_is_aware(clean_env):
    now = BaseConfig().now()
    assert isinstance(now, datetime)
    assert now.tzinfo is not None


def test_test_config_uses_given_dir(clean_env, tmp_path):
    config = TestConfig(tmp_path / "explicit")

    assert config.DATA_DIR == tmp_path / "explicit"
    assert config.DATA_DIR.is_dir()
    assert config.DEV_MODE is True
    assert config.TESTING is True

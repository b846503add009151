"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from trak.config import BaseConfig, DevConfig, TestConfig


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    for name in (
        "TRAK_SECRET_KEY",
        "TRAK_DEV_MODE",
        "TRAK_DATABASE_URL",
        "TRAK_ACTIVITY_WINDOW_DAYS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TRAK_DATA_DIR", str(tmp_path / "data"))


def test_defaults(tmp_path):
    """Without overrides the database is a SQLite file inside the data dir."""
    config = BaseConfig()
    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'trak.db'}"
    assert config.ACTIVITY_WINDOW_DAYS == 364
    assert config.DEV_MODE is True
    assert config.TESTING is False


def test_sqlite_engine_options():
    assert BaseConfig().sqlalchemy_engine_options() == {
        "connect_args": {"check_same_thread": False}
    }


def test_non_sqlite_engine_options(monkeypatch):
    monkeypatch.setenv("TRAK_DATABASE_URL", "postgresql://localhost/trak")
    assert BaseConfig().sqlalchemy_engine_options() == {"connect_args": {}}


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TRAK_ACTIVITY_WINDOW_DAYS", "30")
    monkeypatch.setenv("TRAK_SECRET_KEY", "s3cret")
    monkeypatch.setenv("TRAK_DEV_MODE", "off")
    config = BaseConfig()
    assert config.ACTIVITY_WINDOW_DAYS == 30
    assert config.SECRET_KEY == "s3cret"
    assert config.DEV_MODE is False


def test_placeholder_secret_rejected_outside_dev_mode(monkeypatch):
    monkeypatch.setenv("TRAK_DEV_MODE", "false")
    with pytest.raises(ValueError, match="TRAK_SECRET_KEY"):
        BaseConfig()


@pytest.mark.parametrize("value", ["-1", "soon"])
def test_invalid_activity_window(monkeypatch, value):
    monkeypatch.setenv("TRAK_ACTIVITY_WINDOW_DAYS", value)
    with pytest.raises(ValueError, match="TRAK_ACTIVITY_WINDOW_DAYS"):
        BaseConfig()


def test_environment_classes():
    assert DevConfig.DEBUG is True
    config = TestConfig(database_url="sqlite://")
    assert config.TESTING is True
    assert config.DATABASE_URL == "sqlite://"

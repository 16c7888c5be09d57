from pathlib import Path

import pytest
from pydantic import ValidationError

from pizzaland.config.settings import Settings


def test_defaults_point_at_local_sqlite_file(monkeypatch):
    monkeypatch.delenv("DB_URL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.DATABASE_URL == "sqlite+aiosqlite:///storage/pizzaland.db"
    assert settings.is_sqlite
    assert settings.HTTP_PORT == 44044
    assert (settings.LIST_DEFAULT_LIMIT, settings.LIST_MAX_LIMIT) == (12, 100)


def test_testing_storage_path_wins_when_testing(tmp_path):
    settings = Settings(_env_file=None, TESTING=True, TEST_STORAGE_PATH=tmp_path / "t.db")

    assert settings.DATABASE_URL == f"sqlite+aiosqlite:///{tmp_path / 't.db'}"


def test_explicit_db_url():
    settings = Settings(_env_file=None, DB_URL="postgresql+psycopg://pizza@localhost/pizzaland")

    assert settings.DATABASE_URL == "postgresql+psycopg://pizza@localhost/pizzaland"
    assert not settings.is_sqlite


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")
    monkeypatch.setenv("ENV", "Production")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")

    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"
    assert settings.ENV == "production"
    assert settings.REQUEST_TIMEOUT_SECONDS == 2.5


@pytest.mark.parametrize("field", ["LIST_DEFAULT_LIMIT", "LIST_MAX_LIMIT"])
def test_page_limits_must_be_positive(field):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})


def test_storage_path_is_a_path():
    assert isinstance(Settings(_env_file=None, STORAGE_PATH="data/catalog.db").STORAGE_PATH, Path)

"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from notekeep.core.types import RepositoryConfiguration
from notekeep.storage.memory_repository import InMemoryRepository
from notekeep.storage.sqlite_repository import SQLiteRepository


@pytest.fixture
def db_path(tmp_path):
    """Path for a throwaway SQLite database."""
    return tmp_path / "notekeep.db"


@pytest.fixture
def quiet_config():
    """Repository configuration with tracing disabled."""
    return RepositoryConfiguration(enable_logging=False, operation_timeout=5.0)


@pytest.fixture
def sqlite_repo(db_path, quiet_config):
    """SQLiteRepository backed by a temp database."""
    repo = SQLiteRepository(db_path=db_path, configuration=quiet_config)
    yield repo
    repo.close()


@pytest.fixture
def memory_repo():
    """Empty InMemoryRepository."""
    return InMemoryRepository()


@pytest.fixture(params=["sqlite", "memory"])
def repository(request, db_path, quiet_config):
    """Each repository implementation in turn, for contract tests."""
    if request.param == "sqlite":
        repo = SQLiteRepository(db_path=db_path, configuration=quiet_config)
        yield repo
        repo.close()
    else:
        yield InMemoryRepository(configuration=quiet_config)


@pytest.fixture
def mock_env(monkeypatch, tmp_path):
    """Set up environment variables pointing at a temp data directory."""
    env_vars = {
        "NOTEKEEP_DATA_DIR": str(tmp_path / "data"),
        "NOTEKEEP_ENV": "testing",
        "LOG_LEVEL": "DEBUG",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars

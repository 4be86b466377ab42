"""Dependency container wiring a repository for the current environment.

Every front end should obtain its repository through get_container() so
the environment presets stay consistent.
"""

import logging
from enum import StrEnum
from pathlib import Path
from threading import Lock

from notekeep.core.config import (
    DATABASE_PATH,
    NOTEKEEP_ENV,
    REPOSITORY_LOGGING,
    REPOSITORY_TIMEOUT,
)
from notekeep.core.loading import LoadingManager
from notekeep.core.repository import DataRepository
from notekeep.core.types import RepositoryConfiguration

logger = logging.getLogger(__name__)


class AppEnvironment(StrEnum):
    DEBUG = "debug"
    TESTING = "testing"
    PRODUCTION = "production"

    @property
    def enable_logging(self) -> bool:
        return self is not AppEnvironment.PRODUCTION

    @property
    def repository_timeout(self) -> float:
        return 10.0 if self is AppEnvironment.PRODUCTION else 30.0


class DependencyContainer:
    """Holds the repository and loading manager shared by a front end."""

    def __init__(
        self,
        repository: DataRepository,
        environment: AppEnvironment = AppEnvironment.DEBUG,
    ):
        self.repository = repository
        self.environment = environment
        self.loading = LoadingManager()

        if environment.enable_logging:
            logger.info("Container initialized with %s environment", environment)

    @property
    def repository_configuration(self) -> RepositoryConfiguration:
        """Configuration implied by the environment, before env overrides."""
        return RepositoryConfiguration(
            enable_logging=self.environment.enable_logging,
            operation_timeout=self.environment.repository_timeout,
        )

    @classmethod
    def production(cls, db_path: Path | str | None = None) -> "DependencyContainer":
        return cls._with_sqlite(AppEnvironment.PRODUCTION, db_path)

    @classmethod
    def debug(cls, db_path: Path | str | None = None) -> "DependencyContainer":
        return cls._with_sqlite(AppEnvironment.DEBUG, db_path)

    @classmethod
    def testing(cls) -> "DependencyContainer":
        from notekeep.storage.memory_repository import InMemoryRepository

        return cls(
            repository=InMemoryRepository(
                configuration=_configuration_for(AppEnvironment.TESTING)
            ),
            environment=AppEnvironment.TESTING,
        )

    @classmethod
    def _with_sqlite(
        cls, environment: AppEnvironment, db_path: Path | str | None
    ) -> "DependencyContainer":
        from notekeep.storage.sqlite_repository import SQLiteRepository

        repository = SQLiteRepository(
            db_path=Path(db_path) if db_path else DATABASE_PATH,
            configuration=_configuration_for(environment),
        )
        return cls(repository=repository, environment=environment)

    @classmethod
    def for_environment(
        cls, environment: AppEnvironment | str, db_path: Path | str | None = None
    ) -> "DependencyContainer":
        """Build the container matching an environment name."""
        env = AppEnvironment(environment)
        if env is AppEnvironment.TESTING:
            return cls.testing()
        if env is AppEnvironment.PRODUCTION:
            return cls.production(db_path)
        return cls.debug(db_path)

    def close(self) -> None:
        close = getattr(self.repository, "close", None)
        if close is not None:
            close()


def _configuration_for(environment: AppEnvironment) -> RepositoryConfiguration:
    """Environment preset with NOTEKEEP_REPOSITORY_* overrides applied."""
    return RepositoryConfiguration(
        enable_logging=(
            environment.enable_logging
            if REPOSITORY_LOGGING is None
            else REPOSITORY_LOGGING
        ),
        operation_timeout=(
            environment.repository_timeout
            if REPOSITORY_TIMEOUT is None
            else REPOSITORY_TIMEOUT
        ),
    )


# Default instance
_container: DependencyContainer | None = None
_container_lock = Lock()


def get_container() -> DependencyContainer:
    """Get or create the default container for NOTEKEEP_ENV."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = DependencyContainer.for_environment(NOTEKEEP_ENV)
    return _container


def set_container(container: DependencyContainer | None) -> None:
    """Set the default container instance (for testing)."""
    global _container
    _container = container

"""Notekeep core library - entities, errors and the repository contract."""

from typing import TYPE_CHECKING

from notekeep.core.errors import (
    DeleteFailedError,
    ErrorKind,
    InvalidDataError,
    NotFoundError,
    RepositoryError,
    SaveFailedError,
    UnknownRepositoryError,
)
from notekeep.core.repository import DataRepository
from notekeep.core.types import (
    Category,
    DeleteAllResult,
    Note,
    RepositoryConfiguration,
)

if TYPE_CHECKING:
    from notekeep.core.container import DependencyContainer, get_container

__all__ = [
    # Contract
    "DataRepository",
    # Types
    "Category",
    "DeleteAllResult",
    "Note",
    "RepositoryConfiguration",
    # Errors
    "DeleteFailedError",
    "ErrorKind",
    "InvalidDataError",
    "NotFoundError",
    "RepositoryError",
    "SaveFailedError",
    "UnknownRepositoryError",
    # Wiring
    "DependencyContainer",
    "get_container",
]


def __getattr__(name: str):
    if name == "DependencyContainer":
        from notekeep.core.container import DependencyContainer

        return DependencyContainer
    if name == "get_container":
        from notekeep.core.container import get_container

        return get_container
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

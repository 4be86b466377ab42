"""Shared types and data structures for Notekeep."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


def _new_id() -> str:
    return str(uuid4())


class Category(BaseModel, frozen=True):
    """A named grouping for notes."""

    id: str = Field(default_factory=_new_id)
    name: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def new(cls, name: str) -> "Category":
        """Create a category with a fresh id and matching timestamps."""
        now = datetime.now()
        return cls(name=name, created_at=now, updated_at=now)

    def renamed(self, name: str) -> "Category":
        """Return a copy with a new name and a refreshed updated_at."""
        return self.model_copy(update={"name": name, "updated_at": datetime.now()})


class Note(BaseModel, frozen=True):
    """A titled text entry, optionally filed under a category."""

    id: str = Field(default_factory=_new_id)
    title: str
    content: str = ""
    category_id: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def new(
        cls, title: str, content: str = "", category_id: str | None = None
    ) -> "Note":
        """Create a note with a fresh id and matching timestamps."""
        now = datetime.now()
        return cls(
            title=title,
            content=content,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )

    def revised(self, title: str, content: str, category_id: str | None) -> "Note":
        """Return a copy with title, content and category replaced together."""
        return self.model_copy(
            update={
                "title": title,
                "content": content,
                "category_id": category_id,
                "updated_at": datetime.now(),
            }
        )


class RepositoryConfiguration(BaseModel, frozen=True):
    """Options recognised by repository implementations.

    operation_timeout is advisory. The SQLite repository uses it as the
    lock-wait limit when opening its connection; no operation is cancelled
    when it elapses.
    """

    enable_logging: bool = True
    operation_timeout: float = 10.0

    @field_validator("operation_timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("operation_timeout must be positive")
        return value

    @classmethod
    def default(cls) -> "RepositoryConfiguration":
        return cls(enable_logging=True, operation_timeout=10.0)

    @classmethod
    def debug(cls) -> "RepositoryConfiguration":
        return cls(enable_logging=True, operation_timeout=30.0)

    @classmethod
    def production(cls) -> "RepositoryConfiguration":
        return cls(enable_logging=False, operation_timeout=10.0)


@dataclass(frozen=True)
class DeleteAllResult:
    """Counts returned by a full wipe of stored data."""

    categories_deleted: int
    notes_deleted: int


__all__ = [
    "Category",
    "DeleteAllResult",
    "Note",
    "RepositoryConfiguration",
]

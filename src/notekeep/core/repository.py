"""Data-access contract shared by every repository implementation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from notekeep.core.errors import InvalidDataError
from notekeep.core.types import Category, DeleteAllResult, Note

CATEGORY_NAME_REQUIRED = "Category name cannot be empty"
NOTE_TITLE_REQUIRED = "Note title cannot be empty"


@runtime_checkable
class DataRepository(Protocol):
    """Mediates all persistence of categories and notes.

    Every mutating call has been written to storage by the time it returns.
    Failures raise a RepositoryError subclass and leave stored data unchanged.
    """

    # Categories

    async def fetch_categories(self) -> list[Category]:
        """All categories, newest created first."""
        ...

    async def create_category(self, name: str) -> Category: ...

    async def update_category(self, category: Category, new_name: str) -> Category:
        """Rename a category and return the stored value."""
        ...

    async def delete_category(self, category: Category) -> None:
        """Delete a category together with every note filed under it."""
        ...

    async def delete_all_categories(self) -> int:
        """Cascade-delete every category; return how many categories went."""
        ...

    # Notes

    async def fetch_notes(self) -> list[Note]:
        """All notes, most recently updated first."""
        ...

    async def create_note(
        self, title: str, content: str = "", category: Category | None = None
    ) -> Note: ...

    async def update_note(
        self,
        note: Note,
        title: str,
        content: str,
        category: Category | None,
    ) -> Note: ...

    async def delete_note(self, note: Note) -> None: ...

    async def delete_all_notes(self) -> int: ...

    # Bulk

    async def delete_all_data(self) -> DeleteAllResult: ...

    # Search

    async def search_notes(self, text: str) -> list[Note]:
        """Notes whose title, content or category name contains text."""
        ...

    async def fetch_notes_for_category(self, category: Category) -> list[Note]: ...


def clean_required(value: str, message: str) -> str:
    """Trim a required field, raising InvalidDataError if nothing is left."""
    cleaned = value.strip()
    if not cleaned:
        raise InvalidDataError(message)
    return cleaned


def is_blank(text: str) -> bool:
    return not text.strip()


def matches_search(note: Note, category_name: str | None, text: str) -> bool:
    """Case-insensitive containment against title, content and category name."""
    needle = text.casefold()
    if needle in note.title.casefold() or needle in note.content.casefold():
        return True
    return category_name is not None and needle in category_name.casefold()

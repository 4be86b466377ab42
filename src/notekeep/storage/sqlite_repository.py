"""SQLite-backed implementation of the data repository."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from typing import Generator

from notekeep.core.errors import (
    DeleteFailedError,
    NotFoundError,
    SaveFailedError,
    UnknownRepositoryError,
)
from notekeep.core.repository import (
    CATEGORY_NAME_REQUIRED,
    NOTE_TITLE_REQUIRED,
    clean_required,
    is_blank,
    matches_search,
)
from notekeep.core.types import (
    Category,
    DeleteAllResult,
    Note,
    RepositoryConfiguration,
)
from notekeep.storage.db import connect, init_db
from notekeep.storage.repos import CategoriesRepo, NotesRepo

logger = logging.getLogger(__name__)


class SQLiteRepository:
    """Persists categories and notes in a local SQLite database.

    Each operation runs in its own transaction on a shared connection: it
    commits before returning, or rolls back and raises a RepositoryError.
    Cascading deletes (notes first, then the category) happen inside that
    single transaction, so readers never observe a half-finished cascade.
    """

    def __init__(
        self,
        db_path: Path | str | None = None,
        configuration: RepositoryConfiguration | None = None,
    ):
        """
        Initialize the repository and apply pending migrations.

        Args:
            db_path: Path to SQLite database (defaults to DATABASE_PATH)
            configuration: Logging and timeout options
        """
        self.configuration = configuration or RepositoryConfiguration.default()
        try:
            self.db_path = init_db(db_path)
        except sqlite3.Error as exc:
            raise UnknownRepositoryError(
                f"Could not open database {db_path}: {exc}"
            ) from exc
        self._connection: sqlite3.Connection | None = None
        self._connection_lock = Lock()

    @contextmanager
    def _transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield the shared connection, committing or rolling back on exit."""
        with self._connection_lock:
            if self._connection is None:
                self._connection = connect(
                    self.db_path, timeout=self.configuration.operation_timeout
                )
            try:
                yield self._connection
                self._connection.commit()
            except Exception:
                self._connection.rollback()
                raise

    def close(self) -> None:
        """Close the shared database connection."""
        with self._connection_lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def _trace(self, message: str, *args: object) -> None:
        if self.configuration.enable_logging:
            logger.info(message, *args)

    def _trace_error(self, message: str, exc: Exception) -> None:
        if self.configuration.enable_logging:
            logger.error("%s: %s", message, exc)

    # Categories

    async def fetch_categories(self) -> list[Category]:
        try:
            with self._transaction() as conn:
                categories = CategoriesRepo(conn).get_all()
        except sqlite3.Error as exc:
            self._trace_error("Error fetching categories", exc)
            raise UnknownRepositoryError(str(exc)) from exc

        self._trace("Fetched %d categories", len(categories))
        return categories

    async def create_category(self, name: str) -> Category:
        trimmed = clean_required(name, CATEGORY_NAME_REQUIRED)
        category = Category.new(trimmed)
        try:
            with self._transaction() as conn:
                CategoriesRepo(conn).insert(category)
        except sqlite3.Error as exc:
            self._trace_error("Error creating category", exc)
            raise SaveFailedError(str(exc)) from exc

        self._trace("Created category '%s'", trimmed)
        return category

    async def update_category(self, category: Category, new_name: str) -> Category:
        trimmed = clean_required(new_name, CATEGORY_NAME_REQUIRED)
        updated = category.renamed(trimmed)
        try:
            with self._transaction() as conn:
                if CategoriesRepo(conn).update(updated) == 0:
                    raise NotFoundError(f"Category '{category.name}' no longer exists")
        except sqlite3.Error as exc:
            self._trace_error("Error updating category", exc)
            raise SaveFailedError(str(exc)) from exc

        self._trace("Updated category from '%s' to '%s'", category.name, trimmed)
        return updated

    async def delete_category(self, category: Category) -> None:
        try:
            with self._transaction() as conn:
                notes_deleted = NotesRepo(conn).delete_by_category(category.id)
                if CategoriesRepo(conn).delete(category.id) == 0:
                    raise NotFoundError(f"Category '{category.name}' no longer exists")
        except sqlite3.Error as exc:
            self._trace_error("Error deleting category", exc)
            raise DeleteFailedError(str(exc)) from exc

        if notes_deleted:
            self._trace(
                "Cascade delete - deleted %d notes from category '%s'",
                notes_deleted,
                category.name,
            )
        self._trace(
            "Deleted category '%s' (+ %d related notes)", category.name, notes_deleted
        )

    async def delete_all_categories(self) -> int:
        try:
            with self._transaction() as conn:
                categories = CategoriesRepo(conn)
                count = categories.count()
                notes_deleted = NotesRepo(conn).delete_categorized()
                categories.delete_all()
        except sqlite3.Error as exc:
            self._trace_error("Error deleting all categories", exc)
            raise DeleteFailedError(str(exc)) from exc

        self._trace(
            "Deleted all %d categories (+ %d related notes)", count, notes_deleted
        )
        return count

    # Notes

    async def fetch_notes(self) -> list[Note]:
        try:
            with self._transaction() as conn:
                notes = NotesRepo(conn).get_all()
        except sqlite3.Error as exc:
            self._trace_error("Error fetching notes", exc)
            raise UnknownRepositoryError(str(exc)) from exc

        self._trace("Fetched %d notes", len(notes))
        return notes

    async def create_note(
        self, title: str, content: str = "", category: Category | None = None
    ) -> Note:
        trimmed = clean_required(title, NOTE_TITLE_REQUIRED)
        note = Note.new(trimmed, content, category.id if category else None)
        try:
            with self._transaction() as conn:
                if category and not CategoriesRepo(conn).exists(category.id):
                    raise NotFoundError(f"Category '{category.name}' no longer exists")
                NotesRepo(conn).insert(note)
        except sqlite3.Error as exc:
            self._trace_error("Error creating note", exc)
            raise SaveFailedError(str(exc)) from exc

        self._trace("Created note '%s'", trimmed)
        return note

    async def update_note(
        self,
        note: Note,
        title: str,
        content: str,
        category: Category | None,
    ) -> Note:
        trimmed = clean_required(title, NOTE_TITLE_REQUIRED)
        updated = note.revised(trimmed, content, category.id if category else None)
        try:
            with self._transaction() as conn:
                if category and not CategoriesRepo(conn).exists(category.id):
                    raise NotFoundError(f"Category '{category.name}' no longer exists")
                if NotesRepo(conn).update(updated) == 0:
                    raise NotFoundError(f"Note '{note.title}' no longer exists")
        except sqlite3.Error as exc:
            self._trace_error("Error updating note", exc)
            raise SaveFailedError(str(exc)) from exc

        self._trace("Updated note from '%s' to '%s'", note.title, trimmed)
        return updated

    async def delete_note(self, note: Note) -> None:
        try:
            with self._transaction() as conn:
                if NotesRepo(conn).delete(note.id) == 0:
                    raise NotFoundError(f"Note '{note.title}' no longer exists")
        except sqlite3.Error as exc:
            self._trace_error("Error deleting note", exc)
            raise DeleteFailedError(str(exc)) from exc

        self._trace("Deleted note '%s'", note.title)

    async def delete_all_notes(self) -> int:
        try:
            with self._transaction() as conn:
                count = NotesRepo(conn).delete_all()
        except sqlite3.Error as exc:
            self._trace_error("Error deleting all notes", exc)
            raise DeleteFailedError(str(exc)) from exc

        self._trace("Deleted all %d notes", count)
        return count

    # Bulk

    async def delete_all_data(self) -> DeleteAllResult:
        try:
            with self._transaction() as conn:
                # Notes first so no row ever points at a missing category
                notes_deleted = NotesRepo(conn).delete_all()
                categories_deleted = CategoriesRepo(conn).delete_all()
        except sqlite3.Error as exc:
            self._trace_error("Error deleting all data", exc)
            raise DeleteFailedError(str(exc)) from exc

        self._trace(
            "Deleted all data - %d notes, %d categories",
            notes_deleted,
            categories_deleted,
        )
        return DeleteAllResult(
            categories_deleted=categories_deleted, notes_deleted=notes_deleted
        )

    # Search

    async def search_notes(self, text: str) -> list[Note]:
        if is_blank(text):
            return []

        try:
            with self._transaction() as conn:
                rows = NotesRepo(conn).get_all_with_category_names()
        except sqlite3.Error as exc:
            self._trace_error("Error searching notes", exc)
            raise UnknownRepositoryError(str(exc)) from exc

        found = [note for note, name in rows if matches_search(note, name, text)]
        self._trace("Found %d notes for search '%s'", len(found), text)
        return found

    async def fetch_notes_for_category(self, category: Category) -> list[Note]:
        try:
            with self._transaction() as conn:
                notes = NotesRepo(conn).get_by_category(category.id)
        except sqlite3.Error as exc:
            self._trace_error("Error fetching notes for category", exc)
            raise UnknownRepositoryError(str(exc)) from exc

        self._trace("Found %d notes for category '%s'", len(notes), category.name)
        return notes

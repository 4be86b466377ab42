"""In-memory repository for tests and previews."""

import logging
from collections.abc import Iterable

from notekeep.core.errors import NotFoundError, RepositoryError
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

logger = logging.getLogger(__name__)


class InMemoryRepository:
    """Dict-backed repository honouring the same contract as SQLiteRepository.

    Entities are kept in insertion order; ties on timestamps sort newest
    insertion first, matching the SQLite implementation.
    """

    def __init__(
        self,
        categories: Iterable[Category] = (),
        notes: Iterable[Note] = (),
        configuration: RepositoryConfiguration | None = None,
    ):
        self.configuration = configuration or RepositoryConfiguration(
            enable_logging=False
        )
        self._categories: dict[str, Category] = {}
        self._notes: dict[str, Note] = {}
        self._pending_failure: RepositoryError | None = None
        self.seed(categories, notes)

    def seed(self, categories: Iterable[Category] = (), notes: Iterable[Note] = ()) -> None:
        """Load fixture entities, replacing any with the same id."""
        for category in categories:
            self._categories[category.id] = category
        for note in notes:
            if note.category_id and note.category_id not in self._categories:
                raise ValueError(
                    f"Fixture note '{note.title}' references unknown category"
                )
            self._notes[note.id] = note

    def setup_mock_data(self) -> None:
        """Replace contents with a small fixed data set."""
        work = Category.new("Work")
        personal = Category.new("Personal")
        self._categories.clear()
        self._notes.clear()
        self.seed(
            categories=[work, personal],
            notes=[
                Note.new("Note 1", "Content 1", work.id),
                Note.new("Note 2", "Content 2", personal.id),
                Note.new("Note 3", "Content 3", None),
            ],
        )

    def fail_next(self, error: RepositoryError) -> None:
        """Make the next mutating call raise error instead of applying."""
        self._pending_failure = error

    def _check_failure(self) -> None:
        if self._pending_failure is not None:
            error, self._pending_failure = self._pending_failure, None
            raise error

    def _trace(self, message: str, *args: object) -> None:
        if self.configuration.enable_logging:
            logger.info(message, *args)

    def _sorted_categories(self) -> list[Category]:
        ordered = list(enumerate(self._categories.values()))
        ordered.sort(key=lambda item: (item[1].created_at, item[0]), reverse=True)
        return [category for _, category in ordered]

    def _sorted_notes(self) -> list[Note]:
        ordered = list(enumerate(self._notes.values()))
        ordered.sort(key=lambda item: (item[1].updated_at, item[0]), reverse=True)
        return [note for _, note in ordered]

    def _require_category(self, category: Category | None) -> None:
        if category is not None and category.id not in self._categories:
            raise NotFoundError(f"Category '{category.name}' no longer exists")

    # Categories

    async def fetch_categories(self) -> list[Category]:
        categories = self._sorted_categories()
        self._trace("Fetched %d categories", len(categories))
        return categories

    async def create_category(self, name: str) -> Category:
        trimmed = clean_required(name, CATEGORY_NAME_REQUIRED)
        self._check_failure()
        category = Category.new(trimmed)
        self._categories[category.id] = category
        self._trace("Created category '%s'", trimmed)
        return category

    async def update_category(self, category: Category, new_name: str) -> Category:
        trimmed = clean_required(new_name, CATEGORY_NAME_REQUIRED)
        self._require_category(category)
        self._check_failure()
        updated = self._categories[category.id].renamed(trimmed)
        self._categories[category.id] = updated
        self._trace("Updated category from '%s' to '%s'", category.name, trimmed)
        return updated

    async def delete_category(self, category: Category) -> None:
        self._require_category(category)
        self._check_failure()
        related = [n.id for n in self._notes.values() if n.category_id == category.id]
        for note_id in related:
            del self._notes[note_id]
        del self._categories[category.id]
        if related:
            self._trace(
                "Cascade delete - deleted %d notes from category '%s'",
                len(related),
                category.name,
            )
        self._trace(
            "Deleted category '%s' (+ %d related notes)", category.name, len(related)
        )

    async def delete_all_categories(self) -> int:
        self._check_failure()
        count = len(self._categories)
        kept = {
            note_id: note
            for note_id, note in self._notes.items()
            if note.category_id is None
        }
        notes_deleted = len(self._notes) - len(kept)
        self._notes = kept
        self._categories.clear()
        self._trace(
            "Deleted all %d categories (+ %d related notes)", count, notes_deleted
        )
        return count

    # Notes

    async def fetch_notes(self) -> list[Note]:
        notes = self._sorted_notes()
        self._trace("Fetched %d notes", len(notes))
        return notes

    async def create_note(
        self, title: str, content: str = "", category: Category | None = None
    ) -> Note:
        trimmed = clean_required(title, NOTE_TITLE_REQUIRED)
        self._require_category(category)
        self._check_failure()
        note = Note.new(trimmed, content, category.id if category else None)
        self._notes[note.id] = note
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
        self._require_category(category)
        if note.id not in self._notes:
            raise NotFoundError(f"Note '{note.title}' no longer exists")
        self._check_failure()
        updated = self._notes[note.id].revised(
            trimmed, content, category.id if category else None
        )
        self._notes[note.id] = updated
        self._trace("Updated note from '%s' to '%s'", note.title, trimmed)
        return updated

    async def delete_note(self, note: Note) -> None:
        if note.id not in self._notes:
            raise NotFoundError(f"Note '{note.title}' no longer exists")
        self._check_failure()
        del self._notes[note.id]
        self._trace("Deleted note '%s'", note.title)

    async def delete_all_notes(self) -> int:
        self._check_failure()
        count = len(self._notes)
        self._notes.clear()
        self._trace("Deleted all %d notes", count)
        return count

    # Bulk

    async def delete_all_data(self) -> DeleteAllResult:
        self._check_failure()
        result = DeleteAllResult(
            categories_deleted=len(self._categories), notes_deleted=len(self._notes)
        )
        self._notes.clear()
        self._categories.clear()
        self._trace(
            "Deleted all data - %d notes, %d categories",
            result.notes_deleted,
            result.categories_deleted,
        )
        return result

    # Search

    async def search_notes(self, text: str) -> list[Note]:
        if is_blank(text):
            return []

        found = []
        for note in self._sorted_notes():
            category = self._categories.get(note.category_id or "")
            if matches_search(note, category.name if category else None, text):
                found.append(note)
        self._trace("Found %d notes for search '%s'", len(found), text)
        return found

    async def fetch_notes_for_category(self, category: Category) -> list[Note]:
        notes = [n for n in self._sorted_notes() if n.category_id == category.id]
        self._trace("Found %d notes for category '%s'", len(notes), category.name)
        return notes

"""Notes repository - pure data access for note rows."""

import sqlite3
from datetime import datetime

from notekeep.core.types import Note

_NOTE_COLUMNS = "n.id, n.title, n.content, n.category_id, n.created_at, n.updated_at"


def _row_to_note(row: sqlite3.Row) -> Note:
    return Note(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        category_id=row["category_id"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class NotesRepo:
    """Repository for note data access."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize notes repository.

        Args:
            conn: SQLite connection with row_factory set
        """
        self.conn = conn

    def get_all(self) -> list[Note]:
        """Get all notes, most recently updated first."""
        rows = self.conn.execute(
            f"""
            SELECT {_NOTE_COLUMNS}
            FROM notes n
            ORDER BY n.updated_at DESC, n.rowid DESC
            """
        ).fetchall()
        return [_row_to_note(row) for row in rows]

    def get_all_with_category_names(self) -> list[tuple[Note, str | None]]:
        """Get all notes paired with their category name (None if unfiled)."""
        rows = self.conn.execute(
            f"""
            SELECT {_NOTE_COLUMNS}, c.name AS category_name
            FROM notes n
            LEFT JOIN categories c ON c.id = n.category_id
            ORDER BY n.updated_at DESC, n.rowid DESC
            """
        ).fetchall()
        return [(_row_to_note(row), row["category_name"]) for row in rows]

    def get_by_category(self, category_id: str) -> list[Note]:
        """Get notes filed under a category, most recently updated first."""
        rows = self.conn.execute(
            f"""
            SELECT {_NOTE_COLUMNS}
            FROM notes n
            WHERE n.category_id = ?
            ORDER BY n.updated_at DESC, n.rowid DESC
            """,
            (category_id,),
        ).fetchall()
        return [_row_to_note(row) for row in rows]

    def insert(self, note: Note) -> None:
        self.conn.execute(
            """
            INSERT INTO notes (id, title, content, category_id, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                note.id,
                note.title,
                note.content,
                note.category_id,
                note.created_at.isoformat(),
                note.updated_at.isoformat(),
            ),
        )

    def update(self, note: Note) -> int:
        """Write back title, content, category and updated_at."""
        cursor = self.conn.execute(
            """
            UPDATE notes
            SET title = ?, content = ?, category_id = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                note.title,
                note.content,
                note.category_id,
                note.updated_at.isoformat(),
                note.id,
            ),
        )
        return cursor.rowcount

    def delete(self, note_id: str) -> int:
        cursor = self.conn.execute("DELETE FROM notes WHERE id = ?", (note_id,))
        return cursor.rowcount

    def delete_by_category(self, category_id: str) -> int:
        """Delete every note filed under a category."""
        cursor = self.conn.execute(
            "DELETE FROM notes WHERE category_id = ?", (category_id,)
        )
        return cursor.rowcount

    def delete_categorized(self) -> int:
        """Delete every note that is filed under any category."""
        cursor = self.conn.execute("DELETE FROM notes WHERE category_id IS NOT NULL")
        return cursor.rowcount

    def delete_all(self) -> int:
        cursor = self.conn.execute("DELETE FROM notes")
        return cursor.rowcount

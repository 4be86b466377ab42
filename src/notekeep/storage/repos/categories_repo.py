"""Categories repository - pure data access for category rows."""

import sqlite3
from datetime import datetime

from notekeep.core.types import Category


def _row_to_category(row: sqlite3.Row) -> Category:
    return Category(
        id=row["id"],
        name=row["name"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class CategoriesRepo:
    """Repository for category data access."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize categories repository.

        Args:
            conn: SQLite connection with row_factory set
        """
        self.conn = conn

    def get_all(self) -> list[Category]:
        """Get all categories, newest created first."""
        rows = self.conn.execute(
            """
            SELECT id, name, created_at, updated_at
            FROM categories
            ORDER BY created_at DESC, rowid DESC
            """
        ).fetchall()
        return [_row_to_category(row) for row in rows]

    def exists(self, category_id: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return row is not None

    def insert(self, category: Category) -> None:
        """Insert a new category row."""
        self.conn.execute(
            """
            INSERT INTO categories (id, name, created_at, updated_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                category.id,
                category.name,
                category.created_at.isoformat(),
                category.updated_at.isoformat(),
            ),
        )

    def update(self, category: Category) -> int:
        """Write back name and updated_at. Returns the number of rows changed."""
        cursor = self.conn.execute(
            "UPDATE categories SET name = ?, updated_at = ? WHERE id = ?",
            (category.name, category.updated_at.isoformat(), category.id),
        )
        return cursor.rowcount

    def delete(self, category_id: str) -> int:
        """Delete a category row. Notes must already be gone."""
        cursor = self.conn.execute(
            "DELETE FROM categories WHERE id = ?", (category_id,)
        )
        return cursor.rowcount

    def delete_all(self) -> int:
        cursor = self.conn.execute("DELETE FROM categories")
        return cursor.rowcount

    def count(self) -> int:
        """Get the number of stored categories."""
        row = self.conn.execute("SELECT COUNT(*) FROM categories").fetchone()
        return row[0] if row else 0

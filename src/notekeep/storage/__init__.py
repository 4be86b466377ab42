"""Storage layer for Notekeep - SQLite database and repositories."""

from notekeep.storage.db import init_db
from notekeep.storage.memory_repository import InMemoryRepository
from notekeep.storage.repos import CategoriesRepo, NotesRepo
from notekeep.storage.sqlite_repository import SQLiteRepository

__all__ = [
    "init_db",
    "CategoriesRepo",
    "InMemoryRepository",
    "NotesRepo",
    "SQLiteRepository",
]

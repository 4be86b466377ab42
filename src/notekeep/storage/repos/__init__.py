"""Repository classes for data access."""

from notekeep.storage.repos.categories_repo import CategoriesRepo
from notekeep.storage.repos.notes_repo import NotesRepo

__all__ = [
    "CategoriesRepo",
    "NotesRepo",
]

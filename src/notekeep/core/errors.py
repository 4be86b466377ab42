"""Repository error taxonomy.

Every storage failure surfaces to callers as one of these types. The
repositories never retry or recover internally.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of repository failures."""

    INVALID_DATA = "invalid_data"
    NOT_FOUND = "not_found"
    SAVE_FAILED = "save_failed"
    DELETE_FAILED = "delete_failed"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """Base error for repository operations."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    prefix = "Repository error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class InvalidDataError(RepositoryError):
    """Raised when a required field is empty after trimming."""

    kind = ErrorKind.INVALID_DATA
    prefix = "Invalid data"


class NotFoundError(RepositoryError):
    """Raised when a referenced entity is no longer stored."""

    kind = ErrorKind.NOT_FOUND
    prefix = "Not found"


class SaveFailedError(RepositoryError):
    """Raised when the underlying storage write fails."""

    kind = ErrorKind.SAVE_FAILED
    prefix = "Save failed"


class DeleteFailedError(RepositoryError):
    """Raised when the underlying storage delete fails."""

    kind = ErrorKind.DELETE_FAILED
    prefix = "Delete failed"


class UnknownRepositoryError(RepositoryError):
    """Raised for unclassified storage errors (reads, searches)."""

    kind = ErrorKind.UNKNOWN
    prefix = "Unknown error"

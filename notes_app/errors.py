"""Exceptions raised by the note store and its storage adapters."""

from __future__ import annotations


class NoteError(Exception):
    """Base class for note store errors."""


class ValidationError(NoteError):
    """A note field failed validation (empty title/content, unknown category)."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(NoteError):
    """No note with the given id exists in the collection."""

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id


class PersistenceError(NoteError):
    """A read or write against the storage backend failed."""

    def __init__(self, operation: str, key: str, reason: str = "") -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Storage {operation} failed for key '{key}'{detail}")
        self.operation = operation
        self.key = key

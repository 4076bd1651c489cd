"""Web Notes — local note store with category tags and search."""

from notes_app.errors import NoteError, NotFoundError, PersistenceError, ValidationError
from notes_app.models import Category, Note
from notes_app.store import NoteStore

__all__ = [
    "Category",
    "Note",
    "NoteError",
    "NoteStore",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]

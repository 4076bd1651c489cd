"""Editor session: the note form the presentation layer drives.

Holds the draft being typed and decides whether "save" creates a new note
or edits the one that was opened.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from notes_app.errors import NotFoundError
from notes_app.models import Category, Note
from notes_app.store import NoteStore

logger = logging.getLogger(__name__)

EMPTY_SEARCH = ("No web notes found", "Try a different search term")
EMPTY_COLLECTION = ("Your web is empty", "Thwip! Create your first note!")


def empty_state(query: str) -> tuple[str, str]:
    """Heading and hint shown when the note list has nothing to display."""
    return EMPTY_SEARCH if query else EMPTY_COLLECTION


def format_timestamp(value: datetime) -> str:
    """Render a note timestamp as local ``YYYY-MM-DD HH:MM``."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


class NoteEditor:
    """Draft state for the create/edit form."""

    def __init__(self, store: NoteStore) -> None:
        self._store = store
        self.visible = False
        self.editing: Optional[Note] = None
        self.title = ""
        self.content = ""
        self.category: Category = Category.default()

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    def reset(self) -> None:
        """Clear the draft and forget the note being edited."""
        self.editing = None
        self.title = ""
        self.content = ""
        self.category = Category.default()

    def open_new(self) -> None:
        self.reset()
        self.visible = True

    def open_edit(self, note: Note | str) -> None:
        """Load an existing note (or its id) into the draft and show the form."""
        if isinstance(note, str):
            found = self._store.get(note)
            if found is None:
                raise NotFoundError(note)
            note = found
        self.editing = note
        self.title = note.title
        self.content = note.content
        self.category = (
            note.category if isinstance(note.category, Category) else Category.default()
        )
        self.visible = True

    def cancel(self) -> None:
        self.visible = False
        self.reset()

    async def save(self) -> Note:
        """Create or update from the draft, then close the form.

        On ``ValidationError`` the draft stays open and the error propagates
        so the caller can prompt the user.
        """
        if self.editing is not None:
            note = await self._store.update(
                self.editing.id, self.title, self.content, self.category
            )
        else:
            note = await self._store.create(self.title, self.content, self.category)
        self.reset()
        self.visible = False
        return note

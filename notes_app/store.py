"""In-memory note collection kept in sync with a storage backend."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Optional
from uuid import uuid4

from notes_app.config import DEFAULT_STORAGE_KEY
from notes_app.errors import NotFoundError, PersistenceError, ValidationError
from notes_app.metrics import NOTE_OPERATIONS, NOTES_STORED, PERSISTENCE_FAILURES
from notes_app.models import Category, Note, deserialize_notes, serialize_notes, utcnow
from notes_app.storage import StorageAdapter

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid4())


class NoteStore:
    """Authoritative note collection for a running session.

    Notes are kept newest-created first. Every successful mutation ends with
    :meth:`save`, which writes the whole collection under a single key.
    Storage failures are logged and never undo the in-memory change.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._id_factory = id_factory
        self._notes: list[Note] = []

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def load(self) -> int:
        """Replace the collection with the stored one. Returns the note count.

        A missing blob, a failed read and an unparseable blob all leave an
        empty collection.
        """
        self._notes = []
        try:
            blob = await self._storage.read(self._key)
        except PersistenceError as e:
            PERSISTENCE_FAILURES.labels(operation="load").inc()
            logger.error("Failed to load notes: %s — starting empty", e)
            return self._sync_gauge()

        if blob is None:
            logger.info("No stored notes under '%s' — starting empty", self._key)
            return self._sync_gauge()

        try:
            self._notes = deserialize_notes(blob)
        except ValueError as e:
            PERSISTENCE_FAILURES.labels(operation="parse").inc()
            logger.error("Stored notes under '%s' are corrupt: %s — starting empty", self._key, e)
            return self._sync_gauge()

        logger.info("Loaded %d notes from '%s'", len(self._notes), self._key)
        return self._sync_gauge()

    async def save(self) -> bool:
        """Write the current collection. Returns False if the write failed."""
        blob = serialize_notes(self._notes)
        try:
            await self._storage.write(self._key, blob)
        except PersistenceError as e:
            PERSISTENCE_FAILURES.labels(operation="save").inc()
            logger.error("Failed to save %d notes: %s", len(self._notes), e)
            return False
        logger.debug("Saved %d notes to '%s'", len(self._notes), self._key)
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(
        self, title: str, content: str, category: Category | str | None = None
    ) -> Note:
        """Create a note and put it at the top of the collection."""
        title, content, cat = self._validated("create", title, content, category)
        now = self._clock()
        note = Note(
            id=self._id_factory(),
            title=title,
            content=content,
            category=cat or Category.default(),
            created_at=now,
            updated_at=now,
        )
        self._notes.insert(0, note)
        NOTE_OPERATIONS.labels(operation="create", status="ok").inc()
        self._sync_gauge()
        logger.info("Created note %s — '%s'", note.id, note.title)
        await self.save()
        return note

    async def update(
        self,
        note_id: str,
        title: str,
        content: str,
        category: Category | str | None = None,
    ) -> Note:
        """Edit a note in place; its id, position and creation time are kept.

        ``category=None`` keeps the note's current category.
        """
        title, content, cat = self._validated("update", title, content, category)
        index = self._index_of(note_id)
        if index is None:
            NOTE_OPERATIONS.labels(operation="update", status="not_found").inc()
            raise NotFoundError(note_id)

        current = self._notes[index]
        updated = current.model_copy(
            update={
                "title": title,
                "content": content,
                "category": cat or current.category,
                "updated_at": max(self._clock(), current.updated_at),
            }
        )
        self._notes[index] = updated
        NOTE_OPERATIONS.labels(operation="update", status="ok").inc()
        logger.info("Updated note %s — '%s'", updated.id, updated.title)
        await self.save()
        return updated

    async def delete(self, note_id: str) -> bool:
        """Remove a note if present. Saves either way; returns whether one was removed."""
        index = self._index_of(note_id)
        if index is not None:
            del self._notes[index]
            NOTE_OPERATIONS.labels(operation="delete", status="ok").inc()
            self._sync_gauge()
            logger.info("Deleted note %s", note_id)
        else:
            NOTE_OPERATIONS.labels(operation="delete", status="not_found").inc()
            logger.info("Delete of unknown note %s ignored", note_id)
        await self.save()
        return index is not None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def filter(self, query: str = "") -> Iterator[Note]:
        """Yield notes matching ``query`` on title, content or category.

        Case-insensitive, order-preserving; an empty query yields every note.
        """
        snapshot = tuple(self._notes)
        if not query:
            return iter(snapshot)
        return (n for n in snapshot if n.matches(query))

    def get(self, note_id: str) -> Optional[Note]:
        """Return the note with ``note_id`` or None."""
        index = self._index_of(note_id)
        return None if index is None else self._notes[index]

    @property
    def storage(self) -> StorageAdapter:
        return self._storage

    @property
    def notes(self) -> tuple[Note, ...]:
        """Current collection, newest first."""
        return tuple(self._notes)

    @property
    def count(self) -> int:
        """Number of notes in the collection."""
        return len(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(tuple(self._notes))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _index_of(self, note_id: str) -> Optional[int]:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                return i
        return None

    def _sync_gauge(self) -> int:
        NOTES_STORED.set(len(self._notes))
        return len(self._notes)

    @staticmethod
    def _validated(
        operation: str, title: str, content: str, category: Category | str | None
    ) -> tuple[str, str, Optional[Category]]:
        """Trim title/content and resolve the category, or raise ValidationError."""
        title = (title or "").strip()
        content = (content or "").strip()
        error: Optional[ValidationError] = None
        resolved: Optional[Category] = None
        if not title:
            error = ValidationError("title", "must not be empty")
        elif not content:
            error = ValidationError("content", "must not be empty")
        elif category:
            try:
                resolved = Category(category)
            except ValueError:
                error = ValidationError("category", f"unknown category '{category}'")

        if error is not None:
            NOTE_OPERATIONS.labels(operation=operation, status="invalid").inc()
            logger.info("Rejected %s: %s", operation, error)
            raise error
        return title, content, resolved

"""Startup wiring: logging, storage backend and the initial load."""

from __future__ import annotations

import logging

from notes_app.config import Settings
from notes_app.storage import RedisStorage, create_storage
from notes_app.store import NoteStore

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Install the log format once; later calls leave existing handlers alone."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


async def open_store(settings: Settings | None = None) -> NoteStore:
    """Build the configured storage backend and load the stored notes."""
    settings = settings or Settings()
    configure_logging(settings.log_level)
    storage = create_storage(settings)
    if isinstance(storage, RedisStorage):
        await storage.connect()

    store = NoteStore(storage, key=settings.storage_key)
    count = await store.load()
    logger.info(
        "Note store ready — backend=%s, %d notes", settings.storage_backend, count
    )
    return store


async def close_store(store: NoteStore) -> None:
    """Release the storage backend's connection, if it holds one."""
    if isinstance(store.storage, RedisStorage):
        await store.storage.close()

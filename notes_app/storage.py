"""Key-value storage backends for the serialized note collection.

Every backend exposes the same two async calls, ``read(key)`` and
``write(key, blob)``. Backend-specific failures are re-raised as
:class:`~notes_app.errors.PersistenceError` so the store only has one
exception type to absorb.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import quote

import anyio
import redis.asyncio as aioredis
from redis.exceptions import RedisError

from notes_app.config import Settings
from notes_app.errors import PersistenceError

logger = logging.getLogger(__name__)


class StorageAdapter(Protocol):
    """Durable key-value store used for whole-collection load/save."""

    async def read(self, key: str) -> Optional[str]: ...

    async def write(self, key: str, blob: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage. Contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def write(self, key: str, blob: str) -> None:
        self._data[key] = blob

    def __contains__(self, key: object) -> bool:
        return key in self._data


class JsonFileStorage:
    """Stores each key as a JSON file inside ``data_dir``."""

    def __init__(self, data_dir: Path) -> None:
        self._dir = anyio.Path(data_dir)

    def path_for(self, key: str) -> anyio.Path:
        """File backing ``key``, percent-encoded so distinct keys never share a file."""
        return self._dir / f"{quote(key, safe='')}.json"

    async def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            if not await path.exists():
                return None
            return await path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError("read", key, str(exc)) from exc

    async def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            await self._dir.mkdir(parents=True, exist_ok=True)
            await tmp.write_text(blob, encoding="utf-8")
            await tmp.replace(path)
        except OSError as exc:
            raise PersistenceError("write", key, str(exc)) from exc


class RedisStorage:
    """Async Redis storage. Connecting is non-fatal; I/O without a client fails."""

    def __init__(self, redis_url: str) -> None:
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None

    @property
    def available(self) -> bool:
        """Whether the Redis connection is active."""
        return self._client is not None

    async def connect(self) -> None:
        """Connect to Redis. Logs and leaves the client unset when unreachable."""
        try:
            self._client = aioredis.from_url(self._redis_url, decode_responses=True)
            await self._client.ping()
            logger.info("Redis storage connected: %s", self._redis_url)
        except (RedisError, OSError) as e:
            logger.warning("Redis unavailable, notes will not persist: %s", e)
            self._client = None

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def read(self, key: str) -> Optional[str]:
        if not self._client:
            raise PersistenceError("read", key, "redis not connected")
        try:
            return await self._client.get(key)
        except (RedisError, OSError, UnicodeDecodeError) as exc:
            raise PersistenceError("read", key, str(exc)) from exc

    async def write(self, key: str, blob: str) -> None:
        if not self._client:
            raise PersistenceError("write", key, "redis not connected")
        try:
            await self._client.set(key, blob)
        except (RedisError, OSError) as exc:
            raise PersistenceError("write", key, str(exc)) from exc


def create_storage(settings: Settings) -> StorageAdapter:
    """Build the storage backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "redis":
        return RedisStorage(settings.redis_url)
    if settings.storage_backend == "file":
        return JsonFileStorage(settings.data_dir)
    return MemoryStorage()

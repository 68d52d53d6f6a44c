"""Session stores — ephemeral key-value backends for SessionRecord.

Two backends share one serialized layout (``dump_record`` / ``load_record``)
so a record written by either can be read by the other::

    {"question_ids": [3, 17, 8], "current_index": 1, "correct_count": 1, "total": 3}

stored under ``quiz_session:<session_id>``.

  - MemorySessionStore: in-process ``cachetools.TTLCache``; records expire
    after ``ttl_seconds`` and the least recently used record is evicted
    once ``max_entries`` is reached.
  - RedisSessionStore: ``redis.asyncio`` client; records expire via the
    Redis ``EX`` option.

Expiry is the only way records disappear; callers treat a missing record
as "session not found".
"""

from __future__ import annotations

import json
import logging
import time
from typing import Callable

from cachetools import TTLCache
from redis import asyncio as aioredis

from reading_quiz.config import QuizSettings
from reading_quiz.constants import SESSION_KEY_PREFIX
from reading_quiz.interfaces import SessionStore
from reading_quiz.models.progress import SessionProgress
from reading_quiz.models.session import SessionRecord

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Serialization
# ------------------------------------------------------------------

def session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def dump_record(record: SessionRecord) -> str:
    """Flatten a record into its stored JSON form."""
    progress = record.progress
    return json.dumps(
        {
            "question_ids": record.question_ids,
            "current_index": progress.current_index,
            "correct_count": progress.correct_count,
            "total": progress.total,
        }
    )


def load_record(raw: str | bytes) -> SessionRecord:
    """Rebuild a record from its stored JSON form."""
    data = json.loads(raw)
    return SessionRecord(
        question_ids=data["question_ids"],
        progress=SessionProgress(
            total=data["total"],
            current_index=data["current_index"],
            correct_count=data["correct_count"],
        ),
    )


# ------------------------------------------------------------------
# Backends
# ------------------------------------------------------------------

class MemorySessionStore(SessionStore):
    """In-process TTL cache.  Sessions are lost on restart."""

    def __init__(
        self,
        *,
        ttl_seconds: int = 3600,
        max_entries: int = 10000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TTLCache[str, str] = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )

    async def get(self, session_id: str) -> SessionRecord | None:
        raw = self._cache.get(session_key(session_id))
        if raw is None:
            return None
        return load_record(raw)

    async def put(self, session_id: str, record: SessionRecord) -> None:
        self._cache[session_key(session_id)] = dump_record(record)

    def __len__(self) -> int:
        return len(self._cache)


class RedisSessionStore(SessionStore):
    """Redis-backed store shared by every server process."""

    def __init__(self, client: aioredis.Redis, *, ttl_seconds: int = 3600) -> None:
        self._redis = client
        self._ttl = ttl_seconds

    @classmethod
    def from_url(cls, url: str, *, ttl_seconds: int = 3600) -> RedisSessionStore:
        client = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
        return cls(client, ttl_seconds=ttl_seconds)

    async def get(self, session_id: str) -> SessionRecord | None:
        raw = await self._redis.get(session_key(session_id))
        if raw is None:
            return None
        return load_record(raw)

    async def put(self, session_id: str, record: SessionRecord) -> None:
        # ttl 0 means "no expiry"
        await self._redis.set(
            session_key(session_id),
            dump_record(record),
            ex=self._ttl or None,
        )

    async def close(self) -> None:
        await self._redis.aclose()


def build_session_store(settings: QuizSettings) -> SessionStore:
    """Instantiate the backend selected by ``QUIZ_SESSION_BACKEND``."""
    backend = settings.session_backend
    if backend == "memory":
        logger.info(
            "Using in-memory session store (ttl=%ds, max_entries=%d)",
            settings.session_ttl_seconds, settings.session_max_entries,
        )
        return MemorySessionStore(
            ttl_seconds=settings.session_ttl_seconds,
            max_entries=settings.session_max_entries,
        )
    if backend == "redis":
        logger.info("Using Redis session store (ttl=%ds)", settings.session_ttl_seconds)
        return RedisSessionStore.from_url(
            settings.redis_url, ttl_seconds=settings.session_ttl_seconds,
        )
    raise ValueError(f"Unknown session backend: {backend!r}")

"""Abstract interfaces for the quiz's external collaborators.

These ABCs define the contract the session service relies on.  Concrete
implementations live in ``reading_quiz_db`` (the place catalog) and
``reading_quiz.store`` (session stores).

Typical wiring::

    catalog: PlaceCatalog = PlaceRepository()
    store: SessionStore = MemorySessionStore(ttl_seconds=3600)
    service = QuizSessionService(catalog, store)
"""

from abc import ABC, abstractmethod
from typing import Any

from reading_quiz.models.place import PlaceRecord
from reading_quiz.models.session import SessionRecord


class PlaceCatalog(ABC):
    """Read-only source of place records.

    Methods accept the caller's database handle (``db``) so the caller
    controls transaction boundaries, matching the repository convention.
    """

    @abstractmethod
    async def sample_random(self, db: Any, n: int) -> list[PlaceRecord]:
        """Return up to ``n`` distinct places chosen uniformly at random.

        Returns fewer than ``n`` when the catalog holds fewer places.
        """
        ...

    @abstractmethod
    async def find_by_id(self, db: Any, place_id: int) -> PlaceRecord | None:
        """Fetch one place by id, or ``None`` if it does not exist."""
        ...


class SessionStore(ABC):
    """Ephemeral key-value store holding one record per session.

    A missing record is a normal outcome (never created, or expired) and is
    reported as ``None``, not as an exception.  Writes overwrite
    unconditionally; there is no multi-record atomicity.
    """

    @abstractmethod
    async def get(self, session_id: str) -> SessionRecord | None:
        ...

    @abstractmethod
    async def put(self, session_id: str, record: SessionRecord) -> None:
        ...

    async def close(self) -> None:
        """Release any held connections.  No-op by default."""
        return None

"""reading_quiz_db — PostgreSQL persistence layer for the place catalog.

This package provides the ORM model, async engine factory, and the
repository that serves place records to the quiz SDK.  Quiz sessions are
not stored here; they live in the ephemeral session store.
"""

from reading_quiz_db.engine import dispose_engine, get_engine, session_scope
from reading_quiz_db.models.place import Place
from reading_quiz_db.repository import PlaceRepository

__all__ = [
    "Place",
    "dispose_engine",
    "get_engine",
    "session_scope",
    "PlaceRepository",
]

"""ORM models for reading_quiz_db."""

from reading_quiz_db.models.base import Base
from reading_quiz_db.models.place import Place

__all__ = ["Base", "Place"]

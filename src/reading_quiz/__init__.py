"""reading_quiz — place-name reading quiz SDK.

Public API:
    QuizSessionService — creates sessions, serves questions, scores answers
    MemorySessionStore — in-process TTL session store
    RedisSessionStore  — Redis-backed session store
    normalize / verify — reading comparison (katakana folded to hiragana)
    resolve_current    — current question of a session record

Interfaces:
    PlaceCatalog       — ABC for the read-only place source
    SessionStore       — ABC for ephemeral session storage

Models:
    SessionProgress    — (total, current_index, correct_count) value type
    SessionRecord      — stored session: question ids + progress
    PlaceRecord        — one place name with its reading
    CreatedSession, QuestionView, AnswerResult, Completion, Summary

Client:
    reading_quiz.client — phase state machine and ``QuizClient`` driver
"""

from reading_quiz.errors import (
    EmptyCatalogError,
    InvalidTransitionError,
    PlaceNotFoundError,
    QuestionMismatchError,
    QuizError,
    SessionNotFoundError,
)
from reading_quiz.interfaces import PlaceCatalog, SessionStore
from reading_quiz.models import (
    AnswerResult,
    Completion,
    CreatedSession,
    PlaceRecord,
    QuestionView,
    SessionProgress,
    SessionRecord,
    Summary,
)
from reading_quiz.sequencer import resolve_current
from reading_quiz.service import QuizSessionService
from reading_quiz.store import MemorySessionStore, RedisSessionStore
from reading_quiz.verifier import normalize, verify

__all__ = [
    # Service & stores
    "QuizSessionService",
    "MemorySessionStore",
    "RedisSessionStore",
    "resolve_current",
    "normalize",
    "verify",
    # Interfaces
    "PlaceCatalog",
    "SessionStore",
    # Models
    "AnswerResult",
    "Completion",
    "CreatedSession",
    "PlaceRecord",
    "QuestionView",
    "SessionProgress",
    "SessionRecord",
    "Summary",
    # Errors
    "QuizError",
    "SessionNotFoundError",
    "PlaceNotFoundError",
    "QuestionMismatchError",
    "EmptyCatalogError",
    "InvalidTransitionError",
]

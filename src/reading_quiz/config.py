"""Quiz configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  The session
backend defaults to an in-process TTL cache; set ``QUIZ_SESSION_BACKEND=redis``
to share sessions between server processes.
"""

import os
from dataclasses import dataclass

from reading_quiz.constants import DEFAULT_QUESTION_COUNT, MAX_QUESTION_COUNT


@dataclass(frozen=True)
class QuizSettings:
    """Immutable quiz configuration read from environment at startup."""

    default_total: int = DEFAULT_QUESTION_COUNT
    max_total: int = MAX_QUESTION_COUNT

    # "memory" (cachetools TTLCache) or "redis"
    session_backend: str = "memory"
    session_ttl_seconds: int = 3600
    # Only used by the memory backend
    session_max_entries: int = 10000
    redis_url: str = "redis://localhost:6379/0"

    # Serialize submit_answer per session id inside this process
    serialize_submissions: bool = True


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_quiz_settings() -> QuizSettings:
    """Build settings from ``QUIZ_*`` / ``REDIS_URL`` environment variables."""
    return QuizSettings(
        default_total=int(os.getenv("QUIZ_DEFAULT_TOTAL", str(DEFAULT_QUESTION_COUNT))),
        max_total=int(os.getenv("QUIZ_MAX_TOTAL", str(MAX_QUESTION_COUNT))),
        session_backend=os.getenv("QUIZ_SESSION_BACKEND", "memory").lower(),
        session_ttl_seconds=int(os.getenv("QUIZ_SESSION_TTL_SECONDS", "3600")),
        session_max_entries=int(os.getenv("QUIZ_SESSION_MAX_ENTRIES", "10000")),
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        serialize_submissions=_env_flag("QUIZ_SERIALIZE_SUBMISSIONS", "1"),
    )

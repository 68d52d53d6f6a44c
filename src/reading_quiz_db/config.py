"""Database settings for the place catalog.

The connection target comes from ``DATABASE_URL`` when set, otherwise from
the ``PG_*`` parts (handy with docker-compose)::

    PG_HOST=localhost PG_PORT=5432 PG_USER=quiz PG_PASSWORD=quiz \\
        PG_DATABASE=reading_quiz

Both the runtime engine and Alembic run on asyncpg, so every URL is
normalized to the ``postgresql+asyncpg://`` scheme.
"""

import os
from dataclasses import dataclass

ASYNC_SCHEME = "postgresql+asyncpg://"
_PLAIN_SCHEMES = ("postgresql://", "postgres://")


def _to_async_url(url: str) -> str:
    for scheme in _PLAIN_SCHEMES:
        if url.startswith(scheme):
            return ASYNC_SCHEME + url[len(scheme):]
    return url


@dataclass(frozen=True)
class DatabaseSettings:
    """Immutable connection and pool settings for the catalog database."""

    url: str = f"{ASYNC_SCHEME}quiz:quiz@localhost:5432/reading_quiz"
    pool_size: int = 5
    max_overflow: int = 10
    # Log every SQL statement (PG_ECHO=1)
    echo: bool = False

    @property
    def async_url(self) -> str:
        return _to_async_url(self.url)


def load_database_settings() -> DatabaseSettings:
    """Build settings from ``DATABASE_URL`` / ``PG_*`` environment variables."""
    url = os.getenv("DATABASE_URL")
    if not url:
        url = "{scheme}{user}:{password}@{host}:{port}/{database}".format(
            scheme=ASYNC_SCHEME,
            user=os.getenv("PG_USER", "quiz"),
            password=os.getenv("PG_PASSWORD", "quiz"),
            host=os.getenv("PG_HOST", "localhost"),
            port=os.getenv("PG_PORT", "5432"),
            database=os.getenv("PG_DATABASE", "reading_quiz"),
        )
    return DatabaseSettings(
        url=url,
        pool_size=int(os.getenv("PG_POOL_SIZE", "5")),
        max_overflow=int(os.getenv("PG_MAX_OVERFLOW", "10")),
        echo=os.getenv("PG_ECHO", "0").lower() in ("1", "true", "yes"),
    )

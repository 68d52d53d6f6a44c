"""Server settings, read once from the environment at startup.

Defaults suit local development (all interfaces, port 8080, any origin).
Quiz behaviour lives in :class:`reading_quiz.config.QuizSettings` and is
nested here so ``create_app()`` needs only one settings object.
"""

import os
from dataclasses import dataclass, field

from reading_quiz.config import QuizSettings, load_quiz_settings

API_PREFIX = "/api/v1"


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 8080
    # "*" opens CORS to any origin
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    api_prefix: str = API_PREFIX
    quiz: QuizSettings = field(default_factory=QuizSettings)


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` plus the quiz's own variables."""
    return ServerSettings(
        host=os.getenv("SERVER_HOST", ServerSettings.host),
        port=int(os.getenv("SERVER_PORT", str(ServerSettings.port))),
        cors_origins=_split_origins(os.getenv("SERVER_CORS_ORIGINS", "*")),
        log_level=os.getenv("SERVER_LOG_LEVEL", ServerSettings.log_level).upper(),
        api_prefix=os.getenv("SERVER_API_PREFIX", API_PREFIX).rstrip("/"),
        quiz=load_quiz_settings(),
    )

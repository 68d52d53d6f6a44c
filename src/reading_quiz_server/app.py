"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that builds the session store and quiz service once
  - CORS middleware
  - Global exception handlers (SDK errors → 404/422/503, malformed requests → 400)
  - All API routes mounted under ``settings.api_prefix`` (``/api/v1``)
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``reading-quiz-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from reading_quiz.errors import (
    EmptyCatalogError,
    PlaceNotFoundError,
    QuestionMismatchError,
    SessionNotFoundError,
)
from reading_quiz.service import QuizSessionService
from reading_quiz.store import build_session_store
from reading_quiz_db.engine import dispose_engine, get_engine
from reading_quiz_db.repository import PlaceRepository

from reading_quiz_server.config import ServerSettings, load_settings
from reading_quiz_server.errors import (
    empty_catalog_handler,
    generic_error_handler,
    place_not_found_handler,
    question_mismatch_handler,
    request_validation_handler,
    session_not_found_handler,
    value_error_handler,
)
from reading_quiz_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup, tear down on shutdown.

    Startup:
      1. Build the session store selected by ``QUIZ_SESSION_BACKEND``
      2. Build ``QuizSessionService`` over the place repository
      3. Stash it on ``app.state`` for dependency injection

    Shutdown:
      1. Close the session store
      2. Dispose the database engine's connection pool
    """
    settings: ServerSettings = app.state.settings
    quiz = settings.quiz

    store = build_session_store(quiz)
    app.state.service = QuizSessionService(
        PlaceRepository(),
        store,
        default_total=quiz.default_total,
        max_total=quiz.max_total,
        serialize_submissions=quiz.serialize_submissions,
    )
    logger.info("QuizSessionService ready")

    yield

    await store.close()
    await dispose_engine()
    logger.info("Session store closed and database engine disposed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Reading Quiz API",
        description="REST API for the place-name reading quiz",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers (most specific first by MRO lookup) ---
    app.add_exception_handler(SessionNotFoundError, session_not_found_handler)
    app.add_exception_handler(PlaceNotFoundError, place_not_found_handler)
    app.add_exception_handler(QuestionMismatchError, question_mismatch_handler)
    app.add_exception_handler(EmptyCatalogError, empty_catalog_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside the API prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe: verifies DB connectivity."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": str(exc)}

    register_routes(app, settings.api_prefix)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn reading_quiz_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``reading-quiz-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "reading_quiz_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )

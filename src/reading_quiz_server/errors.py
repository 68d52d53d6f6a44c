"""Global exception handlers — map SDK exceptions to HTTP status codes.

The SDK raises typed exceptions (session not found, question mismatch,
empty catalog).  Rather than catching these in every route, we install
global handlers so route handlers stay focused on the happy path.

Every error body has the shape ``{"error": "<message>"}``.  The full
exception text (which carries session and place ids) is logged server-side;
the client receives a fixed message per error kind.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from reading_quiz.constants import QUESTION_MISMATCH_MESSAGE
from reading_quiz.errors import (
    EmptyCatalogError,
    PlaceNotFoundError,
    QuestionMismatchError,
    SessionNotFoundError,
)

logger = logging.getLogger(__name__)


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


async def session_not_found_handler(
    request: Request, exc: SessionNotFoundError
) -> JSONResponse:
    """Unknown or expired session → 404.  Retrying will not help."""
    logger.warning("%s at %s", exc, request.url.path)
    return _error(404, "session not found")


async def place_not_found_handler(
    request: Request, exc: PlaceNotFoundError
) -> JSONResponse:
    """A sampled place vanished from the catalog → 404."""
    logger.error("%s at %s", exc, request.url.path)
    return _error(404, "place not found")


async def question_mismatch_handler(
    request: Request, exc: QuestionMismatchError
) -> JSONResponse:
    """Stale or replayed answer → 422.  The client should resync."""
    logger.warning("%s at %s", exc, request.url.path)
    return _error(422, QUESTION_MISMATCH_MESSAGE)


async def empty_catalog_handler(
    request: Request, exc: EmptyCatalogError
) -> JSONResponse:
    """No places to quiz on → 503 until the catalog is seeded."""
    logger.error("%s at %s", exc, request.url.path)
    return _error(503, "no places available")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed body or query (missing ``session_id``, non-integer ``total``) → 400.

    422 stays reserved for question mismatches so clients can tell
    "resync" apart from "fix the request".
    """
    logger.warning("Invalid request at %s: %s", request.url.path, exc.errors())
    return _error(400, "invalid request")


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Any other ``ValueError`` → 400."""
    logger.warning("ValueError at %s: %s", request.url.path, exc)
    return _error(400, "invalid request")


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions; logs the traceback, returns 500."""
    logger.exception("Unhandled exception at %s", request.url.path)
    return _error(500, "internal server error")

"""Session creation endpoint."""

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from reading_quiz.models.views import CreatedSession
from reading_quiz.service import QuizSessionService

from reading_quiz_server.dependencies import get_db, get_service

router = APIRouter(tags=["sessions"])


class CreateSessionRequest(BaseModel):
    """Body for POST /sessions.

    ``total`` is optional; missing or non-positive values fall back to the
    default question count rather than being rejected.
    """
    total: int | None = None


@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
    service: QuizSessionService = Depends(get_service),
) -> CreatedSession:
    """Start a quiz over randomly sampled places.

    The returned ``total`` may be lower than requested when the catalog
    holds fewer places.  Returns 503 when the catalog is empty.
    """
    total = body.total if body is not None else None
    return await service.create(db, total=total)

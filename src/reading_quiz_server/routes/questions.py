"""Question endpoints — fetch the current question and submit answers.

Both endpoints return the completion shape ``{completed: true, current,
total}`` once every question has been answered, so a client that missed the
last transition can always find out where the session stands.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from reading_quiz.models.views import (
    AnswerResult,
    Completion,
    QuestionView,
)
from reading_quiz.service import QuizSessionService

from reading_quiz_server.dependencies import get_db, get_service

router = APIRouter(prefix="/questions", tags=["questions"])


class SubmitAnswerRequest(BaseModel):
    """Body for POST /questions/{question_id}/answer.

    A missing ``answer`` is scored as incorrect.
    """
    session_id: str
    answer: str | None = None


@router.get("/next")
async def next_question(
    session_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
    service: QuizSessionService = Depends(get_service),
) -> QuestionView | Completion:
    """Return the session's current question (read-only, repeatable)."""
    return await service.next_question(db, session_id=session_id)


@router.post("/{question_id}/answer", response_model_exclude_none=True)
async def submit_answer(
    question_id: int,
    body: SubmitAnswerRequest,
    db: AsyncSession = Depends(get_db),
    service: QuizSessionService = Depends(get_service),
) -> AnswerResult | Completion:
    """Score an answer to the current question and advance the session.

    Returns 422 when ``question_id`` is not the current question; the
    session is left untouched in that case.
    """
    return await service.submit_answer(
        db,
        session_id=body.session_id,
        question_id=question_id,
        answer=body.answer,
    )

"""Result endpoint — score summary for a session.

Works at any point during the session: before completion it reports the
accuracy of the answers given so far against the full question count.
"""

from fastapi import APIRouter, Depends

from reading_quiz.models.views import Summary
from reading_quiz.service import QuizSessionService

from reading_quiz_server.dependencies import get_service

router = APIRouter(tags=["results"])


@router.get("/results/{session_id}")
async def get_result(
    session_id: str,
    service: QuizSessionService = Depends(get_service),
) -> Summary:
    return await service.result(session_id=session_id)

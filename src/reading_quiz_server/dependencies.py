"""FastAPI dependencies: catalog sessions and the quiz service.

Session creation and the question routes read the catalog through
``get_db``; results come from the session store alone.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from reading_quiz.service import QuizSessionService
from reading_quiz_db.engine import session_scope


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One catalog session per request, committed when the handler returns."""
    async with session_scope() as session:
        yield session


def get_service(request: Request) -> QuizSessionService:
    return request.app.state.service

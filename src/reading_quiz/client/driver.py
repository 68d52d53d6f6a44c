"""QuizClient — drives the client state machine against the HTTP API.

Each action performs the server round-trip first (``start`` performs two:
create, then fetch the first question) and then applies the matching pure
transition.  Only one action may be in flight at a time; an action issued
while another is outstanding is rejected with an ``InvalidTransition``
whose reason is ``"busy"``, the same way a UI disables its buttons.

Usage::

    async with httpx.AsyncClient(base_url="http://localhost:8080") as http:
        client = QuizClient(http)
        await client.start(total=5)
        while client.state.phase != "completed":
            await client.submit("さっぽろ")
            await client.next()
        summary = await client.result()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from reading_quiz.client import state as sm
from reading_quiz.constants import QUESTION_MISMATCH_MESSAGE
from reading_quiz.errors import (
    EmptyCatalogError,
    InvalidTransitionError,
    PlaceNotFoundError,
    QuestionMismatchError,
    SessionNotFoundError,
)
from reading_quiz.models.views import (
    AnswerResult,
    Completion,
    CreatedSession,
    QuestionView,
    Summary,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Rejection reason when the server has finished a session the client still
# shows a question for.  Only ``reset()`` leaves that state.
SESSION_COMPLETED = "session completed"


class QuizClient:
    """Owns one ``ClientQuizState`` and advances it from server responses.

    Args:
        http: an ``httpx.AsyncClient`` whose ``base_url`` points at the server
        api_prefix: path prefix the server mounts its routes under
    """

    def __init__(
        self, http: httpx.AsyncClient, *, api_prefix: str = API_PREFIX
    ) -> None:
        self._http = http
        self._prefix = api_prefix
        self._state = sm.initial_state()
        self._in_flight = asyncio.Lock()

    @property
    def state(self):
        return self._state

    def reset(self) -> sm.IdleState:
        self._state = sm.reset()
        return self._state

    # ==================================================================
    # Actions
    # ==================================================================

    async def start(self, total: int | None = None) -> sm.TransitionResult:
        """Create a session and show its first question."""
        if self._in_flight.locked():
            return self._busy("start")
        async with self._in_flight:
            if self._state.phase != "idle":
                return self._apply(
                    sm.reject("start", self._state, "a session is already in progress")
                )
            body = {} if total is None else {"total": total}
            created = CreatedSession.model_validate(
                await self._request("POST", "/sessions", json=body)
            )
            outcome = await self._fetch_next(created.session_id)
            if isinstance(outcome, Completion):
                return self._apply(
                    sm.reject("start", self._state, "new session has no questions")
                )
            return self._apply(sm.start(self._state, created, outcome))

    async def submit(self, answer: str) -> sm.TransitionResult:
        """Submit an answer to the question being shown.

        If the server already finished the session (another client answered
        the last question), the result is an ``InvalidTransition`` with reason
        :data:`SESSION_COMPLETED` and the state is left unchanged.  Fetch
        :meth:`result` if the score is needed, then :meth:`reset`.
        """
        if self._in_flight.locked():
            return self._busy("answer")
        async with self._in_flight:
            current = self._state
            if not isinstance(current, sm.QuestionState):
                return self._apply(
                    sm.reject("answer", current, "only a shown question can be answered")
                )
            data = await self._request(
                "POST",
                f"/questions/{current.question_id}/answer",
                json={"session_id": current.session_id, "answer": answer},
            )
            if data.get("completed"):
                return self._apply(
                    sm.reject("answer", current, SESSION_COMPLETED)
                )
            return self._apply(sm.answer(current, AnswerResult.model_validate(data)))

    async def next(self) -> sm.TransitionResult:
        """Leave the answered question: show the next one or complete."""
        if self._in_flight.locked():
            return self._busy("advance")
        async with self._in_flight:
            current = self._state
            if not isinstance(current, sm.AnsweredState):
                return self._apply(
                    sm.reject("advance", current, "only an answered question can be left")
                )
            outcome = await self._fetch_next(current.session_id)
            if isinstance(outcome, Completion):
                return self._apply(sm.complete(current, outcome))
            return self._apply(sm.advance(current, outcome))

    async def result(self) -> Summary:
        """Fetch the score report for the current session."""
        session_id = self._state.session_id
        if session_id is None:
            raise InvalidTransitionError("result", self._state.phase, "no session started")
        return Summary.model_validate(
            await self._request("GET", f"/results/{session_id}")
        )

    # ==================================================================
    # Internal helpers
    # ==================================================================

    def _apply(self, result: sm.TransitionResult) -> sm.TransitionResult:
        if isinstance(result, sm.InvalidTransition):
            logger.warning(
                "Rejected %s from phase %s: %s",
                result.action, result.phase, result.reason,
            )
            return result
        self._state = result
        return result

    def _busy(self, action: str) -> sm.InvalidTransition:
        return sm.reject(action, self._state, "busy")

    async def _fetch_next(self, session_id: str) -> QuestionView | Completion:
        data = await self._request(
            "GET", "/questions/next", params={"session_id": session_id},
        )
        if data.get("completed"):
            return Completion.model_validate(data)
        return QuestionView.model_validate(data)

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        response = await self._http.request(method, f"{self._prefix}{path}", **kwargs)
        session_id = self._state.session_id or ""
        question_id = getattr(self._state, "question_id", -1)
        if response.status_code == 404:
            message = _error_message(response)
            if "session" in message:
                raise SessionNotFoundError(session_id)
            if "place" in message:
                raise PlaceNotFoundError(question_id)
        if (
            response.status_code == 422
            and QUESTION_MISMATCH_MESSAGE in _error_message(response)
        ):
            raise QuestionMismatchError(session_id, None, question_id)
        if response.status_code == 503:
            raise EmptyCatalogError()
        response.raise_for_status()
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        return str(response.json().get("error", "")).lower()
    except ValueError:
        return response.text.lower()

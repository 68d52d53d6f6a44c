"""QuizClient tests — the driver talks to the real app over ASGITransport."""

from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from helpers.catalog import MockCatalog
from reading_quiz.client import state as sm
from reading_quiz.client.driver import SESSION_COMPLETED, QuizClient
from reading_quiz.errors import (
    InvalidTransitionError,
    PlaceNotFoundError,
    QuestionMismatchError,
    SessionNotFoundError,
)
from reading_quiz.service import QuizSessionService
from reading_quiz.store import MemorySessionStore
from reading_quiz_server.app import create_app
from reading_quiz_server.config import ServerSettings
from reading_quiz_server.dependencies import get_db


async def _fake_db():
    yield AsyncMock()


@pytest.fixture
def app(service):
    application = create_app(ServerSettings())
    application.state.service = service
    application.dependency_overrides[get_db] = _fake_db
    return application


@pytest_asyncio.fixture
async def http(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestQuizClient:

    @pytest.mark.asyncio
    async def test_full_session(self, http, catalog):
        client = QuizClient(http)
        state = await client.start(total=3)
        assert isinstance(state, sm.QuestionState)
        assert (state.total, state.current_index) == (3, 0)

        answers_right = [True, False, True]
        for right in answers_right:
            reading = catalog.reading_of(client.state.question_id) if right else "ちがう"
            answered = await client.submit(reading)
            assert isinstance(answered, sm.AnsweredState)
            assert answered.correct is right
            await client.next()

        assert client.state.phase == "completed"
        assert client.state.correct_count == 2
        summary = await client.result()
        assert summary.correct_answers == 2
        assert summary.accuracy == 66.67

    @pytest.mark.asyncio
    async def test_wrong_phase_makes_no_request(self, http):
        client = QuizClient(http)
        result = await client.submit("さっぽろ")
        assert isinstance(result, sm.InvalidTransition)
        assert client.state.phase == "idle"

        result = await client.next()
        assert isinstance(result, sm.InvalidTransition)

    @pytest.mark.asyncio
    async def test_second_start_rejected(self, http):
        client = QuizClient(http)
        await client.start(total=2)
        result = await client.start(total=2)
        assert isinstance(result, sm.InvalidTransition)
        assert client.state.phase == "question"

    @pytest.mark.asyncio
    async def test_reentrant_action_is_busy(self, http):
        client = QuizClient(http)
        await client.start(total=2)
        async with client._in_flight:
            result = await client.submit("x")
        assert isinstance(result, sm.InvalidTransition)
        assert result.reason == "busy"
        assert client.state.phase == "question"

    @pytest.mark.asyncio
    async def test_result_before_start(self, http):
        with pytest.raises(InvalidTransitionError):
            await QuizClient(http).result()

    @pytest.mark.asyncio
    async def test_expired_session_raises_not_found(self, http, app, catalog):
        client = QuizClient(http)
        await client.start(total=2)
        # Fresh service with an empty store: the session is gone server-side
        app.state.service = QuizSessionService(catalog, MemorySessionStore())
        with pytest.raises(SessionNotFoundError):
            await client.submit("x")

    @pytest.mark.asyncio
    async def test_server_moved_on_raises_mismatch(self, http, service, catalog):
        client = QuizClient(http)
        await client.start(total=3)
        current = client.state
        # Another tab answers the same question first
        await service.submit_answer(
            AsyncMock(), session_id=current.session_id,
            question_id=current.question_id, answer="x",
        )
        with pytest.raises(QuestionMismatchError):
            await client.submit(catalog.reading_of(current.question_id))
        assert client.state == current

    @pytest.mark.asyncio
    async def test_malformed_request_is_not_a_mismatch(self, http):
        client = QuizClient(http)
        with pytest.raises(httpx.HTTPStatusError) as excinfo:
            await client.start(total="abc")
        assert excinfo.value.response.status_code == 400
        assert client.state.phase == "idle"

    @pytest.mark.asyncio
    async def test_unrecognized_422_is_not_a_mismatch(self):
        def handler(request):
            return httpx.Response(422, json={"error": "something else"})

        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            with pytest.raises(httpx.HTTPStatusError):
                await QuizClient(c).start(total=2)

    @pytest.mark.asyncio
    async def test_vanished_place_raises_place_not_found(self, http, catalog):
        client = QuizClient(http)
        await client.start(total=2)
        current = client.state
        catalog.remove(current.question_id)
        with pytest.raises(PlaceNotFoundError) as excinfo:
            await client.submit("x")
        assert excinfo.value.place_id == current.question_id
        assert client.state == current

    @pytest.mark.asyncio
    async def test_session_finished_elsewhere(self, http, service, catalog):
        client = QuizClient(http)
        await client.start(total=1)
        current = client.state
        # Another tab answers the only question
        await service.submit_answer(
            AsyncMock(), session_id=current.session_id,
            question_id=current.question_id,
            answer=catalog.reading_of(current.question_id),
        )
        result = await client.submit("x")
        assert isinstance(result, sm.InvalidTransition)
        assert result.reason == SESSION_COMPLETED
        assert client.state == current

        summary = await client.result()
        assert summary.correct_answers == 1
        assert client.reset().phase == "idle"

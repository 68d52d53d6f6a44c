"""HTTP API tests using FastAPI's TestClient.

The lifespan handler is not run: the test installs a QuizSessionService
over MockCatalog + MemorySessionStore on ``app.state`` and overrides the
``get_db`` dependency with an AsyncMock session.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from helpers.catalog import MockCatalog
from reading_quiz.service import QuizSessionService
from reading_quiz.store import MemorySessionStore
from reading_quiz_server.app import create_app
from reading_quiz_server.config import ServerSettings
from reading_quiz_server.dependencies import get_db

PREFIX = "/api/v1"


async def _fake_db():
    yield AsyncMock()


@pytest.fixture
def app(service):
    application = create_app(ServerSettings())
    application.state.service = service
    application.dependency_overrides[get_db] = _fake_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


def _create(client, **body):
    response = client.post(f"{PREFIX}/sessions", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def _next(client, session_id):
    response = client.get(f"{PREFIX}/questions/next", params={"session_id": session_id})
    assert response.status_code == 200, response.text
    return response.json()


def _answer(client, session_id, question_id, answer):
    return client.post(
        f"{PREFIX}/questions/{question_id}/answer",
        json={"session_id": session_id, "answer": answer},
    )


class TestCreateSession:

    def test_create_with_total(self, client):
        data = _create(client, total=3)
        assert data["total"] == 3
        assert isinstance(data["session_id"], str)

    def test_create_without_body_uses_default(self, client):
        response = client.post(f"{PREFIX}/sessions")
        assert response.status_code == 201
        assert response.json()["total"] == 10

    def test_non_positive_total_uses_default(self, client):
        assert _create(client, total=0)["total"] == 10
        assert _create(client, total=-2)["total"] == 10

    def test_empty_catalog_is_503(self, app, store):
        app.state.service = QuizSessionService(MockCatalog(places=[]), store)
        response = TestClient(app).post(f"{PREFIX}/sessions", json={"total": 3})
        assert response.status_code == 503
        assert response.json() == {"error": "no places available"}


class TestQuestions:

    def test_next_question_shape(self, client):
        session_id = _create(client, total=3)["session_id"]
        data = _next(client, session_id)
        assert set(data) == {
            "question_id", "session_id", "name", "difficulty", "current", "total",
        }
        assert data["session_id"] == session_id
        assert (data["current"], data["total"]) == (1, 3)

    def test_correct_answer_body(self, client, catalog):
        session_id = _create(client, total=3)["session_id"]
        question = _next(client, session_id)
        response = _answer(
            client, session_id, question["question_id"],
            catalog.reading_of(question["question_id"]),
        )
        assert response.status_code == 200
        assert response.json() == {"correct": True}
        assert _next(client, session_id)["current"] == 2

    def test_wrong_answer_body(self, client, catalog):
        session_id = _create(client, total=3)["session_id"]
        question = _next(client, session_id)
        response = _answer(client, session_id, question["question_id"], "ちがう")
        assert response.json() == {
            "correct": False,
            "correct_reading": catalog.reading_of(question["question_id"]),
        }

    def test_missing_answer_scored_incorrect(self, client):
        session_id = _create(client, total=2)["session_id"]
        question = _next(client, session_id)
        response = client.post(
            f"{PREFIX}/questions/{question['question_id']}/answer",
            json={"session_id": session_id},
        )
        assert response.status_code == 200
        assert response.json()["correct"] is False

    def test_mismatch_is_422_and_does_not_advance(self, client):
        session_id = _create(client, total=3)["session_id"]
        question = _next(client, session_id)
        response = _answer(client, session_id, question["question_id"] + 1000, "x")
        assert response.status_code == 422
        assert "error" in response.json()
        assert _next(client, session_id) == question

    def test_completion_shape(self, client, catalog):
        session_id = _create(client, total=1)["session_id"]
        question = _next(client, session_id)
        _answer(client, session_id, question["question_id"], "x")

        assert _next(client, session_id) == {"completed": True, "current": 1, "total": 1}
        response = _answer(client, session_id, question["question_id"], "x")
        assert response.status_code == 200
        assert response.json() == {"completed": True, "current": 1, "total": 1}


class TestResults:

    def test_result_after_run(self, client, catalog):
        session_id = _create(client, total=4)["session_id"]
        for i in range(4):
            question = _next(client, session_id)
            answer = catalog.reading_of(question["question_id"]) if i < 3 else "x"
            _answer(client, session_id, question["question_id"], answer)

        response = client.get(f"{PREFIX}/results/{session_id}")
        assert response.status_code == 200
        assert response.json() == {
            "session_id": session_id,
            "total_questions": 4,
            "correct_answers": 3,
            "accuracy": 75.0,
        }


class TestUnknownSession:

    def test_next_question_404(self, client):
        response = client.get(f"{PREFIX}/questions/next", params={"session_id": "nope"})
        assert response.status_code == 404
        assert response.json() == {"error": "session not found"}

    def test_answer_404(self, client):
        response = _answer(client, "nope", 1, "x")
        assert response.status_code == 404

    def test_result_404(self, client):
        response = client.get(f"{PREFIX}/results/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "session not found"}


class TestMalformedRequest:
    """Request validation failures are 400 so they never look like a mismatch."""

    def test_next_question_without_session_id(self, client):
        response = client.get(f"{PREFIX}/questions/next")
        assert response.status_code == 400
        assert response.json() == {"error": "invalid request"}

    def test_answer_without_session_id(self, client):
        session_id = _create(client, total=2)["session_id"]
        question = _next(client, session_id)
        response = client.post(
            f"{PREFIX}/questions/{question['question_id']}/answer",
            json={"answer": "x"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "invalid request"}
        assert _next(client, session_id) == question

    def test_non_integer_question_id(self, client):
        response = _answer(client, "nope", "abc", "x")
        assert response.status_code == 400

    def test_non_integer_total(self, client):
        response = client.post(f"{PREFIX}/sessions", json={"total": "abc"})
        assert response.status_code == 400
        assert response.json() == {"error": "invalid request"}

    def test_mismatch_keeps_its_own_status(self, client):
        session_id = _create(client, total=2)["session_id"]
        question = _next(client, session_id)
        response = _answer(client, session_id, question["question_id"] + 1000, "x")
        assert response.status_code == 422
        assert response.json() == {
            "error": "question_id does not match current question",
        }

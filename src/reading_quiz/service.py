"""QuizSessionService — orchestrates the quiz session lifecycle.

Stateless service pattern: each call loads one session record from the
SessionStore, computes the outcome, writes the record back if it changed,
and returns a result model.  No per-session state is kept in memory apart
from the optional submission locks.

Session states (derived from the record):

    Active     current_index <  total
    Completed  current_index == total

Only ``submit_answer`` mutates a record, and it advances the index by
exactly one per accepted answer, so each question is scored at most once.

Usage::

    service = QuizSessionService(PlaceRepository(), MemorySessionStore())
    created = await service.create(db, total=3)
    view = await service.next_question(db, session_id=created.session_id)
    outcome = await service.submit_answer(
        db, session_id=created.session_id,
        question_id=view.question_id, answer="さっぽろ",
    )
    summary = await service.result(session_id=created.session_id)
"""

from __future__ import annotations

import asyncio
import logging
import uuid
import weakref
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import Any

from reading_quiz.constants import DEFAULT_QUESTION_COUNT, MAX_QUESTION_COUNT
from reading_quiz.errors import (
    EmptyCatalogError,
    PlaceNotFoundError,
    QuestionMismatchError,
    SessionNotFoundError,
)
from reading_quiz.interfaces import PlaceCatalog, SessionStore
from reading_quiz.models.place import PlaceRecord
from reading_quiz.models.session import SessionRecord
from reading_quiz.models.views import (
    AnswerResult,
    Completion,
    CreatedSession,
    NextQuestionOutcome,
    QuestionView,
    SubmitOutcome,
    Summary,
)
from reading_quiz.sequencer import resolve_current
from reading_quiz.verifier import verify

logger = logging.getLogger(__name__)


class QuizSessionService:
    """Creates quiz sessions and drives them to completion.

    Args:
        catalog: source of place records
        store: ephemeral session store; the service is its only writer
        default_total: question count used when the caller sends none or a
            non-positive value
        max_total: larger requests are clamped to this many questions
        serialize_submissions: hold a per-session lock around the
            read-modify-write in :meth:`submit_answer`.  This only covers
            requests handled by this process.
    """

    def __init__(
        self,
        catalog: PlaceCatalog,
        store: SessionStore,
        *,
        default_total: int = DEFAULT_QUESTION_COUNT,
        max_total: int = MAX_QUESTION_COUNT,
        serialize_submissions: bool = True,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._default_total = default_total
        self._max_total = max_total
        self._serialize = serialize_submissions
        # Locks disappear once no request holds a reference to them
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    # ==================================================================
    # Session lifecycle
    # ==================================================================

    def resolve_total(self, requested: int | None) -> int:
        """Coerce a requested question count into the accepted range."""
        if requested is None or requested <= 0:
            return self._default_total
        return min(requested, self._max_total)

    async def create(self, db: Any, *, total: int | None = None) -> CreatedSession:
        """Sample questions and start a new session.

        The session's total is the number of places actually sampled, which
        is less than requested when the catalog is small.
        """
        wanted = self.resolve_total(total)
        places = await self._catalog.sample_random(db, wanted)
        if not places:
            raise EmptyCatalogError()

        record = SessionRecord.start([place.id for place in places])
        session_id = str(uuid.uuid4())
        await self._store.put(session_id, record)

        logger.info(
            "Created session %s with %d questions (requested=%s)",
            session_id, record.progress.total, total,
        )
        return CreatedSession(session_id=session_id, total=record.progress.total)

    # ==================================================================
    # Question / answer API
    # ==================================================================

    async def next_question(
        self, db: Any, *, session_id: str
    ) -> NextQuestionOutcome:
        """Return the current question, or ``Completion`` when none remain.

        Read-only; calling it repeatedly for the same state returns the
        same question.
        """
        record = await self._load(session_id)
        place_id = resolve_current(record)
        if place_id is None:
            return self._completion(record)

        place = await self._find_place(db, place_id)
        progress = record.progress
        return QuestionView(
            question_id=place.id,
            session_id=session_id,
            name=place.name,
            difficulty=place.difficulty,
            current=progress.position,
            total=progress.total,
        )

    async def submit_answer(
        self,
        db: Any,
        *,
        session_id: str,
        question_id: int,
        answer: str | None,
    ) -> SubmitOutcome:
        """Score an answer to the current question and advance the session.

        Returns ``Completion`` if the session was already complete.  Raises
        :class:`QuestionMismatchError` without touching the record when
        ``question_id`` is not the current question.
        """
        async with self._submission_guard(session_id):
            record = await self._load(session_id)
            expected = resolve_current(record)
            if expected is None:
                return self._completion(record)

            if question_id != expected:
                logger.warning(
                    "Question mismatch on session %s: expected=%s submitted=%s",
                    session_id, expected, question_id,
                )
                raise QuestionMismatchError(session_id, expected, question_id)

            place = await self._find_place(db, expected)
            correct = verify(answer, place.reading)

            updated = record.model_copy(
                update={"progress": record.progress.advance(correct)}
            )
            await self._store.put(session_id, updated)

        if updated.progress.is_completed:
            logger.info(
                "Session %s completed: %d/%d correct",
                session_id, updated.progress.correct_count, updated.progress.total,
            )

        if correct:
            return AnswerResult(correct=True)
        return AnswerResult(correct=False, correct_reading=place.reading)

    # ==================================================================
    # Results
    # ==================================================================

    async def result(self, *, session_id: str) -> Summary:
        """Summarize the score so far.  Valid before completion too."""
        record = await self._load(session_id)
        progress = record.progress
        return Summary(
            session_id=session_id,
            total_questions=progress.total,
            correct_answers=progress.correct_count,
            accuracy=progress.accuracy(),
        )

    # ==================================================================
    # Internal helpers
    # ==================================================================

    async def _load(self, session_id: str) -> SessionRecord:
        record = await self._store.get(session_id)
        if record is None:
            logger.warning("Session not found: %s", session_id)
            raise SessionNotFoundError(session_id)
        return record

    async def _find_place(self, db: Any, place_id: int) -> PlaceRecord:
        place = await self._catalog.find_by_id(db, place_id)
        if place is None:
            raise PlaceNotFoundError(place_id)
        return place

    @staticmethod
    def _completion(record: SessionRecord) -> Completion:
        progress = record.progress
        return Completion(current=progress.current_index, total=progress.total)

    def _submission_guard(self, session_id: str) -> AbstractAsyncContextManager:
        if not self._serialize:
            return nullcontext()
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

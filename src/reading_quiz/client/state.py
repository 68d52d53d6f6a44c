"""Client quiz state machine — the UI-side mirror of server session progress.

Phases::

    idle ──start──► question ──answer──► answered ──advance──► question ...
                                            │
                                            └──complete──► completed

``idle`` is the only initial phase and ``completed`` is terminal: starting
over goes through :func:`reset` back to ``idle``.

Every transition is a pure function of ``(state, server response)``.  The
server call always happens first; the transition only projects its
response.  Progress moves through the same ``SessionProgress.advance`` the
server uses, so the client cannot drift from the server's counters.

A transition attempted from the wrong phase returns an
:class:`InvalidTransition` value instead of raising, letting the caller
decide whether to redirect, reset, or fail (:func:`unwrap` raises).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from reading_quiz.errors import InvalidTransitionError
from reading_quiz.models.progress import SessionProgress
from reading_quiz.models.views import (
    AnswerResult,
    Completion,
    CreatedSession,
    QuestionView,
)

Phase = Literal["idle", "question", "answered", "completed"]


# ------------------------------------------------------------------
# States
# ------------------------------------------------------------------

class _BaseState(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: str | None = None
    progress: SessionProgress = SessionProgress(total=0)

    @property
    def total(self) -> int:
        return self.progress.total

    @property
    def current_index(self) -> int:
        return self.progress.current_index

    @property
    def correct_count(self) -> int:
        return self.progress.correct_count


class IdleState(_BaseState):
    phase: Literal["idle"] = "idle"


class QuestionState(_BaseState):
    phase: Literal["question"] = "question"
    session_id: str
    question_id: int
    place_name: str


class AnsweredState(_BaseState):
    phase: Literal["answered"] = "answered"
    session_id: str
    question_id: int
    place_name: str
    correct: bool
    correct_reading: str | None = None


class CompletedState(_BaseState):
    phase: Literal["completed"] = "completed"
    session_id: str


ClientQuizState = Annotated[
    Union[IdleState, QuestionState, AnsweredState, CompletedState],
    Field(discriminator="phase"),
]


class InvalidTransition(BaseModel):
    """A rejected transition: ``action`` is not allowed from ``phase``."""

    model_config = ConfigDict(frozen=True)

    action: str
    phase: Phase
    reason: str

    def to_error(self) -> InvalidTransitionError:
        return InvalidTransitionError(self.action, self.phase, self.reason)


TransitionResult = Union[
    IdleState, QuestionState, AnsweredState, CompletedState, InvalidTransition
]


def reject(action: str, state: _BaseState, reason: str) -> InvalidTransition:
    return InvalidTransition(action=action, phase=state.phase, reason=reason)


def unwrap(result: TransitionResult):
    """Return the new state, or raise ``InvalidTransitionError``."""
    if isinstance(result, InvalidTransition):
        raise result.to_error()
    return result


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------

def initial_state() -> IdleState:
    return IdleState()


def reset() -> IdleState:
    """Drop the current attempt.  Legal from every phase."""
    return IdleState()


def start(
    state: _BaseState, created: CreatedSession, view: QuestionView
) -> QuestionState | InvalidTransition:
    """idle → question, from a fresh session and its first question."""
    if state.phase != "idle":
        return reject("start", state, "a session is already in progress")
    if view.session_id != created.session_id:
        return reject("start", state, "question belongs to another session")
    if view.current != 1:
        return reject("start", state, f"expected question 1, got {view.current}")

    return QuestionState(
        session_id=created.session_id,
        progress=SessionProgress(total=created.total),
        question_id=view.question_id,
        place_name=view.name,
    )


def answer(
    state: _BaseState, result: AnswerResult
) -> AnsweredState | InvalidTransition:
    """question → answered, recording the server's verdict."""
    if not isinstance(state, QuestionState):
        return reject("answer", state, "only a shown question can be answered")

    return AnsweredState(
        session_id=state.session_id,
        progress=state.progress.advance(result.correct),
        question_id=state.question_id,
        place_name=state.place_name,
        correct=result.correct,
        correct_reading=result.correct_reading,
    )


def advance(
    state: _BaseState, view: QuestionView
) -> QuestionState | InvalidTransition:
    """answered → question, showing the server's next question."""
    if not isinstance(state, AnsweredState):
        return reject("advance", state, "only an answered question can be left")
    if view.session_id != state.session_id:
        return reject("advance", state, "question belongs to another session")
    if view.current != state.progress.position:
        return reject(
            "advance", state,
            f"out of sync: server is at question {view.current}, "
            f"client expected {state.progress.position}",
        )

    return QuestionState(
        session_id=state.session_id,
        progress=state.progress,
        question_id=view.question_id,
        place_name=view.name,
    )


def complete(
    state: _BaseState, completion: Completion
) -> CompletedState | InvalidTransition:
    """answered → completed, once the server reports no questions remain."""
    if not isinstance(state, AnsweredState):
        return reject("complete", state, "completion follows an answered question")
    if completion.current != state.progress.current_index:
        return reject(
            "complete", state,
            f"out of sync: server answered {completion.current}, "
            f"client answered {state.progress.current_index}",
        )

    return CompletedState(session_id=state.session_id, progress=state.progress)

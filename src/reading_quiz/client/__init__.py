"""Client-side quiz state: pure phase transitions and an HTTP driver."""

from reading_quiz.client.driver import QuizClient
from reading_quiz.client.state import (
    AnsweredState,
    ClientQuizState,
    CompletedState,
    IdleState,
    InvalidTransition,
    QuestionState,
    TransitionResult,
    advance,
    answer,
    complete,
    initial_state,
    reject,
    reset,
    start,
    unwrap,
)

__all__ = [
    "QuizClient",
    "AnsweredState",
    "ClientQuizState",
    "CompletedState",
    "IdleState",
    "InvalidTransition",
    "QuestionState",
    "TransitionResult",
    "advance",
    "answer",
    "complete",
    "initial_state",
    "reject",
    "reset",
    "start",
    "unwrap",
]

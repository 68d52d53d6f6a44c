"""Operation results — the contract between QuizSessionService and callers.

These are the JSON-serializable shapes returned by the service and sent
over the wire by the server.  Callers dispatch on type (or on the
``completed`` flag when reading raw JSON):

  - CreatedSession: a new session and its question count
  - QuestionView:   the current question
  - AnswerResult:   outcome of one submitted answer
  - Completion:     every question has been answered
  - Summary:        score report, available at any point in the session
"""

from typing import Literal

from pydantic import BaseModel


class CreatedSession(BaseModel):
    session_id: str
    total: int


class QuestionView(BaseModel):
    """The question currently awaiting an answer.

    ``current`` is the 1-based position of this question.
    """

    question_id: int
    session_id: str
    name: str
    difficulty: int | None = None
    current: int
    total: int


class Completion(BaseModel):
    """Terminal marker: ``current`` is the number of questions answered."""

    completed: Literal[True] = True
    current: int
    total: int


class AnswerResult(BaseModel):
    """Whether the submitted reading matched.

    ``correct_reading`` is only filled in for wrong answers.
    """

    correct: bool
    correct_reading: str | None = None


class Summary(BaseModel):
    session_id: str
    total_questions: int
    correct_answers: int
    accuracy: float


# Outcome unions; callers isinstance-check against Completion.
NextQuestionOutcome = QuestionView | Completion
SubmitOutcome = AnswerResult | Completion

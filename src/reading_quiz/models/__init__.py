"""Public model re-exports for reading_quiz.

Consumers should import from ``reading_quiz.models`` rather than reaching
into sub-modules directly.
"""

from reading_quiz.models.place import PlaceRecord
from reading_quiz.models.progress import SessionProgress
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

__all__ = [
    "PlaceRecord",
    "SessionProgress",
    "SessionRecord",
    "AnswerResult",
    "Completion",
    "CreatedSession",
    "NextQuestionOutcome",
    "QuestionView",
    "SubmitOutcome",
    "Summary",
]

"""Server-side session record kept in the ephemeral SessionStore."""

from pydantic import BaseModel, model_validator

from reading_quiz.models.progress import SessionProgress


class SessionRecord(BaseModel):
    """One quiz attempt: the sampled questions plus progress through them.

    ``question_ids`` is fixed at creation; only ``progress`` is replaced
    afterwards (by ``QuizSessionService.submit_answer``).
    """

    question_ids: list[int]
    progress: SessionProgress

    @model_validator(mode="after")
    def _check_total(self) -> "SessionRecord":
        if self.progress.total < 1:
            raise ValueError("A session needs at least one question")
        if len(self.question_ids) != self.progress.total:
            raise ValueError(
                f"question_ids has {len(self.question_ids)} entries "
                f"but total is {self.progress.total}"
            )
        return self

    @classmethod
    def start(cls, question_ids: list[int]) -> "SessionRecord":
        """Fresh record positioned at the first question."""
        return cls(
            question_ids=list(question_ids),
            progress=SessionProgress(total=len(question_ids)),
        )

"""SessionProgress — the one value type shared by server and client.

The server's session record and the client's phase state are two encodings
of the same progress counter.  Both embed a ``SessionProgress`` and move it
forward only through :meth:`SessionProgress.advance`, so there is exactly one
place where ``current_index`` and ``correct_count`` change.

Invariant (checked on every construction)::

    0 <= correct_count <= current_index <= total
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SessionProgress(BaseModel):
    """Progress through a fixed-length question sequence."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0)
    # 0-based index of the question currently awaiting an answer
    current_index: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_ordering(self) -> "SessionProgress":
        if self.current_index > self.total:
            raise ValueError(
                f"current_index {self.current_index} exceeds total {self.total}"
            )
        if self.correct_count > self.current_index:
            raise ValueError(
                f"correct_count {self.correct_count} exceeds "
                f"current_index {self.current_index}"
            )
        return self

    @property
    def is_completed(self) -> bool:
        return self.current_index == self.total

    @property
    def position(self) -> int:
        """1-based position of the current question."""
        return self.current_index + 1

    def advance(self, correct: bool) -> "SessionProgress":
        """Return the progress after answering the current question.

        Raises ``ValueError`` when every question has already been answered.
        """
        if self.is_completed:
            raise ValueError("Cannot advance a completed session")
        return self.model_copy(
            update={
                "current_index": self.current_index + 1,
                "correct_count": self.correct_count + (1 if correct else 0),
            }
        )

    def accuracy(self) -> float:
        """Percentage of correct answers over ``total``, two decimals."""
        if self.total <= 0:
            return 0
        return round(self.correct_count / self.total * 100, 2)

"""Question sequencing — which place is the session's current question."""

from reading_quiz.models.session import SessionRecord


def resolve_current(record: SessionRecord) -> int | None:
    """Return the place id awaiting an answer, or ``None`` once completed."""
    progress = record.progress
    if progress.current_index < progress.total:
        return record.question_ids[progress.current_index]
    return None

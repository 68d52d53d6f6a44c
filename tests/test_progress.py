"""Tests for SessionProgress, SessionRecord and the question sequencer."""

import pytest
from pydantic import ValidationError

from reading_quiz.models.progress import SessionProgress
from reading_quiz.models.session import SessionRecord
from reading_quiz.sequencer import resolve_current


class TestSessionProgress:

    def test_defaults_start_at_zero(self):
        p = SessionProgress(total=3)
        assert p.current_index == 0
        assert p.correct_count == 0
        assert p.position == 1
        assert not p.is_completed

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"total": 3, "current_index": 4},
            {"total": 3, "current_index": 1, "correct_count": 2},
            {"total": -1},
            {"total": 3, "current_index": -1},
        ],
    )
    def test_invariant_violations_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            SessionProgress(**kwargs)

    def test_advance_correct_increments_both(self):
        p = SessionProgress(total=3).advance(True)
        assert (p.current_index, p.correct_count) == (1, 1)

    def test_advance_wrong_increments_index_only(self):
        p = SessionProgress(total=3).advance(False)
        assert (p.current_index, p.correct_count) == (1, 0)

    def test_advance_returns_new_value(self):
        p = SessionProgress(total=2)
        p.advance(True)
        assert p.current_index == 0, "advance must not mutate in place"

    def test_cannot_advance_past_total(self):
        p = SessionProgress(total=1).advance(True)
        assert p.is_completed
        with pytest.raises(ValueError):
            p.advance(True)

    def test_k_advances_keep_ordering(self):
        p = SessionProgress(total=5)
        for k, correct in enumerate([True, False, True, True, False], start=1):
            p = p.advance(correct)
            assert p.current_index == k
            assert 0 <= p.correct_count <= p.current_index <= p.total

    def test_accuracy_rounds_to_two_places(self):
        assert SessionProgress(total=10, current_index=10, correct_count=7).accuracy() == 70.0
        assert SessionProgress(total=3, current_index=3, correct_count=2).accuracy() == 66.67

    def test_accuracy_of_empty_total_is_zero(self):
        assert SessionProgress(total=0).accuracy() == 0


class TestSessionRecord:

    def test_start_sets_total_from_ids(self):
        record = SessionRecord.start([5, 2, 9])
        assert record.progress.total == 3
        assert record.progress.current_index == 0

    def test_empty_question_list_rejected(self):
        with pytest.raises(ValidationError):
            SessionRecord.start([])

    def test_total_must_match_question_ids(self):
        with pytest.raises(ValidationError):
            SessionRecord(question_ids=[1, 2], progress=SessionProgress(total=3))


class TestResolveCurrent:

    def test_returns_id_at_current_index(self):
        record = SessionRecord(
            question_ids=[5, 2, 9],
            progress=SessionProgress(total=3, current_index=1),
        )
        assert resolve_current(record) == 2

    def test_returns_none_when_completed(self):
        record = SessionRecord(
            question_ids=[5, 2, 9],
            progress=SessionProgress(total=3, current_index=3, correct_count=1),
        )
        assert resolve_current(record) is None

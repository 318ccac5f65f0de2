"""Tests for domain models: grade ordering, label tables, and record invariants."""

from datetime import date

import pytest

from lctrack.domain.errors import InvalidRecord
from lctrack.domain.models import AttemptGrade, Difficulty, ProgressRecord


def test_grades_ordered_worst_to_best():
    assert (
        AttemptGrade.SHORT_FAIL
        < AttemptGrade.LONG_FAIL
        < AttemptGrade.MESSY
        < AttemptGrade.HARD
        < AttemptGrade.EASY
    )
    assert len(AttemptGrade) == 5


@pytest.mark.parametrize(
    "grade,label,rating",
    [
        (AttemptGrade.SHORT_FAIL, "ShortFail", 1),
        (AttemptGrade.LONG_FAIL, "LongFail", 2),
        (AttemptGrade.MESSY, "Messy", 3),
        (AttemptGrade.HARD, "Hard", 4),
        (AttemptGrade.EASY, "Easy", 5),
    ],
)
def test_grade_encodings(grade, label, rating):
    assert grade.label == label
    assert grade.rating == rating
    assert AttemptGrade.from_label(label) is grade
    assert AttemptGrade.from_rating(rating) is grade


def test_grade_unknown_label_raises_key_error():
    with pytest.raises(KeyError):
        AttemptGrade.from_label("SHORT_FAIL")
    with pytest.raises(KeyError):
        AttemptGrade.from_rating(6)


def test_difficulty_labels_case_insensitive():
    assert Difficulty.from_label("medium") is Difficulty.MEDIUM
    assert Difficulty.from_label(" HARD ") is Difficulty.HARD
    assert Difficulty.EASY.label == "Easy"
    with pytest.raises(KeyError):
        Difficulty.from_label("Extreme")


def test_record_requires_positive_attempt_count():
    with pytest.raises(InvalidRecord):
        ProgressRecord(
            item=1,
            last_attempted=date(2024, 1, 1),
            latest_grade=AttemptGrade.EASY,
            next_due_date=None,
            attempt_count=0,
        )


def test_record_due_date_not_before_last_attempt():
    with pytest.raises(InvalidRecord):
        ProgressRecord(
            item=1,
            last_attempted=date(2024, 1, 2),
            latest_grade=AttemptGrade.EASY,
            next_due_date=date(2024, 1, 1),
            attempt_count=1,
        )


def test_record_is_due(record_42):
    assert not record_42.is_due(date(2024, 1, 1))
    assert record_42.is_due(date(2024, 1, 2))
    assert record_42.is_due(date(2024, 3, 1))


def test_record_without_due_date_is_never_due():
    record = ProgressRecord(
        item=1,
        last_attempted=date(2024, 1, 1),
        latest_grade=AttemptGrade.EASY,
        next_due_date=None,
        attempt_count=3,
    )
    assert not record.is_due(date(2030, 1, 1))

"""
Domain models for attempt tracking.

These are pure data structures with no I/O or external dependencies.
Enumerations carry explicit label tables so the persisted encoding does
not depend on member names.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum

from .errors import InvalidRecord


class AttemptGrade(IntEnum):
    """
    Quality of a single attempt, ordered worst to best.

    Values only define the ordering; use the label and rating tables
    below for any external encoding.
    """

    SHORT_FAIL = 1
    LONG_FAIL = 2
    MESSY = 3
    HARD = 4
    EASY = 5

    @property
    def label(self) -> str:
        return _GRADE_TO_LABEL[self]

    @property
    def rating(self) -> int:
        return _GRADE_TO_RATING[self]

    @classmethod
    def from_label(cls, label: str) -> "AttemptGrade":
        """Look up a grade by its persisted label. Raises KeyError if unknown."""
        return _LABEL_TO_GRADE[label]

    @classmethod
    def from_rating(cls, rating: int) -> "AttemptGrade":
        """Look up a grade by its 1-5 CLI rating. Raises KeyError if unknown."""
        return _RATING_TO_GRADE[rating]


_GRADE_TO_LABEL: dict[AttemptGrade, str] = {
    AttemptGrade.SHORT_FAIL: "ShortFail",
    AttemptGrade.LONG_FAIL: "LongFail",
    AttemptGrade.MESSY: "Messy",
    AttemptGrade.HARD: "Hard",
    AttemptGrade.EASY: "Easy",
}
_LABEL_TO_GRADE = {label: grade for grade, label in _GRADE_TO_LABEL.items()}

_RATING_TO_GRADE: dict[int, AttemptGrade] = {
    1: AttemptGrade.SHORT_FAIL,
    2: AttemptGrade.LONG_FAIL,
    3: AttemptGrade.MESSY,
    4: AttemptGrade.HARD,
    5: AttemptGrade.EASY,
}
_GRADE_TO_RATING = {grade: rating for rating, grade in _RATING_TO_GRADE.items()}


class Difficulty(Enum):
    """Catalog difficulty tier."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def label(self) -> str:
        return _DIFFICULTY_TO_LABEL[self]

    @classmethod
    def from_label(cls, label: str) -> "Difficulty":
        """Case-insensitive lookup by persisted label. Raises KeyError if unknown."""
        return _LABEL_TO_DIFFICULTY[label.strip().lower()]


_DIFFICULTY_TO_LABEL: dict[Difficulty, str] = {
    Difficulty.EASY: "Easy",
    Difficulty.MEDIUM: "Medium",
    Difficulty.HARD: "Hard",
}
_LABEL_TO_DIFFICULTY = {label.lower(): d for d, label in _DIFFICULTY_TO_LABEL.items()}


@dataclass(frozen=True)
class ProgressRecord:
    """
    Per-item summary of attempt history.

    Attributes:
        item: The problem this record belongs to.
        last_attempted: Date of the most recent attempt.
        latest_grade: Grade of the most recent attempt.
        next_due_date: Next review date, or None if no review is scheduled.
        attempt_count: Total number of graded attempts (always >= 1).
    """

    item: int
    last_attempted: date
    latest_grade: AttemptGrade
    next_due_date: date | None
    attempt_count: int

    def __post_init__(self):
        if self.attempt_count < 1:
            raise InvalidRecord(
                f"attempt_count must be >= 1 for item {self.item}, got {self.attempt_count}"
            )
        if self.next_due_date is not None and self.next_due_date < self.last_attempted:
            raise InvalidRecord(
                f"next_due_date {self.next_due_date} precedes last_attempted "
                f"{self.last_attempted} for item {self.item}"
            )

    def is_due(self, on: date) -> bool:
        return self.next_due_date is not None and self.next_due_date <= on


@dataclass(frozen=True)
class CatalogEntry:
    """A known practice problem. Read-only to the scheduler."""

    id: int  # LeetCode ID
    order: int
    name: str
    difficulty: Difficulty | None = None
    week: int | None = None

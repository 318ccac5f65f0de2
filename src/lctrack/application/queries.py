"""
Read-only queries over the catalog and progress records.

Pure set operations; callers fetch the snapshots from the repositories.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from lctrack.domain.models import AttemptGrade, CatalogEntry, ProgressRecord


@dataclass
class ProgressSummary:
    """Aggregate progress over the whole catalog."""

    total_problems: int
    attempted: int
    remaining: int
    total_attempts: int
    due: int
    grades: dict[AttemptGrade, int] = field(default_factory=dict)  # latest grade counts

    @property
    def completion(self) -> float | None:
        """Share of catalog problems attempted at least once."""
        if self.total_problems == 0:
            return None
        return self.attempted / self.total_problems

    def to_dict(self) -> dict:
        return {
            "total_problems": self.total_problems,
            "attempted": self.attempted,
            "remaining": self.remaining,
            "total_attempts": self.total_attempts,
            "due": self.due,
            "completion": self.completion,
            "grades": {grade.label: self.grades.get(grade, 0) for grade in AttemptGrade},
        }


def next_unattempted(
    catalog: Iterable[CatalogEntry], records: Iterable[ProgressRecord]
) -> CatalogEntry | None:
    """
    Return the unattempted catalog entry with the smallest order.

    Ties on order are broken by the smaller id. Returns None once every
    catalog entry has a progress record.
    """
    attempted = {record.item for record in records}
    candidates = [entry for entry in catalog if entry.id not in attempted]
    if not candidates:
        return None
    return min(candidates, key=lambda entry: (entry.order, entry.id))


def due_records(records: Iterable[ProgressRecord], on: date) -> list[ProgressRecord]:
    """Records scheduled for review on or before ``on``, earliest first."""
    due = [record for record in records if record.is_due(on)]
    due.sort(key=lambda record: (record.next_due_date, record.item))
    return due


def summarize_progress(
    catalog: Iterable[CatalogEntry], records: Iterable[ProgressRecord], today: date
) -> ProgressSummary:
    """
    Compute aggregate progress.

    Records for items missing from the catalog still count towards
    attempts and grades but not towards catalog completion.
    """
    catalog_ids = {entry.id for entry in catalog}
    records = list(records)

    attempted = sum(1 for record in records if record.item in catalog_ids)
    grades = Counter(record.latest_grade for record in records)

    return ProgressSummary(
        total_problems=len(catalog_ids),
        attempted=attempted,
        remaining=len(catalog_ids) - attempted,
        total_attempts=sum(record.attempt_count for record in records),
        due=sum(1 for record in records if record.is_due(today)),
        grades=dict(grades),
    )

"""Tests for next-unattempted, due, and summary queries."""

from datetime import date

from lctrack.application.queries import (
    ProgressSummary,
    due_records,
    next_unattempted,
    summarize_progress,
)
from lctrack.application.scheduler import first_attempt
from lctrack.domain.models import AttemptGrade, CatalogEntry, ProgressRecord


def _records(*items, grade=AttemptGrade.HARD, on=date(2024, 1, 1)):
    return [first_attempt(i, grade, on) for i in items]


class TestNextUnattempted:
    def test_returns_gap_in_order(self, catalog):
        result = next_unattempted(catalog, _records(1, 3))
        assert result is not None
        assert result.id == 2

    def test_none_when_all_attempted(self, catalog):
        assert next_unattempted(catalog, _records(1, 2, 3)) is None

    def test_smallest_order_not_catalog_position(self):
        catalog = [
            CatalogEntry(id=10, order=30, name="C"),
            CatalogEntry(id=11, order=10, name="A"),
            CatalogEntry(id=12, order=20, name="B"),
        ]
        assert next_unattempted(catalog, []).id == 11

    def test_tie_on_order_breaks_by_id(self):
        catalog = [
            CatalogEntry(id=8, order=1, name="B"),
            CatalogEntry(id=5, order=1, name="A"),
        ]
        assert next_unattempted(catalog, []).id == 5
        assert next_unattempted(list(reversed(catalog)), []).id == 5

    def test_empty_catalog(self):
        assert next_unattempted([], _records(1)) is None

    def test_records_outside_catalog_ignored(self, catalog):
        assert next_unattempted(catalog, _records(99)).id == 1


class TestDueRecords:
    def test_filters_and_sorts(self):
        records = [
            ProgressRecord(3, date(2024, 1, 5), AttemptGrade.EASY, date(2024, 1, 6), 1),
            ProgressRecord(1, date(2024, 1, 1), AttemptGrade.MESSY, date(2024, 1, 2), 2),
            ProgressRecord(2, date(2024, 1, 1), AttemptGrade.HARD, date(2024, 1, 2), 1),
            ProgressRecord(4, date(2024, 1, 1), AttemptGrade.EASY, None, 4),
        ]
        due = due_records(records, date(2024, 1, 3))
        assert [r.item for r in due] == [1, 2]

    def test_due_on_exact_date(self, record_42):
        assert due_records([record_42], date(2024, 1, 2)) == [record_42]
        assert due_records([record_42], date(2024, 1, 1)) == []


class TestSummary:
    def test_counts(self, catalog):
        records = [
            first_attempt(1, AttemptGrade.EASY, date(2024, 1, 1)),
            ProgressRecord(2, date(2024, 1, 9), AttemptGrade.SHORT_FAIL, date(2024, 1, 10), 3),
        ]
        summary = summarize_progress(catalog, records, today=date(2024, 1, 5))

        assert summary.total_problems == 3
        assert summary.attempted == 2
        assert summary.remaining == 1
        assert summary.total_attempts == 4
        assert summary.due == 1
        assert summary.grades == {AttemptGrade.EASY: 1, AttemptGrade.SHORT_FAIL: 1}
        assert summary.completion == 2 / 3

    def test_empty_catalog_has_no_completion(self):
        summary = summarize_progress([], [], today=date(2024, 1, 1))
        assert summary.completion is None
        assert summary.remaining == 0

    def test_to_dict_lists_every_grade(self):
        summary = ProgressSummary(
            total_problems=2,
            attempted=1,
            remaining=1,
            total_attempts=1,
            due=0,
            grades={AttemptGrade.MESSY: 1},
        )
        d = summary.to_dict()
        assert d["completion"] == 0.5
        assert d["grades"] == {
            "ShortFail": 0,
            "LongFail": 0,
            "Messy": 1,
            "Hard": 0,
            "Easy": 0,
        }

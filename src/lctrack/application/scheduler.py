"""
Attempt state machine and review scheduling.

This is a pure computation module with no I/O and no clock access:
callers always pass the attempt date explicitly.

Two transitions exist for an item:
1. First attempt: no record yet, produces a record with attempt_count=1
2. Subsequent attempt: replaces an existing record, incrementing the count
"""

from dataclasses import replace
from datetime import date, datetime, timedelta

from lctrack.domain.constants import (
    DATE_FORMAT,
    DEFAULT_INTERVAL_DAYS,
    FIRST_ATTEMPT_COUNT,
)
from lctrack.domain.errors import InvalidDate, InvalidGrade, NoPriorAttempt
from lctrack.domain.models import AttemptGrade, ProgressRecord


def _due_date(attempt_date: date, interval: timedelta | None) -> date | None:
    if interval is None:
        return None
    try:
        return attempt_date + interval
    except OverflowError:
        raise InvalidDate(
            attempt_date.isoformat(), "next review would fall past the last supported date"
        ) from None


class Scheduler:
    """
    Turns graded attempts into progress records with a next-due date.

    Stateless and side-effect free. The interval is currently a constant
    number of days regardless of grade or attempt count.
    """

    def __init__(self, interval_days: int = DEFAULT_INTERVAL_DAYS):
        if interval_days < 1:
            raise ValueError(f"interval_days must be >= 1, got {interval_days}")
        self.interval_days = interval_days

    def schedule_interval(self, grade: AttemptGrade, attempt_count: int) -> timedelta | None:
        """
        Time until the item should be reviewed again.

        Args:
            grade: Grade of the attempt just recorded.
            attempt_count: Total attempts after recording it (0 for a first attempt).

        Returns:
            A non-negative interval, or None if the item should never be
            scheduled again.
        """
        return timedelta(days=self.interval_days)

    def first_attempt(
        self, item: int, grade: AttemptGrade, attempt_date: date
    ) -> ProgressRecord:
        """Create the record for an item's first graded attempt.

        Raises:
            InvalidDate: If the next review date falls past the last supported date.
        """
        interval = self.schedule_interval(grade, FIRST_ATTEMPT_COUNT)
        return ProgressRecord(
            item=item,
            last_attempted=attempt_date,
            latest_grade=grade,
            next_due_date=_due_date(attempt_date, interval),
            attempt_count=1,
        )

    def subsequent_attempt(
        self, existing: ProgressRecord | None, grade: AttemptGrade, attempt_date: date
    ) -> ProgressRecord:
        """
        Apply a later attempt to an existing record.

        Returns a new record; ``existing`` is left untouched.

        Raises:
            NoPriorAttempt: If ``existing`` is None.
            InvalidDate: If the next review date falls past the last supported date.
        """
        if existing is None:
            raise NoPriorAttempt()

        attempt_count = existing.attempt_count + 1
        interval = self.schedule_interval(grade, attempt_count)
        return replace(
            existing,
            last_attempted=attempt_date,
            latest_grade=grade,
            next_due_date=_due_date(attempt_date, interval),
            attempt_count=attempt_count,
        )


_default_scheduler = Scheduler()


def schedule_interval(grade: AttemptGrade, attempt_count: int) -> timedelta | None:
    return _default_scheduler.schedule_interval(grade, attempt_count)


def first_attempt(item: int, grade: AttemptGrade, attempt_date: date) -> ProgressRecord:
    return _default_scheduler.first_attempt(item, grade, attempt_date)


def subsequent_attempt(
    existing: ProgressRecord | None, grade: AttemptGrade, attempt_date: date
) -> ProgressRecord:
    return _default_scheduler.subsequent_attempt(existing, grade, attempt_date)


def parse_grade(raw: AttemptGrade | int | str) -> AttemptGrade:
    """
    Translate a raw rating into an AttemptGrade.

    Accepts an AttemptGrade, a 1-5 rating (int or digit string), or a
    persisted label such as "LongFail" (case-insensitive).

    Raises:
        InvalidGrade: If the value has no mapping. Never coerces.
    """
    if isinstance(raw, AttemptGrade):
        return raw
    if isinstance(raw, bool):
        raise InvalidGrade(raw)
    if isinstance(raw, int):
        try:
            return AttemptGrade.from_rating(raw)
        except KeyError:
            raise InvalidGrade(raw) from None
    if isinstance(raw, str):
        text = raw.strip()
        if text.isascii() and text.isdecimal():
            try:
                return parse_grade(int(text))
            except ValueError:
                raise InvalidGrade(raw) from None
        for grade in AttemptGrade:
            if grade.label.lower() == text.lower():
                return grade
    raise InvalidGrade(raw)


def parse_date(raw: str) -> date:
    """
    Parse a YYYY-MM-DD calendar date.

    Raises:
        InvalidDate: If the string is not a valid date in that format.
    """
    try:
        return datetime.strptime(raw.strip(), DATE_FORMAT).date()
    except (ValueError, AttributeError):
        raise InvalidDate(raw) from None


def format_date(value: date | None) -> str | None:
    return value.strftime(DATE_FORMAT) if value is not None else None

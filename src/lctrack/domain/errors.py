"""
Error hierarchy for lctrack.

Every error raised by the domain or application layers derives from
TrackerError so the CLI can report it and abort a single command.
"""


class TrackerError(Exception):
    """Base class for all lctrack errors."""


class NoPriorAttempt(TrackerError):
    """A subsequent attempt was recorded for an item with no progress record."""

    def __init__(self, item: object = None):
        self.item = item
        if item is None:
            msg = "No prior attempt recorded; log a first attempt instead."
        else:
            msg = f"No prior attempt recorded for item {item}; log a first attempt instead."
        super().__init__(msg)


class InvalidGrade(TrackerError, ValueError):
    """A raw rating could not be mapped onto an AttemptGrade."""

    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(
            f"Invalid grade {raw!r}: expected 1-5 or one of "
            "ShortFail, LongFail, Messy, Hard, Easy."
        )


class InvalidDate(TrackerError, ValueError):
    """A date string is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, raw: object, reason: str = "please use YYYY-MM-DD format"):
        self.raw = raw
        super().__init__(f"Invalid date {raw!r}: {reason}.")


class InvalidRecord(TrackerError, ValueError):
    """A ProgressRecord violates one of its invariants."""


class UnknownItem(TrackerError, LookupError):
    """An item id is not present in the catalog."""

    def __init__(self, item: object):
        self.item = item
        super().__init__(f"Problem {item} is not in the catalog.")


class StoreError(TrackerError):
    """The record store failed (I/O error, constraint violation, corrupt row)."""

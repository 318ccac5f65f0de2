"""
Progress Service: Application layer orchestrator.

Loads the current state from the repositories, runs it through the
scheduler, and persists the result.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from lctrack.domain.errors import UnknownItem
from lctrack.domain.models import AttemptGrade, CatalogEntry, ProgressRecord
from lctrack.domain.ports import CatalogRepository, ProgressRepository

from .queries import ProgressSummary, due_records, next_unattempted, summarize_progress
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass
class AttemptResult:
    """Outcome of logging one attempt."""

    record: ProgressRecord
    first_attempt: bool


class ProgressService:
    """
    Application service for logging attempts and answering progress queries.

    Follows Dependency Inversion: depends on the repository abstractions,
    not concrete adapter implementations. The scheduler never sees the
    clock; "today" is resolved here through ``clock``.
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        catalog_repo: CatalogRepository,
        scheduler: Scheduler | None = None,
        clock: Callable[[], date] = date.today,
    ):
        """
        Args:
            progress_repo: The repository (port) for progress records.
            catalog_repo: The repository (port) for the problem catalog.
            scheduler: Optional custom scheduler; uses default if not provided.
            clock: Returns the current local date when none is supplied.
        """
        self._progress = progress_repo
        self._catalog = catalog_repo
        self._scheduler = scheduler or Scheduler()
        self._clock = clock

    def today(self) -> date:
        return self._clock()

    async def record_attempt(
        self,
        item: int,
        grade: AttemptGrade,
        attempt_date: date | None = None,
    ) -> AttemptResult:
        """
        Log a graded attempt, routing to the first or subsequent transition.

        Nothing is written if the scheduler raises.

        Raises:
            UnknownItem: If the item is not in the catalog.
        """
        if await self._catalog.get_item(item) is None:
            raise UnknownItem(item)

        when = attempt_date or self.today()
        existing = await self._progress.get(item)

        if existing is None:
            logger.info(f"Logging first attempt for problem {item}")
            record = self._scheduler.first_attempt(item, grade, when)
        else:
            logger.info(
                f"Updating progress for problem {item} (attempt {existing.attempt_count + 1})"
            )
            record = self._scheduler.subsequent_attempt(existing, grade, when)

        await self._progress.put(record)
        return AttemptResult(record=record, first_attempt=existing is None)

    async def get_progress(self, item: int) -> ProgressRecord | None:
        return await self._progress.get(item)

    async def next_problem(self) -> CatalogEntry | None:
        """The next catalog entry that has never been attempted, if any."""
        catalog = await self._catalog.list_all_items()
        records = await self._progress.list_all()
        return next_unattempted(catalog, records)

    async def due_for_review(self, on: date | None = None) -> list[ProgressRecord]:
        records = await self._progress.list_all()
        return due_records(records, on or self.today())

    async def summary(self) -> ProgressSummary:
        catalog = await self._catalog.list_all_items()
        records = await self._progress.list_all()
        return summarize_progress(catalog, records, self.today())

    async def add_problem(self, entry: CatalogEntry) -> bool:
        """
        Register a problem in the catalog.

        Returns False if a problem with the same id already exists.
        """
        inserted = await self._catalog.add_item(entry)
        if inserted:
            logger.info(f"Added problem {entry.id} ({entry.name}) at order {entry.order}")
        else:
            logger.info(f"Problem {entry.id} already in catalog, skipped")
        return inserted

    async def list_problems(self) -> list[CatalogEntry]:
        return await self._catalog.list_all_items()

"""
Service Factory
Centralizes wiring of storage adapters and the scheduler from configuration.
"""

from lctrack.application.config import AppConfig
from lctrack.application.progress_service import ProgressService
from lctrack.application.scheduler import Scheduler
from lctrack.domain.ports import CatalogRepository, ProgressRepository
from lctrack.infrastructure.sqlite_store import (
    SqliteCatalogRepository,
    SqliteDatabase,
    SqliteProgressRepository,
)


def get_repositories(config: AppConfig) -> tuple[ProgressRepository, CatalogRepository]:
    """
    Returns the progress and catalog repositories backed by the configured database.
    The schema is created on first use.
    """
    db = SqliteDatabase(config.db_path)
    db.initialize()
    return SqliteProgressRepository(db), SqliteCatalogRepository(db)


def get_progress_service(config: AppConfig) -> ProgressService:
    progress_repo, catalog_repo = get_repositories(config)
    return ProgressService(
        progress_repo,
        catalog_repo,
        scheduler=Scheduler(interval_days=config.interval_days),
    )

# Domain Package
from .errors import (
    InvalidDate,
    InvalidGrade,
    InvalidRecord,
    NoPriorAttempt,
    StoreError,
    TrackerError,
    UnknownItem,
)
from .models import AttemptGrade, CatalogEntry, Difficulty, ProgressRecord
from .ports import CatalogRepository, ProgressRepository

__all__ = [
    "AttemptGrade",
    "CatalogEntry",
    "Difficulty",
    "ProgressRecord",
    "CatalogRepository",
    "ProgressRepository",
    "TrackerError",
    "NoPriorAttempt",
    "InvalidGrade",
    "InvalidDate",
    "InvalidRecord",
    "UnknownItem",
    "StoreError",
]

from datetime import date

import pytest

from lctrack.domain.models import AttemptGrade, CatalogEntry, Difficulty, ProgressRecord
from lctrack.infrastructure.sqlite_store import SqliteDatabase


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir and clears LCTRACK_* env."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in ("LCTRACK_DB_PATH", "LCTRACK_VERBOSE", "LCTRACK_INTERVAL_DAYS"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "lc_tracking.db"


@pytest.fixture
def database(db_path):
    db = SqliteDatabase(db_path)
    db.initialize()
    return db


@pytest.fixture
def catalog():
    return [
        CatalogEntry(id=1, order=1, name="Two Sum", difficulty=Difficulty.EASY, week=1),
        CatalogEntry(id=2, order=2, name="Valid Parentheses", difficulty=Difficulty.EASY, week=1),
        CatalogEntry(id=3, order=3, name="Merge Intervals", difficulty=Difficulty.MEDIUM, week=2),
    ]


@pytest.fixture
def record_42():
    return ProgressRecord(
        item=42,
        last_attempted=date(2024, 1, 1),
        latest_grade=AttemptGrade.EASY,
        next_due_date=date(2024, 1, 2),
        attempt_count=1,
    )

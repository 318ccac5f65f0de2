"""
SQLite Store: Infrastructure adapters for the local tracking database.

Implements ProgressRepository and CatalogRepository on top of a single
SQLite file. Dates are stored as YYYY-MM-DD text and enumerations through
their explicit label tables.
"""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path

from lctrack.domain.constants import DATE_FORMAT, SQLITE_TIMEOUT
from lctrack.domain.errors import InvalidRecord, StoreError
from lctrack.domain.models import AttemptGrade, CatalogEntry, Difficulty, ProgressRecord
from lctrack.domain.ports import CatalogRepository, ProgressRepository

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS problems (
        id INTEGER PRIMARY KEY,
        "order" INTEGER NOT NULL,
        name TEXT NOT NULL UNIQUE,
        difficulty TEXT,
        week INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS progress (
        problem_id INTEGER PRIMARY KEY,
        last_attempted TEXT NOT NULL,
        attempt_rating TEXT NOT NULL,
        next_attempt_date TEXT,
        number_of_attempts INTEGER NOT NULL,
        FOREIGN KEY (problem_id) REFERENCES problems(id) ON DELETE CASCADE
    )
    """,
)


class SqliteDatabase:
    """
    Manages connections to the tracking database.

    Use as a context manager: the connection commits on a clean exit and
    rolls back if the block raises. sqlite3 errors surface as StoreError.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.conn: sqlite3.Connection | None = None

    def connect(self) -> sqlite3.Connection:
        """Open a connection, creating the parent directory if needed."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Could not create database directory {self.db_path.parent}: {e}") from e
        try:
            self.conn = sqlite3.connect(str(self.db_path), timeout=SQLITE_TIMEOUT)
        except sqlite3.Error as e:
            raise StoreError(f"Could not open database at {self.db_path}: {e}") from e
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")
        return self.conn

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> sqlite3.Connection:
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            try:
                if exc_type is None:
                    self.conn.commit()
                else:
                    self.conn.rollback()
            finally:
                self.close()
        if isinstance(exc_val, sqlite3.Error):
            raise StoreError(str(exc_val)) from exc_val
        return False

    def initialize(self):
        """Create all tables. Safe to call on an existing database."""
        with self as conn:
            for statement in SCHEMA:
                conn.execute(statement)
        logger.debug(f"Database ready at {self.db_path}")


def _format_date(value: date | None) -> str | None:
    return value.strftime(DATE_FORMAT) if value is not None else None


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    return datetime.strptime(value, DATE_FORMAT).date()


class SqliteProgressRepository(ProgressRepository):
    """Stores one row per attempted problem in the ``progress`` table."""

    def __init__(self, db: SqliteDatabase):
        self.db = db

    async def get(self, item: int) -> ProgressRecord | None:
        with self.db as conn:
            row = conn.execute(
                "SELECT * FROM progress WHERE problem_id = ?", (item,)
            ).fetchone()
        return self._to_record(row) if row else None

    async def put(self, record: ProgressRecord) -> None:
        with self.db as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO progress
                    (problem_id, last_attempted, attempt_rating, next_attempt_date, number_of_attempts)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    record.item,
                    _format_date(record.last_attempted),
                    record.latest_grade.label,
                    _format_date(record.next_due_date),
                    record.attempt_count,
                ),
            )
        logger.debug(f"Saved progress for problem {record.item}")

    async def list_all(self) -> list[ProgressRecord]:
        with self.db as conn:
            rows = conn.execute("SELECT * FROM progress ORDER BY problem_id").fetchall()
        return [self._to_record(row) for row in rows]

    def _to_record(self, row: sqlite3.Row) -> ProgressRecord:
        try:
            return ProgressRecord(
                item=row["problem_id"],
                last_attempted=_parse_date(row["last_attempted"]),
                latest_grade=AttemptGrade.from_label(row["attempt_rating"]),
                next_due_date=_parse_date(row["next_attempt_date"]),
                attempt_count=row["number_of_attempts"],
            )
        except (KeyError, ValueError, TypeError, InvalidRecord) as e:
            raise StoreError(
                f"Corrupt progress row for problem_id {row['problem_id']}: {e}"
            ) from e


class SqliteCatalogRepository(CatalogRepository):
    """Reads and populates the ``problems`` table."""

    def __init__(self, db: SqliteDatabase):
        self.db = db

    async def list_all_items(self) -> list[CatalogEntry]:
        with self.db as conn:
            rows = conn.execute(
                'SELECT id, "order", name, difficulty, week FROM problems ORDER BY "order", id'
            ).fetchall()
        return [self._to_entry(row) for row in rows]

    async def get_item(self, item_id: int) -> CatalogEntry | None:
        with self.db as conn:
            row = conn.execute(
                'SELECT id, "order", name, difficulty, week FROM problems WHERE id = ?',
                (item_id,),
            ).fetchone()
        return self._to_entry(row) if row else None

    async def add_item(self, entry: CatalogEntry) -> bool:
        with self.db as conn:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO problems (id, "order", name, difficulty, week)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.order,
                    entry.name,
                    entry.difficulty.label if entry.difficulty else None,
                    entry.week,
                ),
            )
            return cursor.rowcount > 0

    def _to_entry(self, row: sqlite3.Row) -> CatalogEntry:
        try:
            difficulty = Difficulty.from_label(row["difficulty"]) if row["difficulty"] else None
        except KeyError as e:
            raise StoreError(f"Unknown difficulty {row['difficulty']!r} for problem {row['id']}") from e
        return CatalogEntry(
            id=row["id"],
            order=row["order"],
            name=row["name"],
            difficulty=difficulty,
            week=row["week"],
        )

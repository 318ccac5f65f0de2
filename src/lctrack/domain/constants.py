"""Centralized constants for lctrack.

All magic numbers and storage defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Scheduling ----------
DEFAULT_INTERVAL_DAYS = 1
FIRST_ATTEMPT_COUNT = 0  # attempt count passed to the interval on a first attempt

# ---------- Ratings ----------
MIN_RATING = 1
MAX_RATING = 5

# ---------- Dates ----------
DATE_FORMAT = "%Y-%m-%d"

# ---------- Storage ----------
DEFAULT_DB_FILENAME = "lc_tracking.db"
PROBLEMS_TABLE = "problems"
PROGRESS_TABLE = "progress"
SQLITE_TIMEOUT = 10.0  # seconds

# ---------- Config ----------
ENV_PREFIX = "LCTRACK_"
CONFIG_DIR_NAME = "lctrack"

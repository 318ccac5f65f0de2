# Infrastructure Adapters Package
from .sqlite_store import SqliteCatalogRepository, SqliteDatabase, SqliteProgressRepository

__all__ = ["SqliteDatabase", "SqliteProgressRepository", "SqliteCatalogRepository"]

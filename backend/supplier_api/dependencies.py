"""Database handle and common dependencies for the API."""
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from fastapi import Request

from .store import SCHEMA

# Database path - configurable via env var, defaults to supplier_directory.db
DB_PATH = Path(os.environ.get("DATABASE_PATH", str(Path(__file__).parent.parent / "supplier_directory.db")))

# Query timeout in seconds (configurable via environment variable)
DB_QUERY_TIMEOUT = int(os.environ.get("DB_QUERY_TIMEOUT", "30"))


def casefold(value):
    """SQL casefold(): Unicode-aware case folding (SQLite LOWER only folds ASCII)."""
    return value.casefold() if isinstance(value, str) else value


class Database:
    """Handle on the vendor document store.

    Constructed and opened by the application lifespan, then injected into
    routes with ``Depends(get_database)``. Each unit of work borrows a
    short-lived connection via ``connection()``.
    """

    def __init__(self, path: Path | str = DB_PATH, timeout: int = DB_QUERY_TIMEOUT):
        self.path = Path(path)
        self.timeout = timeout
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "Database":
        """Create the database file and schema if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            conn.close()
        self._open = True
        return self

    def close(self) -> None:
        self._open = False

    def exists(self) -> bool:
        """Check if the database file exists."""
        return self.path.exists()

    def _connect(self) -> sqlite3.Connection:
        """Create a connection with row factory and busy timeout."""
        conn = sqlite3.connect(str(self.path), timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute(f"PRAGMA busy_timeout = {self.timeout * 1000}")
        # WAL mode allows concurrent readers while one writer is active
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA foreign_keys = ON")
        conn.create_function("casefold", 1, casefold, deterministic=True)
        return conn

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for a request-scoped connection."""
        if not self._open:
            raise sqlite3.OperationalError(f"database {self.path.name} is not open")
        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the lifespan-owned database handle."""
    return request.app.state.database

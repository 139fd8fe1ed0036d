"""
SQLite plumbing for the counter document store.

This module provides path resolution for the database file, a
connection factory, a cursor context manager and the error type
raised by the persistence layer.  SQLite is used as a lightweight
embedded document store: one table per collection, one row per
document.  To switch to another backend you would replace the
connection logic here and the queries in ``services.counter_service``.
"""

import enum
import os
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StoreErrorKind(str, enum.Enum):
    """Cause of a failed store operation."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    IO = "io"


class StoreError(Exception):
    """Raised by every store operation that cannot complete.

    ``kind`` tells callers why the operation failed so that request
    handlers can branch on the cause instead of guessing it.
    """

    def __init__(self, kind: StoreErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"StoreError(kind={self.kind.value!r}, message={str(self)!r})"


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are returned unchanged; relative paths are resolved
    against the project root (the directory containing ``counter_api``).
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def validate_collection(name: str) -> str:
    """Return ``name`` if it is usable as a table name, else raise ``ValueError``."""
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid collection name: {name!r}")
    return name


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection with name-addressable rows."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()

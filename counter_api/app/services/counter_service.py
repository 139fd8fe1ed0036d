"""
Persistence layer for counters.

``CounterStore`` wraps a SQLite table used as a document collection:
each row is one counter document ``(id, count, rev)``.  The store is
constructed explicitly and handed to the API layer, so tests can
point it at a temporary file or swap it for a test double.

Every public operation is a coroutine and raises :class:`StoreError`
on failure.  The error ``kind`` distinguishes a missing document, a
conflicting one (duplicate id or stale revision) and any other
backend fault.  The SQL itself lives in private synchronous helpers
that run in Starlette's thread pool, so a locked database only
suspends the request waiting on it.  All queries use parameterized
statements; the table name is validated once at construction.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List

from starlette.concurrency import run_in_threadpool

from counter_api.app.core.db import (
    StoreError,
    StoreErrorKind,
    get_cursor,
    validate_collection,
)
from counter_api.app.schemas.counter import CounterDocument

logger = logging.getLogger(__name__)


class CounterStore:
    """Document store for named counters."""

    def __init__(self, database_path: str, collection: str = "counters") -> None:
        self.database_path = database_path
        self.collection = validate_collection(collection)

    def init(self) -> None:
        """Create the collection table if it does not exist yet."""
        with get_cursor(self.database_path) as cursor:
            cursor.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.collection} (
                    id TEXT PRIMARY KEY,
                    count INTEGER NOT NULL DEFAULT 0,
                    rev INTEGER NOT NULL DEFAULT 1
                )
                """
            )
        logger.info("Counter store ready at %s (%s)", self.database_path, self.collection)

    async def save_counter(self, name: str, count: int) -> CounterDocument:
        """Insert a new counter document.

        Raises ``StoreError(CONFLICT)`` if a document with the same id
        already exists; existing counters are never overwritten.
        """
        return await run_in_threadpool(self._insert, name, count)

    async def modify_counter(self, doc: CounterDocument) -> CounterDocument:
        """Write back a previously loaded document.

        The write only applies if the stored revision still equals
        ``doc.rev``.  Returns the stored document with its new revision.
        """
        return await run_in_threadpool(self._update, doc)

    async def load_counter(self, name: str) -> CounterDocument:
        """Return the document stored under ``name``."""
        return await run_in_threadpool(self._select, name)

    async def remove_counter(self, name: str) -> None:
        """Delete the document stored under ``name``."""
        await run_in_threadpool(self._delete, name)

    async def load_all_counters(self) -> List[CounterDocument]:
        """Return every stored counter, ordered by id."""
        return await run_in_threadpool(self._select_all)

    def _insert(self, name: str, count: int) -> CounterDocument:
        try:
            with get_cursor(self.database_path) as cursor:
                cursor.execute(
                    f"INSERT INTO {self.collection} (id, count, rev) VALUES (?, ?, 1)",
                    (name, count),
                )
        except sqlite3.IntegrityError as exc:
            logger.warning("Counter %s already exists", name)
            raise StoreError(StoreErrorKind.CONFLICT, f"Document update conflict: {name}") from exc
        except sqlite3.Error as exc:
            logger.warning("Failed to save counter %s: %s", name, exc)
            raise StoreError(StoreErrorKind.IO, str(exc)) from exc
        logger.info("Created counter %s", name)
        return CounterDocument(id=name, count=count, rev=1)

    def _update(self, doc: CounterDocument) -> CounterDocument:
        try:
            with get_cursor(self.database_path) as cursor:
                cursor.execute(
                    f"UPDATE {self.collection} SET count = ?, rev = rev + 1 WHERE id = ? AND rev = ?",
                    (doc.count, doc.id, doc.rev),
                )
                if cursor.rowcount == 0:
                    exists = cursor.execute(
                        f"SELECT 1 FROM {self.collection} WHERE id = ?",
                        (doc.id,),
                    ).fetchone()
                    if exists:
                        logger.warning("Stale revision %s for counter %s", doc.rev, doc.id)
                        raise StoreError(StoreErrorKind.CONFLICT, f"Document update conflict: {doc.id}")
                    raise StoreError(StoreErrorKind.NOT_FOUND, f"Counter {doc.id} not found")
        except sqlite3.Error as exc:
            logger.warning("Failed to modify counter %s: %s", doc.id, exc)
            raise StoreError(StoreErrorKind.IO, str(exc)) from exc
        logger.info("Counter %s set to %s", doc.id, doc.count)
        return doc.model_copy(update={"rev": doc.rev + 1})

    def _select(self, name: str) -> CounterDocument:
        try:
            with get_cursor(self.database_path) as cursor:
                row = cursor.execute(
                    f"SELECT id, count, rev FROM {self.collection} WHERE id = ?",
                    (name,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(StoreErrorKind.IO, str(exc)) from exc
        if row is None:
            raise StoreError(StoreErrorKind.NOT_FOUND, f"Counter {name} not found")
        return CounterDocument.from_row(row)

    def _delete(self, name: str) -> None:
        try:
            with get_cursor(self.database_path) as cursor:
                cursor.execute(f"DELETE FROM {self.collection} WHERE id = ?", (name,))
                affected = cursor.rowcount
        except sqlite3.Error as exc:
            logger.warning("Failed to remove counter %s: %s", name, exc)
            raise StoreError(StoreErrorKind.IO, str(exc)) from exc
        if not affected:
            raise StoreError(StoreErrorKind.NOT_FOUND, f"Counter {name} not found")
        logger.info("Deleted counter %s", name)

    def _select_all(self) -> List[CounterDocument]:
        try:
            with get_cursor(self.database_path) as cursor:
                rows = cursor.execute(
                    f"SELECT id, count, rev FROM {self.collection} ORDER BY id"
                ).fetchall()
        except sqlite3.Error as exc:
            logger.warning("Failed to list counters: %s", exc)
            raise StoreError(StoreErrorKind.IO, str(exc)) from exc
        return [CounterDocument.from_row(row) for row in rows]

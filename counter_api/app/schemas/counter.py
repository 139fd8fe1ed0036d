"""
Pydantic schema for counter documents.

A counter is stored as a document keyed by its unique name.  Besides
the ``count`` value each document carries ``rev``, the store's
revision number, which must be sent back unchanged when the document
is modified so that stale writes can be detected.
"""

import sqlite3

from pydantic import BaseModel, Field


class CounterDocument(BaseModel):
    """A counter as held by the document store."""

    id: str = Field(..., min_length=1, description="Unique counter name")
    count: int = Field(0, ge=0, description="Current counter value")
    rev: int = Field(1, ge=1, description="Store revision of this document")

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "CounterDocument":
        return cls(id=row["id"], count=row["count"], rev=row["rev"])

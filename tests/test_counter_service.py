"""Tests for the SQLite-backed counter store."""

from __future__ import annotations

import asyncio
import sqlite3
import time

import pytest

from counter_api.app.core.db import StoreError, StoreErrorKind
from counter_api.app.schemas.counter import CounterDocument
from counter_api.app.services.counter_service import CounterStore


class TestSaveAndLoad:
    @pytest.mark.asyncio
    async def test_new_counter_starts_at_zero(self, store):
        saved = await store.save_counter("visits", 0)
        loaded = await store.load_counter("visits")

        assert saved == CounterDocument(id="visits", count=0, rev=1)
        assert loaded == saved

    @pytest.mark.asyncio
    async def test_duplicate_save_is_rejected(self, store):
        await store.save_counter("visits", 0)
        await store.modify_counter(await store.load_counter("visits"))

        with pytest.raises(StoreError) as exc_info:
            await store.save_counter("visits", 0)

        assert exc_info.value.kind is StoreErrorKind.CONFLICT
        assert (await store.load_counter("visits")).count == 0
        assert (await store.load_counter("visits")).rev == 2

    @pytest.mark.asyncio
    async def test_load_missing_counter(self, store):
        with pytest.raises(StoreError) as exc_info:
            await store.load_counter("nope")

        assert exc_info.value.kind is StoreErrorKind.NOT_FOUND


class TestModify:
    @pytest.mark.asyncio
    async def test_modify_bumps_revision(self, store):
        await store.save_counter("a", 0)
        doc = await store.load_counter("a")
        doc.count += 1

        updated = await store.modify_counter(doc)

        assert updated.count == 1
        assert updated.rev == 2
        assert await store.load_counter("a") == updated

    @pytest.mark.asyncio
    async def test_stale_document_is_rejected(self, store):
        await store.save_counter("a", 0)
        first = await store.load_counter("a")
        second = await store.load_counter("a")
        first.count += 1
        second.count += 1
        await store.modify_counter(first)

        with pytest.raises(StoreError) as exc_info:
            await store.modify_counter(second)

        assert exc_info.value.kind is StoreErrorKind.CONFLICT
        assert (await store.load_counter("a")).count == 1

    @pytest.mark.asyncio
    async def test_modify_missing_document(self, store):
        with pytest.raises(StoreError) as exc_info:
            await store.modify_counter(CounterDocument(id="ghost", count=3, rev=1))

        assert exc_info.value.kind is StoreErrorKind.NOT_FOUND


class TestRemoveAndList:
    @pytest.mark.asyncio
    async def test_remove_counter(self, store):
        await store.save_counter("a", 0)
        await store.remove_counter("a")

        with pytest.raises(StoreError) as exc_info:
            await store.load_counter("a")
        assert exc_info.value.kind is StoreErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_remove_missing_counter(self, store):
        with pytest.raises(StoreError) as exc_info:
            await store.remove_counter("a")

        assert exc_info.value.kind is StoreErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_load_all_counters(self, store):
        for name in ("c", "a", "b"):
            await store.save_counter(name, 0)
        doc = await store.load_counter("b")
        doc.count = 5
        await store.modify_counter(doc)

        counters = await store.load_all_counters()

        assert {(c.id, c.count) for c in counters} == {("a", 0), ("b", 5), ("c", 0)}

    @pytest.mark.asyncio
    async def test_load_all_on_empty_store(self, store):
        assert await store.load_all_counters() == []


class TestBackendFailures:
    @pytest.mark.asyncio
    async def test_missing_table_is_an_io_error(self, tmp_path):
        store = CounterStore(str(tmp_path / "empty.db"))

        with pytest.raises(StoreError) as exc_info:
            await store.load_all_counters()

        assert exc_info.value.kind is StoreErrorKind.IO
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_invalid_collection_name(self, tmp_path):
        with pytest.raises(ValueError):
            CounterStore(str(tmp_path / "x.db"), collection="counters; DROP TABLE x")

    @pytest.mark.asyncio
    async def test_custom_collection(self, tmp_path):
        store = CounterStore(str(tmp_path / "x.db"), collection="hits")
        store.init()
        await store.save_counter("a", 0)

        with sqlite3.connect(str(tmp_path / "x.db")) as conn:
            rows = conn.execute("SELECT id, count FROM hits").fetchall()
        assert rows == [("a", 0)]


class TestLockedDatabase:
    @pytest.mark.asyncio
    async def test_waiting_on_a_lock_keeps_the_loop_running(self, store):
        """A write stuck behind another connection's lock must not freeze the loop."""
        await store.save_counter("a", 0)
        doc = await store.load_counter("a")
        doc.count += 1

        blocker = sqlite3.connect(store.database_path, isolation_level=None)
        blocker.execute("BEGIN EXCLUSIVE")

        async def release():
            await asyncio.sleep(0.3)
            blocker.execute("COMMIT")

        releaser = asyncio.create_task(release())
        started = time.perf_counter()
        try:
            updated = await store.modify_counter(doc)
        finally:
            await releaser
            blocker.close()
        elapsed = time.perf_counter() - started

        assert updated.count == 1
        assert elapsed < 2
        assert (await store.load_counter("a")).count == 1

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from counter_api.app.core.db import StoreError, StoreErrorKind
from counter_api.app.main import create_app
from counter_api.app.services.counter_service import CounterStore


class BrokenStore(CounterStore):
    """Store whose every operation fails with an I/O error."""

    def __init__(self) -> None:
        super().__init__(database_path=":memory:")

    def init(self) -> None:
        pass

    async def _fail(self, *args, **kwargs):
        raise StoreError(StoreErrorKind.IO, "disk I/O error")

    save_counter = _fail
    modify_counter = _fail
    load_counter = _fail
    remove_counter = _fail
    load_all_counters = _fail


@pytest.fixture
def store(tmp_path) -> CounterStore:
    counter_store = CounterStore(str(tmp_path / "counters.db"))
    counter_store.init()
    return counter_store


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as test_client:
        yield test_client


@pytest.fixture
def broken_client():
    with TestClient(create_app(BrokenStore())) as test_client:
        yield test_client

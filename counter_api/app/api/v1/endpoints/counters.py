"""
Counter endpoints for API v1.

Each route reads the counter name from the ``name`` query parameter,
calls the injected :class:`CounterStore` and answers with a small
HTML fragment.  Store failures never propagate out of a handler; they
are mapped to a fixed status code:

* ``POST /create`` – 400 without a name, 500 if the store refuses.
* ``GET /read`` – 404 if the counter does not exist.
* ``PUT /update`` – 404 if the counter cannot be loaded or written.
* ``DELETE /delete`` – 404 if the counter does not exist.
* ``GET /all`` – 500 with the error text if listing fails.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from counter_api.app.api.deps import get_store
from counter_api.app.api.v1 import pages
from counter_api.app.core.db import StoreError, StoreErrorKind
from counter_api.app.services.counter_service import CounterStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create", response_class=HTMLResponse)
async def create_counter(
    name: Optional[str] = Query(None),
    store: CounterStore = Depends(get_store),
) -> HTMLResponse:
    """Create a counter starting at zero."""
    if not name:
        return pages.name_required()
    try:
        await store.save_counter(name, 0)
    except StoreError as exc:
        return pages.create_failed(duplicate=exc.kind is StoreErrorKind.CONFLICT)
    return pages.created(name)


@router.get("/read", response_class=HTMLResponse)
async def read_counter(
    name: Optional[str] = Query(None),
    store: CounterStore = Depends(get_store),
) -> HTMLResponse:
    """Return the current value of a counter."""
    try:
        counter = await store.load_counter(name or "")
    except StoreError:
        return pages.not_found(name or "")
    return pages.counter_value(counter)


@router.put("/update", response_class=HTMLResponse)
async def update_counter(
    name: Optional[str] = Query(None),
    store: CounterStore = Depends(get_store),
) -> HTMLResponse:
    """Increment a counter by one.

    A failed write (for example a concurrent update that bumped the
    revision first) is reported as not found, like a failed load.
    """
    try:
        counter = await store.load_counter(name or "")
        counter.count += 1
        counter = await store.modify_counter(counter)
    except StoreError as exc:
        if exc.kind is not StoreErrorKind.NOT_FOUND:
            logger.warning("Update of counter %s failed: %r", name, exc)
        return pages.not_found(name or "")
    return pages.updated(counter)


@router.delete("/delete", response_class=HTMLResponse)
async def delete_counter(
    name: Optional[str] = Query(None),
    store: CounterStore = Depends(get_store),
) -> HTMLResponse:
    """Delete a counter.

    The response is only sent once the store has confirmed the
    removal, so a 200 always means the counter is gone.
    """
    try:
        counter = await store.load_counter(name or "")
    except StoreError:
        return pages.not_found(name or "")
    try:
        await store.remove_counter(counter.id)
    except StoreError as exc:
        if exc.kind is StoreErrorKind.NOT_FOUND:
            return pages.not_found(counter.id)
        logger.error("Delete of counter %s failed: %r", counter.id, exc)
        return pages.delete_failed(exc)
    return pages.deleted(counter)


@router.get("/all", response_class=HTMLResponse)
async def list_counters(store: CounterStore = Depends(get_store)) -> HTMLResponse:
    """List every counter as ``name = count`` lines."""
    try:
        counters = await store.load_all_counters()
    except StoreError as exc:
        logger.error("Listing counters failed: %r", exc)
        return pages.list_failed(exc)
    return pages.counter_list(counters)

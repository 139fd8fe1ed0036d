"""
Main entrypoint for the Counter API.

This module assembles the FastAPI application: it sets up logging,
attaches the counter store, installs the request logger and the
404 and 405 handlers and includes the versioned router.  The
app is instantiated at import time as ``app`` so it can be served
directly, e.g.::

    uvicorn counter_api.app.main:app --reload
"""

import html
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import get_database_path
from .core.logging_config import setup_logging
from .services.counter_service import CounterStore

logger = logging.getLogger("counter_api.access")


def create_app(store: Optional[CounterStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[CounterStore]
        Store used by the counter endpoints.  When omitted, one is
        built from ``settings.database_url`` and ``settings.collection``.

    Returns
    -------
    FastAPI
        A configured application.  The store table is created on
        startup.
    """
    setup_logging(settings.log_level, settings.log_file)

    if store is None:
        store = CounterStore(get_database_path(), settings.collection)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.3f ms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return HTMLResponse(f"Not found: {html.escape(request.url.path)}", status_code=exc.status_code)
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return PlainTextResponse(
                "Method Not Allowed",
                status_code=exc.status_code,
                headers=exc.headers,
            )
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    app.include_router(v1_router)

    @app.on_event("startup")
    async def startup_event() -> None:
        app.state.store.init()

    return app


app = create_app()

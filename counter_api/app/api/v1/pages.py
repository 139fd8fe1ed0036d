"""
HTML fragments returned by the counter endpoints.

Every counter name is escaped before interpolation since it comes
straight from the query string.
"""

import html
from typing import Iterable

from fastapi import status
from fastapi.responses import HTMLResponse

from counter_api.app.schemas.counter import CounterDocument


def _page(status_code: int, *parts: str) -> HTMLResponse:
    return HTMLResponse(content="".join(parts), status_code=status_code)


def name_required() -> HTMLResponse:
    return _page(status.HTTP_400_BAD_REQUEST, "<h1>Counter Name Required</h1>")


def created(name: str) -> HTMLResponse:
    return _page(status.HTTP_200_OK, f"<h1>Counter {html.escape(name)} Created</h1>")


def create_failed(duplicate: bool) -> HTMLResponse:
    if duplicate:
        hint = "<p>A counter with this name already exists!</p>"
    else:
        hint = "<p>This is likely a duplicate counter name!</p>"
    return _page(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "<h1>Internal Server Error</h1>",
        "<p>Unable to create counter</p>",
        hint,
    )


def counter_value(counter: CounterDocument) -> HTMLResponse:
    return _page(
        status.HTTP_200_OK,
        f"<h1>Counter {html.escape(counter.id)} = {counter.count}</h1>",
    )


def updated(counter: CounterDocument) -> HTMLResponse:
    return _page(status.HTTP_200_OK, f"<h1>Counter {html.escape(counter.id)} Updated</h1>")


def deleted(counter: CounterDocument) -> HTMLResponse:
    return _page(status.HTTP_200_OK, f"<h1>Counter {html.escape(counter.id)} Deleted</h1>")


def delete_failed(error: Exception) -> HTMLResponse:
    return _page(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "<h1>Internal Server Error</h1>",
        "<p>Unable to delete counter</p>",
        f"<pre>{html.escape(str(error))}</pre>",
    )


def not_found(name: str) -> HTMLResponse:
    return _page(status.HTTP_404_NOT_FOUND, f"<h1>Counter {html.escape(name)} Not Found</h1>")


def counter_list(counters: Iterable[CounterDocument]) -> HTMLResponse:
    items = "".join(
        f"<li>{html.escape(counter.id)} = {counter.count}</li>" for counter in counters
    )
    return _page(status.HTTP_200_OK, "<h1>Counters</h1><ul>", items, "</ul>")


def list_failed(error: Exception) -> HTMLResponse:
    return _page(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "<h1>Internal Server Error</h1>",
        "<p>Unable to load counters</p>",
        f"<pre>{html.escape(str(error))}</pre>",
    )

"""
FastAPI dependencies shared by the endpoint modules.
"""

from fastapi import Request

from counter_api.app.services.counter_service import CounterStore


def get_store(request: Request) -> CounterStore:
    """Return the counter store attached to the running application."""
    return request.app.state.store

"""
Top-level router for version 1 of the API.

Aggregates the domain routers.  The counter routes define their own
paths, so they are included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import counters

router = APIRouter()

router.include_router(counters.router, tags=["counters"])

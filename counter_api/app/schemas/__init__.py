"""
Pydantic schemas shared by the service and API layers.
"""

from .counter import CounterDocument  # noqa: F401

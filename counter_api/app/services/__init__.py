"""
Service layer abstraction.

Services own the stored representation of each domain object.  API
handlers receive a service instance through dependency injection and
never talk to the database directly.
"""

from .counter_service import CounterStore  # noqa: F401

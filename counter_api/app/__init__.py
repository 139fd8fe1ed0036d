"""
Application package initializer.

The service is split into configuration and database plumbing
(``core``), the document schema (``schemas``), the persistence layer
(``services``) and the HTTP layer (``api``).  ``main`` wires them
together into a FastAPI application.
"""

from .main import app  # noqa: F401

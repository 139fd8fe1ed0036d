"""
Top-level package for the Counter API.

All functionality lives in submodules under ``app``; import the
ASGI application as ``counter_api.app.main:app``.
"""

__all__ = []

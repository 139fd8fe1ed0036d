"""
HTTP layer of the Counter API.

Each API version lives in its own subpackage (``v1``) and exposes a
single aggregated router consumed by ``main.create_app``.
"""

"""
Version 1 of the API.

Counter endpoints are served from the root path (``/create``,
``/read`` and so on) so the public URLs stay short and unversioned.
"""

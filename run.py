"""Entry point for the Counter API.

Serves the FastAPI application with Uvicorn.  Host, port, database
location and log level come from environment variables (see
``counter_api.app.core.config``); defaults are ``0.0.0.0:3260`` and a
``counters.db`` file in the project root.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from counter_api.app.core.config import settings
from counter_api.app.main import app


async def main() -> None:
    """Run the API server until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server starting on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

"""Entry point for the Query Tracker API.

This script launches the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker or a PaaS where you only specify a single Python file to run.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (see ``query_tracker_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from query_tracker_api.app.core.config import settings
from query_tracker_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Query Tracker API stopped")


if __name__ == "__main__":
    main()

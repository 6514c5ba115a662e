"""Entry point that serves the Customer Service API.

Run from the project root, e.g. under Docker or a process manager
where only a single Python file is specified::

    python run.py

Host and port come from ``API_HOST`` and ``API_PORT`` (defaults
``0.0.0.0`` and ``8000``); see ``customer_service_api.app.core.config``
for the other supported variables.
"""
import asyncio
import logging

from uvicorn import Config, Server

from customer_service_api.app.core.config import settings
from customer_service_api.app.main import app


async def run_api() -> None:
    """Serve the API with Uvicorn until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()

"""Run the agents API with uvicorn."""

import logging

import uvicorn

from agents_api.config import settings
from agents_api.observability.tracing import configure_logging

logger = logging.getLogger("agents_api")


def main():
    configure_logging(settings.log_level)
    base_url = f"http://{settings.host}:{settings.port}"
    logger.info(f"Server will be available at: {base_url}")
    logger.info(f"API Documentation: {base_url}{settings.docs_url}")

    uvicorn.run(
        "agents_api.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

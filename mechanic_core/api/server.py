"""Run the HTTP server with uvicorn."""

import uvicorn

from mechanic_core.api.app import create_app
from mechanic_core.config.settings import settings
from mechanic_core.infrastructure.logging.logger import logger


def main() -> None:
    logger.info("server.start", extra={"extra": {"host": settings.host, "port": settings.port}})
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

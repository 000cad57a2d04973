"""ASGI entry point for launching the FastAPI application."""

from __future__ import annotations

import uvicorn

from .config import Settings, configure_logging


def main() -> None:
    """Run the API using uvicorn."""

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(
        "rectmeasure.api:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

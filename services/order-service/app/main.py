"""Entrypoint: ``python -m app.main`` serves the API with uvicorn."""

import uvicorn

from .config import settings


def run() -> None:
    uvicorn.run(
        "app.app:app",
        host=settings.SERVICE_HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()

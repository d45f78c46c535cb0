"""api-errors FastAPI application factory.

Entry point: uvicorn apierrors.main:app
"""

import logging

from fastapi import FastAPI

from apierrors.config import settings
from apierrors.handlers import register_error_handlers
from apierrors.middleware import RequestIDMiddleware
from apierrors.routers import health

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health.router)
    return app


app = create_app()

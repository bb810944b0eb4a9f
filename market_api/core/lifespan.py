"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from market_api.models import Base
from market_api.services.oauth import close_http_client
from shared.config.logging import setup_logging, market_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import engine


def check_configuration() -> None:
    """
    Refuse to start in production with weak secrets; only warn elsewhere.

    Raises:
        RuntimeError: In production, if any secret check fails.
    """
    secret_errors = settings.validate_production_secrets()
    if not secret_errors:
        return

    for error in secret_errors:
        logger.error("Configuration error: %s", error)
    if settings.environment == "production":
        raise RuntimeError(
            f"Production configuration errors: {'; '.join(secret_errors)}. "
            "Server will not start with insecure configuration."
        )
    logger.warning("Running with insecure defaults (acceptable for development only)")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()
    check_configuration()

    logger.info("Starting market API", port=settings.api_port, env=settings.environment)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    yield

    logger.info("Shutting down market API")
    close_http_client()

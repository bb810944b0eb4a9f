"""
Health check router.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "market-api"


@router.get("")
def health_check():
    """Basic liveness check."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@router.get("/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """
    Verifies database connectivity.
    Returns 503 when the database is unreachable.
    """
    checks = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "dependencies": {},
    }

    try:
        db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
        checks["status"] = "healthy"
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": type(e).__name__}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=503)

    return checks

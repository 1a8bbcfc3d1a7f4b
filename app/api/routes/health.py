"""
Health check endpoints for deployment monitoring and the mobile client.
"""
import logging
from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import config
from app.core.auth_dependency import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


def database_status(db: Session) -> str:
    try:
        db.execute(text("SELECT 1"))
        return "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        return "error"


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for deployment monitoring.

    Returns 200 with status "degraded" when the database is unreachable.
    """
    db_status = database_status(db)
    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "message": "Job Board API is running",
        "timestamp": datetime.utcnow().isoformat(),
        "database": db_status,
        "environment": config.ENVIRONMENT,
        "version": "1.0.0",
    }


@router.get("/mobile/health")
def mobile_health_check(db: Session = Depends(get_db)):
    return {
        "success": True,
        "message": "Mobile API is healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "database": database_status(db),
    }

# fau_portal/api/v1/endpoints/health.py
"""
Health check endpoints for monitoring system status.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fau_portal.db.session import get_db
from fau_portal.scheduler import get_scheduler_status

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """Basic health check - API is responding."""
    return {
        "status": "healthy",
        "service": "fau-portal",
        "scheduler": get_scheduler_status()["status"],
    }


@router.get("/db")
def database_health(db: Session = Depends(get_db)):
    """Check database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "component": "database"}
    except SQLAlchemyError as e:
        raise HTTPException(
            status_code=503,
            detail=f"Database unhealthy: {str(e)}",
        )

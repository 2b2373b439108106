"""Health check endpoints with database connectivity checks."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.core.errors import DependencyError
from app.models import User
from app.schemas.health import DbCheckResponse, HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )


@router.get("/test-db", response_model=DbCheckResponse)
def test_db(db: Session = Depends(get_db)) -> DbCheckResponse:
    """Smoke test: count users. 500 with a generic message when the database is unreachable."""
    if not check_db_connected(db):
        logger.error("Database check failed")
        raise DependencyError("DB error")
    count = db.query(func.count(User.id)).scalar()
    return DbCheckResponse(users_count=count)

"""Health check endpoint with database connectivity checks."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gatekeep.core.config import settings
from gatekeep.core.database import check_db_connected, get_db, get_read_db
from gatekeep.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Session = Depends(get_db),
    read_db: Session = Depends(get_read_db),
) -> HealthResponse:
    """
    Return service health status and connectivity of the write and read handles.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    read_status = "connected" if check_db_connected(read_db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        read_database=read_status,
    )

"""Liveness endpoint for the accounts API, including account store reachability."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """Report that the process is up and whether the accounts database answers."""
    database = "connected" if check_db_connected(db) else "disconnected"
    return HealthResponse(status="ok", environment=settings.APP_ENV, database=database)

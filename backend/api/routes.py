"""Service-level routes."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from db import get_db
from ride_core.errors import Unavailable
from schemas.health import HealthResponse

LOG = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db)) -> HealthResponse:
    """Health check; 503 when the database cannot be reached."""
    try:
        db.execute(text("SELECT 1"))
    except (OperationalError, InterfaceError) as e:
        LOG.warning("Health check failed: %s", e)
        raise Unavailable("Database unreachable") from e
    return HealthResponse()

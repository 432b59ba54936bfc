"""Location history repository: append, latest, list. Appends do not commit; the caller owns the transaction."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.location_history import LocationHistory
from models.vehicle import Vehicle


def append_location(
    session: Session,
    vehicle: Vehicle,
    *,
    ts: datetime,
    longitude: Decimal,
    latitude: Decimal,
) -> LocationHistory:
    """Add a new location entry for vehicle (pending until commit)."""
    entry = LocationHistory(ts=ts, longitude=longitude, latitude=latitude)
    vehicle.add_location(entry)
    session.add(entry)
    return entry


def get_latest_location(session: Session, vehicle_id: str) -> Optional[LocationHistory]:
    """Return the newest location entry for a vehicle, or None."""
    return session.execute(
        select(LocationHistory)
        .where(LocationHistory.vehicle_id == vehicle_id)
        .order_by(LocationHistory.ts.desc())
        .limit(1)
    ).scalar_one_or_none()


def list_locations_for_vehicle(session: Session, vehicle_id: str) -> list[LocationHistory]:
    """Return all location entries for a vehicle, newest first."""
    result = session.execute(
        select(LocationHistory)
        .where(LocationHistory.vehicle_id == vehicle_id)
        .order_by(LocationHistory.ts.desc())
    )
    return list(result.scalars().all())

"""Ride repository: create, open-ride lookups, per-user listing. Creates do not commit."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.ride import Ride
from models.vehicle import Vehicle


def create_ride(
    session: Session,
    vehicle: Vehicle,
    *,
    user_email: str,
    start_ts: datetime,
    start_longitude: Optional[Decimal],
    start_latitude: Optional[Decimal],
) -> Ride:
    """Add an open ride on vehicle for user (pending until commit)."""
    ride = Ride(
        user_email=user_email,
        start_ts=start_ts,
        start_longitude=start_longitude,
        start_latitude=start_latitude,
    )
    vehicle.add_ride(ride)
    session.add(ride)
    return ride


def get_ride(session: Session, ride_id: str) -> Optional[Ride]:
    """Return ride by id or None."""
    return session.get(Ride, ride_id)


def list_open_rides(session: Session, vehicle_id: str, user_email: str | None = None) -> list[Ride]:
    """Return rides without end_ts for a vehicle, optionally restricted to one user."""
    stmt = select(Ride).where(Ride.vehicle_id == vehicle_id, Ride.end_ts.is_(None))
    if user_email is not None:
        stmt = stmt.where(Ride.user_email == user_email)
    result = session.execute(stmt.order_by(Ride.start_ts))
    return list(result.scalars().all())


def list_rides_for_user(session: Session, user_email: str) -> list[Ride]:
    """Return all rides (open and closed) for a user, newest start first."""
    result = session.execute(
        select(Ride)
        .where(Ride.user_email == user_email)
        .order_by(Ride.start_ts.desc())
    )
    return list(result.scalars().all())

"""Vehicle repository: list, get, lock, create, delete."""
from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, selectinload

from models.location_history import LocationHistory
from models.vehicle import Vehicle


def create_vehicle(
    session: Session,
    *,
    battery: int,
    vehicle_type: str,
    vehicle_id: str | None = None,
) -> Vehicle:
    """Register an Available vehicle, commit, and return it."""
    vehicle = Vehicle(battery=battery, vehicle_type=vehicle_type, in_use=False)
    if vehicle_id is not None:
        vehicle.id = vehicle_id
    session.add(vehicle)
    session.commit()
    session.refresh(vehicle)
    return vehicle


def get_vehicle_by_id(session: Session, vehicle_id: str) -> Optional[Vehicle]:
    """Return vehicle by id or None."""
    return session.get(Vehicle, vehicle_id)


def get_vehicle_for_update(session: Session, vehicle_id: str) -> Optional[Vehicle]:
    """Return vehicle by id with a row lock (SELECT ... FOR UPDATE where supported), or None."""
    return session.execute(
        select(Vehicle)
        .where(Vehicle.id == vehicle_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()


def get_vehicle_with_history(session: Session, vehicle_id: str) -> Optional[Vehicle]:
    """Return vehicle with location_history eagerly loaded (newest first), or None."""
    return session.execute(
        select(Vehicle)
        .where(Vehicle.id == vehicle_id)
        .options(selectinload(Vehicle.location_history))
    ).scalar_one_or_none()


def list_vehicles_with_last_location(
    session: Session,
) -> list[tuple[Vehicle, Optional[LocationHistory]]]:
    """Return (vehicle, latest location or None) for every vehicle."""
    latest = (
        select(LocationHistory.vehicle_id, func.max(LocationHistory.ts).label("max_ts"))
        .group_by(LocationHistory.vehicle_id)
        .subquery()
    )
    result = session.execute(
        select(Vehicle, LocationHistory)
        .outerjoin(latest, latest.c.vehicle_id == Vehicle.id)
        .outerjoin(
            LocationHistory,
            and_(LocationHistory.vehicle_id == Vehicle.id, LocationHistory.ts == latest.c.max_ts),
        )
        .order_by(Vehicle.id)
    )
    seen: set[str] = set()
    rows: list[tuple[Vehicle, Optional[LocationHistory]]] = []
    for vehicle, location in result.all():
        # Two entries sharing the max timestamp would duplicate the vehicle.
        if vehicle.id in seen:
            continue
        seen.add(vehicle.id)
        rows.append((vehicle, location))
    return rows


def delete_vehicle(session: Session, vehicle_id: str) -> bool:
    """Delete vehicle by id. Returns True if deleted, False if not found."""
    vehicle = get_vehicle_by_id(session, vehicle_id)
    if vehicle is None:
        return False
    session.delete(vehicle)
    session.commit()
    return True

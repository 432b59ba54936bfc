"""Vehicle API routes."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from db import get_db
from repositories.vehicle_repository import (
    create_vehicle as repo_create_vehicle,
    delete_vehicle as repo_delete_vehicle,
    get_vehicle_by_id as repo_get_vehicle_by_id,
    get_vehicle_with_history as repo_get_vehicle_with_history,
    list_vehicles_with_last_location as repo_list_vehicles_with_last_location,
)
from ride_core.errors import Conflict, NotFound
from schemas.vehicles import LocationResponse, VehicleCreate, VehicleDetail, VehicleResponse

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


def _vehicle_to_response(v, location=None) -> VehicleResponse:
    """Build VehicleResponse from model instance and optional latest location."""
    return VehicleResponse(
        id=v.id,
        battery=v.battery,
        in_use=v.in_use,
        vehicle_type=v.vehicle_type,
        last_longitude=float(location.longitude) if location is not None else None,
        last_latitude=float(location.latitude) if location is not None else None,
        last_checkin=location.ts if location is not None else None,
    )


@router.get("", response_model=list[VehicleResponse])
def list_vehicles(db: Session = Depends(get_db)) -> list[VehicleResponse]:
    """List all vehicles with their latest known location."""
    rows = repo_list_vehicles_with_last_location(db)
    return [_vehicle_to_response(v, loc) for v, loc in rows]


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle(body: VehicleCreate, db: Session = Depends(get_db)) -> VehicleResponse:
    """Register a new vehicle (Available)."""
    vehicle = repo_create_vehicle(db, battery=body.battery, vehicle_type=body.vehicle_type)
    LOG.info("Registered %s %s", vehicle.vehicle_type, vehicle.id)
    return _vehicle_to_response(vehicle)


@router.get("/{vehicle_id}", response_model=VehicleDetail)
def get_vehicle(vehicle_id: str, db: Session = Depends(get_db)) -> VehicleDetail:
    """Get a vehicle with its location history, newest first."""
    vehicle = repo_get_vehicle_with_history(db, vehicle_id)
    if vehicle is None:
        raise NotFound("Vehicle not found")
    return VehicleDetail(
        id=vehicle.id,
        battery=vehicle.battery,
        in_use=vehicle.in_use,
        vehicle_type=vehicle.vehicle_type,
        location_history=[
            LocationResponse(ts=e.ts, longitude=float(e.longitude), latitude=float(e.latitude))
            for e in vehicle.location_history
        ],
    )


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(vehicle_id: str, db: Session = Depends(get_db)) -> None:
    """Retire a vehicle. Vehicles in use cannot be retired."""
    vehicle = repo_get_vehicle_by_id(db, vehicle_id)
    if vehicle is None:
        raise NotFound("Vehicle not found")
    if vehicle.in_use:
        raise Conflict("Vehicle is currently in use")
    repo_delete_vehicle(db, vehicle_id)
    LOG.info("Retired vehicle %s", vehicle_id)
    return None

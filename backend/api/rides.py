"""Ride API routes: start, end, per-user history, active ride."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from db import deadline_after, get_db
from repositories.ride_repository import list_rides_for_user
from ride_core.rides import end_ride, get_active_ride, start_ride
from schemas.rides import (
    ActiveRideResponse,
    EndRideRequest,
    EndRideResponse,
    RideResponse,
    StartRideRequest,
    StartRideResponse,
)
from utils.config import RIDE_TIMEOUT_S

router = APIRouter(prefix="/rides", tags=["rides"])


def _as_float(value):
    return float(value) if value is not None else None


def _ride_to_response(r) -> RideResponse:
    """Build RideResponse from model instance."""
    return RideResponse(
        id=r.id,
        vehicle_id=r.vehicle_id,
        user_email=r.user_email,
        start_ts=r.start_ts,
        end_ts=r.end_ts,
        start_longitude=_as_float(r.start_longitude),
        start_latitude=_as_float(r.start_latitude),
        end_longitude=_as_float(r.end_longitude),
        end_latitude=_as_float(r.end_latitude),
        end_battery=r.end_battery,
    )


@router.post("/start", response_model=StartRideResponse)
def start(body: StartRideRequest, db: Session = Depends(get_db)) -> StartRideResponse:
    """Start a ride on a vehicle for a user."""
    command = body.normalize()
    ride = start_ride(db, command, deadline=deadline_after(RIDE_TIMEOUT_S))
    return StartRideResponse(
        ride=_ride_to_response(ride),
        messages=["Ride started"],
    )


@router.post("/end", response_model=EndRideResponse)
def end(body: EndRideRequest, db: Session = Depends(get_db)) -> EndRideResponse:
    """End the active ride: record battery and final position, free the vehicle."""
    command = body.normalize()
    result = end_ride(db, command, deadline=deadline_after(RIDE_TIMEOUT_S))
    return EndRideResponse(
        ride_id=result.ride_id,
        vehicle_id=result.vehicle_id,
        user_email=result.user_email,
        start_ts=result.start_ts,
        end_ts=result.end_ts,
        duration_minutes=result.duration_minutes,
        distance_km=result.distance_km,
        speed_kmh=result.speed_kmh,
        battery=result.battery,
        messages=result.messages,
    )


@router.get("", response_model=list[RideResponse])
def list_rides(userId: str = Query(..., min_length=1), db: Session = Depends(get_db)) -> list[RideResponse]:
    """List all rides (active and past) for a user, newest first."""
    return [_ride_to_response(r) for r in list_rides_for_user(db, userId)]


@router.get("/active", response_model=ActiveRideResponse)
def active(
    vehicleId: str = Query(..., min_length=1),
    userId: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
) -> ActiveRideResponse:
    """Get the active ride for a vehicle/user pair."""
    ride, vehicle = get_active_ride(db, vehicleId, userId)
    return ActiveRideResponse(
        ride_id=ride.id,
        vehicle_id=vehicle.id,
        user_email=ride.user_email,
        in_use=vehicle.in_use,
        battery=vehicle.battery,
        vehicle_type=vehicle.vehicle_type,
        start_ts=ride.start_ts,
        last_longitude=_as_float(ride.start_longitude),
        last_latitude=_as_float(ride.start_latitude),
    )

"""Ride lifecycle: start-ride and end-ride, each inside one transactional unit."""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from db import check_deadline, transaction
from models.ride import Ride
from models.vehicle import Vehicle
from repositories.location_history_repository import append_location, get_latest_location
from repositories.ride_repository import create_ride, list_open_rides
from repositories.user_repository import get_user
from repositories.vehicle_repository import get_vehicle_by_id, get_vehicle_for_update
from ride_core.commands import EndRideCommand, StartRideCommand
from ride_core.errors import Conflict, Internal, InvalidArgument, NotFound, RideError
from ride_core.geo import DistanceFn, average_speed_kmh, duration_minutes, haversine_km

LOG = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time, naive (timestamps are stored without zone)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class EndRideResult:
    """Summary of a closed ride."""

    ride_id: str
    vehicle_id: str
    user_email: str
    start_ts: datetime
    end_ts: datetime
    duration_minutes: float
    distance_km: Optional[float]
    speed_kmh: Optional[float]
    battery: int

    @property
    def messages(self) -> list[str]:
        lines = ["You have completed your ride."]
        if self.distance_km is not None and self.speed_kmh is not None:
            lines.append(
                f"You traveled {self.distance_km:.2f} km in {self.duration_minutes:.1f} minutes, "
                f"for an average velocity of {self.speed_kmh:.2f} km/h"
            )
        else:
            lines.append(f"Your ride lasted {self.duration_minutes:.1f} minutes.")
        return lines


def _load_vehicle(session: Session, vehicle_id: str) -> Vehicle:
    vehicle = get_vehicle_for_update(session, vehicle_id)
    if vehicle is None:
        raise NotFound("Vehicle not found")
    return vehicle


def start_ride(
    session: Session,
    command: StartRideCommand,
    *,
    deadline: Optional[float] = None,
    now: Optional[datetime] = None,
) -> Ride:
    """
    Check out a vehicle for a user: log the start position, mark in use, open a ride.

    Start position is the submitted coordinates, else the vehicle's last known location.
    """
    try:
        with transaction(session, deadline):
            vehicle = _load_vehicle(session, command.vehicle_id)
            if get_user(session, command.user_id) is None:
                raise NotFound("User not found")
            if vehicle.in_use:
                raise Conflict("Vehicle is currently in use")
            if list_open_rides(session, vehicle.id):
                raise Internal("Vehicle is available but has an open ride")

            longitude, latitude = command.longitude, command.latitude
            if longitude is None or latitude is None:
                last = get_latest_location(session, vehicle.id)
                if last is None:
                    raise InvalidArgument("longitude", "longitude is required: vehicle has no known location")
                longitude, latitude = last.longitude, last.latitude

            check_deadline(deadline)
            ts = now or utcnow()
            append_location(session, vehicle, ts=ts, longitude=longitude, latitude=latitude)
            vehicle.check_out()
            ride = create_ride(
                session,
                vehicle,
                user_email=command.user_id,
                start_ts=ts,
                start_longitude=longitude,
                start_latitude=latitude,
            )
    except RideError as e:
        _log_rejected("Start ride", command.vehicle_id, e)
        raise
    LOG.info("Ride %s started on vehicle %s by %s", ride.id, command.vehicle_id, command.user_id)
    return ride


def end_ride(
    session: Session,
    command: EndRideCommand,
    *,
    deadline: Optional[float] = None,
    distance_fn: DistanceFn = haversine_km,
    now: Optional[datetime] = None,
) -> EndRideResult:
    """
    Check in a vehicle: log the end position, record battery, mark available, close the open ride.

    All steps commit together or not at all. A second end-ride on the same vehicle gets Conflict.
    """
    try:
        with transaction(session, deadline):
            vehicle = _load_vehicle(session, command.vehicle_id)
            if not vehicle.in_use:
                raise Conflict("Vehicle is not in use; ride already ended")
            rides = list_open_rides(session, vehicle.id, command.user_id)
            if not rides:
                # A concurrent end-ride may have committed since the vehicle was read.
                session.refresh(vehicle)
                if not vehicle.in_use:
                    raise Conflict("Vehicle is not in use; ride already ended")
                raise NotFound("No active ride found for this vehicle and user")
            if len(rides) > 1:
                raise Conflict("More than one active ride for this vehicle and user")
            ride = rides[0]

            check_deadline(deadline)
            ts = now or utcnow()
            append_location(session, vehicle, ts=ts, longitude=command.longitude, latitude=command.latitude)
            vehicle.check_in(command.battery)
            ride.close(ts, command.longitude, command.latitude, command.battery)
            result = _summarize(ride, distance_fn)
    except RideError as e:
        _log_rejected("End ride", command.vehicle_id, e)
        raise
    LOG.info(
        "Ride %s ended on vehicle %s: %.1f min, battery %d%%",
        result.ride_id,
        result.vehicle_id,
        result.duration_minutes,
        result.battery,
    )
    return result


def get_active_ride(session: Session, vehicle_id: str, user_email: str) -> tuple[Ride, Vehicle]:
    """Return the open ride for a vehicle/user pair and its vehicle."""
    vehicle = get_vehicle_by_id(session, vehicle_id)
    if vehicle is None or not vehicle.in_use:
        raise NotFound("No active ride found")
    rides = list_open_rides(session, vehicle_id, user_email)
    if not rides:
        raise NotFound("No active ride found")
    if len(rides) > 1:
        raise Conflict("More than one active ride for this vehicle and user")
    return rides[0], vehicle


def _summarize(ride: Ride, distance_fn: DistanceFn) -> EndRideResult:
    distance = None
    if ride.start_longitude is not None and ride.start_latitude is not None:
        distance = distance_fn(
            (ride.start_longitude, ride.start_latitude),
            (ride.end_longitude, ride.end_latitude),
        )
    minutes = duration_minutes(ride.start_ts, ride.end_ts)
    return EndRideResult(
        ride_id=ride.id,
        vehicle_id=ride.vehicle_id,
        user_email=ride.user_email,
        start_ts=ride.start_ts,
        end_ts=ride.end_ts,
        duration_minutes=minutes,
        distance_km=distance,
        speed_kmh=average_speed_kmh(distance, minutes),
        battery=ride.end_battery,
    )


def _log_rejected(operation: str, vehicle_id: str, error: RideError) -> None:
    if isinstance(error, Internal):
        LOG.error("%s on vehicle %s failed: %s", operation, vehicle_id, error.message)
    else:
        LOG.warning("%s on vehicle %s rejected (%s): %s", operation, vehicle_id, error.code, error.message)

"""Pydantic schemas for ride API. Request records keep raw wire values; normalize() yields typed commands."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from ride_core.commands import EndRideCommand, StartRideCommand
from utils.validators import parse_battery, parse_latitude, parse_longitude, parse_required_str


class StartRideRequest(BaseModel):
    """Payload for starting a ride. Coordinates are optional; the last known position is used otherwise."""

    vehicleId: Any = None
    userId: Any = None
    longitude: Any = None
    latitude: Any = None

    def normalize(self) -> StartRideCommand:
        """Validate and convert to a StartRideCommand; raises InvalidArgument naming the field."""
        raw = self.model_dump()
        vehicle_id = parse_required_str(raw, "vehicleId")
        user_id = parse_required_str(raw, "userId")
        longitude = parse_longitude(raw, required=False)
        latitude = parse_latitude(raw, required=False)
        # Coordinates come as a pair or not at all.
        if longitude is None and latitude is not None:
            parse_longitude(raw)
        if latitude is None and longitude is not None:
            parse_latitude(raw)
        return StartRideCommand(
            vehicle_id=vehicle_id,
            user_id=user_id,
            longitude=longitude,
            latitude=latitude,
        )


class EndRideRequest(BaseModel):
    """Payload for ending a ride: start-ride identity plus battery and final position."""

    vehicleId: Any = None
    userId: Any = None
    battery: Any = None
    longitude: Any = None
    latitude: Any = None

    def normalize(self) -> EndRideCommand:
        """Validate and convert to an EndRideCommand; raises InvalidArgument naming the field."""
        raw = self.model_dump()
        ride = StartRideCommand(
            vehicle_id=parse_required_str(raw, "vehicleId"),
            user_id=parse_required_str(raw, "userId"),
        )
        return EndRideCommand(
            ride=ride,
            battery=parse_battery(raw),
            longitude=parse_longitude(raw),
            latitude=parse_latitude(raw),
        )


class RideResponse(BaseModel):
    """Ride in list/detail responses."""

    id: str
    vehicle_id: str
    user_email: str
    start_ts: datetime
    end_ts: datetime | None = None
    start_longitude: float | None = None
    start_latitude: float | None = None
    end_longitude: float | None = None
    end_latitude: float | None = None
    end_battery: int | None = None


class StartRideResponse(BaseModel):
    """Response from starting a ride."""

    ride: RideResponse
    messages: list[str] = []


class EndRideResponse(BaseModel):
    """Response from ending a ride: ride summary plus human-readable messages."""

    ride_id: str
    vehicle_id: str
    user_email: str
    start_ts: datetime
    end_ts: datetime
    duration_minutes: float
    distance_km: float | None = None
    speed_kmh: float | None = None
    battery: int
    messages: list[str] = []


class ActiveRideResponse(BaseModel):
    """Active ride for a vehicle/user pair with the vehicle's state and start check-in."""

    ride_id: str
    vehicle_id: str
    user_email: str
    in_use: bool
    battery: int
    vehicle_type: str
    start_ts: datetime
    last_longitude: float | None = None
    last_latitude: float | None = None

"""Pydantic schemas for vehicle API."""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from utils.config import VEHICLE_TYPES


class VehicleCreate(BaseModel):
    """Payload for registering a vehicle. New vehicles start Available."""

    battery: int = Field(..., ge=0, le=100)
    vehicle_type: str

    @field_validator("vehicle_type")
    @classmethod
    def _known_vehicle_type(cls, value: str) -> str:
        value = value.strip()
        if value not in VEHICLE_TYPES:
            raise ValueError(f"vehicle_type must be one of: {', '.join(sorted(VEHICLE_TYPES))}")
        return value


class LocationResponse(BaseModel):
    """One location history entry."""

    ts: datetime
    longitude: float
    latitude: float


class VehicleResponse(BaseModel):
    """Vehicle in list responses, with its latest check-in when known."""

    id: str
    battery: int
    in_use: bool
    vehicle_type: str
    last_longitude: float | None = None
    last_latitude: float | None = None
    last_checkin: datetime | None = None


class VehicleDetail(BaseModel):
    """Vehicle with its full location history, newest first."""

    id: str
    battery: int
    in_use: bool
    vehicle_type: str
    location_history: list[LocationResponse] = []

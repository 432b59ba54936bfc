"""Typed, validated ride commands produced from raw request payloads."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class StartRideCommand:
    """Who rides which vehicle; optional start position (WGS84 decimal degrees)."""

    vehicle_id: str
    user_id: str
    longitude: Optional[Decimal] = None
    latitude: Optional[Decimal] = None


@dataclass(frozen=True)
class EndRideCommand:
    """End-ride telemetry; embeds the start-ride identity fields."""

    ride: StartRideCommand
    battery: int
    longitude: Decimal
    latitude: Decimal

    @property
    def vehicle_id(self) -> str:
        return self.ride.vehicle_id

    @property
    def user_id(self) -> str:
        return self.ride.user_id

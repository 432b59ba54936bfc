"""Vehicle model for DB persistence."""
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Integer, String, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from models import Base
from ride_core.errors import Conflict, InvalidArgument
from utils.config import VEHICLE_TYPES

if TYPE_CHECKING:
    from models.location_history import LocationHistory
    from models.ride import Ride

BATTERY_MIN = 0
BATTERY_MAX = 100


class Vehicle(Base):
    """Vehicles table: id, battery (percent), in_use, vehicle_type; version guards concurrent writes."""

    __tablename__ = "vehicles"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    battery: Mapped[int] = mapped_column(Integer, nullable=False)
    in_use: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    vehicle_type: Mapped[str] = mapped_column(String(32), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    location_history: Mapped[list["LocationHistory"]] = relationship(
        "LocationHistory",
        back_populates="vehicle",
        cascade="all, delete-orphan",
        order_by="desc(LocationHistory.ts)",
        lazy="select",
    )
    rides: Mapped[list["Ride"]] = relationship(
        "Ride",
        back_populates="vehicle",
        cascade="all, delete-orphan",
        lazy="select",
    )

    __table_args__ = (CheckConstraint("battery >= 0 AND battery <= 100", name="ck_vehicles_battery_range"),)
    __mapper_args__ = {"version_id_col": version}

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("in_use", False)
        super().__init__(**kwargs)

    @validates("id")
    def _validate_id(self, key: str, value: str) -> str:
        # Assigned once; never re-keyed.
        if self.id is not None and value != self.id:
            raise InvalidArgument("id", "Vehicle id cannot be changed")
        return value

    @validates("battery")
    def _validate_battery(self, key: str, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument("battery", "Battery (percent) must be an integer")
        if value < BATTERY_MIN or value > BATTERY_MAX:
            raise InvalidArgument("battery", "Battery (percent) must be between 0 and 100")
        return value

    @validates("in_use")
    def _validate_in_use(self, key: str, value: bool) -> bool:
        if not isinstance(value, bool):
            raise InvalidArgument("in_use", "in_use must be a boolean")
        # Only Available <-> InUse; a same-state assignment is a rejected transition.
        if self.in_use is not None and value == self.in_use:
            raise Conflict("Vehicle is already in use" if value else "Vehicle is already available")
        return value

    @validates("vehicle_type")
    def _validate_vehicle_type(self, key: str, value: str) -> str:
        if not value or value not in VEHICLE_TYPES:
            raise InvalidArgument(
                "vehicle_type",
                f"vehicle_type must be one of: {', '.join(sorted(VEHICLE_TYPES))}",
            )
        return value

    @property
    def is_available(self) -> bool:
        return not self.in_use

    def check_out(self) -> None:
        """Available -> InUse (start-ride)."""
        if self.in_use:
            raise Conflict("Vehicle is currently in use")
        self.in_use = True

    def check_in(self, battery: int) -> None:
        """InUse -> Available (end-ride), recording the returned battery level."""
        if not self.in_use:
            raise Conflict("Vehicle is not in use")
        self.battery = battery
        self.in_use = False

    def add_location(self, entry: "LocationHistory") -> None:
        """Append a location entry; sets the back-reference and keeps a loaded history newest first."""
        entry.vehicle = self
        state = inspect(self)
        # Unloaded persistent history stays unloaded.
        if state.key is None or "location_history" in state.dict:
            self.location_history.sort(key=lambda e: e.ts, reverse=True)

    def add_ride(self, ride: "Ride") -> None:
        """Attach a ride; sets the back-reference."""
        ride.vehicle = self

    def __repr__(self) -> str:
        return f"<Vehicle {self.id} type={self.vehicle_type} battery={self.battery} in_use={self.in_use}>"

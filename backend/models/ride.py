"""Ride model: one user on one vehicle from start-ride to end-ride."""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base

if TYPE_CHECKING:
    from models.user import User
    from models.vehicle import Vehicle


class Ride(Base):
    """rides table: start/end timestamps, start/end coordinates, final battery. Open while end_ts is NULL."""

    __tablename__ = "rides"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    vehicle_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("vehicles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_email: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.email", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_ts: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_ts: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, default=None)
    start_longitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(9, 6), nullable=True)
    start_latitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 6), nullable=True)
    end_longitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(9, 6), nullable=True)
    end_latitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 6), nullable=True)
    end_battery: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    vehicle: Mapped["Vehicle"] = relationship("Vehicle", back_populates="rides")
    user: Mapped["User"] = relationship("User", back_populates="rides")

    @property
    def is_open(self) -> bool:
        return self.end_ts is None

    def close(self, ts: datetime, longitude: Decimal, latitude: Decimal, battery: int) -> None:
        """Populate the end fields."""
        self.end_ts = ts
        self.end_longitude = longitude
        self.end_latitude = latitude
        self.end_battery = battery

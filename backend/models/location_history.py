"""LocationHistory model: append-only vehicle positions."""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base

if TYPE_CHECKING:
    from models.vehicle import Vehicle


class LocationHistory(Base):
    """location_history table: id, vehicle_id, ts, longitude, latitude (WGS84 decimal degrees)."""

    __tablename__ = "location_history"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    vehicle_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("vehicles.id", ondelete="CASCADE"),
        nullable=False,
    )
    ts: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    longitude: Mapped[Decimal] = mapped_column(Numeric(9, 6), nullable=False)
    latitude: Mapped[Decimal] = mapped_column(Numeric(8, 6), nullable=False)

    vehicle: Mapped["Vehicle"] = relationship("Vehicle", back_populates="location_history")

    __table_args__ = (Index("ix_location_history_vehicle_id_ts", "vehicle_id", "ts"),)

    def __repr__(self) -> str:
        return f"<LocationHistory vehicle={self.vehicle_id} ts={self.ts} ({self.longitude}, {self.latitude})>"

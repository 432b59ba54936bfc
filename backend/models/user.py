"""User model for DB persistence."""
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from models import Base

if TYPE_CHECKING:
    from models.ride import Ride


class User(Base):
    """users table: email (key), first_name, last_name, phone_numbers."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_numbers: Mapped[list] = mapped_column(JSON(), nullable=False, default=list)

    rides: Mapped[list["Ride"]] = relationship(
        "Ride",
        back_populates="user",
        cascade="all, delete-orphan",
    )

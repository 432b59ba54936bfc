"""SQLAlchemy declarative base and models."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DB models."""
    pass


# Register every model with Base so string relationships resolve.
from models.location_history import LocationHistory  # noqa: E402,F401
from models.ride import Ride  # noqa: E402,F401
from models.user import User  # noqa: E402,F401
from models.vehicle import Vehicle  # noqa: E402,F401

# Schemas package
from .health import HealthResponse
from .rides import EndRideRequest, EndRideResponse, RideResponse, StartRideRequest
from .users import UserCreate, UserResponse
from .vehicles import VehicleCreate, VehicleDetail, VehicleResponse

__all__ = [
    "EndRideRequest",
    "EndRideResponse",
    "HealthResponse",
    "RideResponse",
    "StartRideRequest",
    "UserCreate",
    "UserResponse",
    "VehicleCreate",
    "VehicleDetail",
    "VehicleResponse",
]

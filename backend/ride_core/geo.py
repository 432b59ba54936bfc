"""Ride calculations: great-circle distance, duration and average speed."""
import math
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union

EARTH_RADIUS_KM = 6371.0

Number = Union[float, Decimal]
# (longitude, latitude) in WGS84 decimal degrees
Point = tuple[Number, Number]
DistanceFn = Callable[[Point, Point], float]


def haversine_km(start: Point, end: Point) -> float:
    """Great-circle distance in km between two (longitude, latitude) points."""
    lon1, lat1 = math.radians(float(start[0])), math.radians(float(start[1]))
    lon2, lat2 = math.radians(float(end[0])), math.radians(float(end[1]))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def duration_minutes(start: datetime, end: datetime) -> float:
    """Elapsed minutes between two timestamps (never negative)."""
    return max(0.0, (end - start).total_seconds() / 60.0)


def average_speed_kmh(distance_km: Optional[float], minutes: float) -> Optional[float]:
    """Average speed in km/h; None when distance is unknown or no time elapsed."""
    if distance_km is None or minutes <= 0:
        return None
    return distance_km / (minutes / 60.0)

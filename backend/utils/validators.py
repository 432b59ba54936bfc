"""Tolerant field parsers for wire payloads; every failure names the offending field."""
from decimal import Decimal, InvalidOperation
from typing import Any

from ride_core.errors import InvalidArgument

LONGITUDE_RANGE = (Decimal(-180), Decimal(180))
LATITUDE_RANGE = (Decimal(-90), Decimal(90))
BATTERY_RANGE = (0, 100)


def _is_missing(value: Any) -> bool:
    """None or blank string counts as missing."""
    return value is None or (isinstance(value, str) and not value.strip())


def parse_required_str(row: dict[str, Any], key: str) -> str:
    """Get a non-empty string value, stripped."""
    value = row.get(key)
    if _is_missing(value):
        raise InvalidArgument(key, f"{key} is required")
    if not isinstance(value, str):
        raise InvalidArgument(key, f"{key} must be a string")
    return value.strip()


def _to_decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidArgument(key, f"{key} must be numeric")
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        raise InvalidArgument(key, f"{key} must be numeric")
    try:
        number = Decimal(text)
    except (InvalidOperation, ValueError) as e:
        raise InvalidArgument(key, f"{key} must be numeric") from e
    if not number.is_finite():
        raise InvalidArgument(key, f"{key} must be numeric")
    return number


def parse_int_in_range(row: dict[str, Any], key: str, low: int, high: int) -> int:
    """Parse a required integer (string or number) within [low, high]."""
    value = row.get(key)
    if _is_missing(value):
        raise InvalidArgument(key, f"{key} is required")
    number = _to_decimal(value, key)
    # Bound before any integral conversion so huge exponents are never expanded.
    if number < low or number > high:
        raise InvalidArgument(key, f"{key} must be between {low} and {high}")
    if number != number.to_integral_value():
        raise InvalidArgument(key, f"{key} must be an integer")
    return int(number)


def parse_decimal_in_range(
    row: dict[str, Any],
    key: str,
    low: Decimal,
    high: Decimal,
    *,
    required: bool = True,
) -> Decimal | None:
    """Parse a decimal (string or number) within [low, high]. Optional fields return None when missing."""
    value = row.get(key)
    if _is_missing(value):
        if required:
            raise InvalidArgument(key, f"{key} is required")
        return None
    number = _to_decimal(value, key)
    if number < low or number > high:
        raise InvalidArgument(key, f"{key} must be between {low} and {high}")
    return number


def parse_battery(row: dict[str, Any], key: str = "battery") -> int:
    """Battery percentage, integer 0..100."""
    return parse_int_in_range(row, key, *BATTERY_RANGE)


def parse_longitude(row: dict[str, Any], key: str = "longitude", *, required: bool = True) -> Decimal | None:
    """Longitude in decimal degrees, -180..180."""
    return parse_decimal_in_range(row, key, *LONGITUDE_RANGE, required=required)


def parse_latitude(row: dict[str, Any], key: str = "latitude", *, required: bool = True) -> Decimal | None:
    """Latitude in decimal degrees, -90..90."""
    return parse_decimal_in_range(row, key, *LATITUDE_RANGE, required=required)

"""Unit tests: EndRideRequest / StartRideRequest validate-and-normalize."""
import time
from decimal import Decimal

import pytest

from ride_core.commands import EndRideCommand, StartRideCommand
from ride_core.errors import InvalidArgument
from schemas.rides import EndRideRequest, StartRideRequest

pytestmark = pytest.mark.unit


def _payload(**overrides):
    body = {
        "vehicleId": "V1",
        "userId": "U1",
        "battery": "55",
        "longitude": "-73.9857",
        "latitude": "40.7484",
    }
    body.update(overrides)
    return body


def _field_error(payload) -> str:
    with pytest.raises(InvalidArgument) as exc:
        EndRideRequest(**payload).normalize()
    return exc.value.field


def test_normalize_string_fields():
    """String wire values become typed command fields."""
    command = EndRideRequest(**_payload()).normalize()
    assert isinstance(command, EndRideCommand)
    assert command.vehicle_id == "V1"
    assert command.user_id == "U1"
    assert command.battery == 55
    assert command.longitude == Decimal("-73.9857")
    assert command.latitude == Decimal("40.7484")


def test_normalize_embeds_start_ride_fields():
    """End-ride command carries the start-ride identity by composition."""
    command = EndRideRequest(**_payload()).normalize()
    assert command.ride == StartRideCommand(vehicle_id="V1", user_id="U1")


def test_normalize_numeric_fields():
    """Numbers on the wire are accepted as well as strings."""
    command = EndRideRequest(**_payload(battery=42, longitude=-73.5, latitude=40)).normalize()
    assert command.battery == 42
    assert command.longitude == Decimal("-73.5")
    assert command.latitude == Decimal("40")


def test_normalize_strips_whitespace():
    """Surrounding whitespace is tolerated."""
    command = EndRideRequest(**_payload(vehicleId=" V1 ", battery=" 7 ")).normalize()
    assert command.vehicle_id == "V1"
    assert command.battery == 7


def test_extra_fields_ignored():
    """Unrecognized fields do not affect validation."""
    command = EndRideRequest(**_payload(color="red", speed="fast")).normalize()
    assert command.battery == 55


def test_battery_out_of_range_names_field():
    """battery='120' is rejected naming battery."""
    assert _field_error(_payload(battery="120")) == "battery"


def test_unparseable_longitude_names_field():
    """longitude='east' is rejected naming longitude."""
    assert _field_error(_payload(longitude="east")) == "longitude"


@pytest.mark.parametrize("battery", ["0", "100"])
def test_battery_boundaries_accepted(battery):
    """0 and 100 are valid battery levels."""
    assert EndRideRequest(**_payload(battery=battery)).normalize().battery == int(battery)


@pytest.mark.parametrize("battery", ["-1", "101"])
def test_battery_just_outside_boundaries_rejected(battery):
    """-1 and 101 are rejected."""
    assert _field_error(_payload(battery=battery)) == "battery"


def test_battery_fraction_rejected():
    """Battery must be a whole percentage."""
    assert _field_error(_payload(battery="55.5")) == "battery"


@pytest.mark.parametrize("battery", ["1e999999", "-1e5000000", "9E+999999999"])
def test_battery_huge_exponent_rejected_quickly(battery):
    """Exponent-notation batteries far out of range fail on the range check without expansion."""
    started = time.monotonic()
    with pytest.raises(InvalidArgument) as exc:
        EndRideRequest(**_payload(battery=battery)).normalize()
    assert exc.value.field == "battery"
    assert "between 0 and 100" in exc.value.message
    assert time.monotonic() - started < 1.0


def test_battery_tiny_exponent_rejected_as_fraction():
    """A tiny non-zero battery is in range but not a whole percentage."""
    with pytest.raises(InvalidArgument) as exc:
        EndRideRequest(**_payload(battery="1e-999999")).normalize()
    assert exc.value.message == "battery must be an integer"


def test_battery_bool_rejected():
    """Booleans are not numbers on the wire."""
    assert _field_error(_payload(battery=True)) == "battery"


@pytest.mark.parametrize(
    "field,value",
    [
        ("longitude", "-180.0001"),
        ("longitude", "180.5"),
        ("latitude", "-90.1"),
        ("latitude", "91"),
        ("latitude", "NaN"),
        ("longitude", "Infinity"),
    ],
)
def test_coordinates_out_of_range_rejected(field, value):
    """Coordinates outside WGS84 ranges, or non-finite, are rejected naming the field."""
    assert _field_error(_payload(**{field: value})) == field


def test_coordinate_boundaries_accepted():
    """Range endpoints are inclusive."""
    command = EndRideRequest(**_payload(longitude="-180", latitude="90")).normalize()
    assert command.longitude == Decimal("-180")
    assert command.latitude == Decimal("90")


@pytest.mark.parametrize("field", ["vehicleId", "userId", "battery", "longitude", "latitude"])
def test_missing_field_names_field(field):
    """Every required field is reported by name when absent."""
    payload = _payload()
    del payload[field]
    assert _field_error(payload) == field


@pytest.mark.parametrize("field", ["vehicleId", "userId", "battery"])
def test_blank_field_names_field(field):
    """Blank strings count as missing."""
    assert _field_error(_payload(**{field: "   "})) == field


def test_non_string_vehicle_id_rejected():
    """Identifiers must be strings."""
    assert _field_error(_payload(vehicleId=["V1"])) == "vehicleId"


def test_start_ride_request_without_coordinates():
    """Start-ride coordinates are optional."""
    command = StartRideRequest(vehicleId="V1", userId="U1").normalize()
    assert command == StartRideCommand(vehicle_id="V1", user_id="U1")


def test_start_ride_request_with_coordinates():
    """Start-ride coordinates are parsed when given."""
    command = StartRideRequest(vehicleId="V1", userId="U1", longitude="10.5", latitude="-3").normalize()
    assert command.longitude == Decimal("10.5")
    assert command.latitude == Decimal("-3")


def test_start_ride_request_half_coordinates_rejected():
    """A latitude without longitude names the missing longitude."""
    with pytest.raises(InvalidArgument) as exc:
        StartRideRequest(vehicleId="V1", userId="U1", latitude="40").normalize()
    assert exc.value.field == "longitude"

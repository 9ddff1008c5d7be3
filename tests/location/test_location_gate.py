import math

from src.face_attendance.face_attendance.location.gate import LocationGate
from src.face_attendance.face_attendance.location.geo import distance_meters
from src.face_attendance.face_attendance.location.model import OfficeGeofence

OFFICE_LAT = 12.9716
OFFICE_LON = 77.5946

# ~500 m north of the office
FAR_LAT = OFFICE_LAT + 0.0045


def test_same_point_is_allowed():
    result = LocationGate().validate(OFFICE_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON, 100)

    assert result.allowed is True
    assert result.distance_meters == 0
    assert result.message == "Location verified - within office premises"


def test_far_point_is_denied_with_distance_in_message():
    result = LocationGate().validate(FAR_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON, 100)

    assert result.allowed is False
    assert 495 <= result.distance_meters <= 505
    assert f"You are {result.distance_meters} meters" in result.message
    assert "(allowed: 100m)" in result.message


def test_exactly_on_the_boundary_is_allowed():
    exact = distance_meters(FAR_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON)

    result = LocationGate().validate(FAR_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON, exact)

    assert result.allowed is True


def test_missing_coordinates_are_invalid():
    gate = LocationGate()
    for args in (
        (None, OFFICE_LON, OFFICE_LAT, OFFICE_LON, 100),
        (OFFICE_LAT, OFFICE_LON, None, OFFICE_LON, 100),
        (OFFICE_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON, None),
        (math.nan, OFFICE_LON, OFFICE_LAT, OFFICE_LON, 100),
    ):
        result = gate.validate(*args)
        assert result.allowed is False
        assert result.distance_meters is None
        assert result.message == "Invalid coordinates provided"


def test_zero_coordinate_counts_as_missing_by_default():
    result = LocationGate().validate(0.0, 0.0, 0.0, 0.0, 100)

    assert result.allowed is False
    assert result.message == "Invalid coordinates provided"


def test_zero_coordinate_is_real_when_configured():
    result = LocationGate(zero_is_missing=False).validate(0.0, 0.0, 0.0, 0.0, 100)

    assert result.allowed is True
    assert result.distance_meters == 0


def test_fractional_radius_is_kept_in_message():
    result = LocationGate().validate(FAR_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON, 50.5)

    assert "(allowed: 50.5m)" in result.message


def test_validate_against_office():
    office = OfficeGeofence(latitude=OFFICE_LAT, longitude=OFFICE_LON, radius_meters=100)

    assert office.is_configured
    assert LocationGate().validate_against(OFFICE_LAT, OFFICE_LON, office).to_dict() == {
        "allowed": True,
        "distance": 0,
        "message": "Location verified - within office premises",
    }
    assert not OfficeGeofence(latitude=None, longitude=OFFICE_LON, radius_meters=100).is_configured


def test_infinite_coordinates_are_invalid():
    gate = LocationGate(zero_is_missing=False)
    for args in (
        (math.inf, OFFICE_LON, OFFICE_LAT, OFFICE_LON, 100),
        (OFFICE_LAT, -math.inf, OFFICE_LAT, OFFICE_LON, 100),
        (OFFICE_LAT, OFFICE_LON, OFFICE_LAT, OFFICE_LON, math.inf),
    ):
        result = gate.validate(*args)
        assert result.allowed is False
        assert result.distance_meters is None
        assert result.message == "Invalid coordinates provided"

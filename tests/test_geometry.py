"""Tests for coordinate to azimuth/attenuation mapping."""

import pytest
from spatialize.core.exceptions import InvalidGeometry
from spatialize.core.geometry import (
    ZERO_DISTANCE_AZIMUTH,
    attenuation_from_coords,
    azimuth_from_coords,
    distance_between,
)
from spatialize.core.models import Coordinate

ORIGIN = Coordinate(0.0, 0.0)


@pytest.mark.parametrize(
    "source, expected",
    [
        ((1, 0), 0.0),     # east
        ((0, 1), 90.0),    # below on screen
        ((-1, 0), 180.0),  # west
        ((0, -1), 270.0),  # up the screen, straight ahead
        ((1, 1), 45.0),
        ((1, -1), 315.0),
    ],
)
def test_azimuth_directions(source, expected):
    """Angles grow clockwise on screen and are canonicalized to [0, 360)."""
    assert azimuth_from_coords(ORIGIN, Coordinate.of(source)) == pytest.approx(expected)


def test_azimuth_is_relative_to_listener():
    """Only the offset between listener and source matters."""
    listener = Coordinate(100.0, 50.0)
    assert azimuth_from_coords(listener, Coordinate(100.0, 0.0)) == pytest.approx(270.0)


def test_azimuth_at_zero_distance():
    """A source on the listener is treated as straight ahead."""
    assert ZERO_DISTANCE_AZIMUTH == 270.0
    assert azimuth_from_coords(ORIGIN, ORIGIN) == 270.0
    assert azimuth_from_coords(Coordinate(-0.0, -0.0), ORIGIN) == 270.0


def test_distance_between():
    """Euclidean distance."""
    assert distance_between(ORIGIN, Coordinate(3.0, 4.0)) == 5.0


def test_attenuation_inside_radius():
    """Full volume anywhere inside the listen radius."""
    assert attenuation_from_coords(ORIGIN, ORIGIN, 10.0) == 1.0
    assert attenuation_from_coords(ORIGIN, Coordinate(9.99, 0.0), 10.0) == 1.0


def test_attenuation_continuous_at_radius():
    """Exactly at the radius the factor is radius/distance == 1."""
    assert attenuation_from_coords(ORIGIN, Coordinate(10.0, 0.0), 10.0) == 1.0


def test_attenuation_inverse_distance():
    """Beyond the radius the factor is radius/distance."""
    assert attenuation_from_coords(ORIGIN, Coordinate(30.0, 40.0), 10.0) == pytest.approx(0.2)


def test_attenuation_strictly_decreasing_beyond_radius():
    """Farther sources are always quieter, but never silent."""
    previous = 1.0
    for distance in [11.0, 20.0, 100.0, 1e4, 1e8]:
        value = attenuation_from_coords(ORIGIN, Coordinate(distance, 0.0), 10.0)
        assert 0.0 < value < previous
        previous = value


@pytest.mark.parametrize("radius", [0.0, -1.0, float("nan"), float("inf")])
def test_attenuation_invalid_radius(radius):
    """Non-positive or non-finite radii are rejected."""
    with pytest.raises(InvalidGeometry):
        attenuation_from_coords(ORIGIN, ORIGIN, radius)


def test_coordinate_rejects_non_finite():
    """Coordinates must be finite numbers."""
    with pytest.raises(InvalidGeometry):
        Coordinate(float("nan"), 0.0)


def test_coordinate_of():
    """Pairs and x/y objects coerce to Coordinate."""
    assert Coordinate.of((1, 2)) == Coordinate(1.0, 2.0)
    assert Coordinate.of(Coordinate(1.0, 2.0)) == Coordinate(1.0, 2.0)

    class Point:
        x = 3
        y = 4

    assert Coordinate.of(Point()) == Coordinate(3.0, 4.0)

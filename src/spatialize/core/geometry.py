"""Mapping from listener/source coordinates to azimuth and attenuation."""

import math

from spatialize.core.models import Coordinate
from spatialize.core.panning import true_mod
from spatialize.utils.validate import validate_listen_radius

ZERO_DISTANCE_AZIMUTH = 270.0
"""Azimuth used when the source sits on the listener: straight ahead."""


def distance_between(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance between two coordinates."""
    return math.hypot(b.x - a.x, b.y - a.y)


def azimuth_from_coords(listener: Coordinate, source: Coordinate) -> float:
    """
    Direction of the source as seen from the listener.

    Returns:
        Angle in degrees in [0, 360). 0 is +x; angles grow clockwise on
        screen since y grows downward.
    """
    dx = source.x - listener.x
    dy = source.y - listener.y
    if dx == 0 and dy == 0:
        return ZERO_DISTANCE_AZIMUTH
    return true_mod(math.degrees(math.atan2(dy, dx)), 360.0)


def attenuation_from_coords(
    listener: Coordinate, source: Coordinate, radius: float
) -> float:
    """
    Distance attenuation: 1 inside the listen radius, radius/distance beyond.

    Raises:
        InvalidGeometry: If radius is not positive.
    """
    radius = validate_listen_radius(radius)
    distance = distance_between(listener, source)
    if distance < radius:
        return 1.0
    return radius / distance

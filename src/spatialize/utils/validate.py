"""Validation utilities."""

import math

from spatialize.core.exceptions import InvalidGeometry


def validate_volume(volume: float) -> float:
    """Validate volume and clamp negatives to 0.0."""
    if not math.isfinite(volume):
        raise ValueError(f"Volume must be finite, got {volume}")
    if volume < 0.0:
        return 0.0
    return float(volume)


def validate_listen_radius(radius: float) -> float:
    """Validate listen radius (must be finite and > 0)."""
    if not math.isfinite(radius) or radius <= 0.0:
        raise InvalidGeometry(f"Listen radius must be positive, got {radius}")
    return float(radius)


def validate_ramp(seconds: float) -> float:
    """Validate a ramp or delay duration (must be finite and >= 0)."""
    if not math.isfinite(seconds) or seconds < 0.0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")
    return float(seconds)

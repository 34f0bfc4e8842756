"""Equal-power pan law over an arbitrary ring of speakers."""

import math

from spatialize.core.exceptions import InvalidGeometry
from spatialize.core.models import GainVector, SpeakerLayout


def true_mod(value: float, divisor: float) -> float:
    """
    Modulo whose result takes the sign of the divisor.

    Float rounding can make ``-tiny % 360`` come out as exactly 360.0;
    that case is folded back to 0.0 so the result stays in [0, divisor).
    """
    result = value % divisor
    if result == divisor:
        return 0.0
    return result


def _equal_power_gain(position: float) -> float:
    """Gain for a normalized distance from a speaker, 0 at the speaker, 1 at its neighbour."""
    # cos(pi/2) is 6e-17, not 0
    if position >= 1.0:
        return 0.0
    return math.cos(position * math.pi / 2)


def gains_from_pan(target_azimuth: float, layout: SpeakerLayout) -> GainVector:
    """
    Compute per-channel gains for a source at the given azimuth.

    Only the two speakers bracketing the target get signal; their squared
    gains sum to 1. Non-spatial channels always get 0. A target exactly on a
    speaker gives that speaker 1.0 and every other channel exactly 0.0.

    Args:
        target_azimuth: Source direction in degrees (any real value).
        layout: Speaker layout; entries are angles or None (non-spatial).

    Returns:
        Tuple of gains aligned with ``layout``.

    Raises:
        InvalidGeometry: If the azimuth is not finite or the layout has
            fewer than two distinct spatial speakers.
    """
    if not math.isfinite(target_azimuth):
        raise InvalidGeometry(f"Azimuth must be finite, got {target_azimuth}")

    # Rotate so the target sits at 0
    rel = {
        i: true_mod(angle - target_azimuth, 360.0)
        for i, angle in enumerate(layout)
        if angle is not None
    }
    if len(rel) < 2:
        raise InvalidGeometry(
            f"Panning needs at least two spatial speakers, layout has {len(rel)}"
        )

    right_speaker = min(rel, key=rel.get)
    left_speaker = max(rel, key=rel.get)
    span = true_mod(rel[right_speaker] - rel[left_speaker], 360.0)
    if left_speaker == right_speaker or span == 0.0:
        raise InvalidGeometry("Speakers must sit at distinct angles")

    gains = [0.0] * len(layout)
    gains[left_speaker] = _equal_power_gain((360.0 - rel[left_speaker]) / span)
    gains[right_speaker] = _equal_power_gain(rel[right_speaker] / span)
    return tuple(gains)

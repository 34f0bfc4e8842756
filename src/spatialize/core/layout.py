"""Fixed speaker layouts keyed by output channel count.

Angles follow the screen convention used throughout the package: 0 degrees
points along +x and angles grow clockwise because y grows downward, so
"straight ahead" (up the screen) is -90 degrees.
"""

from typing import Dict, List

from spatialize.core.exceptions import UnsupportedChannelLayout
from spatialize.core.models import SpeakerLayout
from spatialize.core.panning import true_mod

STRAIGHT_AHEAD = -90.0
STEREO_HALF_WIDTH = 30.0
SURROUND_HALF_WIDTH = 115.0
MAX_PANNING_CHANNELS = 6

NON_SPATIAL = None
"""Layout marker for channels that never receive panned signal (LFE)."""


def _canonical(*angles) -> SpeakerLayout:
    return tuple(a if a is NON_SPATIAL else true_mod(a, 360.0) for a in angles)


_LAYOUTS: Dict[int, SpeakerLayout] = {
    # L, R
    2: _canonical(
        STRAIGHT_AHEAD - STEREO_HALF_WIDTH,
        STRAIGHT_AHEAD + STEREO_HALF_WIDTH,
    ),
    # L, R, C, LFE, Ls, Rs
    6: _canonical(
        STRAIGHT_AHEAD - STEREO_HALF_WIDTH,
        STRAIGHT_AHEAD + STEREO_HALF_WIDTH,
        STRAIGHT_AHEAD,
        NON_SPATIAL,
        STRAIGHT_AHEAD - SURROUND_HALF_WIDTH,
        STRAIGHT_AHEAD + SURROUND_HALF_WIDTH,
    ),
}


def speaker_layout(channel_count: int) -> SpeakerLayout:
    """
    Get the speaker layout for a channel count.

    Args:
        channel_count: Number of panning channels (2 or 6).

    Returns:
        Tuple of per-channel azimuths in [0, 360), NON_SPATIAL for LFE.

    Raises:
        UnsupportedChannelLayout: If no layout is defined for the count.
    """
    try:
        return _LAYOUTS[channel_count]
    except KeyError:
        raise UnsupportedChannelLayout(channel_count) from None


def supported_channel_counts() -> List[int]:
    """Channel counts with a defined layout."""
    return sorted(_LAYOUTS)


def panning_channel_count(max_channel_count: int, limit: int = MAX_PANNING_CHANNELS) -> int:
    """Number of output channels used for panning; extra channels stay silent."""
    return min(max_channel_count, limit)


def spatial_channels(layout: SpeakerLayout) -> List[int]:
    """Indices of channels that carry a speaker angle."""
    return [i for i, angle in enumerate(layout) if angle is not NON_SPATIAL]

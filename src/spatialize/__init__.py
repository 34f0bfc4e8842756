"""
spatialize - surround panning and distance attenuation for 2-D scenes.

This package computes per-speaker gains for a mono source placed relative
to a listener on a 2-D plane, over stereo or 5.1 speaker layouts, and
drives live voices through a pluggable audio backend with smoothed gain
ramps and fade-out on pause.
"""

from spatialize.api.engine import AudioEngine
from spatialize.api.voice import Voice
from spatialize.core.geometry import attenuation_from_coords, azimuth_from_coords
from spatialize.core.layout import speaker_layout
from spatialize.core.models import Coordinate, EngineConfig, VoiceState
from spatialize.core.panning import gains_from_pan
from spatialize.core.exceptions import (
    SpatializeError,
    UnsupportedChannelLayout,
    InvalidGeometry,
    DeviceNotFound,
    EngineNotStarted,
    VoiceNotFound,
    VoiceClosedError,
)

__version__ = "0.1.0"

__all__ = [
    "AudioEngine",
    "Voice",
    "Coordinate",
    "EngineConfig",
    "VoiceState",
    "speaker_layout",
    "gains_from_pan",
    "azimuth_from_coords",
    "attenuation_from_coords",
    "SpatializeError",
    "UnsupportedChannelLayout",
    "InvalidGeometry",
    "DeviceNotFound",
    "EngineNotStarted",
    "VoiceNotFound",
    "VoiceClosedError",
]

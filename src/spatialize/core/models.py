"""Data models and configuration classes."""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from spatialize.core.exceptions import InvalidGeometry

SpeakerLayout = Tuple[Optional[float], ...]
"""Per-channel speaker azimuths in degrees, ``None`` for non-spatial channels."""

GainVector = Tuple[float, ...]
"""Per-channel gains aligned with a SpeakerLayout."""

PANNING_CHANNEL_COUNTS = (2, 6)
"""Channel counts with a speaker layout."""


class PlaybackState(Enum):
    """Media source playback state."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class VoiceState(Enum):
    """Voice controller state."""

    PLAYING = "playing"
    FADING_OUT = "fading_out"
    PAUSED = "paused"


@dataclass(frozen=True)
class Coordinate:
    """2-D position. Origin top-left, x grows rightward, y grows downward."""

    x: float
    y: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise InvalidGeometry(f"Coordinates must be finite, got {self}")

    @classmethod
    def of(cls, value) -> "Coordinate":
        """Coerce a Coordinate, an (x, y) pair or an object with x/y attributes."""
        if isinstance(value, cls):
            return value
        if hasattr(value, "x") and hasattr(value, "y"):
            return cls(float(value.x), float(value.y))
        x, y = value
        return cls(float(x), float(y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class OutputDevice:
    """An audio output device reported by the backend."""

    name: str
    """Device label."""

    max_channel_count: int
    """Number of physical output channels."""


@dataclass(frozen=True)
class VoiceInputs:
    """Everything the mix of a voice is derived from."""

    listener: Coordinate
    source: Coordinate
    listen_radius: float
    volume: float = 1.0
    muted: bool = False

    def replace(self, **changes) -> "VoiceInputs":
        return replace(self, **changes)


@dataclass(frozen=True)
class VoiceMix:
    """Derived parameters pushed to the output sink."""

    azimuth: float
    """Source direction in degrees, [0, 360)."""

    gains: GainVector
    """Per-channel pan gains."""

    attenuation: float
    """Distance attenuation factor in (0, 1]."""

    volume: float
    """Master gain: user volume (0 while muted) times attenuation."""


@dataclass
class EngineConfig:
    """Configuration for AudioEngine."""

    max_panning_channels: int = 6
    """Upper bound on channels used for panning. Default: 6 (5.1)."""

    default_listen_radius: float = 100.0
    """Listen radius for voices created without one. Default: 100.0."""

    pan_ramp_seconds: float = 0.1
    """Ramp time for gain changes caused by movement. Default: 0.1."""

    fade_ramp_seconds: float = 1.0
    """Ramp time for the pause/resume master fade. Default: 1.0."""

    pause_grace_seconds: float = 5.0
    """Delay between pause() and stopping the media. Default: 5.0."""

    log_level: Optional[str] = None
    """Level applied to all spatialize loggers on engine start (process-wide).
    Default: None, leave the current level alone."""

    def __post_init__(self):
        if self.max_panning_channels not in PANNING_CHANNEL_COUNTS:
            raise ValueError(
                f"max_panning_channels must be one of {PANNING_CHANNEL_COUNTS}, "
                f"got {self.max_panning_channels}"
            )
        if not (math.isfinite(self.default_listen_radius) and self.default_listen_radius > 0):
            raise ValueError(
                f"default_listen_radius must be positive, got {self.default_listen_radius}"
            )
        for name in ("pan_ramp_seconds", "fade_ramp_seconds", "pause_grace_seconds"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value >= 0):
                raise ValueError(f"{name} must be non-negative, got {value}")

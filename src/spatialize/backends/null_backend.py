"""Null backend for testing (no actual audio output)."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
from spatialize.core.exceptions import BackendError
from spatialize.core.interfaces import IAudioBackend, IMediaSource, IOutputSink
from spatialize.core.models import OutputDevice, PlaybackState
from spatialize.utils.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GainCommand:
    """A recorded ramp command. ``channel`` is None for the master gain."""

    channel: Optional[int]
    gain: float
    ramp_seconds: float


class NullOutputSink(IOutputSink):
    """Null sink that applies ramps instantly and records every command."""

    def __init__(self, sink_id: str, channel_count: int):
        self.sink_id = sink_id
        self._channel_count = channel_count
        self.gains: List[float] = [0.0] * channel_count
        self.master_gain = 1.0
        self.commands: List[GainCommand] = []
        self.connected = True

    @property
    def channel_count(self) -> int:
        return self._channel_count

    def set_channel_gain(self, channel: int, gain: float, ramp_seconds: float) -> None:
        """Set channel gain."""
        if not self.connected:
            raise BackendError(f"Sink {self.sink_id} is disconnected", backend="null")
        if not 0 <= channel < self._channel_count:
            raise BackendError(
                f"Channel {channel} out of range for {self._channel_count} channels",
                backend="null",
            )
        self.gains[channel] = gain
        self.commands.append(GainCommand(channel, gain, ramp_seconds))

    def set_master_gain(self, gain: float, ramp_seconds: float) -> None:
        """Set master gain."""
        if not self.connected:
            raise BackendError(f"Sink {self.sink_id} is disconnected", backend="null")
        self.master_gain = gain
        self.commands.append(GainCommand(None, gain, ramp_seconds))
        logger.debug(f"NullOutputSink {self.sink_id}: master_gain={gain} over {ramp_seconds}s")

    def master_commands(self) -> List[GainCommand]:
        """Recorded master gain commands, oldest first."""
        return [c for c in self.commands if c.channel is None]

    def disconnect(self) -> None:
        """Disconnect sink."""
        self.connected = False
        logger.debug(f"NullOutputSink {self.sink_id}: disconnected")


class NullMediaSource(IMediaSource):
    """Null media source that only tracks state and commands."""

    def __init__(self, url: str, sink: IOutputSink):
        self._url = url
        self.sink = sink
        self._state = PlaybackState.STOPPED
        self.commands: List[str] = []

    @property
    def url(self) -> str:
        return self._url

    def play(self) -> None:
        """Start playback."""
        self._state = PlaybackState.PLAYING
        self.commands.append("play")
        logger.debug(f"NullMediaSource {self._url}: playing")

    def pause(self) -> None:
        """Pause playback."""
        if self._state == PlaybackState.PLAYING:
            self._state = PlaybackState.PAUSED
        self.commands.append("pause")
        logger.debug(f"NullMediaSource {self._url}: paused")

    def stop(self) -> None:
        """Stop playback."""
        self._state = PlaybackState.STOPPED
        self.commands.append("stop")
        logger.debug(f"NullMediaSource {self._url}: stopped")

    def get_state(self) -> PlaybackState:
        """Get playback state."""
        return self._state


class NullBackend(IAudioBackend):
    """Null backend implementation for testing."""

    DEFAULT_DEVICES: Tuple[OutputDevice, ...] = (OutputDevice("Null Output", 2),)

    def __init__(self, devices: Optional[Sequence[OutputDevice]] = None):
        self._initialized = False
        self._devices = list(devices if devices is not None else self.DEFAULT_DEVICES)
        self.permission_granted = False
        self.device: Optional[OutputDevice] = None
        self.output_channel_count: Optional[int] = None
        self.master_volume = 1.0
        self.sinks: Dict[str, NullOutputSink] = {}
        self.media_sources: List[NullMediaSource] = []
        self._next_sink_id = 0

    def initialize(self) -> None:
        """Initialize backend."""
        if self._initialized:
            return
        self._initialized = True
        logger.info("NullBackend initialized")

    def request_permission(self) -> None:
        """Grant permission."""
        self.permission_granted = True

    def list_output_devices(self) -> List[OutputDevice]:
        """List configured devices."""
        return list(self._devices)

    def select_output_device(self, device: OutputDevice) -> None:
        """Select device."""
        if device not in self._devices:
            raise BackendError(f"Unknown device {device.name!r}", backend="null")
        self.device = device
        logger.debug(f"NullBackend: device={device.name}")

    def set_output_channel_count(self, channel_count: int) -> None:
        """Set output channel count."""
        self.output_channel_count = channel_count

    def create_output_sink(self, channel_count: int) -> NullOutputSink:
        """Create an output sink."""
        if not self._initialized:
            raise BackendError("Backend not initialized", backend="null")
        sink_id = f"null_{self._next_sink_id}"
        self._next_sink_id += 1
        sink = NullOutputSink(sink_id, channel_count)
        self.sinks[sink_id] = sink
        logger.debug(f"Created NullOutputSink {sink_id} with {channel_count} channels")
        return sink

    def create_media_source(self, url: str, sink: IOutputSink) -> NullMediaSource:
        """Create a media source."""
        media = NullMediaSource(url, sink)
        self.media_sources.append(media)
        return media

    def set_master_volume(self, volume: float) -> None:
        """Set master volume."""
        self.master_volume = volume
        logger.debug(f"NullBackend: master_volume={volume}")

    def shutdown(self) -> None:
        """Shutdown backend."""
        for sink in self.sinks.values():
            if sink.connected:
                sink.disconnect()
        self.sinks.clear()
        self._initialized = False
        logger.info("NullBackend shut down")

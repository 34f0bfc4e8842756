"""Protocol interfaces for audio backend abstraction."""

from typing import Callable, List, Protocol

from spatialize.core.models import OutputDevice, PlaybackState


class IOutputSink(Protocol):
    """Per-voice output stage: one gain per output channel plus a master gain."""

    @property
    def channel_count(self) -> int:
        """Number of channels the sink pans across."""
        ...

    def set_channel_gain(self, channel: int, gain: float, ramp_seconds: float) -> None:
        """Smoothly move one channel's gain to ``gain`` over ``ramp_seconds``."""
        ...

    def set_master_gain(self, gain: float, ramp_seconds: float) -> None:
        """Smoothly move the master gain to ``gain`` over ``ramp_seconds``."""
        ...

    def disconnect(self) -> None:
        """Detach the sink from the output and free its resources."""
        ...


class IMediaSource(Protocol):
    """Playable media feeding an output sink."""

    @property
    def url(self) -> str:
        """Opaque media handle."""
        ...

    def play(self) -> None:
        """Start or resume playback."""
        ...

    def pause(self) -> None:
        """Pause playback (can be resumed)."""
        ...

    def stop(self) -> None:
        """Stop playback."""
        ...

    def get_state(self) -> PlaybackState:
        """Get current playback state."""
        ...


class IAudioBackend(Protocol):
    """Interface for audio backend implementation."""

    def initialize(self) -> None:
        """Initialize the backend and its audio context."""
        ...

    def request_permission(self) -> None:
        """Obtain the permission needed to see and use output devices."""
        ...

    def list_output_devices(self) -> List[OutputDevice]:
        """List available output devices."""
        ...

    def select_output_device(self, device: OutputDevice) -> None:
        """Route the audio context to ``device``."""
        ...

    def set_output_channel_count(self, channel_count: int) -> None:
        """Configure how many output channels the context renders."""
        ...

    def create_output_sink(self, channel_count: int) -> IOutputSink:
        """Create a per-voice sink with ``channel_count`` channel gains."""
        ...

    def create_media_source(self, url: str, sink: IOutputSink) -> IMediaSource:
        """Create a mono media source connected into ``sink``."""
        ...

    def set_master_volume(self, volume: float) -> None:
        """Set the context-wide output volume."""
        ...

    def shutdown(self) -> None:
        """Shutdown the backend and free all resources."""
        ...


class IScheduledTask(Protocol):
    """Handle to a deferred callback."""

    @property
    def cancelled(self) -> bool:
        """True once cancel() was called."""
        ...

    def cancel(self) -> None:
        """Prevent the callback from running if it has not run yet."""
        ...


class IScheduler(Protocol):
    """Runs callbacks after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> IScheduledTask:
        """Schedule ``callback`` to run once after ``delay`` seconds."""
        ...

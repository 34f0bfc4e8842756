"""AudioEngine - main public API."""

import uuid
from typing import List, Optional
from spatialize.api.voice import Voice
from spatialize.backends.null_backend import NullBackend
from spatialize.concurrency.scheduler import ThreadingScheduler
from spatialize.core.exceptions import DeviceNotFound, EngineNotStarted, VoiceNotFound
from spatialize.core.interfaces import IAudioBackend, IScheduler
from spatialize.core.layout import panning_channel_count, speaker_layout
from spatialize.core.models import Coordinate, EngineConfig, OutputDevice, VoiceInputs
from spatialize.core.registry import VoiceRegistry
from spatialize.utils.log import get_logger, set_log_level
from spatialize.utils.validate import validate_listen_radius, validate_volume

logger = get_logger(__name__)


class AudioEngine:
    """
    Audio context facade.

    Owns the backend, the selected output device and the voices created
    through it. Several engines can coexist; nothing is process-global.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        backend: Optional[IAudioBackend] = None,
        scheduler: Optional[IScheduler] = None,
    ):
        """
        Initialize AudioEngine.

        Args:
            config: Engine configuration.
            backend: Optional backend implementation (default: NullBackend).
            scheduler: Optional scheduler for delayed stops
                (default: ThreadingScheduler).
        """
        self._config = config or EngineConfig()
        self._backend = backend if backend is not None else NullBackend()
        self._scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self._registry = VoiceRegistry()
        self._device: Optional[OutputDevice] = None
        self._channel_count = 0
        self._started = False

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def backend(self) -> IAudioBackend:
        return self._backend

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def device(self) -> Optional[OutputDevice]:
        """Selected output device, None before start()."""
        return self._device

    @property
    def channel_count(self) -> int:
        """Channels used for panning, 0 before start()."""
        return self._channel_count

    def start(self, device_name: Optional[str] = None) -> None:
        """
        Start the engine on an output device.

        Args:
            device_name: Output device label. Default: first device.

        Raises:
            DeviceNotFound: If no output device has that name.
            UnsupportedChannelLayout: If the device's channel count has no
                speaker layout. Raised before the device is configured.
        """
        if self._started:
            logger.warning("start called multiple times, ignoring")
            return

        if self._config.log_level is not None:
            # Process-wide: affects every engine
            set_log_level(self._config.log_level)
        self._backend.initialize()
        self._backend.request_permission()
        device = self._find_device(device_name)
        channel_count = panning_channel_count(
            device.max_channel_count, self._config.max_panning_channels
        )
        speaker_layout(channel_count)

        self._backend.select_output_device(device)
        logger.info(f'Audio device set to "{device.name}"')
        self._backend.set_output_channel_count(channel_count)
        logger.info(f"Using {channel_count} of {device.max_channel_count} available channels")

        self._device = device
        self._channel_count = channel_count
        self._started = True

    def shutdown(self) -> None:
        """Close every voice and shut the backend down. Idempotent."""
        if not self._started:
            return

        logger.info("Shutting down AudioEngine...")
        for voice in self._registry.get_all():
            try:
                voice.close()
            except Exception as e:
                logger.warning(f"Error closing voice {voice.id}: {e}")
        self._registry.clear()

        self._backend.shutdown()
        self._device = None
        self._channel_count = 0
        self._started = False
        logger.info("AudioEngine shut down")

    def get_device_names(self) -> List[str]:
        """Names of the available output devices."""
        self._backend.request_permission()
        return [d.name for d in self._backend.list_output_devices()]

    def create_voice(
        self,
        url: str,
        listener_coords,
        voice_coords,
        listen_radius: Optional[float] = None,
        *,
        volume: float = 1.0,
    ) -> Voice:
        """
        Create a voice for a media URL.

        Args:
            url: Media handle passed to the backend.
            listener_coords: Listener position, Coordinate or (x, y).
            voice_coords: Source position, Coordinate or (x, y).
            listen_radius: Full-volume radius. Default: config value.
            volume: User volume. Default: 1.0.

        Returns:
            The new voice, paused.

        Raises:
            EngineNotStarted: If engine is not started.
            UnsupportedChannelLayout: If the output channel count has no layout.
            InvalidGeometry: If coordinates or listen radius are invalid.
        """
        if not self._started:
            raise EngineNotStarted("Engine must be started before creating voices")

        # Resolve and validate everything before allocating backend resources
        layout = speaker_layout(self._channel_count)
        if listen_radius is None:
            listen_radius = self._config.default_listen_radius
        inputs = VoiceInputs(
            listener=Coordinate.of(listener_coords),
            source=Coordinate.of(voice_coords),
            listen_radius=validate_listen_radius(listen_radius),
            volume=validate_volume(volume),
        )

        logger.info(f"New voice at {url}")
        logger.debug(f"listener coords: {inputs.listener}")
        logger.debug(f"voice coords: {inputs.source}")

        sink = self._backend.create_output_sink(self._channel_count)
        media = self._backend.create_media_source(url, sink)
        voice = Voice(
            voice_id=str(uuid.uuid4()),
            media=media,
            sink=sink,
            layout=layout,
            inputs=inputs,
            scheduler=self._scheduler,
            config=self._config,
            on_close=self._forget_voice,
        )
        self._registry.register(voice)
        return voice

    def close_voice(self, voice: Voice) -> None:
        """
        Close a voice and forget it.

        Raises:
            VoiceNotFound: If the voice does not belong to this engine.
        """
        if self._registry.get(voice.id) is None:
            raise VoiceNotFound(f"Voice not found: {voice.id}")
        voice.close()

    def _forget_voice(self, voice: Voice) -> None:
        self._registry.remove(voice.id)

    @property
    def voices(self) -> List[Voice]:
        return self._registry.get_all()

    def voice_count(self) -> int:
        return self._registry.count()

    def set_master_volume(self, volume: float) -> None:
        """
        Set the output volume shared by all voices.

        Raises:
            EngineNotStarted: If engine is not started.
        """
        if not self._started:
            raise EngineNotStarted("Engine not started")
        self._backend.set_master_volume(validate_volume(volume))

    def _find_device(self, device_name: Optional[str]) -> OutputDevice:
        devices = self._backend.list_output_devices()
        if device_name is None:
            if not devices:
                raise DeviceNotFound("<default>")
            return devices[0]
        for device in devices:
            if device.name == device_name:
                return device
        raise DeviceNotFound(device_name)

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.shutdown()

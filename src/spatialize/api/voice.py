"""Voice - a single spatialized, playable sound source."""

import threading
from typing import Callable, Optional

from spatialize.core.mix import update as compute_mix
from spatialize.core.exceptions import VoiceClosedError
from spatialize.core.interfaces import IMediaSource, IOutputSink, IScheduledTask, IScheduler
from spatialize.core.models import (
    Coordinate,
    EngineConfig,
    GainVector,
    SpeakerLayout,
    VoiceInputs,
    VoiceMix,
    VoiceState,
)
from spatialize.utils.log import get_logger
from spatialize.utils.validate import validate_listen_radius, validate_volume

logger = get_logger(__name__)


class Voice:
    """
    Controller for one voice.

    Every change to listener/source coordinates, volume or listen radius
    recomputes the whole mix and pushes it to the output sink as smoothed
    ramps. ``pause()`` fades the voice out and only stops the media after a
    grace period; ``play()`` during that period cancels the pending stop.
    """

    def __init__(
        self,
        voice_id: str,
        media: IMediaSource,
        sink: IOutputSink,
        layout: SpeakerLayout,
        inputs: VoiceInputs,
        scheduler: IScheduler,
        config: EngineConfig,
        on_close: Optional[Callable[["Voice"], None]] = None,
    ):
        """
        Initialize Voice and push its initial mix without ramping.

        Args:
            voice_id: Unique identifier.
            media: Media source feeding the sink.
            sink: Output sink the mix is pushed to.
            layout: Speaker layout matching the sink's channel count.
            inputs: Initial coordinates, volume and listen radius.
            scheduler: Scheduler for the delayed stop after pause().
            config: Engine configuration (ramp and grace times).
            on_close: Called once with the voice after it is closed.
        """
        self.id = voice_id
        self._media = media
        self._sink = sink
        self._layout = layout
        self._scheduler = scheduler
        self._config = config
        self._lock = threading.RLock()
        self._state = VoiceState.PAUSED
        self._pending_stop: Optional[IScheduledTask] = None
        self._generation = 0
        self._closed = False
        self._on_close = on_close

        self._inputs = inputs
        self._mix = compute_mix(inputs, layout)
        self._push(self._mix, 0.0, 0.0)

    # -- state -----------------------------------------------------------

    @property
    def state(self) -> VoiceState:
        return self._state

    @property
    def is_playing(self) -> bool:
        """True while audible: playing or still fading out."""
        return self._state != VoiceState.PAUSED

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def url(self) -> str:
        return self._media.url

    @property
    def listener_coords(self) -> Coordinate:
        return self._inputs.listener

    @property
    def source_coords(self) -> Coordinate:
        return self._inputs.source

    @property
    def volume(self) -> float:
        """User volume, unaffected by distance or pause."""
        return self._inputs.volume

    @property
    def listen_radius(self) -> float:
        return self._inputs.listen_radius

    @property
    def mix(self) -> VoiceMix:
        return self._mix

    @property
    def azimuth(self) -> float:
        return self._mix.azimuth

    @property
    def gains(self) -> GainVector:
        return self._mix.gains

    @property
    def effective_volume(self) -> float:
        """Master gain currently targeted on the sink."""
        return self._mix.volume

    # -- parameter updates -----------------------------------------------

    def update(
        self,
        *,
        listener=None,
        source=None,
        volume: Optional[float] = None,
        listen_radius: Optional[float] = None,
    ) -> VoiceMix:
        """
        Apply any subset of new inputs and push the recomputed mix.

        Invalid input raises before anything is changed.

        Returns:
            The new mix.

        Raises:
            VoiceClosedError: If the voice was closed.
            InvalidGeometry: If coordinates or listen radius are invalid.
        """
        with self._lock:
            self._ensure_open()
            changes = {}
            if listener is not None:
                changes["listener"] = Coordinate.of(listener)
            if source is not None:
                changes["source"] = Coordinate.of(source)
            if volume is not None:
                changes["volume"] = validate_volume(volume)
            if listen_radius is not None:
                changes["listen_radius"] = validate_listen_radius(listen_radius)
            return self._apply(self._inputs.replace(**changes), self._config.pan_ramp_seconds)

    def set_listener_coords(self, listener) -> VoiceMix:
        return self.update(listener=listener)

    def set_source_coords(self, source) -> VoiceMix:
        return self.update(source=source)

    def set_volume(self, volume: float) -> VoiceMix:
        return self.update(volume=volume)

    def set_listen_radius(self, listen_radius: float) -> VoiceMix:
        return self.update(listen_radius=listen_radius)

    # -- transport -------------------------------------------------------

    def play(self) -> None:
        """
        Start playback, or recover from a pause still fading out.

        A pending delayed stop is cancelled and the master gain ramps back
        up to the current volume over the fade time.
        """
        with self._lock:
            self._ensure_open()
            self._cancel_pending_stop()
            if self._inputs.muted:
                self._apply(
                    self._inputs.replace(muted=False),
                    self._config.pan_ramp_seconds,
                    self._config.fade_ramp_seconds,
                )
            self._media.play()
            self._state = VoiceState.PLAYING
            logger.debug(f"Voice {self.id}: playing")

    def pause(self) -> None:
        """
        Fade out and stop the media after the grace period.

        Does nothing unless the voice is playing.
        """
        with self._lock:
            self._ensure_open()
            if self._state != VoiceState.PLAYING:
                logger.debug(f"Voice {self.id}: pause ignored in state {self._state.value}")
                return
            self._apply(
                self._inputs.replace(muted=True),
                self._config.pan_ramp_seconds,
                self._config.fade_ramp_seconds,
            )
            self._state = VoiceState.FADING_OUT
            self._generation += 1
            token = self._generation
            self._pending_stop = self._scheduler.call_later(
                self._config.pause_grace_seconds, lambda: self._finish_pause(token)
            )
            logger.debug(
                f"Voice {self.id}: fading out, stopping in {self._config.pause_grace_seconds}s"
            )

    def close(self) -> None:
        """Stop the media and disconnect the sink. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._cancel_pending_stop()
            self._media.stop()
            self._sink.disconnect()
            self._state = VoiceState.PAUSED
            self._closed = True
            logger.debug(f"Voice {self.id}: closed")
        if self._on_close is not None:
            self._on_close(self)

    # -- internals -------------------------------------------------------

    def _finish_pause(self, token: int) -> None:
        with self._lock:
            if self._closed or token != self._generation or self._state != VoiceState.FADING_OUT:
                logger.debug(f"Voice {self.id}: stale delayed stop ignored")
                return
            self._pending_stop = None
            self._media.pause()
            self._state = VoiceState.PAUSED
            logger.debug(f"Voice {self.id}: paused")

    def _cancel_pending_stop(self) -> None:
        # Bumping the generation also voids a stop that is already firing
        self._generation += 1
        if self._pending_stop is not None:
            self._pending_stop.cancel()
            self._pending_stop = None

    def _apply(
        self, inputs: VoiceInputs, ramp_seconds: float, master_ramp_seconds: Optional[float] = None
    ) -> VoiceMix:
        new_mix = compute_mix(inputs, self._layout)
        self._inputs = inputs
        self._mix = new_mix
        self._push(
            new_mix,
            ramp_seconds,
            ramp_seconds if master_ramp_seconds is None else master_ramp_seconds,
        )
        return new_mix

    def _push(self, voice_mix: VoiceMix, ramp_seconds: float, master_ramp_seconds: float) -> None:
        for channel, gain in enumerate(voice_mix.gains):
            self._sink.set_channel_gain(channel, gain, ramp_seconds)
        self._sink.set_master_gain(voice_mix.volume, master_ramp_seconds)

    def _ensure_open(self) -> None:
        if self._closed:
            raise VoiceClosedError(f"Voice {self.id} is closed")

    def __repr__(self) -> str:
        return (
            f"Voice(id={self.id!r}, url={self.url!r}, state={self._state.value}, "
            f"azimuth={self._mix.azimuth:.1f}, volume={self._mix.volume:.3f})"
        )

"""Tests for engine logic (using NullBackend)."""

import logging

import pytest
from spatialize.api.engine import AudioEngine
from spatialize.backends.null_backend import NullBackend
from spatialize.concurrency.scheduler import ManualScheduler
from spatialize.core.exceptions import (
    DeviceNotFound,
    EngineNotStarted,
    InvalidGeometry,
    UnsupportedChannelLayout,
    VoiceNotFound,
)
from spatialize.core.models import EngineConfig, OutputDevice
from spatialize.utils.log import set_log_level

STEREO = OutputDevice("Stereo Out", 2)
SURROUND = OutputDevice("Surround 5.1", 6)
ATMOS = OutputDevice("Atmos 7.1.4", 12)
QUAD = OutputDevice("Quad", 4)


def create_engine(*devices, **kwargs) -> AudioEngine:
    """Create an engine over a NullBackend with the given devices."""
    backend = NullBackend(devices=list(devices) or None)
    return AudioEngine(backend=backend, scheduler=ManualScheduler(), **kwargs)


def test_engine_start_shutdown():
    """Test engine start and shutdown."""
    engine = create_engine(STEREO)

    engine.start()
    assert engine.is_started
    assert engine.device == STEREO
    assert engine.channel_count == 2
    assert engine.backend.permission_granted

    engine.shutdown()
    assert not engine.is_started
    assert engine.channel_count == 0


def test_engine_context_manager():
    """Test engine as context manager."""
    with create_engine() as engine:
        assert engine.is_started
        assert engine.device.name == "Null Output"
    assert not engine.is_started


def test_start_twice_warns(caplog):
    """A second start() is ignored with a warning."""
    engine = create_engine(STEREO, SURROUND)
    engine.start("Surround 5.1")
    with caplog.at_level(logging.WARNING, logger="spatialize.api.engine"):
        engine.start("Stereo Out")
    assert engine.device == SURROUND
    assert "multiple times" in caplog.text
    engine.shutdown()


def test_device_not_found():
    """Unknown device names fail start()."""
    engine = create_engine(STEREO)
    with pytest.raises(DeviceNotFound, match="Missing"):
        engine.start("Missing")
    assert not engine.is_started


def test_no_devices():
    """A backend without devices cannot start."""
    engine = AudioEngine(backend=NullBackend(devices=[]), scheduler=ManualScheduler())
    with pytest.raises(DeviceNotFound):
        engine.start()


def test_get_device_names():
    """Device names are listed after requesting permission."""
    engine = create_engine(STEREO, SURROUND)
    assert engine.get_device_names() == ["Stereo Out", "Surround 5.1"]
    assert engine.backend.permission_granted


def test_channel_count_capped():
    """Devices with more than 6 channels pan over 6."""
    engine = create_engine(ATMOS)
    engine.start("Atmos 7.1.4")
    assert engine.channel_count == 6
    assert engine.backend.output_channel_count == 6

    voice = engine.create_voice("test.mp3", (0, 0), (0, -1))
    assert voice._sink.channel_count == 6
    engine.shutdown()


def test_config_caps_channels():
    """max_panning_channels can force stereo on a surround device."""
    engine = create_engine(SURROUND, config=EngineConfig(max_panning_channels=2))
    engine.start()
    assert engine.channel_count == 2
    engine.shutdown()


def test_unsupported_layout_fails_start():
    """A 4-channel device is rejected before the output is configured."""
    engine = create_engine(QUAD)
    with pytest.raises(UnsupportedChannelLayout) as excinfo:
        engine.start("Quad")
    assert excinfo.value.channel_count == 4
    assert not engine.is_started
    assert engine.device is None
    assert engine.backend.device is None
    assert engine.backend.output_channel_count is None
    assert engine.backend.sinks == {}

    with pytest.raises(EngineNotStarted):
        engine.create_voice("test.mp3", (0, 0), (0, -1))


def test_invalid_radius_before_allocation():
    """Bad geometry fails before any sink exists."""
    engine = create_engine(STEREO)
    engine.start()
    with pytest.raises(InvalidGeometry):
        engine.create_voice("test.mp3", (0, 0), (0, -1), listen_radius=-5)
    assert engine.backend.sinks == {}


def test_create_voice_before_start():
    """Test that create_voice raises error if engine not started."""
    engine = create_engine()
    with pytest.raises(EngineNotStarted):
        engine.create_voice("test.mp3", (0, 0), (1, 1))


def test_default_listen_radius():
    """Voices without a radius use the configured default."""
    engine = create_engine(config=EngineConfig(default_listen_radius=42.0))
    engine.start()
    voice = engine.create_voice("test.mp3", (0, 0), (0, -84))
    assert voice.listen_radius == 42.0
    assert voice.effective_volume == pytest.approx(0.5)
    engine.shutdown()


def test_voices_are_independent():
    """Moving one voice leaves the other untouched."""
    with create_engine(SURROUND) as engine:
        a = engine.create_voice("a.mp3", (0, 0), (0, -10))
        b = engine.create_voice("b.mp3", (0, 0), (0, -10))
        a.set_source_coords((10, 0))
        assert a.azimuth == 0.0
        assert b.azimuth == 270.0
        assert engine.voice_count() == 2
        assert engine.voices == [a, b]


def test_close_voice():
    """close_voice() closes and unregisters."""
    with create_engine() as engine:
        voice = engine.create_voice("test.mp3", (0, 0), (0, -10))
        engine.close_voice(voice)
        assert voice.closed
        assert engine.voice_count() == 0

        with pytest.raises(VoiceNotFound):
            engine.close_voice(voice)


def test_shutdown_closes_voices():
    """Shutdown closes every voice and cancels pending stops."""
    scheduler = ManualScheduler()
    engine = AudioEngine(backend=NullBackend(), scheduler=scheduler)
    engine.start()
    voice = engine.create_voice("test.mp3", (0, 0), (0, -10))
    voice.play()
    voice.pause()

    engine.shutdown()
    assert voice.closed
    assert scheduler.pending() == 0
    assert engine.voice_count() == 0


def test_set_master_volume():
    """Test setting master volume."""
    engine = create_engine()
    with pytest.raises(EngineNotStarted):
        engine.set_master_volume(0.5)

    engine.start()
    engine.set_master_volume(0.5)
    assert engine.backend.master_volume == 0.5
    engine.set_master_volume(-1.0)
    assert engine.backend.master_volume == 0.0


def test_independent_engines():
    """Engines share no state."""
    first = create_engine(STEREO)
    second = create_engine(SURROUND)
    first.start()
    second.start()
    assert first.channel_count == 2
    assert second.channel_count == 6
    first.shutdown()
    assert second.is_started
    second.shutdown()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_panning_channels": 1},
        {"max_panning_channels": 8},
        {"max_panning_channels": 4},
        {"max_panning_channels": 5},
        {"default_listen_radius": 0.0},
        {"pause_grace_seconds": -1.0},
    ],
)
def test_config_validation(kwargs):
    """Invalid configuration is rejected on construction."""
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_output_device_model():
    """OutputDevice compares by value."""
    assert OutputDevice("Stereo Out", 2) == STEREO


def test_voice_close_unregisters():
    """Closing a voice directly removes it from its engine."""
    with create_engine() as engine:
        kept = engine.create_voice("kept.mp3", (0, 0), (0, -10))
        voice = engine.create_voice("test.mp3", (0, 0), (0, -10))
        voice.close()

        assert engine.voice_count() == 1
        assert engine.voices == [kept]
        with pytest.raises(VoiceNotFound):
            engine.close_voice(voice)


def test_default_config_keeps_log_level():
    """An engine without log_level leaves other loggers' levels alone."""
    logger = logging.getLogger("spatialize.api.engine")
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    try:
        with create_engine():
            assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)


def test_configured_log_level_applies():
    """An explicit log_level is applied on start."""
    logger = logging.getLogger("spatialize.api.engine")
    try:
        with create_engine(config=EngineConfig(log_level="ERROR")):
            assert logger.level == logging.ERROR
    finally:
        set_log_level("WARNING")

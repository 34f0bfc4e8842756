"""Shared fixtures."""

import pytest
from spatialize.api.engine import AudioEngine
from spatialize.backends.null_backend import NullBackend
from spatialize.concurrency.scheduler import ManualScheduler
from spatialize.core.models import OutputDevice

STEREO = OutputDevice("Stereo Out", 2)
SURROUND = OutputDevice("Surround 5.1", 6)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def backend():
    return NullBackend(devices=[STEREO, SURROUND])


@pytest.fixture
def engine(backend, scheduler):
    """Engine started on the stereo device."""
    engine = AudioEngine(backend=backend, scheduler=scheduler)
    engine.start("Stereo Out")
    yield engine
    engine.shutdown()


@pytest.fixture
def surround_engine(backend, scheduler):
    """Engine started on the 5.1 device."""
    engine = AudioEngine(backend=backend, scheduler=scheduler)
    engine.start("Surround 5.1")
    yield engine
    engine.shutdown()

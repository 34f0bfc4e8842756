"""Example: a voice orbiting the listener on a 5.1 layout."""

import math
import sys

from spatialize import AudioEngine, EngineConfig
from spatialize.backends.null_backend import NullBackend
from spatialize.concurrency.scheduler import ManualScheduler
from spatialize.core.models import OutputDevice

CHANNEL_NAMES = ("L", "R", "C", "LFE", "Ls", "Rs")

if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else "orbit.mp3"
    steps = 12
    radius = 150.0

    backend = NullBackend(devices=[OutputDevice("Surround 5.1", 6)])
    scheduler = ManualScheduler()
    config = EngineConfig(default_listen_radius=100.0, log_level="INFO")

    with AudioEngine(config=config, backend=backend, scheduler=scheduler) as engine:
        listener = (400.0, 300.0)
        voice = engine.create_voice(url, listener, (listener[0], listener[1] - radius))
        voice.play()
        print(f"Playing {url} on {engine.channel_count} channels")

        for step in range(steps + 1):
            angle = 2 * math.pi * step / steps - math.pi / 2
            source = (
                listener[0] + radius * math.cos(angle),
                listener[1] + radius * math.sin(angle),
            )
            mix = voice.set_source_coords(source)
            levels = "  ".join(f"{name}={g:.2f}" for name, g in zip(CHANNEL_NAMES, mix.gains))
            print(f"azimuth {mix.azimuth:6.1f}  volume {mix.volume:.2f}  {levels}")

        voice.pause()
        print(f"Pausing: {voice.state.value}")
        scheduler.advance(config.pause_grace_seconds)
        print(f"After grace period: {voice.state.value}")

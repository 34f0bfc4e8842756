"""Exception classes for spatialize."""


class SpatializeError(Exception):
    """Base exception for spatialize errors."""
    pass


class UnsupportedChannelLayout(SpatializeError):
    """Raised when a channel count has no defined speaker layout."""

    def __init__(self, channel_count: int):
        self.channel_count = channel_count
        super().__init__(
            f"No speaker layout defined for {channel_count} channels "
            f"(supported: 2, 6)"
        )


class InvalidGeometry(SpatializeError):
    """Raised for a non-positive listen radius or an unpannable layout."""
    pass


class DeviceNotFound(SpatializeError):
    """Raised when the requested output device does not exist."""

    def __init__(self, device_name: str):
        self.device_name = device_name
        super().__init__(f'Audio Device "{device_name}" not found')


class EngineNotStartedError(SpatializeError):
    """Raised when engine operations are attempted before start()."""
    pass


class VoiceNotFoundError(SpatializeError):
    """Raised when a voice is not registered with the engine."""
    pass


class VoiceClosedError(SpatializeError):
    """Raised when a closed voice is used."""
    pass


class BackendError(SpatializeError):
    """Raised when backend operation fails."""

    def __init__(self, message: str, backend: str = ""):
        self.backend = backend
        self.message = message
        if backend:
            super().__init__(f"Backend error ({backend}): {message}")
        else:
            super().__init__(f"Backend error: {message}")


# Short aliases
EngineNotStarted = EngineNotStartedError
VoiceNotFound = VoiceNotFoundError

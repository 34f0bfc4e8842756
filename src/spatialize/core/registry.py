"""Registry of the voices owned by an engine."""

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from spatialize.api.voice import Voice


@dataclass
class VoiceInfo:
    """Information about a registered voice."""

    voice: "Voice"
    created_at: float


class VoiceRegistry:
    """
    Registry for managing the live voices of an engine.

    Responsibilities:
    - Store and retrieve voices by id
    - Track when each voice was created
    - Hand out a snapshot of voices for shutdown
    """

    def __init__(self):
        """Initialize the registry."""
        self._voices: Dict[str, VoiceInfo] = {}

    def register(self, voice: "Voice") -> None:
        """
        Register a new voice.

        Args:
            voice: Voice instance.
        """
        self._voices[voice.id] = VoiceInfo(voice=voice, created_at=time.monotonic())

    def get(self, voice_id: str) -> Optional[VoiceInfo]:
        """
        Get voice information.

        Args:
            voice_id: Voice identifier.

        Returns:
            VoiceInfo if found, None otherwise.
        """
        return self._voices.get(voice_id)

    def remove(self, voice_id: str) -> None:
        """Remove a voice from the registry."""
        self._voices.pop(voice_id, None)

    def get_all(self) -> List["Voice"]:
        """Snapshot of all registered voices, oldest first."""
        return [info.voice for info in self._voices.values()]

    def clear(self) -> None:
        """Clear all voices from registry."""
        self._voices.clear()

    def count(self) -> int:
        """Number of registered voices."""
        return len(self._voices)

"""Pure transition from voice inputs to the mix sent to the output sink."""

from spatialize.core.geometry import attenuation_from_coords, azimuth_from_coords
from spatialize.core.models import SpeakerLayout, VoiceInputs, VoiceMix
from spatialize.core.panning import gains_from_pan


def update(inputs: VoiceInputs, layout: SpeakerLayout) -> VoiceMix:
    """Recompute azimuth, gains, attenuation and volume from scratch."""
    azimuth = azimuth_from_coords(inputs.listener, inputs.source)
    gains = gains_from_pan(azimuth, layout)
    attenuation = attenuation_from_coords(
        inputs.listener, inputs.source, inputs.listen_radius
    )
    user_volume = 0.0 if inputs.muted else inputs.volume
    return VoiceMix(
        azimuth=azimuth,
        gains=gains,
        attenuation=attenuation,
        volume=user_volume * attenuation,
    )

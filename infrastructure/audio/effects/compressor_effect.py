# infrastructure/audio/effects/compressor_effect.py
# Hard-knee compressor, wrapping wavefx.effects.compressor.

import numpy as np
from application.ports.audio_effect_port import IAudioEffect
from wavefx.effects import compressor
from wavefx.errors import InvalidEffectParameter


class CompressorEffect(IAudioEffect):
    """Unity gain below ``cutoff``, 1/ratio gain above it."""

    def __init__(self, cutoff: float = 0.2, ratio: float = 10.0) -> None:
        if ratio == 0:
            raise InvalidEffectParameter(
                "Compressor ratio must be non-zero.\n"
                "    → Use a ratio above 1.0 to compress, e.g. 4.0."
            )
        self.cutoff: float = cutoff
        self.ratio: float = ratio

    @property
    def effect_id(self) -> str:
        return "compressor"

    @property
    def display_name(self) -> str:
        return "Compressor"

    def transform(self, samples: np.ndarray) -> np.ndarray:
        return compressor(samples, self.cutoff, self.ratio)

    def __repr__(self) -> str:
        return f"CompressorEffect(cutoff={self.cutoff}, ratio={self.ratio})"

# infrastructure/audio/effects/delay_effect.py
# Feed-forward echo, wrapping wavefx.effects.delay.

import numpy as np
from application.ports.audio_effect_port import IAudioEffect
from wavefx.effects import delay
from wavefx.errors import OutOfRange


class DelayEffect(IAudioEffect):
    """
    Single echo ``delay_by`` samples after the dry signal, scaled by ``amount``.

    The delay is counted in samples, so 44100 is one second at 44.1 kHz.
    A channel shorter than the delay raises OutOfRange when transformed.
    """

    def __init__(self, delay_by: int = 44100, amount: float = 0.2) -> None:
        if delay_by < 0:
            raise OutOfRange(f"Delay must be non-negative. Got: {delay_by}.")
        self.delay_by: int = int(delay_by)
        self.amount: float = amount

    @property
    def effect_id(self) -> str:
        return "delay"

    @property
    def display_name(self) -> str:
        return "Delay"

    def transform(self, samples: np.ndarray) -> np.ndarray:
        return delay(samples, self.delay_by, self.amount)

    def __repr__(self) -> str:
        return f"DelayEffect(delay_by={self.delay_by}, amount={self.amount})"

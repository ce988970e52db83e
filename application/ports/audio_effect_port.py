# application/ports/audio_effect_port.py
# Port interface for per-channel effects run through wavefx.wave_model.apply.
# Domain layer — must not import infrastructure or adapter code.

from abc import ABC, abstractmethod
import numpy as np


class IAudioEffect(ABC):
    """
    A configured per-channel sample transform.

    Parameters are fixed when the effect is constructed, so a single instance
    can be handed to ``apply`` and run over both channels of a Wave.
    """

    @property
    @abstractmethod
    def effect_id(self) -> str:
        """Unique identifier for this effect (e.g., 'compressor', 'delay')."""
        ...

    @property
    def display_name(self) -> str:
        """Human-readable name for the effect."""
        return self.effect_id

    @abstractmethod
    def transform(self, samples: np.ndarray) -> np.ndarray:
        """
        Transform one channel of samples.

        Args:
            samples: 1-D float64 array. Read-only; implementations return a
                     new array instead of writing into it.

        Returns:
            Processed channel as a 1-D float64 array.
        """
        ...

    def __call__(self, samples: np.ndarray) -> np.ndarray:
        return self.transform(samples)

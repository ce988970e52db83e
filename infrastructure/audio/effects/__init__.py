# infrastructure/audio/effects/__init__.py
from .compressor_effect import CompressorEffect
from .delay_effect import DelayEffect

# Maps effect_id strings to effect classes. Only registered IDs are
# accepted from the command line.
EFFECT_REGISTRY = {
    "compressor": CompressorEffect,
    "delay":      DelayEffect,
}

__all__ = [
    "CompressorEffect",
    "DelayEffect",
    "EFFECT_REGISTRY",
]

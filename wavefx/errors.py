# wavefx/errors.py
# Typed failures raised by the container codec, the Wave model and effects.
# Every error is recoverable at the call site; nothing here halts the process.


class WaveError(ValueError):
    """Base class for all wavefx failures."""


# ── Container decoding ───────────────────────────────────────────

class DecodeError(WaveError):
    """The byte stream is not a WAV file this decoder can read."""


class UnexpectedMagicNumber(DecodeError):
    """One of the fixed chunk tags (RIFF, WAVE, fmt , data) did not match."""

    def __init__(self, expected: str, found: bytes) -> None:
        self.expected: str = expected
        self.found: bytes = found
        super().__init__(
            f"Unexpected chunk tag: expected '{expected}', found {found!r}.\n"
            f"    → The input is not a canonical PCM WAV file."
        )


class UnsupportedFormat(DecodeError):
    """audio_format is anything other than 1 (linear PCM)."""

    def __init__(self, audio_format: int) -> None:
        self.audio_format: int = audio_format
        super().__init__(
            f"Unsupported audio format: {audio_format} (only 1 = linear PCM).\n"
            f"    → Re-export the file as uncompressed 16-bit PCM."
        )


class UnsupportedBitDepth(DecodeError):
    def __init__(self, bits_per_sample: int) -> None:
        self.bits_per_sample: int = bits_per_sample
        super().__init__(
            f"Unsupported bit depth: {bits_per_sample} bits (only 16 is supported).\n"
            f"    → Re-export the file as 16-bit PCM."
        )


class UnsupportedChannelCount(DecodeError):
    def __init__(self, channel_count: int) -> None:
        self.channel_count: int = channel_count
        super().__init__(
            f"Unsupported channel count: {channel_count} (only mono or stereo).\n"
            f"    → Downmix the file to one or two channels first."
        )


class MalformedFormatChunk(DecodeError):
    """Fields of the fmt chunk contradict each other."""


class TruncatedStream(DecodeError):
    def __init__(self, field: str, expected: int, got: int) -> None:
        self.field: str = field
        self.expected: int = expected
        self.got: int = got
        super().__init__(
            f"Truncated stream while reading {field}: "
            f"needed {expected} bytes, got {got}."
        )


# ── Wave model and effects ───────────────────────────────────────

class LengthMismatch(WaveError):
    """Two sample sequences that must line up have different lengths."""


class SampleRateMismatch(WaveError):
    def __init__(self, first: int, second: int) -> None:
        self.first: int = first
        self.second: int = second
        super().__init__(
            f"Sample rates differ: {first} Hz vs {second} Hz.\n"
            f"    → Resample one of the waves before combining them."
        )


class OutOfRange(WaveError, IndexError):
    """A sample index or offset falls outside the buffer it refers to."""


class InvalidEffectParameter(WaveError):
    """An effect was configured with a value it cannot work with."""

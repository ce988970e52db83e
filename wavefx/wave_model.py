# wavefx/wave_model.py
# In-memory dual-channel sample buffer and the combinators that build new
# buffers from existing ones. Nothing in here mutates a Wave in place.

from typing import Callable, Sequence, Union

import numpy as np

from wavefx.errors import LengthMismatch, OutOfRange, SampleRateMismatch

# Full-scale divisor between int16 PCM and the float sample domain.
# k / 32768 is exact for every int16 k, so PCM survives a round trip.
PCM16_SCALE: float = 32768.0
PCM16_MIN: int = -32768
PCM16_MAX: int = 32767

# Highest rate whose stereo 16-bit byte rate (rate x 4) still fits in a u32
MAX_SAMPLE_RATE: int = 0xFFFFFFFF // 4

SampleArray = Union[np.ndarray, Sequence[float]]
ChannelTransform = Callable[[np.ndarray], SampleArray]


def _frozen_channel(samples: SampleArray) -> np.ndarray:
    channel: np.ndarray = np.array(samples, dtype=np.float64)
    if channel.ndim != 1:
        raise ValueError(
            f"A channel must be a 1-D sequence of samples. Got shape {channel.shape}."
        )
    channel.setflags(write=False)
    return channel


class Wave:
    """
    Two equal-length channels of float samples plus a sample rate.

    Samples live in the float domain where 16-bit full scale maps to
    [-1.0, 1.0). Channel arrays are read-only copies of whatever was passed in.

    Raises:
        LengthMismatch: if ``left`` and ``right`` differ in length.
        ValueError:     if a channel is not 1-D, or ``sample_rate`` is not a whole
                        number in 1..MAX_SAMPLE_RATE.
    """

    __slots__ = ("_left", "_right", "_sample_rate")

    def __init__(self, left: SampleArray, right: SampleArray, sample_rate: int) -> None:
        left_arr: np.ndarray = _frozen_channel(left)
        right_arr: np.ndarray = _frozen_channel(right)
        if len(left_arr) != len(right_arr):
            raise LengthMismatch(
                f"Channel lengths differ: left={len(left_arr)}, right={len(right_arr)}.\n"
                f"    → Both channels of a Wave must hold the same number of samples."
            )
        if int(sample_rate) != sample_rate or not (0 < sample_rate <= MAX_SAMPLE_RATE):
            raise ValueError(
                f"Sample rate must be a whole number between 1 and {MAX_SAMPLE_RATE} Hz. "
                f"Got: {sample_rate}."
            )
        self._left: np.ndarray = left_arr
        self._right: np.ndarray = right_arr
        self._sample_rate: int = int(sample_rate)

    # ── Construction from / conversion to PCM ────────────────────

    @classmethod
    def from_pcm16(cls, left: SampleArray, right: SampleArray, sample_rate: int) -> "Wave":
        """Build a Wave from signed 16-bit integer samples."""
        return cls(
            np.asarray(left, dtype=np.float64) / PCM16_SCALE,
            np.asarray(right, dtype=np.float64) / PCM16_SCALE,
            sample_rate,
        )

    def to_pcm16(self) -> tuple[np.ndarray, np.ndarray]:
        """Return (left, right) as int16 arrays, rounded and hard-clipped."""
        return _to_pcm16(self._left), _to_pcm16(self._right)

    # ── Accessors ────────────────────────────────────────────────

    @property
    def left(self) -> np.ndarray:
        return self._left

    @property
    def right(self) -> np.ndarray:
        return self._right

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def num_frames(self) -> int:
        return len(self._left)

    @property
    def duration_seconds(self) -> float:
        return self.num_frames / self._sample_rate

    def __len__(self) -> int:
        return self.num_frames

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wave):
            return NotImplemented
        return (
            self._sample_rate == other._sample_rate
            and np.array_equal(self._left, other._left)
            and np.array_equal(self._right, other._right)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Wave(frames={self.num_frames}, sample_rate={self._sample_rate}, "
            f"duration={self.duration_seconds:.3f}s)"
        )


def _to_pcm16(channel: np.ndarray) -> np.ndarray:
    scaled: np.ndarray = np.rint(channel * PCM16_SCALE)
    return np.clip(scaled, PCM16_MIN, PCM16_MAX).astype(np.int16)


def _check_sample_rates(a: Wave, b: Wave) -> None:
    if a.sample_rate != b.sample_rate:
        raise SampleRateMismatch(a.sample_rate, b.sample_rate)


# ── Combinators ──────────────────────────────────────────────────

def concatenate(a: Wave, b: Wave) -> Wave:
    """Horizontal join: ``b`` plays after ``a``."""
    _check_sample_rates(a, b)
    return Wave(
        np.concatenate([a.left, b.left]),
        np.concatenate([a.right, b.right]),
        a.sample_rate,
    )


def mix(a: Wave, b: Wave) -> Wave:
    """Vertical sum of two waves of the same length and sample rate."""
    if len(a) != len(b):
        raise LengthMismatch(
            f"Cannot mix waves of different lengths: {len(a)} vs {len(b)} frames.\n"
            f"    → Use mix_with_offset to overlay waves of unequal length."
        )
    _check_sample_rates(a, b)
    return Wave(a.left + b.left, a.right + b.right, a.sample_rate)


def mix_with_offset(a: Wave, b: Wave, offset: int) -> Wave:
    """
    Overlay ``b`` onto ``a`` starting ``offset`` frames in.

    The result holds max(len(a), offset + len(b)) frames. Samples of ``a``
    outside the overlap window are kept as they are; frames past the end of
    ``a`` and before ``offset`` are silence.
    """
    if offset < 0:
        raise OutOfRange(f"Offset must be non-negative. Got: {offset}.")
    _check_sample_rates(a, b)

    length: int = max(len(a), offset + len(b))
    end: int = offset + len(b)

    # Fully sized before any indexed write
    left: np.ndarray = np.zeros(length, dtype=np.float64)
    right: np.ndarray = np.zeros(length, dtype=np.float64)
    left[: len(a)] = a.left
    right[: len(a)] = a.right
    left[offset:end] += b.left
    right[offset:end] += b.right

    return Wave(left, right, a.sample_rate)


def apply(wave: Wave, f: ChannelTransform) -> Wave:
    """
    Run ``f`` over each channel independently, keeping the sample rate.

    ``f`` decides its own output length. If the two channels come back with
    different lengths no Wave can be built and LengthMismatch is raised.
    """
    return Wave(f(wave.left), f(wave.right), wave.sample_rate)

import numpy as np

from wavefx.errors import InvalidEffectParameter, OutOfRange


def compressor(samples: np.ndarray, cutoff: float, ratio: float) -> np.ndarray:
    """
    Hard-knee compressor over a single channel.

    Samples quieter than ``cutoff`` pass through unchanged; the part of a
    sample above ``cutoff`` is scaled by 1/ratio, keeping its polarity.

    Args:
        samples: 1-D float samples (not modified).
        cutoff:  Threshold in the same scale as the samples.
        ratio:   Compression ratio. Values <= 1 expand instead of compress.

    Returns:
        New array, same length as the input.
    """
    if ratio == 0:
        raise InvalidEffectParameter(
            "Compressor ratio must be non-zero.\n"
            "    → Use a ratio above 1.0 to compress, e.g. 4.0."
        )

    source: np.ndarray = np.asarray(samples, dtype=np.float64)
    magnitude: np.ndarray = np.abs(source)
    polarity: np.ndarray = np.where(source > 0, 1.0, -1.0)
    compressed: np.ndarray = polarity * (cutoff + (magnitude - cutoff) / ratio)

    return np.where(magnitude < cutoff, source, compressed)


def delay(samples: np.ndarray, delay_by: int, amount: float) -> np.ndarray:
    """
    Feed-forward echo: out[i] = in[i] + amount * in[i - delay_by].

    The first ``delay_by`` samples have nothing to echo and are copied as-is.
    Only the dry input feeds the echo, so repeats do not recirculate.

    Raises:
        OutOfRange: if ``delay_by`` is negative or longer than the input.
    """
    source: np.ndarray = np.asarray(samples, dtype=np.float64)
    if delay_by < 0 or delay_by > len(source):
        raise OutOfRange(
            f"Delay of {delay_by} samples does not fit a channel of "
            f"{len(source)} samples.\n"
            f"    → Use a delay between 0 and the channel length."
        )

    echoed: np.ndarray = source.copy()
    if delay_by == 0:
        echoed += amount * source
    else:
        echoed[delay_by:] += amount * source[:-delay_by]
    return echoed

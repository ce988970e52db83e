import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from application.ports.audio_effect_port import IAudioEffect
from wavefx.container import decode_wav, write_wav
from wavefx.utils import validate_input_file, validate_output_path
from wavefx.wave_model import Wave, apply

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Summary of one processed file."""
    output_path: str
    num_frames: int
    sample_rate: int
    bytes_written: int
    elapsed: float

    @property
    def duration_seconds(self) -> float:
        return self.num_frames / self.sample_rate


def process_wav_file(
    input_path  : str,
    output_path : str,
    effect_chain: List[IAudioEffect],
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
) -> ProcessResult:
    """
    Full pipeline: decode WAV → apply effects → encode WAV.

    Args:
        input_path:   Source 16-bit PCM WAV file (mono or stereo).
        output_path:  Destination .wav path; always written as stereo.
        effect_chain: IAudioEffect instances, applied in list order.
        progress_callback: Optional callback (step_idx, total_steps, step_name).

    Returns:
        ProcessResult describing the written file.
    """
    # ── Validate inputs ──────────────────────────────────────────
    validate_input_file(input_path)
    validate_output_path(output_path)

    steps: List[str] = (
        ["Decoding WAV file"]
        + [f"Applying {e.display_name}" for e in effect_chain]
        + ["Encoding WAV file"]
    )
    total_steps = len(steps)

    def _report(step_idx: int) -> None:
        if progress_callback:
            progress_callback(step_idx, total_steps, steps[step_idx])

    start_time: float = time.time()

    # [1] Decode
    _report(0)
    with open(input_path, "rb") as f:
        wave: Wave = decode_wav(f)
    logger.info("decoded %s: %r", input_path, wave)

    # [2..n] Effects
    for i, effect in enumerate(effect_chain):
        _report(i + 1)
        logger.debug("applying %r", effect)
        wave = apply(wave, effect)

    # [n+1] Encode. Earlier failures never create the output file.
    _report(total_steps - 1)
    with open(output_path, "wb") as f:
        bytes_written: int = write_wav(wave, f)

    elapsed: float = time.time() - start_time
    logger.info("wrote %s (%d bytes) in %.2fs", output_path, bytes_written, elapsed)

    return ProcessResult(
        output_path=output_path,
        num_frames=wave.num_frames,
        sample_rate=wave.sample_rate,
        bytes_written=bytes_written,
        elapsed=elapsed,
    )

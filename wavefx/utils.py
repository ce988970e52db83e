import os

from wavefx.errors import InvalidEffectParameter

# Supported formats
SUPPORTED_INPUT_FORMATS: set[str] = {".wav"}
SUPPORTED_OUTPUT_FORMATS: set[str] = {".wav"}

# Default parameters, matching the values the first release hard-coded:
# cutoff = i16::MAX / 5 on the float scale, one second of delay at 44.1 kHz
DEFAULT_PARAMS: dict[str, float] = {
    "cutoff": 0.2,
    "ratio": 10.0,
    "delay": 44100,
    "amount": 0.2,
}

# Accepted (min, max) per parameter
PARAM_RANGES: dict[str, tuple[float, float]] = {
    "cutoff": (0.0, 1.0),
    "ratio": (0.01, 100.0),
    "delay": (0, 2**31 - 1),
    "amount": (-1.0, 1.0),
}

DEFAULT_EFFECTS: list[str] = ["delay"]


# Validation helpers
def validate_input_file(path: str) -> None:
    """Raise FileNotFoundError / ValueError if the input path is invalid."""
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Input file not found: '{path}'.\n" f"    → Check the path and try again."
        )
    if not os.path.isfile(path):
        raise ValueError(
            f"Input path is not a file: '{path}'.\n"
            f"    → Provide a path to a WAV file, not a directory."
        )

    ext: str = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_INPUT_FORMATS:
        raise ValueError(
            f"Unsupported input format: '{ext}'.\n"
            f"    Supported: {', '.join(sorted(SUPPORTED_INPUT_FORMATS))}\n"
            f"    → Example: python main.py song.wav song_fx.wav"
        )


def validate_output_path(path: str) -> None:
    """Raise ValueError / FileNotFoundError if the output path is invalid."""
    ext: str = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_OUTPUT_FORMATS:
        raise ValueError(
            f"Unsupported output format: '{ext}'.\n"
            f"    Supported: {', '.join(sorted(SUPPORTED_OUTPUT_FORMATS))}\n"
            f"    → Example: python main.py song.wav song_fx.wav"
        )

    output_dir: str = os.path.dirname(os.path.abspath(path))
    if not os.path.exists(output_dir):
        raise FileNotFoundError(
            f"Output directory does not exist: '{output_dir}'.\n"
            f"    → Create the directory first, or choose an existing path."
        )


def validate_param_range(
    value: float, name: str, min_val: float, max_val: float
) -> None:
    """Raise InvalidEffectParameter if a parameter is out of its valid range."""
    if not (min_val <= value <= max_val):
        raise InvalidEffectParameter(
            f"Parameter '{name}' must be between {min_val} and {max_val}. Got: {value}.\n"
            f"    → Adjust the value to be within the valid range."
        )


def validate_params(params: dict[str, float]) -> None:
    """Check every known parameter in ``params`` against PARAM_RANGES."""
    for name, value in params.items():
        if name in PARAM_RANGES:
            min_val, max_val = PARAM_RANGES[name]
            validate_param_range(value, name, min_val, max_val)


# Path helpers

def get_output_path(input_path: str, suffix: str = "_fx") -> str:
    """
    Auto-generate an output path from an input path.

    Example: song.wav, suffix='_fx'  →  song_fx.wav
    """
    base: str
    base, _ = os.path.splitext(input_path)
    return f"{base}{suffix}.wav"

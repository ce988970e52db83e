#!/usr/bin/env python3
"""
wavefx CLI
Apply compressor and delay effects to 16-bit PCM WAV files.

Usage:
    python main.py input.wav output.wav
    python main.py input.wav output.wav --effect compressor --cutoff 0.3
    python main.py input.wav --auto-output --effect compressor --effect delay
"""

import argparse
import logging
import sys
from typing import List, Optional

from tqdm import tqdm

from application.ports.audio_effect_port import IAudioEffect
from infrastructure.audio.effects import EFFECT_REGISTRY, CompressorEffect, DelayEffect
from wavefx.core import process_wav_file
from wavefx.printer import OutputPrinter
from wavefx.utils import DEFAULT_EFFECTS, DEFAULT_PARAMS, get_output_path, validate_params


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="wavefx",
        description="Apply simple effects to 16-bit PCM WAV files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py song.wav song_fx.wav
  python main.py song.wav song_fx.wav --effect compressor --cutoff 0.25 --ratio 4
  python main.py song.wav --auto-output --effect delay --delay 22050 --amount 0.4

Parameter guide:
  --cutoff  0.1  = heavy squash   | 0.5  = only the loudest peaks
  --ratio   2    = gentle         | 10   = near limiting
  --delay   11025 = slapback      | 44100 = one second at 44.1 kHz
  --amount  0.2  = faint echo     | 0.8  = strong echo
        """,
    )

    # Positional arguments
    parser.add_argument(
        "input",
        metavar="INPUT",
        help="Path to the input WAV file (16-bit PCM, mono or stereo).",
    )
    parser.add_argument(
        "output",
        metavar="OUTPUT",
        nargs="?",
        default=None,
        help="Path for the output WAV file. Omit if using --auto-output.",
    )

    # Effect selection and parameters
    fx_group = parser.add_argument_group("Effect Parameters")
    fx_group.add_argument(
        "--effect",
        "-e",
        action="append",
        choices=sorted(EFFECT_REGISTRY),
        default=None,
        help="Effect to apply; repeat to chain effects in order "
             f"(default: {', '.join(DEFAULT_EFFECTS)}).",
    )
    fx_group.add_argument(
        "--cutoff",
        "-c",
        type=float,
        default=DEFAULT_PARAMS["cutoff"],
        metavar="LEVEL",
        help=f"Compressor threshold, 0.0-1.0 of full scale (default: {DEFAULT_PARAMS['cutoff']}).",
    )
    fx_group.add_argument(
        "--ratio",
        "-r",
        type=float,
        default=DEFAULT_PARAMS["ratio"],
        metavar="RATIO",
        help=f"Compressor ratio (default: {DEFAULT_PARAMS['ratio']}).",
    )
    fx_group.add_argument(
        "--delay",
        "-d",
        type=int,
        default=int(DEFAULT_PARAMS["delay"]),
        metavar="SAMPLES",
        help=f"Echo delay in samples (default: {int(DEFAULT_PARAMS['delay'])}).",
    )
    fx_group.add_argument(
        "--amount",
        "-a",
        type=float,
        default=DEFAULT_PARAMS["amount"],
        metavar="LEVEL",
        help=f"Echo level relative to the dry signal (default: {DEFAULT_PARAMS['amount']}).",
    )

    # Output options
    out_group = parser.add_argument_group("Output Options")
    out_group.add_argument(
        "--auto-output",
        action="store_true",
        help="Auto-generate output filename from input (e.g., song.wav -> song_fx.wav).",
    )
    out_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors.",
    )
    out_group.add_argument(
        "--no-color",
        "-n",
        action="store_true",
        help="Disable colored output (also auto-disabled when NO_COLOR env var is set).",
    )
    out_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log decoder and pipeline details to stderr.",
    )

    return parser


def build_effect_chain(args: argparse.Namespace) -> List[IAudioEffect]:
    """Instantiate the selected effects with their command-line parameters."""
    validate_params({
        "cutoff": args.cutoff,
        "ratio":  args.ratio,
        "delay":  args.delay,
        "amount": args.amount,
    })

    chain: List[IAudioEffect] = []
    for effect_id in args.effect or DEFAULT_EFFECTS:
        effect_cls = EFFECT_REGISTRY[effect_id]
        if effect_cls is CompressorEffect:
            chain.append(CompressorEffect(cutoff=args.cutoff, ratio=args.ratio))
        elif effect_cls is DelayEffect:
            chain.append(DelayEffect(delay_by=args.delay, amount=args.amount))
    return chain


def main(argv: Optional[List[str]] = None) -> None:
    parser: argparse.ArgumentParser = build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    printer: OutputPrinter = OutputPrinter(
        quiet=args.quiet,
        no_color=args.no_color,
    )

    output_path: str
    if args.output is not None:
        output_path = args.output
    elif args.auto_output:
        output_path = get_output_path(args.input)
    else:
        parser.error(
            "Provide an OUTPUT path, or use --auto-output to generate one automatically."
        )
        return  # unreachable but satisfies type checkers

    try:
        effect_chain: List[IAudioEffect] = build_effect_chain(args)
        printer.info(
            f"Processing {args.input} with "
            + (" → ".join(repr(e) for e in effect_chain) or "no effects")
        )

        if args.quiet:
            result = process_wav_file(args.input, output_path, effect_chain)
        else:
            # Decode + effects + encode
            total_steps = len(effect_chain) + 2
            with tqdm(total=total_steps, desc="Processing", unit="step") as pbar:

                def cli_callback(step_idx: int, total: int, name: str) -> None:
                    pbar.set_description(name)
                    if step_idx > 0:
                        pbar.update(1)
                    if step_idx == total - 1:
                        pbar.update(1)  # finish the bar

                result = process_wav_file(
                    args.input,
                    output_path,
                    effect_chain,
                    progress_callback=cli_callback,
                )

        printer.success(
            title=result.output_path,
            details={
                "Effects": ", ".join(e.display_name for e in effect_chain) or "none",
                "Frames": str(result.num_frames),
                "Rate": f"{result.sample_rate} Hz",
                "Duration": f"{result.duration_seconds:.2f}s",
                "Size": f"{result.bytes_written / (1024 * 1024):.2f} MB",
                "Time": f"{result.elapsed:.1f}s",
            },
        )

    except (FileNotFoundError, ValueError) as exc:
        printer.error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        printer.warning("Processing cancelled.", hint="Output file may be incomplete.")
        sys.exit(130)


if __name__ == "__main__":
    main()

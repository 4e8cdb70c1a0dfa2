"""Command-line entry point for the fret placement calculator.

Either computes one fretboard and prints it, or runs the OSC responder.
"""

import argparse
import signal
import sys
import time
from typing import Optional

from . import config
from .fretboard import Fretboard
from .systems import SYSTEM_PARSERS, FretboardRequestError, fretboard_for_request


def print_fretboard(fretboard: Fretboard) -> None:
    """Print a fretboard as an aligned table."""
    print(f"{fretboard.system} (scale length {fretboard.scale_length:g})")
    if fretboard.description:
        print(f"  {fretboard.description}")
    print()
    for number, fret in enumerate(fretboard.frets, start=1):
        line = f"{number:>3}  {fret.label:<22} {fret.position:>10}"
        if fret.interval:
            line += f"  [{fret.interval}]"
        if fret.comment:
            line += f"  {fret.comment}"
        print(line)


def build_params(args: argparse.Namespace) -> dict[str, str]:
    """Map parsed command-line options onto request parameter names."""
    params = {
        "scaleLength": args.scale_length,
        "tuningSystem": args.tuning_system,
        "divisions": args.divisions,
        "octaves": args.octaves,
        "diatonicMode": args.mode,
        "justSymmetry": args.symmetry,
        "limit": args.limit,
    }
    return {k: str(v) for k, v in params.items() if v is not None}


def serve(host: str, port: int, reply_port: int) -> None:
    """Run the OSC responder until interrupted."""
    from .osc_server import FretboardResponder

    responder = FretboardResponder(host=host, port=port, reply_port=reply_port)
    running = True

    def signal_handler(sig, frame):
        nonlocal running
        running = False

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    responder.start()
    print("\n🎸 Fret placement responder is active! Press Ctrl+C to stop.\n")
    try:
        while running:
            time.sleep(0.1)
    finally:
        responder.stop()
        print("\n✓ Fret placement responder has stopped.")


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the fret-placement CLI."""
    parser = argparse.ArgumentParser(
        description="Fret placement calculator for historical and theoretical tuning systems"
    )
    parser.add_argument(
        "--scale-length", "-l",
        help="Vibrating string length, e.g. 540 (any unit)",
    )
    parser.add_argument(
        "--tuning-system", "-t",
        default=config.DEFAULT_TUNING_SYSTEM,
        help=f"One of: {', '.join(SYSTEM_PARSERS)} (default: {config.DEFAULT_TUNING_SYSTEM})",
    )
    parser.add_argument(
        "--divisions",
        help=f"Equal divisions of the octave (default: {config.DEFAULT_EQUAL_DIVISIONS})",
    )
    parser.add_argument(
        "--octaves",
        help=f"Octaves to compute for equal/diatonic systems (default: {config.DEFAULT_OCTAVES})",
    )
    parser.add_argument(
        "--mode",
        help=f"Diatonic mode (default: {config.DEFAULT_DIATONIC_MODE})",
    )
    parser.add_argument(
        "--symmetry",
        help=f"Just intonation symmetry: asymmetric, symmetric1, symmetric2 or none "
             f"(default: {config.DEFAULT_JUST_SYMMETRY})",
    )
    parser.add_argument(
        "--limit",
        help=f"Prime limit for justFromRatios: 5, 7 or 13 (default: {config.DEFAULT_JUST_LIMIT})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the fretboard as JSON",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the OSC responder instead of computing one fretboard",
    )
    parser.add_argument(
        "--host",
        default=config.OSC_HOST,
        help=f"OSC listen address (default: {config.OSC_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.OSC_LISTEN_PORT,
        help=f"OSC listen port (default: {config.OSC_LISTEN_PORT})",
    )
    parser.add_argument(
        "--reply-port",
        type=int,
        default=config.OSC_REPLY_PORT,
        help=f"OSC reply port (default: {config.OSC_REPLY_PORT})",
    )

    args = parser.parse_args(argv)

    if args.serve:
        try:
            serve(args.host, args.port, args.reply_port)
        except ImportError as e:
            print(f"✗ {e}", file=sys.stderr)
            return 1
        return 0

    try:
        fretboard = fretboard_for_request(build_params(args))
    except FretboardRequestError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(fretboard.to_json())
    else:
        print_fretboard(fretboard)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Main CLI entry point for osccodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.dump import dump_file, encode_arguments
from ..exceptions import OscCodecError


def main() -> int:
    """Main entry point for the osccodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="osccodec: Open Sound Control Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  osccodec --dump packet.bin                 Decode and print a raw packet
  osccodec --encode /synth/1/freq 440.0      Print the hex of a message
  osccodec --version                         Show version
        """,
    )

    parser.add_argument(
        "--dump",
        metavar="FILE",
        type=str,
        help="Decode a raw OSC packet file and print its structure",
    )

    parser.add_argument(
        "--encode",
        metavar="ADDRESS",
        type=str,
        help="Encode a message with the given address and trailing arguments",
    )

    parser.add_argument(
        "arguments",
        nargs="*",
        help="Message arguments for --encode (ints, floats, otherwise strings)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"osccodec {__version__}",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --dump
    if args.dump:
        file_path = Path(args.dump)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            dump_file(file_path)
            return 0
        except OscCodecError as e:
            print(f"Error decoding packet: {e}", file=sys.stderr)
            return 1

    # Handle --encode
    if args.encode:
        try:
            print(encode_arguments(args.encode, args.arguments).hex())
            return 0
        except OscCodecError as e:
            print(f"Error encoding message: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

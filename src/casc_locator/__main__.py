"""
Locator codec command line.

Inspect and produce packed block locators and hex keys.

Usage::

    python -m casc_locator pack --file 5 --offset 0x10 --size 100
    python -m casc_locator pack --file 20 --offset 16 --size 100 --stored
    python -m casc_locator unpack 0500000010 --size-hex 00000064
    python -m casc_locator hex 0123456789ABCDEF0123456789ABCDEF --kind content
    python -m casc_locator dump ./data.refs --limit 10

Commands:
    pack     Encode a locator from raw (or --stored) fields
    unpack   Decode a 5-byte reference given as 10 hex characters
    hex      Validate and normalize a hex key
    dump     Decode a file made of consecutive 5-byte references
"""

from __future__ import annotations

import argparse
import logging
import sys
from itertools import islice
from pathlib import Path

from casc_locator.config import CASC_ENV, LOG_LEVEL
from casc_locator.locator import (
    REFERENCE_BYTE_LENGTH,
    SIZE_BYTE_LENGTH,
    BlockLocator,
    iter_references,
)
from casc_locator.types import BaseHexKey, CascError, ContentKey, EncodingKey, IndexKey

logger = logging.getLogger(__name__)

KEY_TYPES: dict[str, type[BaseHexKey]] = {
    "index": IndexKey,
    "content": ContentKey,
    "encoding": EncodingKey,
}
"""Key kinds accepted by the `hex` command."""


class ReferenceHex(BaseHexKey):
    """A packed reference given on the command line."""

    LENGTH = REFERENCE_BYTE_LENGTH


class SizeHex(BaseHexKey):
    """A size field given on the command line."""

    LENGTH = SIZE_BYTE_LENGTH


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


_handler: logging.Handler | None = None


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the tool with optional colors."""
    global _handler

    level = logging.DEBUG if verbose else LOG_LEVEL

    handler = logging.StreamHandler()
    handler.setLevel(level)

    # Plain output in the test environment keeps captured logs readable.
    if no_color or CASC_ENV == "test":
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.setLevel(level)
    root.addHandler(handler)
    _handler = handler


def format_locator(locator: BlockLocator) -> str:
    """Render the stored fields of a locator on one line."""
    return f"file={locator.file} offset={locator.offset} size={locator.size}"


def cmd_pack(args: argparse.Namespace) -> None:
    """Encode a locator and print both serialized fields."""
    locator = BlockLocator.create(args.file, args.offset, args.size, packed=not args.stored)
    print(format_locator(locator))
    print(f"reference={locator.offset_bytes().hex()}")
    print(f"size={locator.size_bytes().hex()}")


def cmd_unpack(args: argparse.Namespace) -> None:
    """Decode a packed reference (and optional size field)."""
    reference = ReferenceHex.from_string(args.reference)
    size = SizeHex.zero() if args.size_hex is None else SizeHex.from_string(args.size_hex)
    print(format_locator(BlockLocator.decode(reference.data, size.data)))


def cmd_hex(args: argparse.Namespace) -> None:
    """Normalize a hex key of the requested kind."""
    key = KEY_TYPES[args.kind].from_string(args.value)
    print(key.string)


def cmd_dump(args: argparse.Namespace) -> None:
    """Decode every reference stored in a file."""
    data = args.path.read_bytes()
    logger.info("Dumping %s (%d bytes)", args.path, len(data))

    references = iter_references(data)
    if args.limit is not None:
        references = islice(references, args.limit)

    for index, reference in enumerate(references):
        locator = BlockLocator.from_reference(reference, 0)
        raw = reference.encode_bytes().hex()
        print(f"{index}: {raw} file={locator.file} offset={locator.offset}")


def _int(value: str) -> int:
    """Parse an integer argument in any Python literal base (0x.., 0b.., decimal)."""
    return int(value, 0)


def _count(value: str) -> int:
    """Parse a non-negative record count."""
    count = int(value)
    if count < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {count}")
    return count


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="casc-locator",
        description="Packed block locator codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    pack = commands.add_parser("pack", help="Encode a locator")
    pack.add_argument("--file", required=True, type=_int, help="File byte (or stored index)")
    pack.add_argument("--offset", required=True, type=_int, help="Offset word (or stored offset)")
    pack.add_argument("--size", required=True, type=_int, help="Block size in bytes")
    pack.add_argument(
        "--stored",
        action="store_true",
        help="Treat --file/--offset as already relocated 10/30-bit values",
    )
    pack.set_defaults(handler=cmd_pack)

    unpack = commands.add_parser("unpack", help="Decode a 5-byte reference")
    unpack.add_argument("reference", help="Reference as 10 hex characters")
    unpack.add_argument("--size-hex", default=None, help="Size field as 8 hex characters")
    unpack.set_defaults(handler=cmd_unpack)

    hex_cmd = commands.add_parser("hex", help="Normalize a hex key")
    hex_cmd.add_argument("value", help="Key as hex characters (any case)")
    hex_cmd.add_argument(
        "--kind",
        choices=sorted(KEY_TYPES),
        default="content",
        help="Key kind, which fixes the expected length (default: content)",
    )
    hex_cmd.set_defaults(handler=cmd_hex)

    dump = commands.add_parser("dump", help="Decode a file of packed references")
    dump.add_argument("path", type=Path, help="File made of consecutive 5-byte references")
    dump.add_argument("--limit", type=_count, default=None, help="Stop after this many records")
    dump.set_defaults(handler=cmd_dump)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        args.handler(args)
    except (CascError, OSError) as e:
        logger.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

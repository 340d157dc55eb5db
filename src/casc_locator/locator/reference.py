"""
The packed 5-byte reference record.

Index regions store one of these per entry, back to back with no padding.
Readers walk such a region as an array of records and turn each one into a
`BlockLocator` instead of picking at the bits themselves.
"""

from __future__ import annotations

import logging
import struct
from typing import IO, Final, Iterator

from casc_locator.types import CascDecodeError, CascStreamError, Record, Uint8, Uint32

from .constants import REFERENCE_BYTE_LENGTH

logger = logging.getLogger(__name__)

REFERENCE_STRUCT: Final = struct.Struct(">BI")
"""The same layout as a `struct` format: big-endian, unpadded, 5 bytes."""


class PackedReference(Record):
    """
    Raw on-disk form of a locator's (file, offset) pair.

    `high` is the file byte and `low` the big-endian offset word whose two top
    bits still hold the high bits of the file index.
    """

    high: Uint8
    """File byte, as stored on disk."""

    low: Uint32
    """Offset word, as stored on disk."""

    def __bytes__(self) -> bytes:
        """Return the 5-byte on-disk encoding."""
        return self.encode_bytes()


def iter_references(buffer: bytes | bytearray | memoryview) -> Iterator[PackedReference]:
    """
    Iterate over an index region holding consecutive packed references.

    Args:
        buffer: Raw region contents. Must hold a whole number of records.

    Yields:
        One `PackedReference` per 5-byte record, in order.

    Raises:
        CascDecodeError: If the region ends with a partial record.
    """
    view = memoryview(buffer)
    remainder = len(view) % REFERENCE_BYTE_LENGTH
    if remainder:
        raise CascDecodeError(
            PackedReference.__name__,
            f"region of {len(view)} bytes leaves a partial record of {remainder} bytes",
            offset=len(view) - remainder,
        )

    logger.debug("Reading %d packed references", len(view) // REFERENCE_BYTE_LENGTH)
    for high, low in REFERENCE_STRUCT.iter_unpack(view):
        yield PackedReference(high=Uint8(high), low=Uint32(low))


def read_references(stream: IO[bytes], count: int) -> list[PackedReference]:
    """
    Read `count` consecutive references from a binary stream.

    Raises:
        CascStreamError: If the stream ends before `count` records were read.
    """
    expected = count * REFERENCE_BYTE_LENGTH
    data = stream.read(expected)
    if len(data) != expected:
        raise CascStreamError(
            PackedReference.__name__, expected_bytes=expected, actual_bytes=len(data)
        )
    return list(iter_references(data))

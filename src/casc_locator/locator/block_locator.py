"""
Block locator: where a stored block lives and how large it is.

Index entries describe a block with three numbers: the data file holding it,
the byte offset inside that file and the number of bytes. On disk the first
two share a 5-byte reference and the size is a separate 4-byte field, both
big-endian.

The reference is not a plain (uint8, uint32) pair. Offsets never need more
than 30 bits, so the top two bits of the offset word are used to extend the
file index from 8 to 10 bits::

    stored_file   = (raw_file << 2) | (raw_offset >> 30)
    stored_offset = raw_offset & 0x3FFFFFFF

A `BlockLocator` always holds the stored values. Serializing the reference
applies the inverse, so the 5 bytes written are exactly the 5 bytes read.
"""

from __future__ import annotations

import logging

from typing_extensions import Self

from casc_locator.types import StrictBaseModel, Uint8, Uint10, Uint30, Uint32

from .constants import DONATED_BITS, DONATED_MASK, OFFSET_BITS, OFFSET_MASK
from .reference import PackedReference

logger = logging.getLogger(__name__)


class BlockLocator(StrictBaseModel):
    """
    Immutable (file, offset, size) triple for one stored block.

    Constructing the model directly takes the stored values and validates
    them against their widths. Use `from_raw` for values read from disk.

    Raises:
        InvalidRangeError: If any field does not fit its width.
    """

    file: Uint10
    """Index of the data file holding the block (0-1023)."""

    offset: Uint30
    """Byte offset of the block inside its data file."""

    size: Uint32
    """Number of bytes in the block."""

    @classmethod
    def create(cls, file: int, offset: int, size: int, packed: bool = True) -> Self:
        """
        Build a locator from raw or already relocated fields.

        Args:
            file: File index. One raw byte when `packed`, else a stored 10-bit index.
            offset: Offset. A raw 32-bit word when `packed`, else a stored 30-bit offset.
            size: Block size in bytes (32 bits).
            packed: Whether to move the top offset bits into the file index.

        Raises:
            InvalidRangeError: If any value exceeds its width.
        """
        if packed:
            return cls.from_raw(file, offset, size)
        return cls(file=Uint10(file), offset=Uint30(offset), size=Uint32(size))

    @classmethod
    def from_raw(cls, file: int, offset: int, size: int) -> Self:
        """
        Build a locator from the on-disk file byte and offset word.

        Bits 30 and 31 of `offset` become bits 0 and 1 of the stored file
        index and are cleared from the stored offset.
        """
        raw_file = int(Uint8(file))
        raw_offset = int(Uint32(offset))

        return cls(
            file=Uint10((raw_file << DONATED_BITS) | (raw_offset >> OFFSET_BITS)),
            offset=Uint30(raw_offset & OFFSET_MASK),
            size=Uint32(size),
        )

    @classmethod
    def from_reference(cls, reference: PackedReference, size: int) -> Self:
        """Build a locator from a packed reference and its separate size field."""
        return cls.from_raw(reference.high, reference.low, size)

    @classmethod
    def decode(cls, offset_bytes: bytes, size_bytes: bytes) -> Self:
        """
        Parse the 5-byte packed reference and the 4-byte size field.

        Raises:
            CascDecodeError: If either field has the wrong number of bytes.
        """
        reference = PackedReference.decode_bytes(offset_bytes)
        size = Uint32.decode_bytes(size_bytes)
        locator = cls.from_reference(reference, size)
        logger.debug(
            "Decoded %s as file=%d offset=%d size=%d",
            offset_bytes.hex(),
            locator.file,
            locator.offset,
            locator.size,
        )
        return locator

    def to_reference(self) -> PackedReference:
        """Undo the bit relocation and return the on-disk reference."""
        file = int(self.file)
        low = int(self.offset) | ((file & DONATED_MASK) << OFFSET_BITS)
        return PackedReference(high=Uint8(file >> DONATED_BITS), low=Uint32(low))

    def offset_bytes(self) -> bytes:
        """
        Serialize the (file, offset) pair.

        Returns:
            5 bytes: the file byte followed by the big-endian offset word.
        """
        return self.to_reference().encode_bytes()

    def size_bytes(self) -> bytes:
        """
        Serialize the block size.

        Returns:
            4 bytes: the big-endian size.
        """
        return self.size.encode_bytes()

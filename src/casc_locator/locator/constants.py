"""
Constants for the packed block locator layout.

On disk a locator's (file, offset) pair occupies 5 bytes::

    byte 0      bytes 1..4 (big-endian)
    +--------+  +--------------------------------+
    |  high  |  | b31 b30 | 30-bit block offset  |
    +--------+  +--------------------------------+

In memory the two top bits of the 32-bit word belong to the file index. They
are moved below the 8 bits of `high`, giving a 10-bit file index and a 30-bit
offset.
"""

from __future__ import annotations

from typing import Final

# ===========================================================================
# Field Widths
# ===========================================================================

DONATED_BITS: Final = 2
"""Number of high offset bits that belong to the file index."""

RAW_FILE_BITS: Final = 8
"""Width of the on-disk file byte."""

RAW_OFFSET_BITS: Final = 32
"""Width of the on-disk offset word."""

FILE_BITS: Final = RAW_FILE_BITS + DONATED_BITS
"""Width of the stored file index (10 bits, files 0-1023)."""

OFFSET_BITS: Final = RAW_OFFSET_BITS - DONATED_BITS
"""Width of the stored offset (30 bits)."""

SIZE_BITS: Final = 32
"""Width of the block size. Serialized as a full 32-bit word."""

# ===========================================================================
# Masks
# ===========================================================================

OFFSET_MASK: Final = (1 << OFFSET_BITS) - 1
"""Selects the 30 offset bits of the raw offset word (0x3FFFFFFF)."""

DONATED_MASK: Final = (1 << DONATED_BITS) - 1
"""Selects the donated bits at the bottom of the stored file index (0b11)."""

# ===========================================================================
# Serialized Sizes
# ===========================================================================

REFERENCE_BYTE_LENGTH: Final = 5
"""Bytes in the packed (file, offset) reference: 1 file byte + 4 offset bytes."""

SIZE_BYTE_LENGTH: Final = 4
"""Bytes in the separately stored size field."""

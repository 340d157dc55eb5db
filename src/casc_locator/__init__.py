"""
Packed block locator codec for content addressable storage containers.

Usage::

    from casc_locator import BlockLocator, ContentKey

    locator = BlockLocator.decode(reference_bytes, size_bytes)
    key = ContentKey.from_string("0123456789abcdef0123456789abcdef")
"""

from .locator import BlockLocator, PackedReference, iter_references, read_references
from .types import (
    CascError,
    ContentKey,
    EncodingKey,
    IndexKey,
    InvalidEncodingError,
    InvalidRangeError,
)

__all__ = [
    "BlockLocator",
    "PackedReference",
    "iter_references",
    "read_references",
    "ContentKey",
    "EncodingKey",
    "IndexKey",
    # Exceptions
    "CascError",
    "InvalidRangeError",
    "InvalidEncodingError",
]

"""Packed block locators and their on-disk reference records."""

from .block_locator import BlockLocator
from .constants import (
    FILE_BITS,
    OFFSET_BITS,
    REFERENCE_BYTE_LENGTH,
    SIZE_BITS,
    SIZE_BYTE_LENGTH,
)
from .reference import REFERENCE_STRUCT, PackedReference, iter_references, read_references

__all__ = [
    "BlockLocator",
    "PackedReference",
    "REFERENCE_STRUCT",
    "iter_references",
    "read_references",
    # Layout
    "FILE_BITS",
    "OFFSET_BITS",
    "SIZE_BITS",
    "REFERENCE_BYTE_LENGTH",
    "SIZE_BYTE_LENGTH",
]

"""Reusable type definitions for the locator codec."""

from .base import StrictBaseModel
from .codec_base import FixedSizeType
from .exceptions import (
    CascDecodeError,
    CascError,
    CascSerializationError,
    CascStreamError,
    CascValueError,
    InvalidEncodingError,
    InvalidRangeError,
)
from .hex_key import BaseHexKey, ContentKey, EncodingKey, IndexKey
from .record import Record
from .uint import BaseUint, Uint8, Uint10, Uint30, Uint32

__all__ = [
    # Core types
    "BaseUint",
    "Uint8",
    "Uint10",
    "Uint30",
    "Uint32",
    "BaseHexKey",
    "IndexKey",
    "ContentKey",
    "EncodingKey",
    "Record",
    "FixedSizeType",
    "StrictBaseModel",
    # Exceptions
    "CascError",
    "CascValueError",
    "InvalidRangeError",
    "InvalidEncodingError",
    "CascSerializationError",
    "CascDecodeError",
    "CascStreamError",
]

"""
Fixed-length byte keys with a hexadecimal text form.

Content addressed storage looks blocks up by hash. Those hashes travel as raw
bytes inside index files and as lowercase hex in logs, configs and command
lines. A `BaseHexKey` subclass holds both forms of one key:

- `data`:   the raw `LENGTH` bytes.
- `string`: `2 * LENGTH` lowercase hex characters, high nibble first.

Both are computed when the key is created, whichever form was supplied.
"""

from __future__ import annotations

import string
from typing import IO, Any, ClassVar, Sequence, SupportsIndex

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

from .codec_base import FixedSizeType
from .exceptions import InvalidEncodingError

_HEX_DIGITS = frozenset(string.hexdigits)


class BaseHexKey(bytes, FixedSizeType):
    """
    A base class for fixed-length keys that inherits from `bytes`.

    Subclasses set:
      - `LENGTH`: exact number of bytes the key must contain.

    Accepted inputs:
      - `str`: exactly `2 * LENGTH` hex digits in any letter case. No `0x`
        prefix, separators or whitespace.
      - `bytes` / `bytearray` / `memoryview` of exactly `LENGTH` bytes.
      - Sequences (lists, tuples) of integers in [0, 255]. Unordered
        iterables such as sets are rejected.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    _string: str

    def __new__(cls, value: Any) -> Self:
        """
        Create and validate a new key.

        Raises:
            InvalidEncodingError: On malformed hex text or a wrong length.
            TypeError: If `value` is of an unsupported type.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        if isinstance(value, str):
            raw = cls._decode_hex(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
        elif isinstance(value, Sequence):
            try:
                raw = bytes(bytearray(value))
            except ValueError as e:
                raise InvalidEncodingError(cls.__name__, str(e)) from e
        else:
            raise TypeError(f"Cannot build {cls.__name__} from {type(value).__name__}")

        if len(raw) != cls.LENGTH:
            raise InvalidEncodingError(
                cls.__name__, f"expected exactly {cls.LENGTH} bytes, got {len(raw)}"
            )

        instance = super().__new__(cls, raw)
        instance._string = raw.hex()
        return instance

    @classmethod
    def _decode_hex(cls, text: str) -> bytes:
        """Decode `2 * LENGTH` hex digits, rejecting anything else."""
        expected = 2 * cls.LENGTH
        if len(text) != expected:
            raise InvalidEncodingError(
                cls.__name__, f"expected {expected} hex characters, got {len(text)}"
            )
        for position, char in enumerate(text):
            if char not in _HEX_DIGITS:
                raise InvalidEncodingError(
                    cls.__name__, f"non-hex character {char!r} at position {position}"
                )
        return bytes.fromhex(text)

    @classmethod
    def from_string(cls, text: str) -> Self:
        """Parse a key from its hex representation."""
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        return cls(text)

    @classmethod
    def zero(cls) -> Self:
        """Create a key filled with zero bytes."""
        return cls(b"\x00" * cls.LENGTH)

    @property
    def data(self) -> bytes:
        """The raw key bytes."""
        return bytes(self)

    @property
    def string(self) -> str:
        """The lowercase hex representation."""
        return self._string

    @classmethod
    def get_byte_length(cls) -> int:
        """Get the byte length of this fixed-size key."""
        return cls.LENGTH

    def serialize(self, stream: IO[bytes]) -> int:
        """
        Write the raw bytes to `stream`.

        Returns:
            Number of bytes written (always `LENGTH`).
        """
        stream.write(self)
        return len(self)

    @classmethod
    def deserialize(cls, stream: IO[bytes], scope: int) -> Self:
        """Read exactly `LENGTH` bytes from `stream` and build a key."""
        return cls(cls._read_exact(stream, scope))

    def encode_bytes(self) -> bytes:
        """Return the raw key bytes."""
        return bytes(self)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        Instances pass through, raw bytes and hex strings go through the
        constructor, and keys serialize back to their hex string.
        """

        def validate(value: Any) -> BaseHexKey:
            if isinstance(value, cls):
                return value
            try:
                return cls(value)
            except TypeError as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(min_length=2 * cls.LENGTH, max_length=2 * cls.LENGTH),
                    core_schema.no_info_plain_validator_function(validate),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.string),
        )

    def __repr__(self) -> str:
        """Return a string representation of the key."""
        return f"{type(self).__name__}({self._string})"

    def __str__(self) -> str:
        """Return the lowercase hex representation."""
        return self._string

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return self._string if sep is None else bytes(self).hex(sep, bytes_per_sep)


class IndexKey(BaseHexKey):
    """The 9-byte key prefix stored in front of every index file entry."""

    LENGTH = 9


class ContentKey(BaseHexKey):
    """MD5 of a file's decoded content (16 bytes)."""

    LENGTH = 16


class EncodingKey(BaseHexKey):
    """MD5 of a file's encoded (on-disk) representation (16 bytes)."""

    LENGTH = 16

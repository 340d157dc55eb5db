"""
Fixed-layout records: ordered fixed-size fields with no padding.

A record is the Python view of a packed on-disk struct. Its serialized form is
the concatenation of its fields' encodings in declaration order, so the byte
length is always the sum of the field widths.
"""

from __future__ import annotations

from typing import IO, Type, cast

from typing_extensions import Self

from .base import StrictBaseModel
from .codec_base import FixedSizeType


class Record(StrictBaseModel, FixedSizeType):
    """
    A strict, ordered collection of fixed-size named fields.

    Example:
        >>> class Header(Record):
        ...     version: Uint8
        ...     count: Uint32

    Serialization format:
        [field_1][field_2]...   (no padding, no offsets)
    """

    @classmethod
    def _field_types(cls) -> list[tuple[str, Type[FixedSizeType]]]:
        """Field names with their codec types, in declaration order."""
        return [
            (name, cast(Type[FixedSizeType], field.annotation))
            for name, field in cls.model_fields.items()
        ]

    @classmethod
    def get_byte_length(cls) -> int:
        """Total byte length of all fields summed together."""
        return sum(field_type.get_byte_length() for _, field_type in cls._field_types())

    def serialize(self, stream: IO[bytes]) -> int:
        """
        Write every field in definition order.

        Returns:
            Number of bytes written to the stream.
        """
        written = 0
        for name, _ in self._field_types():
            written += cast(FixedSizeType, getattr(self, name)).serialize(stream)
        return written

    @classmethod
    def deserialize(cls, stream: IO[bytes], scope: int) -> Self:
        """
        Read every field in definition order.

        Raises:
            CascDecodeError: If `scope` differs from the record width.
            CascStreamError: If the stream ends unexpectedly.
        """
        data = cls._read_exact(stream, scope)

        fields = {}
        position = 0
        for name, field_type in cls._field_types():
            size = field_type.get_byte_length()
            fields[name] = field_type.decode_bytes(data[position : position + size])
            position += size

        return cls(**fields)

"""Base interface shared by all fixed-size codec types."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import IO

from typing_extensions import Self

from .exceptions import CascDecodeError, CascStreamError


class FixedSizeType(ABC):
    """
    Abstract base class for every value with a fixed on-disk width.

    Subclasses only describe their width and how to move between a stream and
    an instance. Byte-level helpers are derived from those.
    """

    @classmethod
    @abstractmethod
    def get_byte_length(cls) -> int:
        """
        Get the number of bytes a serialized value occupies.

        Returns:
            int: The number of bytes.
        """
        ...

    @abstractmethod
    def serialize(self, stream: IO[bytes]) -> int:
        """
        Serializes the value and writes it to a binary stream.

        Args:
            stream (IO[bytes]): The stream to write the serialized data to.

        Returns:
            int: The number of bytes written.
        """
        ...

    @classmethod
    @abstractmethod
    def deserialize(cls, stream: IO[bytes], scope: int) -> Self:
        """
        Deserializes a value from a binary stream within a given scope.

        Args:
            stream (IO[bytes]): The stream to read from.
            scope (int): The number of bytes available to read for this value.

        Returns:
            Self: An instance of the class.
        """
        ...

    @classmethod
    def _read_exact(cls, stream: IO[bytes], scope: int) -> bytes:
        """Read exactly `get_byte_length()` bytes, validating `scope` first."""
        length = cls.get_byte_length()
        if scope != length:
            raise CascDecodeError(cls.__name__, f"expected scope {length}, got {scope}")
        data = stream.read(length)
        if len(data) != length:
            raise CascStreamError(cls.__name__, expected_bytes=length, actual_bytes=len(data))
        return data

    def encode_bytes(self) -> bytes:
        """
        Serializes the value to a byte string.

        Returns:
            bytes: The serialized byte string.
        """
        with io.BytesIO() as stream:
            self.serialize(stream)
            return stream.getvalue()

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """
        Deserializes a byte string of exactly `get_byte_length()` bytes.

        Raises:
            CascDecodeError: If `data` has the wrong length.
        """
        length = cls.get_byte_length()
        if len(data) != length:
            raise CascDecodeError(cls.__name__, f"expected {length} bytes, got {len(data)}")
        with io.BytesIO(data) as stream:
            return cls.deserialize(stream, len(data))

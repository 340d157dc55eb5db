"""Fixed-width unsigned integer types with big-endian encoding."""

from __future__ import annotations

from typing import IO, Any, ClassVar, Literal, SupportsIndex

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self

from .codec_base import FixedSizeType
from .exceptions import InvalidRangeError


class BaseUint(int, FixedSizeType):
    """
    A base class for custom unsigned integer types that inherits from `int`.

    Every on-disk integer in the locator format is big-endian, so that is the
    default byte order for all conversions.
    """

    BITS: ClassVar[int]
    """The number of significant bits (overridden by subclasses)."""

    def __new__(cls, value: Any) -> Self:
        """
        Create and validate a new Uint instance.

        Raises:
            TypeError: If `value` is not an integer (booleans are rejected too).
            InvalidRangeError: If `value` is outside [0, 2**BITS - 1].
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        int_value = int(value)
        if not (0 <= int_value < (2**cls.BITS)):
            raise InvalidRangeError(int_value, cls.__name__, max_value=2**cls.BITS - 1)
        return super().__new__(cls, int_value)

    @classmethod
    def max_value(cls) -> Self:
        """Return the largest value representable in `BITS` bits."""
        return cls(2**cls.BITS - 1)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> BaseUint:
            """
            Pydantic validation function that calls the class constructor.

            Range violations are not converted, so they surface as
            `InvalidRangeError` instead of a `ValidationError`.
            """
            if isinstance(value, cls):
                return value
            try:
                return cls(value)
            except TypeError as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.int_schema(ge=0, lt=2**cls.BITS),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """Hook into Pydantic's JSON Schema generation system."""
        json_schema = handler(core_schema)
        json_schema.update(format=f"uint{cls.BITS}")
        return json_schema

    @classmethod
    def get_byte_length(cls) -> int:
        """Smallest whole number of bytes that holds `BITS` bits."""
        return (cls.BITS + 7) // 8

    def to_bytes(
        self,
        length: SupportsIndex | None = None,
        byteorder: Literal["little", "big"] = "big",
        *,
        signed: bool = False,
    ) -> bytes:
        """
        Return an array of bytes representing the integer.

        Defaults to big-endian and a fixed length based on `BITS`.
        """
        actual_length = self.get_byte_length() if length is None else int(length)
        return super().to_bytes(length=actual_length, byteorder=byteorder, signed=signed)

    def serialize(self, stream: IO[bytes]) -> int:
        """Write the big-endian encoding to `stream` and return the bytes written."""
        data = self.to_bytes()
        stream.write(data)
        return len(data)

    @classmethod
    def deserialize(cls, stream: IO[bytes], scope: int) -> Self:
        """
        Read a big-endian value of exactly `get_byte_length()` bytes.

        Raises:
            CascDecodeError: If `scope` does not match the type width.
            CascStreamError: If the stream ends prematurely.
            InvalidRangeError: If the decoded value exceeds `BITS` bits.
        """
        data = cls._read_exact(stream, scope)
        return cls(int.from_bytes(data, "big"))

    def __repr__(self) -> str:
        """Return the official string representation of the object."""
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        """Return the informal, user-friendly string representation."""
        return str(int(self))


class Uint8(BaseUint):
    """A type representing an 8-bit unsigned integer (uint8)."""

    BITS = 8


class Uint10(BaseUint):
    """A type representing a 10-bit unsigned integer, stored in 2 bytes."""

    BITS = 10


class Uint30(BaseUint):
    """A type representing a 30-bit unsigned integer, stored in 4 bytes."""

    BITS = 30


class Uint32(BaseUint):
    """A type representing a 32-bit unsigned integer (uint32)."""

    BITS = 32

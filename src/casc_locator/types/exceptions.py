"""Exception hierarchy for the locator codec."""

from __future__ import annotations


class CascError(Exception):
    """
    Base exception for all codec errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class CascValueError(CascError):
    """
    Base class for value-related errors.

    Raised when a value is invalid for a codec operation, even if the type is correct.
    """


class InvalidRangeError(CascValueError, OverflowError):
    """
    Raised when a numeric value does not fit its declared bit width.

    Values are rejected instead of being truncated to the field width.

    Attributes:
        value: The value that caused the overflow.
        type_name: The type or field that couldn't hold the value.
        min_value: The minimum allowed value (inclusive).
        max_value: The maximum allowed value (inclusive).
    """

    def __init__(
        self,
        value: int,
        type_name: str,
        *,
        min_value: int = 0,
        max_value: int,
    ) -> None:
        self.value = value
        self.type_name = type_name
        self.min_value = min_value
        self.max_value = max_value

        super().__init__(
            f"{value} is out of range for {type_name} (valid range: [{min_value}, {max_value}])"
        )


class InvalidEncodingError(CascValueError, ValueError):
    """
    Raised when textual or raw input cannot be decoded into a fixed-length key.

    Attributes:
        type_name: The key type being constructed.
        detail: Description of what went wrong.
    """

    def __init__(self, type_name: str, detail: str) -> None:
        self.type_name = type_name
        self.detail = detail

        super().__init__(f"Invalid encoding for {type_name}: {detail}")


class CascSerializationError(CascError):
    """Base class for serialization-related errors."""


class CascDecodeError(CascSerializationError):
    """
    Raised when decoding bytes to a value fails.

    Attributes:
        type_name: The type being decoded.
        detail: Description of what went wrong.
        offset: The byte offset where the error occurred (if known).
    """

    def __init__(
        self,
        type_name: str,
        detail: str,
        *,
        offset: int | None = None,
    ) -> None:
        self.type_name = type_name
        self.detail = detail
        self.offset = offset

        msg = f"Failed to decode {type_name}: {detail}"
        if offset is not None:
            msg = f"{msg} (at byte offset {offset})"

        super().__init__(msg)


class CascStreamError(CascSerializationError):
    """
    Raised when a stream ends before a fixed-size value could be read.

    Attributes:
        type_name: The type being processed when the error occurred.
        expected_bytes: Number of bytes expected.
        actual_bytes: Number of bytes received.
    """

    def __init__(self, type_name: str, *, expected_bytes: int, actual_bytes: int) -> None:
        self.type_name = type_name
        self.expected_bytes = expected_bytes
        self.actual_bytes = actual_bytes

        super().__init__(
            f"Stream ended prematurely while reading {type_name}: "
            f"expected {expected_bytes} bytes, got {actual_bytes}"
        )

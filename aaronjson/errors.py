"""Exception types raised while building, reading, parsing and converting JSON values."""

from __future__ import annotations


class JsonError(Exception):
    """Base class for every error raised by this package."""

    default_message = "json error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)


class InvalidJsonFormatError(JsonError, ValueError):
    """The input is not well-formed JSON."""

    default_message = "invalid JSON format"


class JsonParseError(InvalidJsonFormatError):
    """Parsing failed; ``position`` is the byte offset where it failed, if known."""

    def __init__(self, message: str | None = None, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class EmptyDataError(JsonParseError):
    """The input holds nothing but whitespace."""

    default_message = "empty data"


class IncorrectOperationError(JsonError, TypeError):
    """The operation is not supported by this kind of JSON value."""

    default_message = "incorrect operation"


class KeyNotFoundError(JsonError, LookupError):
    """An object has no member with the requested key."""

    default_message = "key not found"


class IndexOutOfBoundsError(JsonError, IndexError):
    """An array index lies outside the array."""

    default_message = "index out of bounds"


class NilValueAppendError(JsonError, ValueError):
    """``None`` was given where a JSON value was required for appending."""

    default_message = "cannot append nil value to array"


class NilValueRemoveError(JsonError, ValueError):
    """``None`` was given where a JSON value was required for removal."""

    default_message = "cannot remove nil value from array"


class MarshalError(JsonError, TypeError):
    """A Python value cannot be turned into a JSON value."""

    default_message = "unsupported type"


class UnmarshalError(JsonError, TypeError):
    """A JSON value cannot be converted to the requested target."""

    default_message = "cannot unmarshal"


class UnmarshalTargetTypeMismatchError(UnmarshalError):
    """The requested target type does not fit the kind of JSON value."""

    default_message = "unmarshal target type mismatch"
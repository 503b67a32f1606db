"""Scalar JSON values and the base class shared by every JSON value."""

from __future__ import annotations

import math
import types
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin

from .errors import IncorrectOperationError, UnmarshalError, UnmarshalTargetTypeMismatchError

if TYPE_CHECKING:
    from .containers import JsonArray, JsonObject

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if ord(char) < 32:
        return f"\\u{ord(char):04x}"
    return char


def escape_string(text: str) -> str:
    """Escape quotes, backslashes and control characters for a JSON string literal."""
    return "".join(_escape_char(char) for char in text)


def _special(number: float) -> str | None:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    return None


def _format_fixed(number: float) -> str:
    """Six-decimal fixed notation."""
    return _special(number) or f"{number:f}"


def _format_general(number: float) -> str:
    """Shortest round-trip digits, in exponent form when the exponent is below -4 or at least 6."""
    special = _special(number)
    if special:
        return special
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    sign = "-" if number < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(number))).as_tuple()
    raw = "".join(str(d) for d in digit_tuple)
    point = len(raw) + exponent
    digits = raw.rstrip("0")
    exp10 = point - 1
    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp10):02d}"
    if point <= 0:
        body = "0." + "0" * -point + digits
    elif point >= len(digits):
        body = digits + "0" * (point - len(digits))
    else:
        body = f"{digits[:point]}.{digits[point:]}"
    return sign + body


def _type_name(target: Any) -> str:
    return target.__name__ if isinstance(target, type) else repr(target)


def _check_target(target: Any) -> None:
    if target is None:
        raise UnmarshalError("cannot unmarshal into nil interface")
    if not (isinstance(target, type) or target is Any or get_origin(target) is not None):
        raise UnmarshalError("unmarshal target must be a type")


def _is_any(target: Any) -> bool:
    return target is Any or target is object


def _accepts_none(target: Any) -> bool:
    if _is_any(target) or target is type(None):
        return True
    origin = get_origin(target)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(target)
    return (origin or target) in (list, dict)


def _mismatch(kind: str, target: Any) -> UnmarshalTargetTypeMismatchError:
    return UnmarshalTargetTypeMismatchError(f"cannot unmarshal {kind} into {_type_name(target)}")


def _truncate(number: float, kind: str, target: Any) -> int:
    try:
        return int(number)
    except (ValueError, OverflowError) as exc:
        raise _mismatch(kind, target) from exc


class JsonValue:
    """Base of every JSON value; each accessor fails unless a subclass supports it."""

    __slots__ = ()

    def get(self, *args: str) -> JsonValue:
        raise IncorrectOperationError(f"cannot get key [{' '.join(args)}] from {self}")

    def get_map(self) -> dict[str, JsonValue]:
        raise IncorrectOperationError(f"cannot get map from {self}")

    def get_slice(self) -> list[JsonValue]:
        raise IncorrectOperationError(f"cannot get slice from {self}")

    def as_string(self) -> str:
        raise IncorrectOperationError(f"cannot convert {self} to string")

    def as_int(self) -> int:
        raise IncorrectOperationError(f"cannot convert {self} to int")

    def as_float(self) -> float:
        raise IncorrectOperationError(f"cannot convert {self} to float")

    def as_bool(self) -> bool:
        raise IncorrectOperationError(f"cannot convert {self} to bool")

    def as_object(self) -> JsonObject:
        raise IncorrectOperationError(f"cannot convert {self} to object")

    def as_array(self) -> JsonArray:
        raise IncorrectOperationError(f"cannot convert {self} to array")

    def is_null(self) -> bool:
        return False

    def is_string(self) -> bool:
        return False

    def is_int(self) -> bool:
        return False

    def is_float(self) -> bool:
        return False

    def is_bool(self) -> bool:
        return False

    def is_object(self) -> bool:
        return False

    def is_array(self) -> bool:
        return False

    def unmarshal(self, target: Any) -> Any:
        """Convert to a Python value of the ``target`` type."""
        raise UnmarshalError(f"cannot unmarshal {self} into {_type_name(target)}")

    def pretty_string(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True)
class JsonNull(JsonValue):
    """The JSON ``null`` value."""

    def is_null(self) -> bool:
        return True

    def unmarshal(self, target: Any) -> None:
        _check_target(target)
        if _accepts_none(target):
            return None
        raise _mismatch("null", target)

    def __str__(self) -> str:
        return "null"


@dataclass(frozen=True)
class JsonBool(JsonValue):
    """A JSON boolean."""

    value: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bool(self.value))

    def is_bool(self) -> bool:
        return True

    def as_bool(self) -> bool:
        return self.value

    def as_string(self) -> str:
        return str(self)

    def as_int(self) -> int:
        return 1 if self.value else 0

    def as_float(self) -> float:
        return 1.0 if self.value else 0.0

    def unmarshal(self, target: Any) -> bool:
        _check_target(target)
        if target is bool or _is_any(target):
            return self.value
        raise _mismatch("bool", target)

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class JsonInt(JsonValue):
    """A JSON number written without fraction or exponent."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def is_int(self) -> bool:
        return True

    def as_int(self) -> int:
        try:
            return int(self.value)
        except (ValueError, OverflowError) as exc:
            raise IncorrectOperationError(f"cannot convert {self} to int") from exc

    def as_float(self) -> float:
        raise IncorrectOperationError(f"cannot convert int {_format_fixed(self.value)} to float64")

    def unmarshal(self, target: Any) -> int | float:
        _check_target(target)
        if target is bool:
            raise _mismatch("int", target)
        if target is int or _is_any(target):
            return _truncate(self.value, "int", target)
        if target is float:
            return self.value
        raise _mismatch("int", target)

    def pretty_string(self) -> str:
        if math.isfinite(self.value) and self.value.is_integer():
            return f"{self.value:.0f}"
        return _format_general(self.value)

    def __str__(self) -> str:
        return _format_fixed(self.value)


@dataclass(frozen=True)
class JsonFloat(JsonValue):
    """A JSON number written with a fraction or an exponent."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def is_float(self) -> bool:
        return True

    def as_int(self) -> int:
        raise IncorrectOperationError(f"cannot convert float {_format_fixed(self.value)} to int")

    def as_float(self) -> float:
        return self.value

    def unmarshal(self, target: Any) -> int | float:
        _check_target(target)
        if target is bool:
            raise _mismatch("float", target)
        if target is float or _is_any(target):
            return self.value
        if target is int:
            return _truncate(self.value, "float", target)
        raise _mismatch("float", target)

    def pretty_string(self) -> str:
        value = self.value
        if math.isfinite(value) and value.is_integer() and -1e12 < value < 1e12:
            return f"{value:.0f}"
        return _format_general(value)

    def __str__(self) -> str:
        return _format_fixed(self.value)


@dataclass(frozen=True)
class JsonString(JsonValue):
    """A JSON string; ``str()`` gives the raw text, ``pretty_string()`` the quoted form."""

    value: str

    def is_string(self) -> bool:
        return True

    def as_string(self) -> str:
        return self.value

    def unmarshal(self, target: Any) -> str:
        _check_target(target)
        if target is str or _is_any(target):
            return self.value
        raise _mismatch("string", target)

    def pretty_string(self) -> str:
        return f'"{escape_string(self.value)}"'

    def __str__(self) -> str:
        return self.value
"""JSON arrays and objects."""

from __future__ import annotations

import dataclasses
import types
from typing import Any, Iterable, Iterator, Union, get_args, get_origin

from .errors import (
    IncorrectOperationError,
    IndexOutOfBoundsError,
    KeyNotFoundError,
    NilValueAppendError,
    UnmarshalError,
    UnmarshalTargetTypeMismatchError,
)
from .values import JsonString, JsonValue, _check_target, _is_any, _type_name, escape_string

# Dataclass field metadata key naming the JSON member a field maps to.
JSON_NAME_KEY = "json_name"

_KEY_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

# Field annotations given as plain text are resolved against these names only.
_ANNOTATION_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
    "tuple": tuple,
    "object": object,
    "Any": Any,
}


def _quote_key_char(char: str) -> str:
    if char in _KEY_ESCAPES:
        return _KEY_ESCAPES[char]
    code = ord(char)
    if code < 0x20 or code == 0x7F:
        return f"\\x{code:02x}"
    if not char.isprintable():
        return f"\\u{code:04x}" if code < 0x10000 else f"\\U{code:08x}"
    return char


def _quote_key(key: str) -> str:
    return '"' + "".join(_quote_key_char(char) for char in key) + '"'


def _inline(value: JsonValue) -> str:
    if isinstance(value, JsonString):
        return f'"{escape_string(value.value)}"'
    return str(value)


def _pretty(value: JsonValue, indent: int) -> str:
    if isinstance(value, (JsonArray, JsonObject)):
        return value._pretty(indent)
    return value.pretty_string()


def _strip_optional(target: Any) -> Any:
    origin = get_origin(target)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(target) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return target


def _zero(target: Any) -> Any:
    """The value a target type holds when the JSON input says nothing about it."""
    if target in (bool, int, float, str):
        return target()
    origin = get_origin(target) or target
    if origin is list:
        return []
    if origin is dict:
        return {}
    return None


def _json_name(field: dataclasses.Field) -> str:
    name = field.metadata.get(JSON_NAME_KEY) or field.name
    return field.name if name == "-" else name


def _field_type(field: dataclasses.Field) -> Any:
    if isinstance(field.type, str):
        return _ANNOTATION_NAMES.get(field.type.strip(), Any)
    return field.type


def _require_value(value: Any, action: str) -> JsonValue:
    if value is None:
        raise NilValueAppendError()
    if not isinstance(value, JsonValue):
        raise IncorrectOperationError(f"cannot {action} {type(value).__name__}: not a JSON value")
    return value


class JsonArray(JsonValue):
    """An ordered sequence of JSON values."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[JsonValue] | None = None) -> None:
        self._items: list[JsonValue] = []
        for item in items or ():
            self.append(item)

    def as_array(self) -> JsonArray:
        return self

    def is_array(self) -> bool:
        return True

    def get_slice(self) -> list[JsonValue]:
        return list(self._items)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._items):
            raise IndexOutOfBoundsError()

    def index(self, i: int) -> JsonValue:
        self._check_index(i)
        return self._items[i]

    def set_by_index(self, index: int, value: JsonValue) -> JsonValue:
        self._check_index(index)
        self._items[index] = _require_value(value, "store")
        return value

    def append(self, value: JsonValue) -> JsonValue:
        self._items.append(_require_value(value, "append"))
        return value

    def remove_by_index(self, index: int) -> JsonValue:
        self._check_index(index)
        return self._items.pop(index)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonArray):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonArray({self._items!r})"

    @staticmethod
    def _convert(index: int, item: JsonValue, target: Any) -> Any:
        try:
            return item.unmarshal(target)
        except UnmarshalError as exc:
            raise UnmarshalError(f"failed to unmarshal array element at index {index}: {exc}") from exc

    def _convert_all(self, target: Any) -> list[Any]:
        return [self._convert(i, item, target) for i, item in enumerate(self._items)]

    def unmarshal(self, target: Any) -> list[Any] | tuple[Any, ...]:
        """Convert to a list, or to a tuple for tuple targets; fixed tuples are padded with zero values."""
        _check_target(target)
        resolved = _strip_optional(target)
        if _is_any(resolved):
            return self._convert_all(Any)
        origin = get_origin(resolved) or resolved
        args = get_args(resolved)
        if origin is list:
            return self._convert_all(args[0] if args else Any)
        if origin is tuple:
            if not args or (len(args) == 2 and args[1] is Ellipsis):
                return tuple(self._convert_all(args[0] if args else Any))
            if len(self._items) > len(args):
                raise UnmarshalError(
                    f"array length mismatch: JSON array has {len(self._items)} elements "
                    f"but target array has capacity {len(args)}"
                )
            converted = [self._convert(i, item, args[i]) for i, item in enumerate(self._items)]
            converted.extend(_zero(arg) for arg in args[len(self._items):])
            return tuple(converted)
        raise UnmarshalTargetTypeMismatchError(f"cannot unmarshal array into {_type_name(target)}")

    def _pretty(self, indent: int) -> str:
        if not self._items:
            return "[]"
        pad = "  " * indent
        inner = pad + "  "
        lines = ",\n".join(inner + _pretty(item, indent + 1) for item in self._items)
        return f"[\n{lines}\n{pad}]"

    def pretty_string(self) -> str:
        return self._pretty(0)

    def __str__(self) -> str:
        return "[" + ", ".join(_inline(item) for item in self._items) + "]"


class JsonObject(JsonValue):
    """A mapping of string keys to JSON values, presented in sorted key order."""

    __slots__ = ("_members",)

    def __init__(self) -> None:
        self._members: dict[str, JsonValue] = {}

    def as_object(self) -> JsonObject:
        return self

    def is_object(self) -> bool:
        return True

    def get(self, *args: str) -> JsonValue:
        """Look up a member, following nested objects when several keys are given."""
        if not args:
            raise IncorrectOperationError("no key provided for Get operation")
        first, *rest = args
        try:
            value = self._members[first]
        except KeyError:
            raise KeyNotFoundError(f"key '{first}' not found in object") from None
        if not rest:
            return value
        if not value.is_object():
            raise IncorrectOperationError(
                f"value for key '{first}' is not an object, cannot match key path"
            )
        return value.get(*rest)

    def get_map(self) -> dict[str, JsonValue]:
        if not self._members:
            raise IncorrectOperationError("object is empty, cannot return map")
        return dict(self._members)

    def set(self, key: str, value: JsonValue) -> JsonValue:
        if value is None:
            raise NilValueAppendError(f"cannot set nil value for key '{key}'")
        self._members[key] = _require_value(value, "set")
        return value

    def remove(self, key: str) -> JsonValue | None:
        """Remove a member and return it, or return ``None`` if there was none."""
        return self._members.pop(key, None)

    def __len__(self) -> int:
        return len(self._members)

    def keys(self) -> list[str]:
        return sorted(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return self._members == other._members

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonObject({self._members!r})"

    def _convert(self, key: str, target: Any) -> Any:
        try:
            return self._members[key].unmarshal(target)
        except UnmarshalError as exc:
            raise UnmarshalError(f"failed to unmarshal object field '{key}': {exc}") from exc

    def unmarshal(self, target: Any) -> Any:
        """Convert to a dict or to an instance of a dataclass."""
        _check_target(target)
        resolved = _strip_optional(target)
        if _is_any(resolved):
            return {key: self._convert(key, Any) for key in self.keys()}
        origin = get_origin(resolved) or resolved
        if origin is dict:
            args = get_args(resolved)
            key_type, value_type = args if args else (str, Any)
            if key_type is not str:
                raise UnmarshalError(f"map key type must be string, got {_type_name(key_type)}")
            return {key: self._convert(key, value_type) for key in self.keys()}
        if isinstance(resolved, type) and dataclasses.is_dataclass(resolved):
            return self._to_dataclass(resolved)
        raise UnmarshalTargetTypeMismatchError(f"cannot unmarshal object into {_type_name(target)}")

    def _to_dataclass(self, cls: type) -> Any:
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(cls):
            if not field.init:
                continue
            field_type = _field_type(field)
            name = _json_name(field)
            if name in self._members:
                try:
                    kwargs[field.name] = self._members[name].unmarshal(field_type)
                except UnmarshalError as exc:
                    raise UnmarshalError(f"failed to unmarshal field '{field.name}': {exc}") from exc
            elif field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                kwargs[field.name] = _zero(field_type)
        return cls(**kwargs)

    def _pretty(self, indent: int) -> str:
        if not self._members:
            return "{}"
        pad = "  " * indent
        inner = pad + "  "
        lines = ",\n".join(
            f'{inner}"{escape_string(key)}": {_pretty(self._members[key], indent + 1)}'
            for key in self.keys()
        )
        return f"{{\n{lines}\n{pad}}}"

    def pretty_string(self) -> str:
        return self._pretty(0)

    def __str__(self) -> str:
        members = (f"{_quote_key(key)}: {_inline(self._members[key])}" for key in self.keys())
        return "{" + ", ".join(members) + "}"
"""Conversion of plain Python values and dataclass instances into JSON values."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from .containers import JSON_NAME_KEY, JsonArray, JsonObject
from .errors import MarshalError
from .values import JsonBool, JsonFloat, JsonInt, JsonNull, JsonString, JsonValue

OMITEMPTY_KEY = "json_omitempty"
SKIP_KEY = "json_skip"

_SEQUENCE_TYPES = (list, tuple, bytes, bytearray)


def json_field(name: str | None = None, omitempty: bool = False, skip: bool = False) -> Any:
    """A dataclass field carrying its JSON member name and marshalling options.

    ``name`` replaces the field name in JSON; ``omitempty`` leaves the member out
    when the value is empty; ``skip`` never writes the member.
    """
    metadata = {
        JSON_NAME_KEY: "-" if skip else name,
        OMITEMPTY_KEY: omitempty,
        SKIP_KEY: skip,
    }
    return dataclasses.field(metadata=metadata)


def marshal(value: Any) -> JsonValue:
    """Convert a Python value into a JSON value.

    Supports ``None``, booleans, integers, floats, strings, lists, tuples, bytes,
    mappings with string keys, dataclass instances and existing JSON values.
    """
    if value is None:
        return JsonNull()
    if isinstance(value, JsonValue):
        return value
    if isinstance(value, bool):
        return JsonBool(value)
    if isinstance(value, int):
        return JsonInt(float(value))
    if isinstance(value, float):
        return JsonFloat(value)
    if isinstance(value, str):
        return JsonString(value)
    if isinstance(value, _SEQUENCE_TYPES):
        return _marshal_sequence(value)
    if isinstance(value, Mapping):
        return _marshal_mapping(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _marshal_dataclass(value)
    raise MarshalError(f"unsupported type: {type(value).__name__}")


def _marshal_sequence(items: Any) -> JsonArray:
    array = JsonArray()
    for index, item in enumerate(items):
        try:
            array.append(marshal(item))
        except MarshalError as exc:
            raise MarshalError(f"failed to marshal array element at index {index}: {exc}") from exc
    return array


def _marshal_mapping(mapping: Mapping) -> JsonObject:
    if not all(isinstance(key, str) for key in mapping):
        raise MarshalError("only maps with string keys are supported")
    obj = JsonObject()
    for key, item in mapping.items():
        try:
            obj.set(key, marshal(item))
        except MarshalError as exc:
            raise MarshalError(f"failed to marshal map value for key '{key}': {exc}") from exc
    return obj


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, Mapping) + _SEQUENCE_TYPES):
        return len(value) == 0
    return False


def _marshal_dataclass(instance: Any) -> JsonObject:
    obj = JsonObject()
    for field in dataclasses.fields(instance):
        if field.name.startswith("_") or field.metadata.get(SKIP_KEY):
            continue
        name = field.metadata.get(JSON_NAME_KEY) or field.name
        if name == "-":
            continue
        value = getattr(instance, field.name)
        if field.metadata.get(OMITEMPTY_KEY) and _is_empty(value):
            continue
        try:
            obj.set(name, marshal(value))
        except MarshalError as exc:
            raise MarshalError(f"failed to marshal struct field '{field.name}': {exc}") from exc
    return obj
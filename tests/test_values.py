from typing import Any, Optional

import pytest

from aaronjson.errors import (
    IncorrectOperationError,
    UnmarshalError,
    UnmarshalTargetTypeMismatchError,
)
from aaronjson.values import (
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonNull,
    JsonString,
    JsonValue,
    escape_string,
)

TYPE_CHECKS = ["is_null", "is_string", "is_int", "is_float", "is_bool", "is_object", "is_array"]


def _true_checks(value):
    return [name for name in TYPE_CHECKS if getattr(value, name)()]


# --- base value ---


@pytest.mark.parametrize(
    "call",
    [
        lambda v: v.get("key"),
        lambda v: v.get_map(),
        lambda v: v.get_slice(),
        lambda v: v.as_string(),
        lambda v: v.as_int(),
        lambda v: v.as_float(),
        lambda v: v.as_bool(),
        lambda v: v.as_object(),
        lambda v: v.as_array(),
    ],
)
def test_base_accessors_raise(call):
    with pytest.raises(IncorrectOperationError):
        call(JsonValue())


def test_base_unmarshal_raises():
    with pytest.raises(UnmarshalError):
        JsonValue().unmarshal(dict)


def test_base_type_checks_are_false():
    assert _true_checks(JsonValue()) == []


def test_base_string_forms_are_empty():
    assert str(JsonValue()) == ""
    assert JsonValue().pretty_string() == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        (JsonString("test"), ["is_string"]),
        (JsonInt(42), ["is_int"]),
        (JsonBool(True), ["is_bool"]),
        (JsonNull(), ["is_null"]),
        (JsonFloat(3.14), ["is_float"]),
    ],
)
def test_subclasses_override_one_check(value, expected):
    assert _true_checks(value) == expected


# --- null ---


def test_null_strings():
    assert str(JsonNull()) == "null"
    assert JsonNull().pretty_string() == "null"


@pytest.mark.parametrize(
    "call",
    [
        lambda v: v.as_string(),
        lambda v: v.as_int(),
        lambda v: v.as_float(),
        lambda v: v.as_bool(),
        lambda v: v.as_object(),
        lambda v: v.as_array(),
        lambda v: v.get("key"),
        lambda v: v.get_map(),
        lambda v: v.get_slice(),
    ],
)
def test_null_accessors_raise(call):
    with pytest.raises(IncorrectOperationError):
        call(JsonNull())


def test_null_error_message_names_value():
    with pytest.raises(IncorrectOperationError, match="cannot convert null to string"):
        JsonNull().as_string()


@pytest.mark.parametrize("target", [Optional[str], Any, object, list, dict, list[int], str | None])
def test_null_unmarshal_to_nullable(target):
    assert JsonNull().unmarshal(target) is None


def test_null_unmarshal_to_plain_type_raises():
    with pytest.raises(UnmarshalTargetTypeMismatchError):
        JsonNull().unmarshal(str)


def test_null_unmarshal_bad_targets():
    with pytest.raises(UnmarshalError):
        JsonNull().unmarshal("test")
    with pytest.raises(UnmarshalError):
        JsonNull().unmarshal(None)


# --- bool ---


@pytest.mark.parametrize("flag, text", [(True, "true"), (False, "false")])
def test_bool_strings(flag, text):
    value = JsonBool(flag)
    assert str(value) == text
    assert value.pretty_string() == text
    assert value.as_string() == text


@pytest.mark.parametrize("flag, number", [(True, 1), (False, 0)])
def test_bool_conversions(flag, number):
    value = JsonBool(flag)
    assert value.as_bool() is flag
    assert value.as_int() == number
    assert value.as_float() == float(number)


def test_bool_type_checks():
    assert _true_checks(JsonBool(True)) == ["is_bool"]


def test_bool_unmarshal():
    assert JsonBool(True).unmarshal(bool) is True
    assert JsonBool(True).unmarshal(Any) is True
    with pytest.raises(UnmarshalTargetTypeMismatchError):
        JsonBool(True).unmarshal(str)
    with pytest.raises(UnmarshalError):
        JsonBool(True).unmarshal(True)
    with pytest.raises(UnmarshalError):
        JsonBool(True).unmarshal(None)


# --- int ---


@pytest.mark.parametrize("number, expected", [(42, 42), (-10, -10), (0, 0), (3.14, 3)])
def test_int_as_int(number, expected):
    assert JsonInt(number).as_int() == expected


def test_int_as_float_raises():
    with pytest.raises(IncorrectOperationError):
        JsonInt(42).as_float()


@pytest.mark.parametrize(
    "number, expected",
    [(42, "42.000000"), (-10, "-10.000000"), (0, "0.000000"), (3.14, "3.140000")],
)
def test_int_string(number, expected):
    assert str(JsonInt(number)) == expected


@pytest.mark.parametrize("number, expected", [(42, "42"), (-10, "-10"), (0, "0"), (3.14, "3.14")])
def test_int_pretty_string(number, expected):
    assert JsonInt(number).pretty_string() == expected


def test_int_type_checks():
    assert _true_checks(JsonInt(42)) == ["is_int"]


def test_int_unmarshal():
    assert JsonInt(42).unmarshal(int) == 42
    assert JsonInt(42).unmarshal(float) == 42.0
    result = JsonInt(42).unmarshal(Any)
    assert result == 42 and type(result) is int
    with pytest.raises(UnmarshalTargetTypeMismatchError):
        JsonInt(42).unmarshal(bool)
    with pytest.raises(UnmarshalTargetTypeMismatchError):
        JsonInt(42).unmarshal(str)


def test_int_equality():
    assert JsonInt(1) == JsonInt(1.0)
    assert JsonInt(1) != JsonFloat(1.0)


# --- float ---


@pytest.mark.parametrize("number", [3.14, -2.5, 0.0, 1.23e10, 0.001])
def test_float_as_float(number):
    assert JsonFloat(number).as_float() == number


def test_float_as_int_raises():
    with pytest.raises(IncorrectOperationError):
        JsonFloat(3.14).as_int()


@pytest.mark.parametrize(
    "number, expected",
    [(3.14, "3.140000"), (-2.5, "-2.500000"), (0.0, "0.000000"), (42.0, "42.000000")],
)
def test_float_string(number, expected):
    assert str(JsonFloat(number)) == expected


@pytest.mark.parametrize(
    "number, expected",
    [
        (3.14, "3.14"),
        (-2.5, "-2.5"),
        (0.0, "0"),
        (42.0, "42"),
        (0.000001, "1e-06"),
        (1000000000000.0, "1e+12"),
    ],
)
def test_float_pretty_string(number, expected):
    assert JsonFloat(number).pretty_string() == expected


def test_float_type_checks():
    assert _true_checks(JsonFloat(3.14)) == ["is_float"]


def test_float_unmarshal():
    assert JsonFloat(3.14).unmarshal(float) == 3.14
    assert JsonFloat(3.14).unmarshal(int) == 3
    assert JsonFloat(3.14).unmarshal(Any) == 3.14
    with pytest.raises(UnmarshalTargetTypeMismatchError):
        JsonFloat(3.14).unmarshal(str)


# --- string ---


def test_string_basics():
    value = JsonString("hello world")
    assert str(value) == "hello world"
    assert value.as_string() == "hello world"
    assert _true_checks(value) == ["is_string"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello", '"hello"'),
        ("", '""'),
        ('he said "hello"', '"he said \\"hello\\""'),
        ("hello\nworld", '"hello\\nworld"'),
        ("hello\tworld", '"hello\\tworld"'),
    ],
)
def test_string_pretty_string(text, expected):
    assert JsonString(text).pretty_string() == expected


def test_string_unmarshal():
    value = JsonString("hello world")
    assert value.unmarshal(str) == "hello world"
    assert value.unmarshal(Any) == "hello world"
    with pytest.raises(UnmarshalTargetTypeMismatchError):
        value.unmarshal(int)
    with pytest.raises(UnmarshalError):
        value.unmarshal("target")
    with pytest.raises(UnmarshalError):
        value.unmarshal(None)


# --- escaping ---


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello", "hello"),
        ('he said "hello"', 'he said \\"hello\\"'),
        ("path\\to\\file", "path\\\\to\\\\file"),
        ("hello\nworld", "hello\\nworld"),
        ("hello\tworld", "hello\\tworld"),
        ("hello\rworld", "hello\\rworld"),
        ("hello\fworld", "hello\\fworld"),
        ("hello\bworld", "hello\\bworld"),
        ("hello\x01world", "hello\\u0001world"),
        ("", ""),
        ('line1\nline2\tindented"quoted"', 'line1\\nline2\\tindented\\"quoted\\"'),
        ("Hello 世界", "Hello 世界"),
        ("hello\x00\x1fworld", "hello\\u0000\\u001fworld"),
    ],
)
def test_escape_string(text, expected):
    assert escape_string(text) == expected
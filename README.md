# aaronjson

A small JSON library. It parses text into a tree of typed values, builds such
trees from plain Python data, and converts values back into Python types.

## Installing

```
pip install aaronjson
```

## Parsing

```python
from aaronjson.parse import parse, parse_bytes

doc = parse('{"name": "John", "age": 30, "hobbies": ["reading", "coding"]}')

doc.is_object()                    # True
doc.get("name").as_string()        # "John"
doc.get("age").as_int()            # 30
len(doc.get("hobbies").as_array()) # 2

parse_bytes(b'[1, 2, 3]')
```

`get` takes one key or several. With several keys it walks through nested
objects, so `doc.get("a", "b")` is the same as `doc.get("a").get("b")`. A
missing key raises `KeyNotFoundError`.

A number with no fraction and no exponent becomes a `JsonInt`; any other number
becomes a `JsonFloat`. Both keep their value as a float. Escape sequences inside
strings are kept as written, not decoded. Parsing stops after the first
complete value; whatever follows it is not examined.

Malformed input raises `JsonParseError` from `aaronjson.errors`, with the byte
offset in its `position` attribute. This covers unterminated strings and
containers, trailing commas, a missing colon or comma, an empty key, a leading
`+`, a leading zero followed by another digit, a decimal point or exponent
without digits, and misspelt `true`, `false` or `null`. Input that is empty or
only whitespace raises `EmptyDataError`, a subclass of `JsonParseError`.

## Building values

```python
from aaronjson.values import JsonString, JsonInt, JsonBool, JsonNull
from aaronjson.containers import JsonArray, JsonObject

obj = JsonObject()
obj.set("name", JsonString("John"))
obj.set("active", JsonBool(True))

arr = JsonArray()
arr.append(JsonInt(42))
obj.set("items", arr)

obj.keys()          # ['active', 'items', 'name']
str(obj)            # '{"active": true, "items": [42.000000], "name": "John"}'
obj.pretty_string() # indented form, two spaces per level
```

In the compact `str()` form, numbers are written with six decimals and members
appear in sorted key order. `str()` of a lone `JsonString` is its raw text;
`pretty_string()` gives the quoted, escaped form. In pretty form, whole numbers
are written without decimals.

Arrays support `index`, `set_by_index`, `append`, `remove_by_index`,
`get_slice`, `len()` and iteration. An index outside the array raises
`IndexOutOfBoundsError`; appending `None` raises `NilValueAppendError`.
Objects support `get`, `set`, `remove` (which returns `None` for a missing
key), `keys`, `get_map` and `len()`.

Every value has `is_null`, `is_string`, `is_int`, `is_float`, `is_bool`,
`is_object` and `is_array`, and the accessors `as_string`, `as_int`,
`as_float`, `as_bool`, `as_object` and `as_array`. An accessor that does not
apply to the value raises `IncorrectOperationError`. `JsonInt.as_float()` and
`JsonFloat.as_int()` raise as well; a `JsonBool` answers `as_int`, `as_float`
and `as_string`.

## Marshalling Python data

```python
from dataclasses import dataclass
from aaronjson.marshal import marshal, json_field

@dataclass
class Person:
    name: str = json_field("name")
    age: int = json_field("age", omitempty=True)
    notes: str = json_field("notes", skip=True)

str(marshal(Person(name="John", age=0, notes="internal")))
# '{"name": "John"}'
```

`marshal` accepts:

- `None`
- `bool`, `int`, `float` and `str`
- lists, tuples, `bytes` and `bytearray`
- mappings with string keys
- dataclass instances (fields whose names start with `_` are left out)
- values that are already JSON values

Anything else raises `MarshalError`. `json_field` renames a member, leaves it
out when empty (`omitempty`), or never writes it (`skip`).

## Unmarshalling

Every value has `unmarshal(target)`, where `target` is a type. It returns a new
Python value of that type:

```python
from dataclasses import dataclass
from typing import Any
from aaronjson.parse import parse

@dataclass
class Person:
    name: str
    age: int

parse('{"name": "John", "age": 30}').unmarshal(Person)  # Person(name='John', age=30)
parse('["a", "b"]').unmarshal(list[str])               # ['a', 'b']
parse('["a"]').unmarshal(tuple[str, str])              # ('a', '')
parse('{"k": 1}').unmarshal(dict[str, int])            # {'k': 1}
parse('[1, true, null]').unmarshal(Any)                # [1, True, None]
```

Numbers convert to `int` (truncated) or `float`; `null` converts to `None` for
optional, list, dict or `Any` targets. A target that does not fit the value
raises `UnmarshalError` or its subclass `UnmarshalTargetTypeMismatchError`; a
JSON array longer than a fixed-size tuple target also raises `UnmarshalError`.

## Errors

All errors derive from `aaronjson.errors.JsonError`, and each also derives from
the matching built-in exception (`ValueError`, `TypeError`, `LookupError` or
`IndexError`).

## What it does not do

There is no command-line tool. The package does not decode string escape
sequences, and its compact output is not meant as a canonical JSON writer.
"""Parsing of JSON text into JSON values."""

from __future__ import annotations

import math

from .containers import JsonArray, JsonObject
from .errors import EmptyDataError, JsonParseError
from .values import JsonBool, JsonFloat, JsonInt, JsonNull, JsonString, JsonValue

_WHITESPACE = frozenset(b" \t\n\r")
_TERMINATORS = frozenset(b",]} \t\n\r")
_DIGITS = frozenset(b"0123456789")
_NONZERO_DIGITS = frozenset("123456789")
_PLAIN_ZEROS = frozenset({"0", "-0", "0.0", "-0.0"})


def skip_whitespace(data: bytes, pos: int) -> int:
    """Return the first position at or after ``pos`` that is not a space, tab, CR or LF."""
    while pos < len(data) and data[pos] in _WHITESPACE:
        pos += 1
    return pos


def is_valid_number_terminator(c: int | str | bytes) -> bool:
    """Whether the character may directly follow a number, boolean or null."""
    code = ord(c) if isinstance(c, (str, bytes)) else c
    return code in _TERMINATORS


class _Parser:
    """Recursive-descent reader over a byte buffer."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def _current(self) -> int | None:
        return self.data[self.pos] if self.pos < len(self.data) else None

    def _skip(self) -> None:
        self.pos = skip_whitespace(self.data, self.pos)

    def _digit_here(self) -> bool:
        return self._current() in _DIGITS

    def document(self) -> JsonValue:
        self._skip()
        if self.pos >= len(self.data):
            raise EmptyDataError("empty JSON data", self.pos)
        return self.value()

    def value(self) -> JsonValue:
        self._skip()
        char = self._current()
        if char is None:
            raise JsonParseError("unexpected end of data", self.pos)
        if char == ord("{"):
            return self.object()
        if char == ord("["):
            return self.array()
        if char == ord('"'):
            return JsonString(self.string())
        if char in (ord("t"), ord("f")):
            return self.boolean()
        if char == ord("n"):
            return self.null()
        if char in _DIGITS or char in (ord("-"), ord("+")):
            return self.number()
        raise JsonParseError(f"invalid JSON data at position {self.pos}", self.pos)

    def object(self) -> JsonObject:
        self.pos += 1
        obj = JsonObject()
        self._skip()
        if self._current() == ord("}"):
            self.pos += 1
            return obj
        while True:
            self._skip()
            char = self._current()
            if char is None:
                raise JsonParseError("unexpected end of data while parsing object", self.pos)
            if char != ord('"'):
                raise JsonParseError(f"expected string key at position {self.pos}", self.pos)
            key = self.string()
            if not key:
                raise JsonParseError(f"empty key at position {self.pos}", self.pos)
            self._skip()
            if self._current() != ord(":"):
                raise JsonParseError(f"expected ':' after key at position {self.pos}", self.pos)
            self.pos += 1
            obj.set(key, self.value())
            self._skip()
            char = self._current()
            if char is None:
                raise JsonParseError("unexpected end of data while parsing object", self.pos)
            self.pos += 1
            if char == ord("}"):
                return obj
            if char != ord(","):
                self.pos -= 1
                raise JsonParseError(f"expected ',' or '}}' at position {self.pos}", self.pos)

    def array(self) -> JsonArray:
        self.pos += 1
        array = JsonArray()
        self._skip()
        if self._current() == ord("]"):
            self.pos += 1
            return array
        while True:
            self._skip()
            if self._current() is None:
                raise JsonParseError("unexpected end of data while parsing array", self.pos)
            array.append(self.value())
            self._skip()
            char = self._current()
            if char is None:
                raise JsonParseError("unexpected end of data while parsing array", self.pos)
            self.pos += 1
            if char == ord("]"):
                return array
            if char != ord(","):
                self.pos -= 1
                raise JsonParseError(f"expected ',' or ']' at position {self.pos}", self.pos)

    def string(self) -> str:
        """Read a quoted string; escape sequences are kept as written."""
        self.pos += 1
        start = self.pos
        while self.pos < len(self.data):
            char = self.data[self.pos]
            if char == ord('"'):
                text = self.data[start:self.pos].decode("utf-8", "surrogateescape")
                self.pos += 1
                return text
            self.pos += 2 if char == ord("\\") else 1
        raise JsonParseError(f"unterminated string starting at position {start - 1}", start - 1)

    def _digits(self) -> None:
        while self._digit_here():
            self.pos += 1

    def number(self) -> JsonValue:
        start = self.pos
        char = self._current()
        if char == ord("-"):
            self.pos += 1
            if self.pos >= len(self.data):
                raise JsonParseError(
                    f"invalid number: minus sign without digits at position {start}", self.pos
                )
        elif char == ord("+"):
            raise JsonParseError(f"invalid number: leading plus sign at position {start}", self.pos)

        if not self._digit_here():
            raise JsonParseError(f"invalid number: no digits at position {start}", self.pos)

        is_float = False
        if self._current() == ord("0"):
            self.pos += 1
            if self._digit_here():
                raise JsonParseError(
                    f"invalid number: leading zero followed by digit at position {start}", self.pos
                )
        else:
            self._digits()

        if self._current() == ord("."):
            is_float = True
            self.pos += 1
            if not self._digit_here():
                raise JsonParseError(
                    f"invalid number: decimal point without fractional digits at position {start}",
                    self.pos,
                )
            self._digits()

        if self._current() in (ord("e"), ord("E")):
            is_float = True
            self.pos += 1
            if self._current() in (ord("+"), ord("-")):
                self.pos += 1
            if not self._digit_here():
                raise JsonParseError(
                    f"invalid number: exponent without digits at position {start}", self.pos
                )
            self._digits()

        text = self.data[start:self.pos].decode("ascii")
        following = self._current()
        if following is not None and not is_valid_number_terminator(following):
            raise JsonParseError(
                f"invalid character '{chr(following)}' after number at position {self.pos}", self.pos
            )

        number = float(text)
        kind = "float" if is_float else "integer"
        if math.isinf(number):
            raise JsonParseError(
                f"invalid {kind} number '{text}' at position {start}: value out of range", self.pos
            )
        if not is_float:
            return JsonInt(number)
        if number == 0 and text not in _PLAIN_ZEROS and _NONZERO_DIGITS.intersection(text):
            raise JsonParseError(f"number underflow: '{text}' at position {start}", self.pos)
        return JsonFloat(number)

    def _keyword(self, word: bytes) -> bool:
        if not self.data.startswith(word, self.pos):
            return False
        end = self.pos + len(word)
        if end < len(self.data) and not is_valid_number_terminator(self.data[end]):
            return False
        self.pos = end
        return True

    def boolean(self) -> JsonBool:
        start = self.pos
        if self.data.startswith(b"true", start):
            if self._keyword(b"true"):
                return JsonBool(True)
        elif self._keyword(b"false"):
            return JsonBool(False)
        raise JsonParseError(f"invalid boolean value at position {start}", start)

    def null(self) -> JsonNull:
        start = self.pos
        if self._keyword(b"null"):
            return JsonNull()
        raise JsonParseError(f"invalid null value at position {start}", start)


def parse_bytes(data: bytes) -> JsonValue:
    """Parse UTF-8 encoded JSON; text after the first complete value is not examined."""
    return _Parser(bytes(data)).document()


def parse(text: str) -> JsonValue:
    """Parse a JSON document given as text."""
    return parse_bytes(text.encode("utf-8", "surrogateescape"))
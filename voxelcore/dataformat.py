"""Parser for the ``.data`` key/value configuration format.

A document is a sequence of ``key : value`` entries separated by newlines.
Values may be integers, floats, strings, booleans, bare tags, numeric ranges
(``lo..hi``), keybinds (``<LC+a>``), typed arrays (``int[1, 2]``) and objects
(``{ key: value, ... }``). Comments start with ``#`` and run to end of line.
"""

from __future__ import annotations

import enum
import re
import string
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_FLOAT_PREFIX = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")

_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")


class ParseError(ValueError):
    """Raised when a document cannot be read or parsed."""


@dataclass(frozen=True)
class Tag:
    """A bare identifier used as a value."""

    name: str


@dataclass(frozen=True)
class IntRange:
    """An inclusive integer range written as ``lo..hi``."""

    lo: int
    hi: int


@dataclass(frozen=True)
class FloatRange:
    """A range written as ``lo..hi`` where at least one bound is a float."""

    lo: float
    hi: float


@dataclass(frozen=True)
class Keybind:
    """A key chord written as ``<tok+tok+...>``."""

    keys: tuple[str, ...] = ()


class ElemType(enum.Enum):
    """Declared element type of a typed array."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    TAG = "tag"


_ELEM_TYPE_NAMES = {
    "int": ElemType.INT,
    "float": ElemType.FLOAT,
    "string": ElemType.STRING,
    "str": ElemType.STRING,
    "bool": ElemType.BOOL,
    "tag": ElemType.TAG,
}


@dataclass
class TypedArray:
    """An array such as ``int[1, 2, 3]``."""

    elem_type: ElemType
    elements: list["Value"] = field(default_factory=list)


@dataclass
class Object:
    """An ordered collection of ``key: value`` pairs in braces."""

    entries: list[tuple[str, "Value"]] = field(default_factory=list)

    def get(self, key: str) -> Optional["Value"]:
        """Return the first value stored under ``key``, or ``None``."""
        return next((v for k, v in self.entries if k == key), None)


Value = Union[bool, int, float, str, Tag, IntRange, FloatRange, Keybind, TypedArray, Object]


@dataclass
class Document:
    """The top-level entries of a parsed file, in order."""

    entries: list[tuple[str, Value]] = field(default_factory=list)

    def get(self, key: str) -> Optional[Value]:
        """Return the first value stored under ``key``, or ``None``."""
        return next((v for k, v in self.entries if k == key), None)


class _TK(enum.Enum):
    IDENT = enum.auto()
    INTEGER = enum.auto()
    FLOAT = enum.auto()
    STRING = enum.auto()
    DOTDOT = enum.auto()
    COLON = enum.auto()
    COMMA = enum.auto()
    LBRACKET = enum.auto()
    RBRACKET = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()
    NEWLINE = enum.auto()
    END = enum.auto()
    ERROR = enum.auto()
    KEYBIND = enum.auto()


@dataclass(frozen=True)
class _Token:
    kind: _TK
    text: str
    line: int


_PUNCTUATION = {
    ":": _TK.COLON,
    ",": _TK.COMMA,
    "[": _TK.LBRACKET,
    "]": _TK.RBRACKET,
    "{": _TK.LBRACE,
    "}": _TK.RBRACE,
}

_STRING_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}


def _tokenize(src: str) -> Iterator[_Token]:
    """Yield tokens from ``src``; yields END forever once input is exhausted."""
    pos = 0
    line = 1
    n = len(src)

    def at(i: int) -> str:
        return src[i] if i < n else ""

    while True:
        while pos < n and src[pos] in " \t\r":
            pos += 1
        if pos >= n:
            yield _Token(_TK.END, "", line)
            continue

        c = src[pos]

        if c == "\n":
            pos += 1
            line += 1
            yield _Token(_TK.NEWLINE, "\n", line)
        elif c == "#":
            while pos < n and src[pos] != "\n":
                pos += 1
        elif c in _PUNCTUATION:
            pos += 1
            yield _Token(_PUNCTUATION[c], c, line)
        elif c == "<":
            start_line = line
            pos += 1
            raw: list[str] = []
            while pos < n and src[pos] not in ">\n":
                if src[pos] == "\\" and pos + 1 < n:
                    raw.append("\\" + src[pos + 1])
                    pos += 2
                else:
                    raw.append(src[pos])
                    pos += 1
            if at(pos) == ">":
                pos += 1
            yield _Token(_TK.KEYBIND, "".join(raw), start_line)
        elif c == ".":
            if at(pos + 1) == ".":
                pos += 2
                yield _Token(_TK.DOTDOT, "..", line)
            else:
                pos += 1
                yield _Token(_TK.ERROR, ".", line)
        elif c == '"':
            start_line = line
            pos += 1
            chars: list[str] = []
            while pos < n and src[pos] != '"':
                if src[pos] == "\n":
                    break
                if src[pos] == "\\" and pos + 1 < n:
                    pos += 1
                    esc = src[pos]
                    chars.append(_STRING_ESCAPES.get(esc, "\\" + esc))
                else:
                    chars.append(src[pos])
                pos += 1
            if at(pos) == '"':
                pos += 1
            yield _Token(_TK.STRING, "".join(chars), start_line)
        elif c in _LETTERS or c == "_":
            start = pos
            while pos < n and src[pos] in _IDENT_CHARS:
                pos += 1
            yield _Token(_TK.IDENT, src[start:pos], line)
        elif c in _DIGITS or (c == "-" and at(pos + 1) in _DIGITS and at(pos + 1)):
            start = pos
            is_float = False
            if src[pos] == "-":
                pos += 1
            while pos < n and src[pos] in _DIGITS:
                pos += 1
            if at(pos) == "." and at(pos + 1) != "." and at(pos + 1) and at(pos + 1) in _DIGITS:
                is_float = True
                pos += 1
                while pos < n and src[pos] in _DIGITS:
                    pos += 1
            if at(pos) in ("e", "E") and at(pos):
                is_float = True
                pos += 1
                if at(pos) in ("+", "-") and at(pos):
                    pos += 1
                while pos < n and src[pos] in _DIGITS:
                    pos += 1
            yield _Token(_TK.FLOAT if is_float else _TK.INTEGER, src[start:pos], line)
        else:
            pos += 1
            yield _Token(_TK.ERROR, c, line)


def _parse_float_text(text: str) -> Optional[float]:
    """Parse the longest numeric prefix; return ``None`` if out of range."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    literal = match.group(0)
    value = float(literal)
    if value in (float("inf"), float("-inf")):
        return None
    if value != 0.0 and abs(value) < sys.float_info.min:
        return None
    if value == 0.0:
        mantissa = re.split(r"[eE]", literal)[0]
        if any(ch in "123456789" for ch in mantissa):
            return None
    return value


class _Parser:
    def __init__(self, source: str) -> None:
        self._tokens = _tokenize(source)
        self.current = next(self._tokens)

    def _error(self, message: str) -> ParseError:
        return ParseError(f"line {self.current.line}: {message}")

    def advance(self) -> None:
        self.current = next(self._tokens)

    def skip_newlines(self) -> None:
        while self.current.kind is _TK.NEWLINE:
            self.advance()

    def expect(self, kind: _TK, what: str) -> None:
        if self.current.kind is not kind:
            raise self._error(f"expected {what}, got '{self.current.text}'")
        self.advance()

    def parse_number(self) -> tuple[Union[int, float], bool]:
        tok = self.current
        if tok.kind is _TK.INTEGER:
            value = int(tok.text)
            if not _INT64_MIN <= value <= _INT64_MAX:
                raise self._error(f"integer out of range '{tok.text}'")
            self.advance()
            return value, False
        if tok.kind is _TK.FLOAT:
            fvalue = _parse_float_text(tok.text)
            if fvalue is None:
                raise self._error(f"float out of range '{tok.text}'")
            self.advance()
            return fvalue, True
        raise self._error(f"expected a number, got '{tok.text}'")

    def parse_value(self) -> Value:
        kind = self.current.kind

        if kind is _TK.KEYBIND:
            return self.parse_keybind()

        if kind in (_TK.INTEGER, _TK.FLOAT):
            lo, lo_float = self.parse_number()
            if self.current.kind is _TK.DOTDOT:
                self.advance()
                hi, hi_float = self.parse_number()
                if lo_float or hi_float:
                    return FloatRange(float(lo), float(hi))
                return IntRange(int(lo), int(hi))
            return lo

        if kind is _TK.STRING:
            text = self.current.text
            self.advance()
            return text

        if kind is _TK.IDENT:
            name = self.current.text
            self.advance()
            if name == "true":
                return True
            if name == "false":
                return False
            if self.current.kind is _TK.LBRACKET:
                return self.parse_typed_array(name)
            return Tag(name)

        if kind is _TK.LBRACE:
            return self.parse_object()

        raise self._error(f"unexpected token '{self.current.text}' in value position")

    def parse_typed_array(self, type_name: str) -> TypedArray:
        elem_type = _ELEM_TYPE_NAMES.get(type_name)
        if elem_type is None:
            raise self._error(f"unknown typed-array element type '{type_name}'")
        self.advance()
        array = TypedArray(elem_type)
        while self.current.kind not in (_TK.RBRACKET, _TK.END):
            array.elements.append(self.parse_value())
            if self.current.kind is not _TK.COMMA:
                break
            self.advance()
            if self.current.kind is _TK.RBRACKET:
                break
        self.expect(_TK.RBRACKET, "]")
        return array

    def parse_object(self) -> Object:
        self.advance()
        obj = Object()
        self.skip_newlines()
        while self.current.kind not in (_TK.RBRACE, _TK.END):
            if self.current.kind is not _TK.IDENT:
                raise self._error(
                    f"expected identifier as object key, got '{self.current.text}'"
                )
            key = self.current.text
            self.advance()
            self.expect(_TK.COLON, ":")
            obj.entries.append((key, self.parse_value()))
            self.skip_newlines()
            if self.current.kind is _TK.COMMA:
                self.advance()
                self.skip_newlines()
                if self.current.kind is _TK.RBRACE:
                    break
        self.expect(_TK.RBRACE, "}")
        return obj

    def parse_keybind(self) -> Keybind:
        raw = self.current.text
        self.advance()
        keys: list[str] = []
        token: list[str] = []
        chars = iter(raw)
        for ch in chars:
            if ch == "\\":
                escaped = next(chars, None)
                token.append("\\" if escaped is None else escaped)
            elif ch == "+":
                if token:
                    keys.append("".join(token))
                    token = []
            else:
                token.append(ch)
        if token:
            keys.append("".join(token))
        return Keybind(tuple(keys))

    def parse_document(self) -> Document:
        doc = Document()
        self.skip_newlines()
        while self.current.kind is not _TK.END:
            if self.current.kind is not _TK.IDENT:
                raise self._error(
                    f"expected 'identifier :' entry, got '{self.current.text}'"
                )
            key = self.current.text
            self.advance()
            self.expect(_TK.COLON, ":")
            doc.entries.append((key, self.parse_value()))
            self.skip_newlines()
        return doc


def parse_string(source: str) -> Document:
    """Parse a document from text; raise :class:`ParseError` on bad input."""
    return _Parser(source).parse_document()


def parse_file(path: Union[str, Path]) -> Document:
    """Read and parse the document at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"cannot open file: {path}") from exc
    return parse_string(text)
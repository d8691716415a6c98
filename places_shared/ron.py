"""
Reader and writer for the subset of RON that cosmic-config stores per key.

Supported values: booleans, integers, floats, strings, lists, ``Some(x)``
and ``None``, bare enum variants (``Home``) and newtype variants
(``Path("/tmp")``). Variants decode to :class:`Variant`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t", "r": "\r", "0": "\0", "'": "'"}
_DELIMITERS = set(",()[]") | {" ", "\t", "\r", "\n"}


class RonError(ValueError):
    """Raised when text is not in the supported RON subset."""


@dataclass(frozen=True, slots=True)
class Variant:
    """An enum variant, with its payload for newtype variants."""

    name: str
    value: Any = None
    has_value: bool = False

    @classmethod
    def unit(cls, name: str) -> "Variant":
        return cls(name=name)

    @classmethod
    def newtype(cls, name: str, value: Any) -> "Variant":
        return cls(name=name, value=value, has_value=True)


def loads(text: str) -> Any:
    parser = _Parser(text)
    value = parser.value()
    parser.skip_space()
    if not parser.at_end():
        raise parser.error("unexpected trailing characters")
    return value


def dumps(value: Any, indent: int = 0) -> str:
    """Serialise ``value`` the way ``ron::ser::to_string_pretty`` lays it out."""
    pad = "    "
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "None"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, Variant):
        if not value.has_value:
            return value.name
        return f"{value.name}({dumps(value.value, indent)})"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        inner = pad * (indent + 1)
        items = "".join(f"{inner}{dumps(item, indent + 1)},\n" for item in value)
        return f"[\n{items}{pad * indent}]"
    raise TypeError(f"Cannot encode {type(value).__name__} as RON.")


def _quote(value: str) -> str:
    out = ['"']
    for ch in value:
        if ch == '"':
            out.append('\\"')
        elif ch == "\\":
            out.append("\\\\")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\r":
            out.append("\\r")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if not self.at_end() else ""

    def error(self, message: str) -> RonError:
        line = self.text.count("\n", 0, self.pos) + 1
        return RonError(f"{message} at line {line}, offset {self.pos}")

    def skip_space(self) -> None:
        while not self.at_end():
            ch = self.peek()
            if ch.isspace():
                self.pos += 1
            elif self.text.startswith("//", self.pos):
                end = self.text.find("\n", self.pos)
                self.pos = len(self.text) if end == -1 else end
            else:
                return

    def expect(self, ch: str) -> None:
        self.skip_space()
        if self.peek() != ch:
            raise self.error(f"expected {ch!r}")
        self.pos += 1

    def value(self) -> Any:
        self.skip_space()
        ch = self.peek()
        if not ch:
            raise self.error("unexpected end of input")
        if ch == '"':
            return self.string()
        if ch == "[":
            return self.sequence()
        if ch == "-" or ch.isdigit():
            return self.number()
        if ch.isalpha() or ch == "_":
            return self.identifier_value()
        raise self.error(f"unexpected character {ch!r}")

    def sequence(self) -> List[Any]:
        self.expect("[")
        items: List[Any] = []
        while True:
            self.skip_space()
            if self.peek() == "]":
                self.pos += 1
                return items
            items.append(self.value())
            self.skip_space()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "]":
                raise self.error("expected ',' or ']'")

    def identifier_value(self) -> Any:
        name = self.identifier()
        if name == "true":
            return True
        if name == "false":
            return False
        self.skip_space()
        if self.peek() != "(":
            if name == "None":
                return None
            return Variant.unit(name)
        self.pos += 1
        payload = self.value()
        self.skip_space()
        if self.peek() == ",":
            self.pos += 1
        self.expect(")")
        if name == "Some":
            return payload
        return Variant.newtype(name, payload)

    def identifier(self) -> str:
        start = self.pos
        while not self.at_end() and (self.peek().isalnum() or self.peek() == "_"):
            self.pos += 1
        return self.text[start:self.pos]

    def number(self) -> Any:
        start = self.pos
        while not self.at_end() and self.peek() not in _DELIMITERS:
            self.pos += 1
        token = self.text[start:self.pos]
        try:
            if any(c in token for c in ".eE"):
                return float(token)
            return int(token)
        except ValueError as exc:
            raise self.error(f"invalid number {token!r}") from exc

    def string(self) -> str:
        self.pos += 1
        chars: List[str] = []
        while True:
            if self.at_end():
                raise self.error("unterminated string")
            ch = self.text[self.pos]
            self.pos += 1
            if ch == '"':
                return "".join(chars)
            if ch != "\\":
                chars.append(ch)
                continue
            chars.append(self.escape())

    def escape(self) -> str:
        if self.at_end():
            raise self.error("unterminated escape")
        ch = self.text[self.pos]
        self.pos += 1
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        if ch == "u" and self.peek() == "{":
            end = self.text.find("}", self.pos)
            if end == -1:
                raise self.error("unterminated unicode escape")
            digits = self.text[self.pos + 1:end]
            self.pos = end + 1
            return chr(_hex(digits, self))
        raise self.error(f"unknown escape \\{ch}")


def _hex(digits: str, parser: _Parser) -> int:
    try:
        code = int(digits, 16)
    except ValueError as exc:
        raise parser.error(f"invalid unicode escape {digits!r}") from exc
    if code > 0x10FFFF:
        raise parser.error(f"invalid unicode escape {digits!r}")
    return code


__all__ = ["RonError", "Variant", "dumps", "loads"]

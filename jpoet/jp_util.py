"""
Shared helpers: argument checks, Java identifier rules, and literal escaping.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from functools import cached_property
from typing import AbstractSet, NoReturn

from jp_errors import BuildError


# Reserved words that may never be used as a simple name.
JAVA_KEYWORDS = frozenset({
    'abstract', 'assert', 'boolean', 'break', 'byte', 'case', 'catch', 'char',
    'class', 'const', 'continue', 'default', 'do', 'double', 'else', 'enum',
    'extends', 'final', 'finally', 'float', 'for', 'goto', 'if', 'implements',
    'import', 'instanceof', 'int', 'interface', 'long', 'native', 'new',
    'package', 'private', 'protected', 'public', 'return', 'short', 'static',
    'strictfp', 'super', 'switch', 'synchronized', 'this', 'throw', 'throws',
    'transient', 'try', 'void', 'volatile', 'while',
    # Literals
    'true', 'false', 'null',
})


def fail(message: str) -> NoReturn:
    raise BuildError(message)


def check_argument(condition: bool, message: str) -> None:
    """Raise a BuildError with `message` unless `condition` holds."""
    if not condition:
        fail(message)


def check_state(condition: bool, message: str) -> None:
    """Same as check_argument, for faults about builder state rather than inputs."""
    if not condition:
        fail(message)


def is_identifier_start(ch: str) -> bool:
    return ch == "$" or ch == "_" or ch.isalpha()


def is_identifier_part(ch: str) -> bool:
    return ch == "$" or ch == "_" or ch.isalnum()


def is_identifier(text: str) -> bool:
    """True if `text` is lexically a Java identifier (keywords included)."""
    if not text or not is_identifier_start(text[0]):
        return False
    return all(is_identifier_part(c) for c in text[1:])


def is_name(text: str) -> bool:
    """
    True if `text` is a usable simple or dotted name: every segment is an
    identifier and none is a reserved word.
    """
    if not text:
        return False
    for segment in text.split("."):
        if not is_identifier(segment) or segment in JAVA_KEYWORDS:
            return False
    return True


def identifier_prefix(text: str) -> str:
    """Return the longest prefix of `text` that is an identifier ('' if none)."""
    if not text or not is_identifier_start(text[0]):
        return ""
    end = 1
    while end < len(text) and is_identifier_part(text[end]):
        end += 1
    return text[:end]


def require_exactly_one_of(modifiers: AbstractSet, *mutually_exclusive) -> None:
    count = sum(1 for m in mutually_exclusive if m in modifiers)
    if count != 1:
        names = ", ".join(m.keyword for m in mutually_exclusive)
        current = ", ".join(sorted(m.keyword for m in modifiers))
        fail(f"[BLD-0050] modifiers [{current}] must contain one of [{names}]")


def character_literal_without_single_quotes(ch: str) -> str:
    """Escape one character for use inside a Java char or string literal."""
    if ch == "\b":
        return "\\b"
    if ch == "\t":
        return "\\t"
    if ch == "\n":
        return "\\n"
    if ch == "\f":
        return "\\f"
    if ch == "\r":
        return "\\r"
    if ch == '"':
        return '"'
    if ch == "'":
        return "\\'"
    if ch == "\\":
        return "\\\\"
    code = ord(ch)
    if code < 0x20 or 0x7F <= code <= 0x9F:
        return f"\\u{code:04x}"
    return ch


def string_literal_with_double_quotes(value: str, indent: str) -> str:
    """
    Quote `value` as a Java string literal. Strings containing line feeds are
    split after each one into a '+' concatenation on the following line.
    """
    parts = ['"']
    for i, ch in enumerate(value):
        if ch == "'":
            parts.append("'")
            continue
        if ch == '"':
            parts.append('\\"')
            continue
        parts.append(character_literal_without_single_quotes(ch))
        if ch == "\n" and i + 1 < len(value):
            parts.append('"\n' + indent + indent + '+ "')
    parts.append('"')
    return "".join(parts)


class RenderedEquality:
    """
    Value semantics for immutable model objects: two objects are equal when
    they are of the same class and render the same text. The text is rendered
    once and cached on the instance.
    """

    __slots__ = ()

    @cached_property
    def _rendered(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return self._rendered == other._rendered

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash(self._rendered)


class NullSink:
    """Output sink that discards everything (used for import collection passes)."""

    def write(self, text: str) -> int:
        return len(text)



"""
Open modifier set.

Modifiers are keyword-like qualifiers rendered before declarations. The
canonical Java keywords live in the `Modifier` family. `Cascade` is the
built-in custom family; tools may declare their own families as further
`OpenModifier, Enum` subclasses.

Every member is a singleton, so modifiers compare by identity. Sorting puts
the canonical family first (in keyword order), then custom families ordered
by their qualified class name, each in declaration order.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from enum import Enum
from typing import FrozenSet, Iterable, List, Tuple

from jp_util import check_argument


class OpenModifier:
    """Mixin shared by every modifier family; the enum value is the keyword."""

    @property
    def keyword(self) -> str:
        return self.value

    def sort_key(self) -> Tuple[int, str, int]:
        family = type(self)
        position = family._member_names_.index(self.name)
        if family is Modifier:
            return (0, "", position)
        return (1, f"{family.__module__}.{family.__qualname__}", position)

    def __str__(self) -> str:
        return self.keyword


class Modifier(OpenModifier, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    DEFAULT = "default"
    STATIC = "static"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    STRICTFP = "strictfp"


class Cascade(OpenModifier, Enum):
    UTILITY = "utility"


# Shorthand for the built-in custom modifier.
UTILITY = Cascade.UTILITY


def sorted_modifiers(modifiers: Iterable[OpenModifier]) -> List[OpenModifier]:
    """Return `modifiers` in canonical emission order."""
    return sorted(modifiers, key=lambda m: m.sort_key())


def modifier_set(modifiers: Iterable[OpenModifier]) -> FrozenSet[OpenModifier]:
    """Validate and freeze a collection of modifiers."""
    result = frozenset(modifiers)
    for modifier in result:
        check_argument(isinstance(modifier, OpenModifier) and isinstance(modifier, Enum),
                       f"[BLD-0020] expected a modifier but was {modifier!r}")
    return result

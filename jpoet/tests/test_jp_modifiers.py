#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from enum import Enum

import pytest

from jp_errors import BuildError
from jp_field_spec import FieldSpec
from jp_modifiers import UTILITY, Cascade, Modifier, OpenModifier, modifier_set, sorted_modifiers
from jp_names import INT
from jp_type_spec import TypeSpec


class Backend(OpenModifier, Enum):
    SHARED = "shared"


class Tier(OpenModifier, Enum):
    LOW = "low"
    HIGH = "high"


def test_canonical_order():
    modifiers = [Modifier.FINAL, Modifier.STATIC, Modifier.PRIVATE, Modifier.SYNCHRONIZED]
    assert sorted_modifiers(modifiers) == [Modifier.PRIVATE, Modifier.STATIC, Modifier.FINAL, Modifier.SYNCHRONIZED]


def test_custom_families_sort_after_the_canonical_family():
    modifiers = {Tier.HIGH, Modifier.FINAL, UTILITY, Modifier.PUBLIC, Backend.SHARED, Tier.LOW}
    assert sorted_modifiers(modifiers) == [
        Modifier.PUBLIC, Modifier.FINAL, Cascade.UTILITY, Backend.SHARED, Tier.LOW, Tier.HIGH,
    ]


def test_keywords():
    assert Modifier.STRICTFP.keyword == "strictfp"
    assert str(Tier.HIGH) == "high"


def test_builtin_utility_modifier():
    assert UTILITY is Cascade.UTILITY
    assert UTILITY.keyword == "utility"
    assert sorted_modifiers([UTILITY, Modifier.STRICTFP]) == [Modifier.STRICTFP, UTILITY]


def test_custom_modifiers_render_on_declarations():
    field = FieldSpec.builder(INT, "x", UTILITY, Modifier.PRIVATE).build()
    assert str(field) == "private utility int x;\n"
    helper = TypeSpec.class_builder("Helper").add_modifiers(UTILITY, Modifier.PUBLIC, Modifier.FINAL).build()
    assert str(helper) == "public final utility class Helper {\n}\n"


def test_modifier_set_rejects_non_modifiers():
    with pytest.raises(BuildError) as e:
        modifier_set([Modifier.PUBLIC, "static"])
    assert e.value.code == "BLD-0020"
    assert modifier_set([Modifier.PUBLIC, Modifier.PUBLIC]) == frozenset({Modifier.PUBLIC})

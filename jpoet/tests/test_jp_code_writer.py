#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import io

import pytest

from jp_code_block import CodeBlock
from jp_code_writer import CodeWriter
from jp_errors import EmissionError
from jp_modifiers import Modifier
from jp_names import ClassName, ParameterizedTypeName
from jp_type_spec import TypeSpec

STRING = ClassName.get("java.lang", "String")
MATH = ClassName.get("java.lang", "Math")
LIST = ClassName.get("java.util", "List")
MAP = ClassName.get("java.util", "Map")
MAP_ENTRY = MAP.nested_class("Entry")


# ============================================================================
# Name shortening and import suggestions
# ============================================================================

def test_unimported_types_are_qualified_and_suggested(writer, out):
    writer.emit("$T", LIST)
    assert out.getvalue() == "java.util.List"
    assert writer.suggested_imports() == {"List": LIST}


def test_imported_types_are_shortened():
    out = io.StringIO()
    writer = CodeWriter(out, imported_types={"List": LIST, "String": STRING})
    writer.emit("$T", ParameterizedTypeName.get(LIST, STRING))
    assert out.getvalue() == "List<String>"


def test_nested_class_is_shortened_through_its_enclosing_import():
    out = io.StringIO()
    writer = CodeWriter(out, imported_types={"Map": MAP})
    writer.emit("$T", MAP_ENTRY)
    assert out.getvalue() == "Map.Entry"


def test_nested_class_suggests_its_top_level_class(writer, out):
    writer.emit("$T", MAP_ENTRY)
    assert out.getvalue() == "java.util.Map.Entry"
    assert writer.suggested_imports() == {"Map": MAP}


def test_first_suggestion_wins_on_collision(writer):
    writer.emit("$T $T", ClassName.get("a", "Foo"), ClassName.get("b", "Foo"))
    assert writer.suggested_imports() == {"Foo": ClassName.get("a", "Foo")}


def test_same_package_names_are_short_and_block_suggestions(writer, out):
    writer.push_package("com.example")
    writer.emit("$T, $T", ClassName.get("com.example", "Helper"), ClassName.get("other", "Helper"))
    writer.pop_package()
    assert out.getvalue() == "Helper, other.Helper"
    assert writer.suggested_imports() == {}


def test_default_package_types_are_never_suggested(writer, out):
    writer.emit("$T", ClassName.get("", "Taco"))
    assert out.getvalue() == "Taco"
    assert writer.suggested_imports() == {}


def test_shadowed_name_is_qualified_and_logged(debug_context, capsys):
    out = io.StringIO()
    writer = CodeWriter(out, imported_types={"List": ClassName.get("com.example", "List")}, context=debug_context)
    writer.emit("$T", LIST)
    assert out.getvalue() == "java.util.List"
    assert writer.suggested_imports() == {}
    assert "'java.util.List' is shadowed" in capsys.readouterr().err


def test_types_in_javadoc_are_not_suggested(writer, out):
    writer.emit_javadoc(CodeBlock.of("See $T.\n", LIST))
    assert out.getvalue() == "/**\n * See java.util.List.\n */\n"
    assert writer.suggested_imports() == {}


# ============================================================================
# Static import deferral
# ============================================================================

def test_static_import_member_access_drops_the_type():
    out = io.StringIO()
    writer = CodeWriter(out, static_imports=frozenset({"java.lang.Math.max"}))
    writer.emit("$T.max(1, 2)", MATH)
    assert out.getvalue() == "max(1, 2)"
    assert writer.pending_type_name is None
    assert writer.suggested_imports() == {}


def test_static_import_wildcard():
    out = io.StringIO()
    writer = CodeWriter(out, static_imports=frozenset({"java.lang.Math.*"}))
    writer.emit("$T.min(1, 2)", MATH)
    assert out.getvalue() == "min(1, 2)"


def test_unimported_member_keeps_the_type():
    out = io.StringIO()
    writer = CodeWriter(out, static_imports=frozenset({"java.lang.Math.max"}))
    writer.emit("$T.min(1, 2)", MATH)
    assert out.getvalue() == "java.lang.Math.min(1, 2)"
    assert writer.pending_type_name is None


def test_literal_without_member_access_keeps_the_type():
    out = io.StringIO()
    writer = CodeWriter(out, static_imports=frozenset({"java.lang.Math.max"}))
    writer.emit("$T max", MATH)
    assert out.getvalue() == "java.lang.Math max"


def test_type_at_end_of_block_is_not_deferred():
    out = io.StringIO()
    writer = CodeWriter(out, static_imports=frozenset({"java.lang.Math.max"}))
    writer.emit("$T", MATH)
    assert out.getvalue() == "java.lang.Math"
    assert writer.pending_type_name is None


def test_second_pending_type_is_a_fault():
    out = io.StringIO()
    writer = CodeWriter(out, static_imports=frozenset({"java.lang.Math.max"}))
    writer.pending_type_name = ClassName.get("java.lang", "Integer")
    with pytest.raises(EmissionError) as e:
        writer.emit("$T.max(1, 2)", MATH)
    assert e.value.code == "EMT-0030"


# ============================================================================
# Indentation and statements
# ============================================================================

def test_wrapped_statement_lines_get_two_extra_levels(writer, out):
    writer.emit(CodeBlock.builder().add_statement("int x = $L\n+ $L\n+ $L", 1, 2, 3).build())
    assert out.getvalue() == "int x = 1\n    + 2\n    + 3;\n"
    assert writer.indent_level == 0
    assert writer.statement_line == -1


def test_single_line_statement_keeps_indentation(writer, out):
    writer.emit("{\n").indent()
    writer.emit(CodeBlock.builder().add_statement("return $L", 1).build())
    assert out.getvalue() == "{\n  return 1;\n"
    assert writer.indent_level == 1


def test_blank_lines_carry_no_indentation(writer, out):
    writer.emit("{\n").indent(2)
    writer.emit("a\n\nb\n")
    assert out.getvalue() == "{\n    a\n\n    b\n"


def test_custom_indent_unit():
    out = io.StringIO()
    writer = CodeWriter(out, indent_unit="\t")
    writer.emit("{\n").indent().emit("x\n")
    assert out.getvalue() == "{\n\tx\n"


def test_raw_strings_are_not_formats(writer, out):
    writer.emit("price: $5")
    assert out.getvalue() == "price: $5"


def test_comments(writer, out):
    writer.emit_comment(CodeBlock.of("Generated.\n\nDo not edit."))
    assert out.getvalue() == "// Generated.\n//\n// Do not edit.\n"


def test_modifiers_are_emitted_in_canonical_order(writer, out):
    writer.emit_modifiers({Modifier.FINAL, Modifier.STATIC, Modifier.PUBLIC})
    assert out.getvalue() == "public static final "


def test_implicit_modifiers_are_skipped(writer, out):
    writer.emit_modifiers({Modifier.PUBLIC, Modifier.ABSTRACT}, {Modifier.PUBLIC})
    assert out.getvalue() == "abstract "


# ============================================================================
# Faults
# ============================================================================

def test_unindent_below_zero(writer):
    with pytest.raises(EmissionError) as e:
        writer.unindent()
    assert e.value.code == "EMT-0010"


def test_nested_statement_enter(writer):
    with pytest.raises(EmissionError) as e:
        writer.emit(CodeBlock.of("$[a$["))
    assert e.value.code == "EMT-0020"


def test_statement_exit_without_enter(writer):
    with pytest.raises(EmissionError) as e:
        writer.emit(CodeBlock.of("a;$]"))
    assert e.value.code == "EMT-0021"


def test_package_stack(writer):
    writer.push_package("com.example")
    with pytest.raises(EmissionError) as e:
        writer.push_package("com.other")
    assert e.value.code == "EMT-0040"

    writer.pop_package()
    with pytest.raises(EmissionError) as e:
        writer.pop_package()
    assert e.value.code == "EMT-0041"


def test_emission_errors_are_runtime_errors(writer):
    with pytest.raises(RuntimeError):
        writer.unindent(3)


# ============================================================================
# Scope
# ============================================================================

def test_nested_type_shadows_an_imported_type_of_the_same_name():
    other_inner = ClassName.get("other", "Inner")
    outer = (TypeSpec.class_builder("Outer")
             .add_field(ClassName.get("com.example", "Outer", "Inner"), "mine")
             .add_field(other_inner, "theirs")
             .add_type(TypeSpec.class_builder("Inner").build())
             .build())
    out = io.StringIO()
    writer = CodeWriter(out, imported_types={"Inner": other_inner})
    writer.push_package("com.example")
    outer.emit(writer, None, frozenset())
    writer.pop_package()
    assert out.getvalue() == "class Outer {\n  Inner mine;\n\n  other.Inner theirs;\n\n  class Inner {\n  }\n}\n"
    assert writer.suggested_imports() == {}


def test_top_level_type_name_resolves_to_itself():
    node = ClassName.get("com.example", "Node")
    spec = TypeSpec.class_builder("Node").add_field(node, "next").build()
    out = io.StringIO()
    writer = CodeWriter(out)
    writer.push_package("com.example")
    spec.emit(writer, None, frozenset())
    assert out.getvalue() == "class Node {\n  Node next;\n}\n"

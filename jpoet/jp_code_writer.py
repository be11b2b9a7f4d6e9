"""
Code Writer

Converts the source model to text suitable for both humans and javac. The
writer performs a single depth-first pass and tracks:

- the stack of enclosing types, used to shorten class names,
- the indentation level and the statement-wrap line counter,
- at most one type reference whose emission is held back because the
  following literal may turn it into a statically imported member access,
- the types that had to be written fully qualified, which become the
  suggested imports for a second pass.

Indentation is emitted lazily so that blank lines carry no trailing
whitespace. All output goes through `emit_and_indent`.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Mapping, NoReturn, Optional, Sequence, Union

from jp_code_block import CodeBlock
from jp_context import GenerationContext
from jp_errors import EmissionError
from jp_logger import log_debug
from jp_modifiers import OpenModifier, sorted_modifiers
from jp_names import ClassName, TypeName, TypeVariableName
from jp_util import identifier_prefix, is_identifier_start, string_literal_with_double_quotes

# Sentinel: no package has been pushed. Never equal to a real package name.
_NO_PACKAGE = object()


@dataclass
class CodeWriter:
    """
    Stateful emission engine.

    Attributes:
        out:                Sink with a `write(str)` method.
        indent_unit:        Text emitted once per indentation level.
        imported_types:     Simple name -> class that may be referenced by it.
        static_imports:     Static import signatures, `pkg.Type.member` or `pkg.Type.*`.
        context:            Optional generation context, used for debug logging.
        statement_line:     -1 outside a statement; otherwise the number of
                            wrapped lines written since `$[`.
        pending_type_name:  Class reference held back for static-import lookahead.
    """
    out: object
    indent_unit: str = "  "
    imported_types: Mapping[str, ClassName] = field(default_factory=dict)
    static_imports: AbstractSet[str] = frozenset()
    context: Optional[GenerationContext] = None

    indent_level: int = field(default=0, init=False)
    statement_line: int = field(default=-1, init=False)
    pending_type_name: Optional[ClassName] = field(default=None, init=False)

    _javadoc: bool = field(default=False, init=False)
    _comment: bool = field(default=False, init=False)
    _trailing_newline: bool = field(default=False, init=False)
    _package_name: object = field(default=_NO_PACKAGE, init=False)
    _type_spec_stack: List[object] = field(default_factory=list, init=False)
    _static_import_class_names: Dict[str, None] = field(default_factory=dict, init=False)
    _importable_types: Dict[str, ClassName] = field(default_factory=dict, init=False)
    _referenced_names: Dict[str, None] = field(default_factory=dict, init=False)

    def __post_init__(self):
        for signature in self.static_imports:
            self._static_import_class_names[signature[:signature.rfind(".")]] = None

    def fault(self, message: str) -> NoReturn:
        """Abort emission: the model or template violates a writer invariant."""
        raise EmissionError(message)

    # ============================================================================
    # Writer state
    # ============================================================================

    def indent(self, levels: int = 1) -> "CodeWriter":
        self.indent_level += levels
        return self

    def unindent(self, levels: int = 1) -> "CodeWriter":
        if self.indent_level - levels < 0:
            self.fault(f"[EMT-0010] cannot unindent {levels} from {self.indent_level}")
        self.indent_level -= levels
        return self

    def push_package(self, package_name: str) -> "CodeWriter":
        if self._package_name is not _NO_PACKAGE:
            self.fault(f"[EMT-0040] package already set: {self._package_name!r}")
        self._package_name = package_name
        return self

    def pop_package(self) -> "CodeWriter":
        if self._package_name is _NO_PACKAGE:
            self.fault("[EMT-0041] no package to pop")
        self._package_name = _NO_PACKAGE
        return self

    def push_type(self, type_spec) -> "CodeWriter":
        self._type_spec_stack.append(type_spec)
        return self

    def pop_type(self) -> "CodeWriter":
        self._type_spec_stack.pop()
        return self

    # ============================================================================
    # Declaration fragments
    # ============================================================================

    def emit_comment(self, code_block: CodeBlock) -> None:
        self._trailing_newline = True  # Force the '//' prefix on the first line.
        self._comment = True
        try:
            self.emit(code_block)
            self.emit("\n")
        finally:
            self._comment = False

    def emit_javadoc(self, javadoc: CodeBlock) -> None:
        if javadoc.is_empty():
            return
        self.emit("/**\n")
        self._javadoc = True
        try:
            self.emit(javadoc)
        finally:
            self._javadoc = False
        self.emit(" */\n")

    def emit_annotations(self, annotations: Sequence[object], inline: bool) -> None:
        for annotation_spec in annotations:
            annotation_spec.emit(self, inline)
            self.emit(" " if inline else "\n")

    def emit_modifiers(self, modifiers: AbstractSet[OpenModifier],
                       implicit_modifiers: AbstractSet[OpenModifier] = frozenset()) -> None:
        """Emit `modifiers` in canonical order, skipping those in `implicit_modifiers`."""
        for modifier in sorted_modifiers(modifiers):
            if modifier in implicit_modifiers:
                continue
            self.emit_and_indent(modifier.keyword)
            self.emit_and_indent(" ")

    def emit_type_variables(self, type_variables: Sequence[TypeVariableName]) -> None:
        """
        Emit type variables with their bounds. Only used where the variables
        are declared; every other reference omits the bounds.
        """
        if not type_variables:
            return
        self.emit("<")
        first_type_variable = True
        for type_variable in type_variables:
            if not first_type_variable:
                self.emit(", ")
            self.emit("$L", type_variable.name)
            first_bound = True
            for bound in type_variable.bounds:
                self.emit(" extends $T" if first_bound else " & $T", bound)
                first_bound = False
            first_type_variable = False
        self.emit(">")

    # ============================================================================
    # Format block emission
    # ============================================================================

    def emit(self, code: Union[str, CodeBlock], *args: object) -> "CodeWriter":
        """
        Emit a CodeBlock, a format string with arguments, or (with no
        arguments) a raw string that is not interpreted as a format.
        """
        if isinstance(code, CodeBlock):
            return self._emit_code_block(code)
        if not args:
            return self.emit_and_indent(code)
        return self._emit_code_block(CodeBlock.of(code, *args))

    def _emit_code_block(self, code_block: CodeBlock) -> "CodeWriter":
        a = 0
        parts = code_block.format_parts
        for i, part in enumerate(parts):
            if part == "$L":
                self._emit_literal(code_block.args[a])
                a += 1

            elif part == "$N":
                self.emit_and_indent(code_block.args[a])
                a += 1

            elif part == "$S":
                string = code_block.args[a]
                a += 1
                # None is emitted as the literal null: no quotes.
                self.emit_and_indent(
                    string_literal_with_double_quotes(string, self.indent_unit) if string is not None else "null")

            elif part == "$T":
                type_name: TypeName = code_block.args[a]
                a += 1
                if type_name.is_annotated:
                    type_name.emit_annotations(self)
                    type_name = type_name.without_annotations()
                # Hold the type back if a literal follows and the type owns a static import.
                if isinstance(type_name, ClassName) and i + 1 < len(parts):
                    if not parts[i + 1].startswith("$"):
                        if type_name.canonical_name in self._static_import_class_names:
                            if self.pending_type_name is not None:
                                self.fault("[EMT-0030] a type is already pending for static import: "
                                           f"{self.pending_type_name.canonical_name}")
                            self.pending_type_name = type_name
                            continue
                type_name.emit(self)

            elif part == "$$":
                self.emit_and_indent("$")

            elif part == "$>":
                self.indent()

            elif part == "$<":
                self.unindent()

            elif part == "$[":
                if self.statement_line != -1:
                    self.fault("[EMT-0020] statement enter $[ followed by statement enter $[")
                self.statement_line = 0

            elif part == "$]":
                if self.statement_line == -1:
                    self.fault("[EMT-0021] statement exit $] has no matching statement enter $[")
                if self.statement_line > 0:
                    self.unindent(2)  # End of a multi-line statement.
                self.statement_line = -1

            else:
                if self.pending_type_name is not None:
                    deferred = self.pending_type_name
                    self.pending_type_name = None
                    if part.startswith(".") and self._emit_static_import_member(deferred.canonical_name, part):
                        continue
                    deferred.emit(self)
                self.emit_and_indent(part)
        return self

    def _emit_static_import_member(self, canonical: str, part: str) -> bool:
        """Emit `part` without its leading dot if it accesses a statically imported member."""
        member_access = part[1:]
        if not member_access or not is_identifier_start(member_access[0]):
            return False
        member_name = identifier_prefix(member_access)
        explicit = canonical + "." + member_name
        wildcard = canonical + ".*"
        if explicit in self.static_imports or wildcard in self.static_imports:
            self.emit_and_indent(member_access)
            return True
        return False

    def _emit_literal(self, o: object) -> None:
        from jp_annotation_spec import AnnotationSpec
        from jp_type_spec import TypeSpec

        if isinstance(o, TypeSpec):
            o.emit(self, None, frozenset())
        elif isinstance(o, AnnotationSpec):
            o.emit(self, True)
        elif isinstance(o, CodeBlock):
            self.emit(o)
        elif isinstance(o, bool):
            self.emit_and_indent("true" if o else "false")
        elif o is None:
            self.emit_and_indent("null")
        else:
            self.emit_and_indent(str(o))

    # ============================================================================
    # Name resolution
    # ============================================================================

    def lookup_name(self, class_name: ClassName) -> str:
        """
        Return the best name to identify `class_name` with in the current
        context: the shortest suffix that resolves back to it through the
        enclosing types and imports. Names visible through inheritance are
        not considered.
        """
        name_resolved = False
        c: Optional[ClassName] = class_name
        while c is not None:
            resolved = self._resolve(c.simple_name)
            name_resolved = resolved is not None

            if resolved == c:
                suffix_offset = len(c.simple_names) - 1
                return ".".join(class_name.simple_names[suffix_offset:])
            c = c.enclosing_class_name()

        # Resolved, but to a different class: only the qualified name is unambiguous.
        if name_resolved:
            log_debug(self.context, f"'{class_name.canonical_name}' is shadowed, using qualified name")
            return class_name.canonical_name

        if self._package_name == class_name.package_name:
            self._referenced_names[class_name.top_level_class_name().simple_name] = None
            return ".".join(class_name.simple_names)

        # Fully qualified for now; suggest importing it for a later pass.
        if not self._javadoc:
            self._importable_type(class_name)

        return class_name.canonical_name

    def _importable_type(self, class_name: ClassName) -> None:
        if class_name.package_name == "":
            return
        top_level_class_name = class_name.top_level_class_name()
        simple_name = top_level_class_name.simple_name
        # On collision, the first one wins.
        if simple_name not in self._importable_types:
            self._importable_types[simple_name] = top_level_class_name

    def _resolve(self, simple_name: str) -> Optional[ClassName]:
        """
        Return the class referenced by `simple_name` in the current nesting
        context and imports, or None.
        """
        # A member type of the current (possibly nested) type or its enclosing types.
        for i in range(len(self._type_spec_stack) - 1, -1, -1):
            type_spec = self._type_spec_stack[i]
            for visible_child in type_spec.type_specs:
                if visible_child.name == simple_name:
                    return self._stack_class_name(i, simple_name)

        # The top-level type itself.
        if self._type_spec_stack and self._type_spec_stack[0].name == simple_name:
            return ClassName(self._current_package(), (simple_name,))

        imported_type = self.imported_types.get(simple_name)
        if imported_type is not None:
            return imported_type

        return None

    def _stack_class_name(self, stack_depth: int, simple_name: str) -> ClassName:
        """Return the class named `simple_name` nested in the type at `stack_depth`."""
        names = [self._type_spec_stack[i].name for i in range(stack_depth + 1)]
        names.append(simple_name)
        return ClassName(self._current_package(), tuple(names))

    def _current_package(self) -> str:
        return self._package_name if self._package_name is not _NO_PACKAGE else ""

    # ============================================================================
    # Output
    # ============================================================================

    def emit_and_indent(self, s: str) -> "CodeWriter":
        """
        Emit `s`, adding indentation (and javadoc / comment prefixes) at the
        start of each non-empty line. Every write to `out` goes through here.
        """
        first = True
        for line in s.split("\n"):
            if not first:
                # Blank lines in javadoc and comments keep their prefix.
                if (self._javadoc or self._comment) and self._trailing_newline:
                    self._emit_indentation()
                    self.out.write(" *" if self._javadoc else "//")
                self.out.write("\n")
                self._trailing_newline = True
                if self.statement_line != -1:
                    if self.statement_line == 0:
                        self.indent(2)  # First wrapped line of a statement.
                    self.statement_line += 1

            first = False
            if not line:
                continue  # Don't indent empty lines.

            if self._trailing_newline:
                self._emit_indentation()
                if self._javadoc:
                    self.out.write(" * ")
                elif self._comment:
                    self.out.write("// ")

            self.out.write(line)
            self._trailing_newline = False
        return self

    def _emit_indentation(self) -> None:
        self.out.write(self.indent_unit * self.indent_level)

    def suggested_imports(self) -> Dict[str, ClassName]:
        """
        Return the types that should have been imported for the emitted code,
        by simple name. On simple name collisions the first use wins; names
        that were also referenced from the current package are left out.
        """
        return {
            simple_name: class_name
            for simple_name, class_name in self._importable_types.items()
            if simple_name not in self._referenced_names
        }

"""
Format blocks

A CodeBlock is a fragment of source text built from a format string and
arguments. Format strings interleave literal text with placeholders:

    $L  emits a literal value with no escaping (strings, numbers, nested
        CodeBlocks, TypeSpecs and AnnotationSpecs).
    $N  emits a name: a string, or the name of a parameter, field, method
        or type spec.
    $S  escapes and quotes a string; None renders as `null`.
    $T  emits a type reference, shortened against imports and scope.
    $$  emits a dollar sign.
    $>  increases the indentation level.
    $<  decreases the indentation level.
    $[  begins a statement; wrapped lines are indented by two extra levels.
    $]  ends a statement.

Placeholders that take an argument may be positional ("$L") or carry a
1-based index ("$2L"), but a single format string cannot mix both.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import io
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from jp_names import TypeName
from jp_util import RenderedEquality, check_argument, fail

_ARG_PLACEHOLDERS = "LNST"
_NO_ARG_PLACEHOLDERS = "$><[]"


@dataclass(frozen=True, eq=False)
class CodeBlock(RenderedEquality):
    """
    Immutable sequence of format parts. Every part is either literal text or a
    two-character placeholder; `args` holds one entry per argument placeholder,
    in order of appearance.
    """
    format_parts: Tuple[str, ...] = ()
    args: Tuple[object, ...] = ()

    @staticmethod
    def of(format: str, *args: object) -> "CodeBlock":
        return CodeBlockBuilder().add(format, *args).build()

    @staticmethod
    def builder() -> "CodeBlockBuilder":
        return CodeBlockBuilder()

    @staticmethod
    def join(code_blocks: Iterable["CodeBlock"], separator: str) -> "CodeBlock":
        """Concatenate `code_blocks`, placing the literal `separator` between them."""
        builder = CodeBlockBuilder()
        first = True
        for code_block in code_blocks:
            if not first:
                builder.add(separator.replace("$", "$$"))
            builder.add_block(code_block)
            first = False
        return builder.build()

    def is_empty(self) -> bool:
        return len(self.format_parts) == 0

    def to_builder(self) -> "CodeBlockBuilder":
        builder = CodeBlockBuilder()
        builder.format_parts.extend(self.format_parts)
        builder.args.extend(self.args)
        return builder

    def __str__(self) -> str:
        from jp_code_writer import CodeWriter

        out = io.StringIO()
        CodeWriter(out).emit(self)
        return out.getvalue()


_EMPTY = CodeBlock()


@dataclass
class CodeBlockBuilder:
    """Append-only accumulator for a CodeBlock. Not thread-safe."""
    format_parts: List[str] = field(default_factory=list)
    args: List[object] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.format_parts) == 0

    def add(self, format: str, *args: object) -> "CodeBlockBuilder":
        has_relative = False
        has_indexed = False
        relative_index = 0
        indexed_used = [False] * len(args)

        p = 0
        while p < len(format):
            if format[p] != "$":
                next_p = format.find("$", p + 1)
                if next_p == -1:
                    next_p = len(format)
                self.format_parts.append(format[p:next_p])
                p = next_p
                continue

            p += 1  # '$'
            index_start = p
            while p < len(format) and format[p].isdigit():
                p += 1
            index_end = p
            check_argument(p < len(format), f"[FMT-0010] dangling format characters in {format!r}")
            c = format[p]
            p += 1

            if c in _NO_ARG_PLACEHOLDERS:
                check_argument(index_start == index_end,
                               f"[FMT-0016] $$, $>, $<, $[ and $] may not have an index: {format!r}")
                self.format_parts.append("$" + c)
                continue

            check_argument(c in _ARG_PLACEHOLDERS, f"[FMT-0011] invalid format placeholder '${c}' in {format!r}")
            if index_start < index_end:
                index = int(format[index_start:index_end]) - 1
                has_indexed = True
                check_argument(0 <= index < len(args),
                               f"[FMT-0012] index {index + 1} for {format!r} not in range "
                               f"(received {len(args)} arguments)")
                indexed_used[index] = True
            else:
                index = relative_index
                has_relative = True
                relative_index += 1
                check_argument(index < len(args), f"[FMT-0014] not enough arguments for {format!r}")
            check_argument(not (has_indexed and has_relative),
                           f"[FMT-0013] cannot mix indexed and positional parameters in {format!r}")

            self._add_argument(format, c, args[index])
            self.format_parts.append("$" + c)

        if has_indexed:
            unused = [str(i + 1) for i, used in enumerate(indexed_used) if not used]
            check_argument(not unused, f"[FMT-0015] unused arguments {', '.join(unused)} for {format!r}")
        else:
            check_argument(relative_index == len(args),
                           f"[FMT-0014] expected {relative_index} arguments for {format!r} "
                           f"but received {len(args)}")
        return self

    def _add_argument(self, format: str, c: str, arg: object) -> None:
        if c == "N":
            self.args.append(_arg_to_name(arg))
        elif c == "L":
            self.args.append(arg)
        elif c == "S":
            self.args.append(None if arg is None else str(arg))
        elif c == "T":
            check_argument(isinstance(arg, TypeName), f"[FMT-0021] expected type but was {arg!r} in {format!r}")
            self.args.append(arg)
        else:
            fail(f"[FMT-0011] invalid format placeholder '${c}' in {format!r}")

    def add_block(self, code_block: CodeBlock) -> "CodeBlockBuilder":
        self.format_parts.extend(code_block.format_parts)
        self.args.extend(code_block.args)
        return self

    def add_statement(self, format: str, *args: object) -> "CodeBlockBuilder":
        self.add("$[")
        self.add(format, *args)
        self.add(";\n$]")
        return self

    def begin_control_flow(self, control_flow: str, *args: object) -> "CodeBlockBuilder":
        """
        Open a braced block, e.g. begin_control_flow("if ($N != null)", name).
        """
        self.add(control_flow + " {\n", *args)
        self.indent()
        return self

    def next_control_flow(self, control_flow: str, *args: object) -> "CodeBlockBuilder":
        """Close the current block and open the next one, e.g. "else"."""
        self.unindent()
        self.add("} " + control_flow + " {\n", *args)
        self.indent()
        return self

    def end_control_flow(self, control_flow: Optional[str] = None, *args: object) -> "CodeBlockBuilder":
        """
        Close the current block. A trailing control flow such as
        "while ($N)" is emitted after the brace, for do/while loops.
        """
        self.unindent()
        if control_flow is None:
            self.add("}\n")
        else:
            self.add("} " + control_flow + ";\n", *args)
        return self

    def indent(self) -> "CodeBlockBuilder":
        self.format_parts.append("$>")
        return self

    def unindent(self) -> "CodeBlockBuilder":
        self.format_parts.append("$<")
        return self

    def build(self) -> CodeBlock:
        if not self.format_parts:
            return _EMPTY
        return CodeBlock(tuple(self.format_parts), tuple(self.args))


def _arg_to_name(arg: object) -> str:
    from jp_field_spec import FieldSpec
    from jp_method_spec import MethodSpec
    from jp_parameter_spec import ParameterSpec
    from jp_type_spec import TypeSpec

    if isinstance(arg, str):
        return arg
    if isinstance(arg, (ParameterSpec, FieldSpec, MethodSpec, TypeSpec)) and arg.name is not None:
        return arg.name
    fail(f"[FMT-0020] expected name but was {arg!r}")

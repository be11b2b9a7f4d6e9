"""
Java source files

A JavaFile pairs a top-level TypeSpec with its package. Rendering takes two
passes over the model: the first writes into a NullSink and only collects the
types that had to be written fully qualified; the second emits the real text
with those types imported.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Union

from jp_code_block import CodeBlock, CodeBlockBuilder
from jp_code_writer import CodeWriter
from jp_context import GenerationContext
from jp_errors import BuildError
from jp_logger import log_debug, log_error, log_info, log_stage
from jp_names import ClassName
from jp_type_spec import TypeSpec
from jp_util import NullSink, RenderedEquality, check_argument, is_name


@dataclass(frozen=True, eq=False)
class JavaFile(RenderedEquality):
    package_name: str
    type_spec: TypeSpec
    file_comment: CodeBlock = CodeBlock()
    static_imports: FrozenSet[str] = frozenset()
    indent: str = "  "
    context: Optional[GenerationContext] = None

    @staticmethod
    def builder(package_name: str, type_spec: TypeSpec,
                context: Optional[GenerationContext] = None) -> "JavaFileBuilder":
        check_argument(package_name == "" or is_name(package_name),
                       f"[BLD-0011] not a valid package name: {package_name!r}")
        check_argument(isinstance(type_spec, TypeSpec) and type_spec.name is not None,
                       f"[BLD-0080] expected a named type spec but was {type_spec!r}")
        builder = JavaFileBuilder(package_name, type_spec, context=context)
        if context is not None:
            builder.indent_unit = context.indent
        return builder

    def to_builder(self) -> "JavaFileBuilder":
        builder = JavaFileBuilder(self.package_name, self.type_spec, context=self.context)
        builder.file_comment.add_block(self.file_comment)
        builder.static_imports.extend(sorted(self.static_imports))
        builder.indent_unit = self.indent
        return builder

    # ============================================================================
    # Emission
    # ============================================================================

    def suggested_imports(self) -> Dict[str, ClassName]:
        """Run the collection pass and return the imports it suggests, by simple name."""
        log_stage(self.context, "Collecting imports for", self._describe())
        writer = CodeWriter(NullSink(), self.indent, static_imports=self.static_imports, context=self.context)
        self.emit(writer)
        suggested = writer.suggested_imports()
        for simple_name, class_name in suggested.items():
            log_debug(self.context, f"Suggested import {class_name.canonical_name} for '{simple_name}'")
        return suggested

    def write_to(self, out) -> None:
        """Render this file to `out`, any sink with a `write(str)` method."""
        imports = self.suggested_imports()
        log_stage(self.context, "Emitting", self._describe())
        writer = CodeWriter(out, self.indent, imports, self.static_imports, self.context)
        self.emit(writer)

    def emit(self, writer: CodeWriter) -> None:
        writer.push_package(self.package_name)

        if not self.file_comment.is_empty():
            writer.emit_comment(self.file_comment)

        if self.package_name:
            writer.emit("package $L;\n", self.package_name)
            writer.emit("\n")

        if self.static_imports:
            for signature in sorted(self.static_imports):
                writer.emit("import static $L;\n", signature)
            writer.emit("\n")

        imported = sorted(writer.imported_types.values())
        for class_name in imported:
            writer.emit("import $L;\n", class_name.canonical_name)
        if imported:
            writer.emit("\n")

        self.type_spec.emit(writer, None, frozenset())

        writer.pop_package()

    def to_string(self) -> str:
        out = io.StringIO()
        self.write_to(out)
        return out.getvalue()

    def __str__(self) -> str:
        return self.to_string()

    # ============================================================================
    # File output
    # ============================================================================

    def write_to_path(self, directory: Union[str, Path]) -> Path:
        """
        Write this file under `directory`, in the subdirectory matching its
        package, and return the path of the written file.
        """
        context = self.context or GenerationContext.default()
        directory = Path(directory)
        if directory.exists() and not directory.is_dir():
            raise BuildError(f"[OUT-0010] path {directory} exists but is not a directory.")

        output_directory = directory
        if self.package_name:
            output_directory = directory.joinpath(*self.package_name.split("."))
        output_path = output_directory / f"{self.type_spec.name}{context.file_extension}"

        try:
            output_directory.mkdir(parents=True, exist_ok=True)
            output_path.write_text(self.to_string(), encoding=context.encoding)
        except OSError as e:
            log_error(self.context, f"error: cannot write '{output_path}': {e}")
            raise

        log_info(self.context, f"Wrote {output_path}")
        return output_path

    def _describe(self) -> str:
        if self.package_name:
            return f"{self.package_name}.{self.type_spec.name}"
        return self.type_spec.name


@dataclass
class JavaFileBuilder:
    package_name: str
    type_spec: TypeSpec
    file_comment: CodeBlockBuilder = field(default_factory=CodeBlockBuilder)
    static_imports: List[str] = field(default_factory=list)
    indent_unit: str = "  "
    context: Optional[GenerationContext] = None

    def add_file_comment(self, format: str, *args: object) -> "JavaFileBuilder":
        self.file_comment.add(format, *args)
        return self

    def add_static_import(self, owner: Union[ClassName, str], *names: str) -> "JavaFileBuilder":
        """
        Add `import static owner.name;` for each name. `owner` is a ClassName
        or a canonical class name; a name of "*" imports every member.
        """
        canonical = owner.canonical_name if isinstance(owner, ClassName) else owner
        check_argument(is_name(canonical), f"[BLD-0080] expected a class name but was {owner!r}")
        check_argument(len(names) > 0, "[BLD-0010] no member names given for static import")
        for name in names:
            check_argument(name == "*" or (is_name(name) and "." not in name),
                           f"[BLD-0010] not a valid name: {name!r}")
            self.static_imports.append(canonical + "." + name)
        return self

    def indent(self, indent: str) -> "JavaFileBuilder":
        self.indent_unit = indent
        return self

    def build(self) -> JavaFile:
        return JavaFile(
            package_name=self.package_name,
            type_spec=self.type_spec,
            file_comment=self.file_comment.build(),
            static_imports=frozenset(self.static_imports),
            indent=self.indent_unit,
            context=self.context,
        )

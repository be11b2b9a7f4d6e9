"""
Type names

Value objects naming the types that generated code refers to: primitive
keywords, declared classes (package + nested simple names), parameterized
types, arrays, wildcards and type variables.

Names are immutable and compare structurally; rendering is delegated to the
CodeWriter so that class names are shortened against the current scope and
imports.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import io
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, ClassVar, Dict, Optional, Tuple

from jp_util import RenderedEquality, check_argument, fail, is_name

if TYPE_CHECKING:
    from jp_annotation_spec import AnnotationSpec
    from jp_code_writer import CodeWriter


@dataclass(frozen=True, eq=False)
class TypeName(RenderedEquality):
    """
    Base class for all type names.
    Only its subclasses are instantiated; `annotations` are type-use annotations
    rendered inline before the type.
    """
    annotations: Tuple["AnnotationSpec", ...] = field(default=(), kw_only=True)

    @property
    def is_annotated(self) -> bool:
        return len(self.annotations) > 0

    def annotated(self, *annotations: "AnnotationSpec") -> "TypeName":
        return replace(self, annotations=self.annotations + tuple(annotations))

    def without_annotations(self) -> "TypeName":
        return replace(self, annotations=())

    def is_primitive(self) -> bool:
        """True for primitive keywords other than void."""
        return False

    def is_boxed_primitive(self) -> bool:
        return False

    def box(self) -> "TypeName":
        return self

    def unbox(self) -> "TypeName":
        fail(f"[BLD-0071] cannot unbox {self}")

    def emit_annotations(self, writer: "CodeWriter") -> None:
        for annotation in self.annotations:
            annotation.emit(writer, True)
            writer.emit(" ")

    def emit(self, writer: "CodeWriter") -> None:
        raise NotImplementedError(type(self).__name__)

    def __str__(self) -> str:
        from jp_code_writer import CodeWriter

        out = io.StringIO()
        CodeWriter(out).emit("$T", self)
        return out.getvalue()


@dataclass(frozen=True, eq=False)
class PrimitiveTypeName(TypeName):
    keyword: str

    def is_primitive(self) -> bool:
        return self.keyword != "void"

    def box(self) -> "TypeName":
        boxed = _BOXES[self.keyword]
        return boxed.annotated(*self.annotations) if self.annotations else boxed

    def emit(self, writer: "CodeWriter") -> None:
        writer.emit_and_indent(self.keyword)


VOID = PrimitiveTypeName("void")
BOOLEAN = PrimitiveTypeName("boolean")
BYTE = PrimitiveTypeName("byte")
SHORT = PrimitiveTypeName("short")
INT = PrimitiveTypeName("int")
LONG = PrimitiveTypeName("long")
CHAR = PrimitiveTypeName("char")
FLOAT = PrimitiveTypeName("float")
DOUBLE = PrimitiveTypeName("double")


@dataclass(frozen=True, eq=False)
class ClassName(TypeName):
    """
    A fully-qualified class name for top-level and member classes.

    `simple_names` lists the class and its enclosing classes outer-to-inner,
    so `java.util.Map.Entry` is ClassName("java.util", ("Map", "Entry")).
    """
    package_name: str
    simple_names: Tuple[str, ...]

    OBJECT: ClassVar["ClassName"]

    @staticmethod
    def get(package_name: str, simple_name: str, *simple_names: str) -> "ClassName":
        check_argument(package_name == "" or is_name(package_name),
                       f"[BLD-0011] not a valid package name: {package_name!r}")
        names = (simple_name,) + tuple(simple_names)
        for name in names:
            check_argument(is_name(name) and "." not in name, f"[BLD-0010] not a valid name: {name!r}")
        return ClassName(package_name, names)

    @staticmethod
    def best_guess(class_name_string: str) -> "ClassName":
        """
        Guess a class name from a dotted string: leading lowercase segments
        form the package, the remaining capitalized segments are classes.
        """
        segments = class_name_string.split(".")
        p = 0
        while p < len(segments) and segments[p][:1].islower():
            p += 1
        simple = segments[p:]
        if not simple or not all(s[:1].isupper() and is_name(s) for s in simple):
            fail(f"[BLD-0074] couldn't make a guess for {class_name_string!r}")
        return ClassName.get(".".join(segments[:p]), *simple)

    @property
    def simple_name(self) -> str:
        return self.simple_names[-1]

    @property
    def canonical_name(self) -> str:
        if self.package_name:
            return self.package_name + "." + ".".join(self.simple_names)
        return ".".join(self.simple_names)

    def enclosing_class_name(self) -> Optional["ClassName"]:
        if len(self.simple_names) == 1:
            return None
        return ClassName(self.package_name, self.simple_names[:-1])

    def top_level_class_name(self) -> "ClassName":
        return ClassName(self.package_name, self.simple_names[:1])

    def nested_class(self, name: str) -> "ClassName":
        check_argument(is_name(name) and "." not in name, f"[BLD-0010] not a valid name: {name!r}")
        return ClassName(self.package_name, self.simple_names + (name,))

    def peer_class(self, name: str) -> "ClassName":
        check_argument(is_name(name) and "." not in name, f"[BLD-0010] not a valid name: {name!r}")
        return ClassName(self.package_name, self.simple_names[:-1] + (name,))

    def reflection_name(self) -> str:
        """The name as a class loader knows it: nested classes joined by '$'."""
        nested = "$".join(self.simple_names)
        return f"{self.package_name}.{nested}" if self.package_name else nested

    def is_boxed_primitive(self) -> bool:
        return self.without_annotations() in _UNBOXES

    def unbox(self) -> TypeName:
        primitive = _UNBOXES.get(self.without_annotations())
        if primitive is None:
            fail(f"[BLD-0071] cannot unbox {self.canonical_name}")
        return primitive.annotated(*self.annotations) if self.annotations else primitive

    def emit(self, writer: "CodeWriter") -> None:
        writer.emit_and_indent(writer.lookup_name(self))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ClassName) or type(other) is not type(self):
            return False
        return (self.package_name == other.package_name
                and self.simple_names == other.simple_names
                and self.annotations == other.annotations)

    def __hash__(self) -> int:
        return hash((self.package_name, self.simple_names))

    def __lt__(self, other: "ClassName") -> bool:
        return self.canonical_name < other.canonical_name


ClassName.OBJECT = ClassName("java.lang", ("Object",))

_BOXES: Dict[str, ClassName] = {
    "void": ClassName("java.lang", ("Void",)),
    "boolean": ClassName("java.lang", ("Boolean",)),
    "byte": ClassName("java.lang", ("Byte",)),
    "short": ClassName("java.lang", ("Short",)),
    "int": ClassName("java.lang", ("Integer",)),
    "long": ClassName("java.lang", ("Long",)),
    "char": ClassName("java.lang", ("Character",)),
    "float": ClassName("java.lang", ("Float",)),
    "double": ClassName("java.lang", ("Double",)),
}

_UNBOXES: Dict[ClassName, PrimitiveTypeName] = {
    boxed: PrimitiveTypeName(keyword) for keyword, boxed in _BOXES.items()
}


def _check_type_argument(arg: object) -> TypeName:
    check_argument(isinstance(arg, TypeName), f"[BLD-0080] expected a type name but was {arg!r}")
    check_argument(not isinstance(arg, PrimitiveTypeName),
                   f"[BLD-0070] primitive type {arg} cannot be used here")
    return arg


@dataclass(frozen=True, eq=False)
class ParameterizedTypeName(TypeName):
    raw_type: ClassName
    type_arguments: Tuple[TypeName, ...]

    @staticmethod
    def get(raw_type: ClassName, *type_arguments: TypeName) -> "ParameterizedTypeName":
        check_argument(isinstance(raw_type, ClassName), f"[BLD-0080] expected a class name but was {raw_type!r}")
        check_argument(len(type_arguments) > 0, f"[BLD-0073] no type arguments: {raw_type.canonical_name}")
        return ParameterizedTypeName(raw_type, tuple(_check_type_argument(a) for a in type_arguments))

    def emit(self, writer: "CodeWriter") -> None:
        self.raw_type.emit(writer)
        writer.emit_and_indent("<")
        first = True
        for argument in self.type_arguments:
            if not first:
                writer.emit_and_indent(", ")
            writer.emit("$T", argument)
            first = False
        writer.emit_and_indent(">")


@dataclass(frozen=True, eq=False)
class ArrayTypeName(TypeName):
    component_type: TypeName

    @staticmethod
    def of(component_type: TypeName) -> "ArrayTypeName":
        check_argument(isinstance(component_type, TypeName) and component_type != VOID,
                       f"[BLD-0070] invalid array component type: {component_type!r}")
        return ArrayTypeName(component_type)

    def emit(self, writer: "CodeWriter") -> None:
        writer.emit("$T[]", self.component_type)


@dataclass(frozen=True, eq=False)
class WildcardTypeName(TypeName):
    upper_bounds: Tuple[TypeName, ...]
    lower_bounds: Tuple[TypeName, ...] = ()

    def __post_init__(self):
        check_argument(len(self.upper_bounds) == 1, f"[BLD-0072] unexpected extends bounds: {self.upper_bounds!r}")
        check_argument(len(self.lower_bounds) <= 1, f"[BLD-0072] unexpected super bounds: {self.lower_bounds!r}")
        for bound in self.upper_bounds + self.lower_bounds:
            _check_type_argument(bound)

    @staticmethod
    def subtype_of(upper_bound: TypeName) -> "WildcardTypeName":
        """`? extends upper_bound`"""
        return WildcardTypeName((upper_bound,))

    @staticmethod
    def supertype_of(lower_bound: TypeName) -> "WildcardTypeName":
        """`? super lower_bound`"""
        return WildcardTypeName((ClassName.OBJECT,), (lower_bound,))

    def emit(self, writer: "CodeWriter") -> None:
        if self.lower_bounds:
            writer.emit("? super $T", self.lower_bounds[0])
        elif self.upper_bounds[0] == ClassName.OBJECT:
            writer.emit_and_indent("?")
        else:
            writer.emit("? extends $T", self.upper_bounds[0])


@dataclass(frozen=True, eq=False)
class TypeVariableName(TypeName):
    """A type variable; bounds are rendered only where it is declared."""
    name: str
    bounds: Tuple[TypeName, ...] = ()

    @staticmethod
    def get(name: str, *bounds: TypeName) -> "TypeVariableName":
        check_argument(is_name(name) and "." not in name, f"[BLD-0010] not a valid name: {name!r}")
        kept = tuple(_check_type_argument(b) for b in bounds if b != ClassName.OBJECT)
        return TypeVariableName(name, kept)

    def with_bounds(self, *bounds: TypeName) -> "TypeVariableName":
        return TypeVariableName.get(self.name, *(self.bounds + tuple(bounds))).annotated(*self.annotations)

    def emit(self, writer: "CodeWriter") -> None:
        writer.emit_and_indent(self.name)

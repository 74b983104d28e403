"""
Static type descriptors attached to tree nodes.

The rewrite core never resolves types itself; the engine that built the tree
attaches a ``JavaType`` to every expression. The descriptor supports the three
assignability questions the core asks (exception-typed, marker-typed,
boolean-typed) plus the capability probe on a logger's declared type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


THROWABLE = "java.lang.Throwable"
OBJECT = "java.lang.Object"

TypeKind = Literal["class", "record", "primitive", "array", "unknown"]

_NUMERIC_PRIMITIVES = frozenset({"byte", "short", "int", "long", "float", "double", "char"})


@dataclass(frozen=True)
class JavaType:
    """Declared type of an expression.

    Attributes:
        fqn: Fully-qualified name (``java.lang.String``) or primitive name (``int``).
        supertypes: Every supertype and interface the type is assignable to.
        type_kind: Shape of the type.
        methods: Declared method names, used for capability probes.
        components: Record component names (only for ``type_kind == "record"``).
        element: Element type for arrays.
    """

    fqn: str
    supertypes: frozenset[str] = frozenset()
    type_kind: TypeKind = "class"
    methods: frozenset[str] = frozenset()
    components: tuple[str, ...] = ()
    element: JavaType | None = None

    def is_assignable_to(self, fqn: str) -> bool:
        """Check whether a value of this type can be assigned to ``fqn``."""
        return self.fqn == fqn or fqn in self.supertypes

    @property
    def is_string(self) -> bool:
        return self.fqn == "java.lang.String"

    @property
    def is_boolean(self) -> bool:
        return self.fqn in ("boolean", "java.lang.Boolean")

    @property
    def is_numeric(self) -> bool:
        return self.type_kind == "primitive" and self.fqn in _NUMERIC_PRIMITIVES

    @property
    def is_exception(self) -> bool:
        return self.is_assignable_to(THROWABLE)

    @property
    def is_object_array(self) -> bool:
        return self.type_kind == "array" and self.element is not None and self.element.fqn == OBJECT

    def declares(self, method_name: str) -> bool:
        """Capability probe: does the type declare ``method_name``."""
        return method_name in self.methods


def primitive(name: str) -> JavaType:
    return JavaType(fqn=name, type_kind="primitive")


def class_type(
    fqn: str,
    *supertypes: str,
    methods: frozenset[str] = frozenset(),
) -> JavaType:
    """Build a class type that is always assignable to ``java.lang.Object``."""
    return JavaType(fqn=fqn, supertypes=frozenset((*supertypes, OBJECT)), methods=methods)


def exception_type(fqn: str = "java.lang.Exception") -> JavaType:
    """Build a checked or unchecked exception type."""
    return class_type(fqn, "java.lang.Exception", THROWABLE)


def record_type(fqn: str, *components: str) -> JavaType:
    return JavaType(
        fqn=fqn,
        supertypes=frozenset({"java.lang.Record", OBJECT}),
        type_kind="record",
        components=components,
    )


def array_of(element: JavaType) -> JavaType:
    return JavaType(
        fqn=f"{element.fqn}[]", type_kind="array", element=element, supertypes=frozenset({OBJECT})
    )


STRING = class_type("java.lang.String", "java.lang.CharSequence")
OBJECT_TYPE = JavaType(fqn=OBJECT)
BOOLEAN = primitive("boolean")
INT = primitive("int")
LONG = primitive("long")
DOUBLE = primitive("double")
CHAR = primitive("char")
VOID = primitive("void")
NULL = JavaType(fqn="null", type_kind="unknown")
UNKNOWN = JavaType(fqn="<unknown>", type_kind="unknown")
SUPPLIER = class_type("java.util.function.Supplier")
OBJECT_ARRAY = array_of(OBJECT_TYPE)

"""
Expression ADT - the closed set of expression shapes the rewrite core sees.

Type Safety:
    - All expression nodes are frozen dataclasses (immutable, hashable)
    - Literal discriminators enable exhaustive pattern matching
    - ``Expression`` is the closed union; unanticipated shapes arrive as ``Opaque``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from logrewrite.tree.types import (
    BOOLEAN,
    CHAR,
    DOUBLE,
    INT,
    LONG,
    NULL,
    STRING,
    SUPPLIER,
    UNKNOWN,
    JavaType,
    array_of,
    primitive,
)

if TYPE_CHECKING:
    from logrewrite.tree.statements import Statement


LiteralKind = Literal["string", "char", "int", "long", "float", "double", "boolean", "null"]

_LITERAL_TYPES: dict[str, JavaType] = {
    "string": STRING,
    "char": CHAR,
    "int": INT,
    "long": LONG,
    "float": primitive("float"),
    "double": DOUBLE,
    "boolean": BOOLEAN,
    "null": NULL,
}


@dataclass(frozen=True)
class Constant:
    """Literal value as it evaluates at runtime (not its source spelling).

    Attributes:
        value: Runtime value; strings hold unescaped text.
        literal_kind: Which literal syntax produced the value.
    """

    value: str | int | float | bool | None
    literal_kind: LiteralKind = "string"
    kind: Literal["Constant"] = "Constant"

    @property
    def type(self) -> JavaType:
        return _LITERAL_TYPES[self.literal_kind]

    @property
    def is_string(self) -> bool:
        return self.literal_kind == "string"


@dataclass(frozen=True)
class Identifier:
    """Reference to a local, parameter, field or ``this``."""

    name: str
    type: JavaType = UNKNOWN
    kind: Literal["Identifier"] = "Identifier"


@dataclass(frozen=True)
class FieldAccess:
    """``target.name`` field read."""

    target: Expression
    name: str
    type: JavaType = UNKNOWN
    kind: Literal["FieldAccess"] = "FieldAccess"


@dataclass(frozen=True)
class MethodCall:
    """Method invocation.

    Attributes:
        target: Receiver expression; ``None`` for an implicit receiver.
        name: Simple method name.
        args: Actual arguments in source order.
        type: Return type.
        is_static: Whether the resolved method is static.
        param_count: Declared parameter count; defaults to ``len(args)``.
        declaring_type: Type that declares the method, when known.
    """

    target: Expression | None
    name: str
    args: tuple[Expression, ...] = ()
    type: JavaType = UNKNOWN
    is_static: bool = False
    param_count: int | None = None
    declaring_type: JavaType | None = None
    kind: Literal["MethodCall"] = "MethodCall"

    @property
    def declared_params(self) -> int:
        return len(self.args) if self.param_count is None else self.param_count


@dataclass(frozen=True)
class Concat:
    """String concatenation ``left + right`` (String-typed ``+``)."""

    left: Expression
    right: Expression
    kind: Literal["Concat"] = "Concat"

    @property
    def type(self) -> JavaType:
        return STRING


@dataclass(frozen=True)
class BinaryOp:
    """Boolean, comparison or arithmetic binary expression."""

    operator: str
    left: Expression
    right: Expression
    type: JavaType = UNKNOWN
    kind: Literal["BinaryOp"] = "BinaryOp"


@dataclass(frozen=True)
class NewInstance:
    """Object allocation ``new T(args)``."""

    type: JavaType
    args: tuple[Expression, ...] = ()
    kind: Literal["NewInstance"] = "NewInstance"


@dataclass(frozen=True)
class NewArray:
    """Array allocation with an initializer ``new T[]{...}``."""

    element_type: JavaType
    elements: tuple[Expression, ...] = ()
    kind: Literal["NewArray"] = "NewArray"

    @property
    def type(self) -> JavaType:
        return array_of(self.element_type)


@dataclass(frozen=True)
class Lambda:
    """Lambda expression; a zero-parameter lambda is a deferred-evaluation thunk.

    Attributes:
        params: Parameter names.
        body: Expression body, or a statement block for ``{ ... }`` bodies.
    """

    params: tuple[str, ...]
    body: Expression | tuple[Statement, ...]
    type: JavaType = SUPPLIER
    kind: Literal["Lambda"] = "Lambda"


@dataclass(frozen=True)
class Opaque:
    """Any expression shape the core does not model (ternaries, casts, ...)."""

    source: str
    type: JavaType = UNKNOWN
    kind: Literal["Opaque"] = "Opaque"


Expression = (
    Constant
    | Identifier
    | FieldAccess
    | MethodCall
    | Concat
    | BinaryOp
    | NewInstance
    | NewArray
    | Lambda
    | Opaque
)


def thunk(body: Expression) -> Lambda:
    """Wrap ``body`` in a zero-argument supplier ``() -> body``."""
    return Lambda(params=(), body=body)


__all__ = [
    "BinaryOp",
    "Concat",
    "Constant",
    "Expression",
    "FieldAccess",
    "Identifier",
    "Lambda",
    "LiteralKind",
    "MethodCall",
    "NewArray",
    "NewInstance",
    "Opaque",
    "thunk",
]

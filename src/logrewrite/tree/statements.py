"""
Statement ADT and the compilation-unit container.

Statements are immutable; a rewrite builds new statement tuples and the caller
installs them only once a whole block has been rewritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from logrewrite.tree.expressions import Expression


@dataclass(frozen=True)
class ExpressionStatement:
    """An expression evaluated for its side effect, e.g. ``LOG.info(...);``."""

    expression: Expression
    kind: Literal["ExpressionStatement"] = "ExpressionStatement"


@dataclass(frozen=True)
class IfStatement:
    """``if (condition) { then_body } else { else_body }``.

    ``else_body`` is ``None`` when there is no ``else`` branch.
    """

    condition: Expression
    then_body: tuple[Statement, ...]
    else_body: tuple[Statement, ...] | None = None
    kind: Literal["IfStatement"] = "IfStatement"


@dataclass(frozen=True)
class CompoundStatement:
    """Any statement owning a nested block: loops, ``try``, ``catch``, ``synchronized``.

    Attributes:
        header: Source text of the statement header, e.g. ``for (String s : items)``.
        body: Nested statements.
    """

    header: str
    body: tuple[Statement, ...]
    kind: Literal["CompoundStatement"] = "CompoundStatement"

    @property
    def is_catch(self) -> bool:
        return self.header.lstrip().startswith("catch")


@dataclass(frozen=True)
class OpaqueStatement:
    """Any statement the core does not look into (declarations, returns, ...)."""

    source: str
    kind: Literal["OpaqueStatement"] = "OpaqueStatement"


Statement = ExpressionStatement | IfStatement | CompoundStatement | OpaqueStatement


@dataclass(frozen=True)
class MethodDeclaration:
    """A method with its body block."""

    name: str
    body: tuple[Statement, ...]
    kind: Literal["MethodDeclaration"] = "MethodDeclaration"


@dataclass(frozen=True)
class CompilationUnit:
    """One source file's already-parsed tree."""

    path: str
    methods: tuple[MethodDeclaration, ...]
    kind: Literal["CompilationUnit"] = "CompilationUnit"


__all__ = [
    "CompilationUnit",
    "CompoundStatement",
    "ExpressionStatement",
    "IfStatement",
    "MethodDeclaration",
    "OpaqueStatement",
    "Statement",
]

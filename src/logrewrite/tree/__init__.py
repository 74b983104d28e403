"""
Tree model consumed and produced by the rewrite core.

This package re-exports the expression and statement ADTs, the type
descriptors, the printer and the template-instantiation primitive so callers
can build and inspect trees from a single import.
"""

from __future__ import annotations

from logrewrite.tree.expressions import (
    BinaryOp,
    Concat,
    Constant,
    Expression,
    FieldAccess,
    Identifier,
    Lambda,
    MethodCall,
    NewArray,
    NewInstance,
    Opaque,
    thunk,
)
from logrewrite.tree.printer import (
    render_expression,
    render_statement,
    render_statements,
    render_unit,
)
from logrewrite.tree.statements import (
    CompilationUnit,
    CompoundStatement,
    ExpressionStatement,
    IfStatement,
    MethodDeclaration,
    OpaqueStatement,
    Statement,
)
from logrewrite.tree.template import instantiate_arguments
from logrewrite.tree.transform import map_statements, walk_expression, walk_statements
from logrewrite.tree.types import JavaType

__all__ = [
    "BinaryOp",
    "CompilationUnit",
    "CompoundStatement",
    "Concat",
    "Constant",
    "Expression",
    "ExpressionStatement",
    "FieldAccess",
    "Identifier",
    "IfStatement",
    "JavaType",
    "Lambda",
    "MethodCall",
    "MethodDeclaration",
    "NewArray",
    "NewInstance",
    "Opaque",
    "OpaqueStatement",
    "Statement",
    "instantiate_arguments",
    "map_statements",
    "render_expression",
    "render_statement",
    "render_statements",
    "render_unit",
    "thunk",
    "walk_expression",
    "walk_statements",
]

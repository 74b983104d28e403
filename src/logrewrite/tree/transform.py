"""Traversal helpers over expressions and statements."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import replace

from logrewrite.tree.expressions import (
    BinaryOp,
    Concat,
    Expression,
    FieldAccess,
    Lambda,
    MethodCall,
    NewArray,
    NewInstance,
)
from logrewrite.tree.statements import (
    CompoundStatement,
    ExpressionStatement,
    IfStatement,
    Statement,
)


ExpressionMap = Callable[[Expression], Expression]


def walk_expression(expr: Expression) -> Iterator[Expression]:
    """Yield ``expr`` and every sub-expression, including those in lambda blocks."""
    yield expr
    match expr:
        case FieldAccess(target=target):
            yield from walk_expression(target)
        case MethodCall(target=target, args=args):
            if target is not None:
                yield from walk_expression(target)
            for arg in args:
                yield from walk_expression(arg)
        case Concat(left=left, right=right) | BinaryOp(left=left, right=right):
            yield from walk_expression(left)
            yield from walk_expression(right)
        case NewInstance(args=args):
            for arg in args:
                yield from walk_expression(arg)
        case NewArray(elements=elements):
            for element in elements:
                yield from walk_expression(element)
        case Lambda(body=tuple() as body):
            for stmt in body:
                yield from walk_statement(stmt)
        case Lambda(body=body):
            yield from walk_expression(body)
        case _:
            pass


def walk_statement(stmt: Statement, *, skip_catch: bool = False) -> Iterator[Expression]:
    """Yield every expression reachable from ``stmt``.

    With ``skip_catch`` the bodies of ``catch`` clauses are not entered.
    """
    match stmt:
        case ExpressionStatement(expression=expression):
            yield from walk_expression(expression)
        case IfStatement(condition=condition, then_body=then_body, else_body=else_body):
            yield from walk_expression(condition)
            for inner in (*then_body, *(else_body or ())):
                yield from walk_statement(inner, skip_catch=skip_catch)
        case CompoundStatement(body=body):
            if not (skip_catch and stmt.is_catch):
                for inner in body:
                    yield from walk_statement(inner, skip_catch=skip_catch)
        case _:
            pass


def walk_statements(statements: Sequence[Statement]) -> Iterator[Expression]:
    for stmt in statements:
        yield from walk_statement(stmt)


def _map_all(exprs: tuple[Expression, ...], fn: ExpressionMap) -> tuple[Expression, ...]:
    return tuple(map_expression(e, fn) for e in exprs)


def map_expression(expr: Expression, fn: ExpressionMap) -> Expression:
    """Rebuild ``expr`` top-down with ``fn`` applied to every node.

    A node that ``fn`` replaces is not descended into.
    """
    mapped = fn(expr)
    if mapped is not expr:
        return mapped
    match expr:
        case FieldAccess(target=target):
            return replace(expr, target=map_expression(target, fn))
        case MethodCall(target=target, args=args):
            new_target = None if target is None else map_expression(target, fn)
            return replace(expr, target=new_target, args=_map_all(args, fn))
        case Concat(left=left, right=right):
            return replace(expr, left=map_expression(left, fn), right=map_expression(right, fn))
        case BinaryOp(left=left, right=right):
            return replace(expr, left=map_expression(left, fn), right=map_expression(right, fn))
        case NewInstance(args=args):
            return replace(expr, args=_map_all(args, fn))
        case NewArray(elements=elements):
            return replace(expr, elements=_map_all(elements, fn))
        case Lambda(body=tuple() as body):
            return replace(expr, body=map_statements(body, fn))
        case Lambda(body=body):
            return replace(expr, body=map_expression(body, fn))
        case _:
            return expr


def map_statement(stmt: Statement, fn: ExpressionMap) -> Statement:
    match stmt:
        case ExpressionStatement(expression=expression):
            return replace(stmt, expression=map_expression(expression, fn))
        case IfStatement(condition=condition, then_body=then_body, else_body=else_body):
            return replace(
                stmt,
                condition=map_expression(condition, fn),
                then_body=map_statements(then_body, fn),
                else_body=None if else_body is None else map_statements(else_body, fn),
            )
        case CompoundStatement(body=body):
            return replace(stmt, body=map_statements(body, fn))
        case _:
            return stmt


def map_statements(statements: Sequence[Statement], fn: ExpressionMap) -> tuple[Statement, ...]:
    """Apply ``map_expression`` to every expression of every statement."""
    return tuple(map_statement(stmt, fn) for stmt in statements)


__all__ = [
    "ExpressionMap",
    "map_expression",
    "map_statement",
    "map_statements",
    "walk_expression",
    "walk_statement",
    "walk_statements",
]

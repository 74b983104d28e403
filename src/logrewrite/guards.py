"""
Unit driver for expensive-argument protection.

Walks every block of a method body bottom-up (``if``/``else`` bodies,
compound statement bodies, block-bodied lambdas) and, per block:

1. converts eligible Expensive log calls to the deferred-evaluation chain when
   the logger's declared type supports one (probed once per logger type and
   cached for the unit),
2. runs the guard planner over the resulting statements.

Calls already under an enablement check for their level are not eligible.
The set of such levels is passed down the recursion. An ``if`` whose
condition mentions an enablement check without being exactly one check is
ambiguous: it is counted and left untouched, body included.

Block results are returned, never written back through shared state; a block
is replaced only after all of it has been rewritten.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from logrewrite.calls import match_log_call, match_log_statement
from logrewrite.errors.planner import (
    AccumulatorInvariantError,
    AmbiguousGuardCondition,
    DeferredMessageUnsupported,
)
from logrewrite.fluent import to_fluent
from logrewrite.frameworks import Level, LoggingFramework
from logrewrite.planner import LevelPredicate, fold_statements
from logrewrite.result import Failure, Success
from logrewrite.tree.expressions import BinaryOp, Expression, Lambda, MethodCall, NewInstance
from logrewrite.tree.printer import render_expression
from logrewrite.tree.statements import (
    CompoundStatement,
    ExpressionStatement,
    IfStatement,
    Statement,
)
from logrewrite.tree.transform import walk_expression, walk_statement
from logrewrite.tree.types import JavaType


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WrapStats:
    """Counts reported by one wrap pass."""

    guards_synthesized: int = 0
    guards_merged: int = 0
    fluent_converted: int = 0
    fluent_fallbacks: int = 0
    ambiguous_guards: int = 0
    blocks_kept: int = 0

    def __add__(self, other: WrapStats) -> WrapStats:
        return WrapStats(
            guards_synthesized=self.guards_synthesized + other.guards_synthesized,
            guards_merged=self.guards_merged + other.guards_merged,
            fluent_converted=self.fluent_converted + other.fluent_converted,
            fluent_fallbacks=self.fluent_fallbacks + other.fluent_fallbacks,
            ambiguous_guards=self.ambiguous_guards + other.ambiguous_guards,
            blocks_kept=self.blocks_kept + other.blocks_kept,
        )


@dataclass
class FluentProbe:
    """Per-unit cache of the deferred-evaluation capability per logger type."""

    framework: LoggingFramework
    _known: dict[JavaType, bool] = field(default_factory=dict)

    def __call__(self, logger_type: JavaType) -> bool:
        if logger_type not in self._known:
            self._known[logger_type] = self.framework.supports_fluent(logger_type)
        return self._known[logger_type]


@dataclass(frozen=True)
class WrapContext:
    framework: LoggingFramework
    level_predicate: LevelPredicate
    probe: FluentProbe
    prefer_fluent: bool = True
    strict: bool = False
    guarded: frozenset[Level] = frozenset()

    def eligible(self, level: Level) -> bool:
        return self.level_predicate(level) and level not in self.guarded

    def under(self, levels: frozenset[Level]) -> WrapContext:
        return self if not levels else replace(self, guarded=self.guarded | levels)


def guarded_levels_of(condition: Expression, framework: LoggingFramework) -> frozenset[Level]:
    """Levels known to be enabled when ``condition`` is true (checks joined by ``&&``)."""
    level = framework.enabled_level(condition)
    if level is not None:
        return frozenset({level})
    if isinstance(condition, BinaryOp) and condition.operator == "&&":
        return guarded_levels_of(condition.left, framework) | guarded_levels_of(condition.right, framework)
    return frozenset()


def _mentions_enabled_check(condition: Expression, framework: LoggingFramework) -> bool:
    return any(
        isinstance(node, MethodCall) and framework.enabled_level(node) is not None
        for node in walk_expression(condition)
    )


def _rewrite_expression(expr: Expression, ctx: WrapContext) -> tuple[Expression, WrapStats]:
    """Rewrite the statement blocks of lambdas nested anywhere in ``expr``."""
    match expr:
        case Lambda(body=tuple() as body):
            new_body, stats = _rewrite_block(body, ctx)
            return (expr if new_body == body else replace(expr, body=new_body)), stats
        case MethodCall(target=target, args=args):
            new_target, target_stats = (
                (None, WrapStats()) if target is None else _rewrite_expression(target, ctx)
            )
            new_args, args_stats = _rewrite_all(args, ctx)
            if new_target == target and new_args == args:
                return expr, target_stats + args_stats
            return replace(expr, target=new_target, args=new_args), target_stats + args_stats
        case NewInstance(args=args):
            new_args, stats = _rewrite_all(args, ctx)
            return (expr if new_args == args else replace(expr, args=new_args)), stats
        case _:
            return expr, WrapStats()


def _rewrite_all(
    exprs: tuple[Expression, ...],
    ctx: WrapContext,
) -> tuple[tuple[Expression, ...], WrapStats]:
    results = [_rewrite_expression(e, ctx) for e in exprs]
    stats = sum((s for _, s in results), WrapStats())
    return tuple(e for e, _ in results), stats


def _rewrite_nested(stmt: Statement, ctx: WrapContext) -> tuple[Statement, WrapStats]:
    """Rewrite the blocks owned by ``stmt`` (not ``stmt`` itself)."""
    match stmt:
        case IfStatement(condition=condition, then_body=then_body, else_body=else_body):
            levels = guarded_levels_of(condition, ctx.framework)
            exact = ctx.framework.enabled_level(condition) is not None
            if not exact and _mentions_enabled_check(condition, ctx.framework):
                reason = AmbiguousGuardCondition(condition=render_expression(condition))
                logger.debug("leaving guard as-is: %s", reason)
                return stmt, WrapStats(ambiguous_guards=1)
            new_then, then_stats = _rewrite_block(then_body, ctx.under(levels))
            new_else, else_stats = (
                (None, WrapStats()) if else_body is None else _rewrite_block(else_body, ctx)
            )
            stats = then_stats + else_stats
            if new_then == then_body and new_else == else_body:
                return stmt, stats
            return replace(stmt, then_body=new_then, else_body=new_else), stats
        case CompoundStatement(body=body):
            new_body, stats = _rewrite_block(body, ctx)
            return (stmt if new_body == body else replace(stmt, body=new_body)), stats
        case ExpressionStatement(expression=expression):
            new_expression, stats = _rewrite_expression(expression, ctx)
            if new_expression == expression:
                return stmt, stats
            return replace(stmt, expression=new_expression), stats
        case _:
            return stmt, WrapStats()


def _convert_fluent(stmt: Statement, ctx: WrapContext) -> tuple[Statement, WrapStats]:
    call = match_log_statement(stmt, ctx.framework)
    if call is None or not ctx.prefer_fluent or not ctx.eligible(call.level):
        return stmt, WrapStats()
    if not ctx.probe(call.logger.type):
        return stmt, WrapStats()
    match to_fluent(call, ctx.framework):
        case Success(chain):
            logger.debug("deferred %s -> %s", render_expression(call.node), render_expression(chain))
            return ExpressionStatement(chain), WrapStats(fluent_converted=1)
        case Failure(DeferredMessageUnsupported() as skip):
            logger.debug("guarding instead of deferring %s: %s", render_expression(call.node), skip)
            return stmt, WrapStats(fluent_fallbacks=1)
        case Failure(_):
            return stmt, WrapStats()


def _rewrite_block(
    statements: Sequence[Statement],
    ctx: WrapContext,
) -> tuple[tuple[Statement, ...], WrapStats]:
    nested = [_rewrite_nested(stmt, ctx) for stmt in statements]
    converted = [_convert_fluent(stmt, ctx) for stmt, _ in nested]
    block = tuple(stmt for stmt, _ in converted)
    stats = sum((s for _, s in nested), WrapStats()) + sum((s for _, s in converted), WrapStats())

    try:
        final = fold_statements(block, ctx.eligible, ctx.framework)
    except AccumulatorInvariantError:
        if ctx.strict:
            raise
        logger.error("guard planning failed; block left unplanned", exc_info=True)
        return block, stats + WrapStats(blocks_kept=1)
    planned = WrapStats(guards_synthesized=final.synthesized, guards_merged=final.merged)
    return final.output, stats + planned


@dataclass(frozen=True)
class WrapResult:
    statements: tuple[Statement, ...]
    stats: WrapStats


def wrap_expensive_statements(
    statements: Sequence[Statement],
    framework: LoggingFramework,
    level_predicate: LevelPredicate,
    *,
    prefer_fluent: bool = True,
    strict: bool = False,
    probe: FluentProbe | None = None,
) -> WrapResult:
    """Protect Expensive log arguments in a method body.

    Args:
        statements: Method body.
        framework: Strategy selected for the unit.
        level_predicate: Levels eligible for protection.
        prefer_fluent: Use the deferred-evaluation chain where the logger supports it.
        strict: Propagate ``AccumulatorInvariantError`` instead of keeping the block.
        probe: Capability cache shared across the unit's method bodies.

    Returns:
        The rewritten body and what was done to it.
    """
    ctx = WrapContext(
        framework=framework,
        level_predicate=level_predicate,
        probe=probe if probe is not None else FluentProbe(framework),
        prefer_fluent=prefer_fluent,
        strict=strict,
    )
    new_statements, stats = _rewrite_block(statements, ctx)
    return WrapResult(new_statements, stats)


def _max_logged_level(
    body: Sequence[Statement],
    guard_logger: Expression,
    framework: LoggingFramework,
) -> Level | None:
    levels = [
        call.level
        for stmt in body
        for node in walk_statement(stmt, skip_catch=True)
        if (call := match_log_call(node, framework)) is not None and call.logger == guard_logger
    ]
    return max(levels, key=lambda level: level.rank, default=None)


def _align(stmt: Statement, framework: LoggingFramework) -> Statement:
    match stmt:
        case IfStatement(condition=condition, then_body=then_body, else_body=else_body):
            aligned = replace(
                stmt,
                then_body=align_guard_levels(then_body, framework),
                else_body=None if else_body is None else align_guard_levels(else_body, framework),
            )
            level = framework.enabled_level(condition)
            if level is None or else_body is not None or not isinstance(condition, MethodCall):
                return aligned
            if condition.target is None:
                return aligned
            used = _max_logged_level(aligned.then_body, condition.target, framework)
            if used is None or used == level:
                return aligned
            check = framework.enabled_check(condition.target, used)
            if check is None:
                return aligned
            logger.debug("aligned %s -> %s", render_expression(condition), render_expression(check))
            return replace(aligned, condition=check)
        case CompoundStatement(body=body):
            return replace(stmt, body=align_guard_levels(body, framework))
        case _:
            return stmt


def align_guard_levels(
    statements: Sequence[Statement],
    framework: LoggingFramework,
) -> tuple[Statement, ...]:
    """Make ``if (is<L>Enabled())`` check the highest level its body logs at.

    Only ``if`` statements without ``else`` whose condition is exactly one
    enablement check are changed; log calls inside ``catch`` bodies are not
    counted.
    """
    return tuple(_align(stmt, framework) for stmt in statements)


__all__ = [
    "FluentProbe",
    "WrapContext",
    "WrapResult",
    "WrapStats",
    "align_guard_levels",
    "guarded_levels_of",
    "wrap_expensive_statements",
]

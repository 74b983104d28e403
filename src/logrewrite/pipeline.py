"""
Per-unit rewrite pipeline.

Runs the enabled passes over every method of one compilation unit, in order:

1. expand ``new Object[]{...}`` final arguments into varargs
2. parameterize concatenated messages
3. strip ``.toString()`` from format arguments
4. complete exception logging
5. guard or defer Expensive log calls
6. align guard levels with the calls they protect

Units share nothing, so callers may process them concurrently.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from functools import reduce

from logrewrite.calls import LogCall, match_log_call
from logrewrite.config import RewriteConfig
from logrewrite.errors.template import ParameterizeSkip
from logrewrite.exceptions import complete_exception_logging
from logrewrite.frameworks import LoggingFramework
from logrewrite.guards import FluentProbe, WrapStats, align_guard_levels, wrap_expensive_statements
from logrewrite.parameterize import parameterize_call, strip_to_string
from logrewrite.reorder import expand_argument_array
from logrewrite.result import Result, Success, partition_results
from logrewrite.tree.expressions import Expression, MethodCall
from logrewrite.tree.statements import CompilationUnit, MethodDeclaration, Statement
from logrewrite.tree.transform import map_statements, walk_statements


logger = logging.getLogger(__name__)

CallRewrite = Callable[[LogCall], MethodCall | None]


@dataclass(frozen=True)
class RewriteReport:
    """What ``optimize_unit`` did to one unit."""

    path: str
    arrays_expanded: int = 0
    parameterized: int = 0
    parameterize_skips: dict[str, int] = field(default_factory=dict)
    to_string_stripped: int = 0
    exceptions_completed: int = 0
    guards_aligned: int = 0
    wrap: WrapStats = WrapStats()

    @property
    def changed(self) -> bool:
        wrap = self.wrap
        return bool(
            self.arrays_expanded
            or self.parameterized
            or self.to_string_stripped
            or self.exceptions_completed
            or self.guards_aligned
            or wrap.guards_synthesized
            or wrap.guards_merged
            or wrap.fluent_converted
        )

    def merge(self, other: RewriteReport) -> RewriteReport:
        return RewriteReport(
            path=self.path,
            arrays_expanded=self.arrays_expanded + other.arrays_expanded,
            parameterized=self.parameterized + other.parameterized,
            parameterize_skips=dict(Counter(self.parameterize_skips) + Counter(other.parameterize_skips)),
            to_string_stripped=self.to_string_stripped + other.to_string_stripped,
            exceptions_completed=self.exceptions_completed + other.exceptions_completed,
            guards_aligned=self.guards_aligned + other.guards_aligned,
            wrap=self.wrap + other.wrap,
        )


def _log_calls(statements: Sequence[Statement], framework: LoggingFramework) -> list[LogCall]:
    return [
        call
        for expr in walk_statements(statements)
        if (call := match_log_call(expr, framework)) is not None
    ]


def _install(
    statements: Sequence[Statement],
    replacements: dict[Expression, Expression],
) -> tuple[Statement, ...]:
    if not replacements:
        return tuple(statements)
    return map_statements(statements, lambda expr: replacements.get(expr, expr))


def rewrite_calls(
    statements: Sequence[Statement],
    framework: LoggingFramework,
    step: CallRewrite,
) -> tuple[tuple[Statement, ...], int]:
    """Apply a per-call rewrite to every log call; return the new body and the count."""
    calls = _log_calls(statements, framework)
    replacements: dict[Expression, Expression] = {
        call.node: new for call in calls if (new := step(call)) is not None
    }
    count = sum(1 for call in calls if call.node in replacements)
    return _install(statements, replacements), count


def parameterize_statements(
    statements: Sequence[Statement],
    framework: LoggingFramework,
    *,
    remove_to_string: bool = False,
) -> tuple[tuple[Statement, ...], int, dict[str, int]]:
    """Parameterize every log call; return the new body, the count and skip reasons."""
    calls = _log_calls(statements, framework)
    results: dict[Expression, Result[MethodCall, ParameterizeSkip]] = {
        call.node: parameterize_call(call, framework, remove_to_string=remove_to_string) for call in calls
    }
    _, skips = partition_results(list(results.values()))
    replacements: dict[Expression, Expression] = {
        node: result.value for node, result in results.items() if isinstance(result, Success)
    }
    count = sum(1 for call in calls if call.node in replacements)
    return _install(statements, replacements), count, dict(Counter(skip.kind for skip in skips))


def _align_body(
    statements: tuple[Statement, ...],
    framework: LoggingFramework,
) -> tuple[tuple[Statement, ...], int]:
    aligned = align_guard_levels(statements, framework)
    # alignment only swaps conditions, so both walks visit the same shapes
    changed = sum(
        1
        for old, new in zip(walk_statements(statements), walk_statements(aligned))
        if old != new and framework.enabled_level(old) is not None
    )
    return aligned, changed


def optimize_method(
    method: MethodDeclaration,
    config: RewriteConfig,
    path: str,
    probe: FluentProbe,
) -> tuple[MethodDeclaration, RewriteReport]:
    framework = config.logging_framework
    body = method.body
    expanded = parameterized = stripped = completed = aligned = 0
    skips: dict[str, int] = {}
    wrap = WrapStats()

    if config.parameterize:
        body, expanded = rewrite_calls(body, framework, expand_argument_array)
        body, parameterized, skips = parameterize_statements(
            body, framework, remove_to_string=config.remove_to_string
        )
    if config.remove_to_string:
        body, stripped = rewrite_calls(body, framework, strip_to_string)
    if config.complete_exception_logging:
        body, completed = rewrite_calls(
            body, framework, lambda call: complete_exception_logging(call, framework)
        )
    if config.wrap_expensive:
        wrapped = wrap_expensive_statements(
            body,
            framework,
            config.guards_level,
            prefer_fluent=config.prefer_fluent,
            strict=config.strict,
            probe=probe,
        )
        body, wrap = wrapped.statements, wrapped.stats
    if config.align_guard_levels:
        body, aligned = _align_body(body, framework)

    report = RewriteReport(
        path=path,
        arrays_expanded=expanded,
        parameterized=parameterized,
        parameterize_skips=skips,
        to_string_stripped=stripped,
        exceptions_completed=completed,
        guards_aligned=aligned,
        wrap=wrap,
    )
    return (method if body == method.body else replace(method, body=body)), report


def optimize_unit(
    unit: CompilationUnit,
    config: RewriteConfig | None = None,
) -> tuple[CompilationUnit, RewriteReport]:
    """Run the configured passes over every method of ``unit``.

    Args:
        unit: Parsed compilation unit.
        config: Options; defaults to ``RewriteConfig()``.

    Returns:
        The rewritten unit (``unit`` itself when nothing changed) and a report.

    Raises:
        AccumulatorInvariantError: Only with ``config.strict``.
    """
    config = config if config is not None else RewriteConfig()
    probe = FluentProbe(config.logging_framework)
    outcomes = [optimize_method(method, config, unit.path, probe) for method in unit.methods]

    report = reduce(RewriteReport.merge, (r for _, r in outcomes), RewriteReport(path=unit.path))
    methods = tuple(method for method, _ in outcomes)

    if report.changed:
        logger.info(
            "%s: %d parameterized, %d guard(s) added, %d merged, %d deferred",
            unit.path,
            report.parameterized,
            report.wrap.guards_synthesized,
            report.wrap.guards_merged,
            report.wrap.fluent_converted,
        )
    else:
        logger.debug("%s: unchanged", unit.path)
    if report.wrap.blocks_kept:
        logger.warning("%s: %d block(s) kept after planner errors", unit.path, report.wrap.blocks_kept)

    new_unit = unit if methods == unit.methods else replace(unit, methods=methods)
    return new_unit, report


__all__ = [
    "CallRewrite",
    "RewriteReport",
    "optimize_method",
    "optimize_unit",
    "parameterize_statements",
    "rewrite_calls",
]

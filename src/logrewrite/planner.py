"""
Guard-insertion planner.

Scans one statement sequence and merges contiguous runs of same-level log
statements into a single enablement guard::

    LOG.debug("a");                      if (LOG.isDebugEnabled()) {
    LOG.debug("b: {}", compute());  =>       LOG.debug("a");
    LOG.info("c: {}", other());              LOG.debug("b: {}", compute());
                                         }
                                         if (LOG.isInfoEnabled()) {
                                             LOG.info("c: {}", other());
                                         }

Each statement is viewed as a ``LogStatement`` (an eligible bare log call),
a ``GuardedBlock`` (an existing ``if`` whose condition is exactly one
enablement check and whose body holds only log calls at that level on the
same logger) or ``Other``. A run is keyed by (level, logger); a change of key
flushes the run:

- a run holding an existing guard and any other statement is emitted as that
  first guard, with the whole run as its body
- a guard-free run holding an unguarded Expensive call is emitted as one new
  guard
- any other run is emitted exactly as it was read

Statements are never reordered. The state is an immutable value folded over
the sequence; the new sequence exists only once the whole fold is done.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from functools import reduce

from logrewrite.calls import LogCall, match_log_statement
from logrewrite.classifier import is_expensive
from logrewrite.errors.planner import AccumulatorInvariantError
from logrewrite.frameworks import SLF4J, Level, LoggingFramework
from logrewrite.tree.expressions import Expression, MethodCall
from logrewrite.tree.statements import IfStatement, Statement


logger = logging.getLogger(__name__)

LevelPredicate = Callable[[Level], bool]


@dataclass(frozen=True)
class RunKey:
    """Identity of a run: one level on one logger expression."""

    level: Level
    logger: Expression


Kind = RunKey | None


@dataclass(frozen=True)
class LogStatement:
    statement: Statement
    call: LogCall

    @property
    def key(self) -> RunKey:
        return RunKey(self.call.level, self.call.logger)

    @property
    def is_expensive(self) -> bool:
        return any(is_expensive(arg) for arg in self.call.arguments)


@dataclass(frozen=True)
class GuardedBlock:
    """Existing guard whose body consists solely of log calls at ``level``."""

    statement: IfStatement
    level: Level
    logger: Expression

    @property
    def key(self) -> RunKey:
        return RunKey(self.level, self.logger)

    @property
    def inner(self) -> tuple[Statement, ...]:
        return self.statement.then_body


@dataclass(frozen=True)
class Other:
    statement: Statement


StatementView = LogStatement | GuardedBlock | Other


def kind_of(view: StatementView) -> Kind:
    match view:
        case LogStatement() | GuardedBlock():
            return view.key
        case Other():
            return None


def view_statement(
    stmt: Statement,
    framework: LoggingFramework,
    eligible: LevelPredicate,
) -> StatementView:
    """Classify one statement for the planner."""
    call = match_log_statement(stmt, framework)
    if call is not None:
        return LogStatement(stmt, call) if eligible(call.level) else Other(stmt)
    if not isinstance(stmt, IfStatement) or stmt.else_body is not None or not stmt.then_body:
        return Other(stmt)

    level = framework.enabled_level(stmt.condition)
    condition = stmt.condition
    if level is None or not eligible(level):
        return Other(stmt)
    if not isinstance(condition, MethodCall) or condition.target is None:
        return Other(stmt)
    guard_logger = condition.target
    inner = [match_log_statement(s, framework) for s in stmt.then_body]
    if not all(c is not None and c.level == level and c.logger == guard_logger for c in inner):
        return Other(stmt)
    return GuardedBlock(stmt, level, guard_logger)


@dataclass(frozen=True)
class AccumulatorState:
    """Planner state between two statements.

    Attributes:
        run: Key of the run being accumulated, ``None`` when idle.
        buffered: Unwrapped log statements of the current run.
        originals: The current run's statements exactly as read.
        reused_guard: First existing guard of the run, if any.
        expensive: Whether the run holds an unguarded Expensive call.
        output: Statements already emitted.
        synthesized: Guards created so far.
        merged: Runs folded into an existing guard so far.
    """

    run: Kind = None
    buffered: tuple[Statement, ...] = ()
    originals: tuple[Statement, ...] = ()
    reused_guard: IfStatement | None = None
    expensive: bool = False
    output: tuple[Statement, ...] = ()
    synthesized: int = 0
    merged: int = 0


def check_invariant(state: AccumulatorState) -> AccumulatorState:
    """Raise ``AccumulatorInvariantError`` if the run bookkeeping is inconsistent."""
    idle = state.run is None
    if idle != (not state.buffered) or idle != (not state.originals):
        raise AccumulatorInvariantError(
            f"run={state.run!r} with {len(state.buffered)} buffered, {len(state.originals)} read"
        )
    if idle and (state.reused_guard is not None or state.expensive):
        raise AccumulatorInvariantError("idle accumulator still holds run data")
    return state


def _flush(state: AccumulatorState, framework: LoggingFramework) -> AccumulatorState:
    if state.run is None:
        return state
    emitted: tuple[Statement, ...]
    synthesized, merged = state.synthesized, state.merged
    if state.reused_guard is not None and len(state.originals) > 1:
        emitted = (replace(state.reused_guard, then_body=state.buffered),)
        merged += 1
    elif not state.expensive or state.reused_guard is not None:
        emitted = state.originals
    else:
        check = framework.enabled_check(state.run.logger, state.run.level)
        if check is None:
            raise AccumulatorInvariantError(f"{framework.name} cannot guard {state.run.level.value}")
        emitted = (IfStatement(condition=check, then_body=state.buffered),)
        synthesized += 1
    return AccumulatorState(
        output=state.output + emitted,
        synthesized=synthesized,
        merged=merged,
    )


def _push(state: AccumulatorState, view: StatementView, framework: LoggingFramework) -> AccumulatorState:
    kind = kind_of(view)
    if state.run is not None and kind != state.run:
        state = _flush(state, framework)

    match view:
        case Other(statement=statement):
            next_state = replace(state, output=state.output + (statement,))
        case LogStatement(statement=statement):
            next_state = replace(
                state,
                run=kind,
                buffered=state.buffered + (statement,),
                originals=state.originals + (statement,),
                expensive=state.expensive or view.is_expensive,
            )
        case GuardedBlock(statement=statement):
            next_state = replace(
                state,
                run=kind,
                buffered=state.buffered + view.inner,
                originals=state.originals + (statement,),
                reused_guard=state.reused_guard or statement,
            )
    return check_invariant(next_state)


def fold_statements(
    statements: Sequence[Statement],
    level_predicate: LevelPredicate,
    framework: LoggingFramework = SLF4J,
) -> AccumulatorState:
    """Run the planner over ``statements`` and return the final (flushed) state."""

    def eligible(level: Level) -> bool:
        return level_predicate(level) and framework.can_guard(level)

    views = [view_statement(stmt, framework, eligible) for stmt in statements]
    final = reduce(lambda state, view: _push(state, view, framework), views, AccumulatorState())
    return check_invariant(_flush(final, framework))


def plan_guards(
    statements: Sequence[Statement],
    level_predicate: LevelPredicate,
    framework: LoggingFramework = SLF4J,
) -> tuple[Statement, ...]:
    """Merge contiguous same-level log statements into enablement guards.

    Args:
        statements: One block's statements.
        level_predicate: Levels eligible for guarding (e.g. trace/debug/info).
        framework: Strategy used to match calls and build checks.

    Returns:
        The planned statement sequence; identical to the input when no run
        holds an unguarded Expensive call or an existing guard with neighbours.

    Raises:
        AccumulatorInvariantError: Planner bookkeeping became inconsistent.
    """
    final = fold_statements(statements, level_predicate, framework)
    if final.synthesized or final.merged:
        logger.debug("planned %d new guard(s), %d merged run(s)", final.synthesized, final.merged)
    return final.output


__all__ = [
    "AccumulatorState",
    "GuardedBlock",
    "Kind",
    "LevelPredicate",
    "LogStatement",
    "Other",
    "RunKey",
    "StatementView",
    "check_invariant",
    "fold_statements",
    "kind_of",
    "plan_guards",
    "view_statement",
]

"""
Call-shape matching for logging calls.

``match_log_call`` recognises ``<logger>.<level>(args...)`` on a receiver whose
declared type is the framework's logger and returns a transient ``LogCall``
view. Fluent chains (``logger.atInfo()...log(..)``) are not log calls: their
receiver is an event builder, not a logger.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from logrewrite.frameworks import Level, LoggingFramework
from logrewrite.tree.expressions import Expression, MethodCall
from logrewrite.tree.statements import ExpressionStatement, Statement


@dataclass(frozen=True)
class LogCall:
    """View over one logging call.

    Attributes:
        node: The underlying call node.
        logger: Receiver expression.
        level: Severity of the called method.
        arguments: Raw arguments in source order.
        has_leading_marker: Whether the first argument is marker-typed.
    """

    node: MethodCall
    logger: Expression
    level: Level
    arguments: tuple[Expression, ...]
    has_leading_marker: bool

    @property
    def message_index(self) -> int:
        return 1 if self.has_leading_marker else 0

    @property
    def message(self) -> Expression | None:
        index = self.message_index
        return self.arguments[index] if index < len(self.arguments) else None

    @property
    def leading(self) -> tuple[Expression, ...]:
        """Arguments before the message (the marker, when present)."""
        return self.arguments[: self.message_index]

    @property
    def format_arguments(self) -> tuple[Expression, ...]:
        """Arguments after the message."""
        return self.arguments[self.message_index + 1 :]

    def with_arguments(self, arguments: tuple[Expression, ...]) -> MethodCall:
        """Build a replacement call node carrying ``arguments``."""
        return replace(self.node, args=arguments, param_count=None)


def match_log_call(expr: Expression, framework: LoggingFramework) -> LogCall | None:
    """Return a ``LogCall`` view if ``expr`` is a logging call of ``framework``."""
    if not isinstance(expr, MethodCall) or expr.target is None or expr.is_static:
        return None
    level = framework.level_of(expr.name)
    if level is None or not framework.is_logger(expr.target):
        return None
    has_marker = bool(expr.args) and framework.is_marker(expr.args[0])
    return LogCall(
        node=expr,
        logger=expr.target,
        level=level,
        arguments=expr.args,
        has_leading_marker=has_marker,
    )


def match_log_statement(stmt: Statement, framework: LoggingFramework) -> LogCall | None:
    """Match a statement of the form ``<logger>.<level>(...);``."""
    if isinstance(stmt, ExpressionStatement):
        return match_log_call(stmt.expression, framework)
    return None


__all__ = ["LogCall", "match_log_call", "match_log_statement"]

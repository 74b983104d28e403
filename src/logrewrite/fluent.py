"""
Deferred-evaluation ("fluent") rewrite of a single log call.

SLF4J 2::

    logger.info("Result: {} ({})", compute(), name)
    logger.atInfo().addArgument(() -> compute()).addArgument(name).log("Result: {} ({})")

    logger.info(expensiveOp())
    logger.atInfo().log(() -> expensiveOp())

Log4j 2 ``LogBuilder`` takes suppliers on the terminal call, so once any
argument is deferred every argument is::

    logger.atInfo().log("Result: {} ({})", () -> compute(), () -> name)

Log4j 2 has no ``Supplier<String>`` message overload, so an Expensive message
is reported as ``DeferredMessageUnsupported`` and left to the guard planner.
"""

from __future__ import annotations

from logrewrite.calls import LogCall
from logrewrite.classifier import is_expensive
from logrewrite.concatenation import count_markers, split_trailing_exception
from logrewrite.errors.planner import (
    DeferredMessageUnsupported,
    FluentSkip,
    FluentUnsupported,
    NothingToDefer,
)
from logrewrite.frameworks import FluentDialect, LoggingFramework
from logrewrite.result import Failure, Result, Success
from logrewrite.tree.expressions import Constant, Expression, MethodCall, thunk
from logrewrite.tree.types import VOID, class_type


def _split_cause(call: LogCall) -> tuple[tuple[Expression, ...], Expression | None]:
    """Separate the cause from the format arguments.

    A final exception argument is the cause unless the message has a
    placeholder for it.
    """
    message = call.message
    following = call.format_arguments
    if isinstance(message, Constant) and message.is_string:
        if count_markers(str(message.value)) >= len(following):
            return following, None
    return split_trailing_exception(following)


def _chain(
    target: Expression,
    name: str,
    args: tuple[Expression, ...],
    dialect: FluentDialect,
) -> MethodCall:
    return MethodCall(target=target, name=name, args=args, type=class_type(dialect.builder_fqn))


def to_fluent(call: LogCall, framework: LoggingFramework) -> Result[MethodCall, FluentSkip]:
    """Rewrite ``call`` into its framework's deferred-evaluation chain.

    Args:
        call: Matched logging call.
        framework: Strategy of the logger's framework.

    Returns:
        Success with the chain, or why the call cannot or need not be converted.
    """
    dialect = framework.fluent
    if dialect is None or not framework.supports_fluent(call.logger.type):
        return Failure(FluentUnsupported(logger_type=call.logger.type.fqn))
    message = call.message
    if message is None:
        return Failure(NothingToDefer())

    arguments, cause = _split_cause(call)
    expensive_message = is_expensive(message)
    if not expensive_message and not any(is_expensive(arg) for arg in arguments):
        return Failure(NothingToDefer())
    if expensive_message and not (dialect.defers_message and message.type.is_string):
        return Failure(DeferredMessageUnsupported(framework=framework.name))

    chain = _chain(call.logger, dialect.starter(call.level), (), dialect)
    for marker in call.leading:
        chain = _chain(chain, dialect.marker_method, (marker,), dialect)
    if cause is not None:
        chain = _chain(chain, dialect.cause_method, (cause,), dialect)

    terminal_args: tuple[Expression, ...]
    if dialect.argument_method is not None:
        for arg in arguments:
            deferred = thunk(arg) if is_expensive(arg) else arg
            chain = _chain(chain, dialect.argument_method, (deferred,), dialect)
        terminal_args = (thunk(message) if expensive_message else message,)
    else:
        terminal_args = (message, *(thunk(arg) for arg in arguments))

    return Success(MethodCall(target=chain, name=dialect.log_method, args=terminal_args, type=VOID))


__all__ = ["to_fluent"]

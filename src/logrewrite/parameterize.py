"""
Message parameterization for individual log calls.

Turns ``LOG.info("Hello " + name + "!")`` into ``LOG.info("Hello {}!", name)``
and, optionally, strips redundant ``.toString()`` calls from format arguments
(placeholder frameworks call ``toString()`` themselves, and only when the
level is enabled).
"""

from __future__ import annotations

import logging

from logrewrite.calls import LogCall
from logrewrite.concatenation import TemplateResult, compile_message
from logrewrite.errors.template import (
    DeferredMessage,
    ExceptionOnlyMessage,
    MessageAlreadyTemplate,
    MissingMessage,
    ParameterizeResult,
    PlaceholdersUnsupported,
    UnresolvedMessageType,
)
from logrewrite.frameworks import LoggingFramework
from logrewrite.reorder import reorder
from logrewrite.result import Failure, Success
from logrewrite.tree.expressions import Concat, Expression, Lambda, MethodCall
from logrewrite.tree.printer import render_expression


logger = logging.getLogger(__name__)


def _is_deferred(message: Expression) -> bool:
    return isinstance(message, Lambda) or message.type.is_assignable_to("java.util.function.Supplier")


def _unwrap_to_string(arg: Expression, *, is_last: bool) -> Expression:
    if not isinstance(arg, MethodCall) or arg.name != "toString" or arg.declared_params != 0:
        return arg
    if arg.target is None or arg.is_static:
        return arg
    # a final Throwable argument would change meaning from text to stack trace
    if is_last and arg.target.type.is_exception:
        return arg
    return arg.target


def _strip_placeholders(result: TemplateResult) -> TemplateResult:
    args = result.placeholder_args
    stripped = tuple(
        _unwrap_to_string(arg, is_last=i == len(args) - 1 and result.trailing_exception is None)
        for i, arg in enumerate(args)
    )
    return TemplateResult(result.message, stripped, result.trailing_exception)


def parameterize_call(
    call: LogCall,
    framework: LoggingFramework,
    *,
    remove_to_string: bool = False,
) -> ParameterizeResult[MethodCall]:
    """Rewrite a concatenated log message into a placeholder template.

    Args:
        call: Matched logging call.
        framework: Strategy of the logger's framework.
        remove_to_string: Also drop ``.toString()`` from the placeholder arguments.

    Returns:
        Success with the replacement call, or the reason the call is left as-is.
    """
    if not framework.supports_placeholders:
        return Failure(PlaceholdersUnsupported(framework=framework.name))
    message = call.message
    if message is None:
        return Failure(MissingMessage())
    if _is_deferred(message):
        return Failure(DeferredMessage())
    if message.type.is_exception and not call.format_arguments:
        return Failure(ExceptionOnlyMessage())
    if not isinstance(message, Concat) and message.type.is_string:
        return Failure(MessageAlreadyTemplate())
    if not isinstance(message, Concat) and message.type.type_kind == "unknown":
        return Failure(UnresolvedMessageType())

    result = compile_message(message, call.format_arguments)
    if remove_to_string:
        result = _strip_placeholders(result)

    match reorder(call, result):
        case Success(arguments):
            rewritten = call.with_arguments(arguments)
            logger.debug(
                "parameterized %s -> %s",
                render_expression(call.node),
                render_expression(rewritten),
            )
            return Success(rewritten)
        case Failure(skip):
            return Failure(skip)


def strip_to_string(call: LogCall) -> MethodCall | None:
    """Remove ``.toString()`` from the format arguments of ``call``.

    A ``toString()`` on an exception-typed receiver in the final position is
    kept, since the bare exception would be logged as a stack trace.

    Returns:
        The rewritten call, or ``None`` when no argument changed.
    """
    first = call.message_index + 1
    last = len(call.arguments) - 1
    arguments = tuple(
        arg if i < first else _unwrap_to_string(arg, is_last=i == last)
        for i, arg in enumerate(call.arguments)
    )
    if arguments == call.arguments:
        return None
    return call.with_arguments(arguments)


__all__ = ["parameterize_call", "strip_to_string"]

"""
Final argument assembly for parameterized log calls.

The rewritten argument list is always::

    [leading marker] + [template literal] + [placeholder args] + [trailing exception]

It is built by instantiating a host template (one ``#{}`` slot per carried
expression, the message as a quoted literal) rather than by splicing tuples,
so the same primitive that installs rewritten calls also validates them.
"""

from __future__ import annotations

import logging

from logrewrite.calls import LogCall
from logrewrite.concatenation import TemplateResult
from logrewrite.errors.template import (
    ExceptionOnlyMessage,
    MalformedTemplate,
    MissingMessage,
    ParameterizeResult,
    TemplateInstantiationFailed,
)
from logrewrite.result import Failure, Success
from logrewrite.tree.expressions import Expression, MethodCall, NewArray
from logrewrite.tree.template import SLOT, instantiate_arguments
from logrewrite.tree.types import OBJECT


logger = logging.getLogger(__name__)


def host_template(leading: int, result: TemplateResult) -> str:
    """Host template text for ``leading`` carried arguments followed by ``result``."""
    slots = [SLOT] * leading
    slots.append(f'"{result.template}"')
    slots.extend(SLOT for _ in result.placeholder_args)
    if result.trailing_exception is not None:
        slots.append(SLOT)
    return ", ".join(slots)


def reorder(call: LogCall, result: TemplateResult) -> ParameterizeResult[tuple[Expression, ...]]:
    """Assemble the final argument tuple for ``call`` from a compiled message.

    Returns:
        Success with the new arguments, or the reason the call must stay as-is:
        no message, a sole exception argument, or a marker/argument count
        mismatch.
    """
    message = call.message
    if message is None:
        return Failure(MissingMessage())
    if message.type.is_exception and not call.format_arguments:
        return Failure(ExceptionOnlyMessage())
    if not result.is_well_formed:
        return Failure(
            MalformedTemplate(
                template=result.template,
                markers=result.marker_count,
                arguments=len(result.placeholder_args),
            )
        )

    values: list[Expression] = [*call.leading, *result.placeholder_args]
    if result.trailing_exception is not None:
        values.append(result.trailing_exception)

    template = host_template(len(call.leading), result)
    match instantiate_arguments(template, values):
        case Success(arguments):
            return Success(arguments)
        case Failure(error):
            logger.debug("host template %r rejected: %s", template, error)
            return Failure(TemplateInstantiationFailed(error=error))


def expand_argument_array(call: LogCall) -> MethodCall | None:
    """Splice a final ``new Object[]{...}`` argument into varargs.

    Returns the rewritten call, or ``None`` when the final argument is not an
    ``Object[]`` initializer. An empty initializer is dropped.
    """
    if not call.arguments:
        return None
    last = call.arguments[-1]
    if not isinstance(last, NewArray) or last.element_type.fqn != OBJECT:
        return None
    return call.with_arguments((*call.arguments[:-1], *last.elements))


__all__ = ["expand_argument_array", "host_template", "reorder"]

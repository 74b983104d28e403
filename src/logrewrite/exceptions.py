"""Log the exception itself instead of only its message."""

from __future__ import annotations

from logrewrite.calls import LogCall
from logrewrite.concatenation import count_markers
from logrewrite.frameworks import LoggingFramework
from logrewrite.tree.expressions import Constant, Expression, MethodCall


_MESSAGE_GETTERS = frozenset({"getMessage", "getLocalizedMessage"})


def _exception_of_message_call(arg: Expression) -> Expression | None:
    """Return ``e`` for ``e.getMessage()`` / ``e.getLocalizedMessage()``."""
    if not isinstance(arg, MethodCall) or arg.name not in _MESSAGE_GETTERS:
        return None
    if arg.declared_params != 0 or arg.target is None or not arg.target.type.is_exception:
        return None
    return arg.target


def complete_exception_logging(call: LogCall, framework: LoggingFramework) -> MethodCall | None:
    """Pass the exception, not just its message, to the logging call.

    - ``LOG.error(e.getMessage())`` becomes ``LOG.error("", e)``.
    - ``LOG.error("Failed: {}", e.getMessage())`` becomes
      ``LOG.error("Failed: {}", e.getMessage(), e)``: the message is
      still consumed by its placeholder.
    - ``LOG.error("Failed", e.getMessage())`` becomes ``LOG.error("Failed", e)``.

    Returns:
        The rewritten call, or ``None`` when the final argument is not an
        exception-message getter or the message is not a string literal.
    """
    if not framework.supports_placeholders or not call.arguments:
        return None
    exception = _exception_of_message_call(call.arguments[-1])
    if exception is None:
        return None

    if len(call.arguments) == call.message_index + 1:
        return call.with_arguments((*call.leading, Constant(""), exception))

    message = call.message
    if not isinstance(message, Constant) or not message.is_string:
        return None
    placeholders = count_markers(str(message.value))
    if placeholders >= len(call.format_arguments):
        return call.with_arguments((*call.arguments, exception))
    return call.with_arguments((*call.arguments[:-1], exception))


__all__ = ["complete_exception_logging"]

# tests/helpers/factories.py
"""Test data factories for logrewrite tests.

Thin wrappers over ``logrewrite.testing`` that fix the names used across the
suite (``LOG`` as the logger, ``compute()`` as the canonical expensive call).
"""

from __future__ import annotations

from logrewrite.calls import LogCall, match_log_call
from logrewrite.frameworks import SLF4J, Level, LoggingFramework
from logrewrite.testing import (
    SLF4J2_LOGGER,
    SLF4J_LOGGER,
    expensive,
    getter,
    guard,
    log,
    log_call,
    logger_ref,
    text,
    var,
)
from logrewrite.tree.expressions import Expression, Identifier
from logrewrite.tree.statements import ExpressionStatement, IfStatement, Statement

LOG: Identifier = logger_ref("LOG", SLF4J_LOGGER)
FLUENT_LOG: Identifier = logger_ref("logger", SLF4J2_LOGGER)


def make_log_call(
    method: str,
    *args: Expression,
    logger: Expression = LOG,
    framework: LoggingFramework = SLF4J,
) -> LogCall:
    """Build and match ``logger.method(args...)``, failing if it is not a log call."""
    call = match_log_call(log_call(logger, method, *args), framework)
    if call is None:
        raise AssertionError(f"{method} is not a {framework.name} log call")
    return call


def cheap_log(method: str, logger: Expression = LOG) -> ExpressionStatement:
    """``LOG.<method>("msg {}", name);``"""
    return log(logger, method, text("msg {}"), var("name"))


def expensive_log(method: str, logger: Expression = LOG, name: str = "compute") -> ExpressionStatement:
    """``LOG.<method>("msg {}", compute());``"""
    return log(logger, method, text("msg {}"), expensive(name))


def getter_log(method: str, logger: Expression = LOG) -> ExpressionStatement:
    """``LOG.<method>("msg {}", user.getName());``"""
    return log(logger, method, text("msg {}"), getter(var("user"), "getName"))


def guarded(level: Level, *body: Statement, logger: Expression = LOG) -> IfStatement:
    return guard(logger, level, *body)

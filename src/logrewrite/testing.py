"""Tree builders for tests and examples."""

from __future__ import annotations

from functools import reduce
from typing import Final

from logrewrite.frameworks import SLF4J, Level, LoggingFramework
from logrewrite.tree.expressions import (
    BinaryOp,
    Concat,
    Constant,
    Expression,
    Identifier,
    MethodCall,
)
from logrewrite.tree.statements import (
    CompilationUnit,
    ExpressionStatement,
    IfStatement,
    MethodDeclaration,
    OpaqueStatement,
    Statement,
)
from logrewrite.tree.types import (
    BOOLEAN,
    STRING,
    VOID,
    JavaType,
    class_type,
    exception_type,
)


_FLUENT_METHODS: Final[frozenset[str]] = frozenset(f"at{level.title}" for level in Level)

SLF4J_LOGGER: Final[JavaType] = class_type(SLF4J.logger_fqn)
SLF4J2_LOGGER: Final[JavaType] = class_type(SLF4J.logger_fqn, methods=_FLUENT_METHODS)
LOG4J2_LOGGER: Final[JavaType] = class_type("org.apache.logging.log4j.Logger", methods=_FLUENT_METHODS)
LOG4J1_LOGGER: Final[JavaType] = class_type("org.apache.log4j.Logger", "org.apache.log4j.Category")
JUL_LOGGER: Final[JavaType] = class_type("java.util.logging.Logger")
SLF4J_MARKER: Final[JavaType] = class_type("org.slf4j.Marker")
EXCEPTION: Final[JavaType] = exception_type()


def logger_ref(name: str = "LOG", logger_type: JavaType = SLF4J_LOGGER) -> Identifier:
    return Identifier(name, logger_type)


def text(value: str) -> Constant:
    return Constant(value)


def var(name: str, type_: JavaType = STRING) -> Identifier:
    return Identifier(name, type_)


def exception_var(name: str = "e") -> Identifier:
    return Identifier(name, EXCEPTION)


def marker_var(name: str = "marker") -> Identifier:
    return Identifier(name, SLF4J_MARKER)


def expensive(name: str = "compute", type_: JavaType = STRING) -> MethodCall:
    """An implicit-receiver call that is not a getter: ``compute()``."""
    return MethodCall(target=None, name=name, type=type_)


def getter(target: Expression | None, name: str, type_: JavaType = STRING) -> MethodCall:
    return MethodCall(target=target, name=name, type=type_)


def concat(*parts: Expression | str) -> Expression:
    """Left-nested ``+`` chain; plain strings become literals."""
    nodes = [text(p) if isinstance(p, str) else p for p in parts]
    return reduce(lambda left, right: Concat(left, right), nodes)


def log_call(logger: Expression, method: str, *args: Expression) -> MethodCall:
    return MethodCall(target=logger, name=method, args=args, type=VOID)


def log(logger: Expression, method: str, *args: Expression) -> ExpressionStatement:
    """``logger.method(args...);``"""
    return ExpressionStatement(log_call(logger, method, *args))


def enabled(logger: Expression, level: Level, framework: LoggingFramework = SLF4J) -> MethodCall:
    check = framework.enabled_check(logger, level)
    if check is None:
        raise ValueError(f"{framework.name} has no enablement check for {level.value}")
    return check


def guard(
    logger: Expression,
    level: Level,
    *body: Statement,
    framework: LoggingFramework = SLF4J,
) -> IfStatement:
    """``if (logger.is<Level>Enabled()) { body }``"""
    return IfStatement(condition=enabled(logger, level, framework), then_body=body)


def both(left: Expression, right: Expression) -> BinaryOp:
    return BinaryOp("&&", left, right, BOOLEAN)


def other(source: str = "doWork();") -> OpaqueStatement:
    return OpaqueStatement(source)


def unit(*bodies: tuple[Statement, ...], path: str = "A.java") -> CompilationUnit:
    methods = tuple(MethodDeclaration(f"method{i}", body) for i, body in enumerate(bodies))
    return CompilationUnit(path=path, methods=methods)


__all__ = [
    "EXCEPTION",
    "JUL_LOGGER",
    "LOG4J1_LOGGER",
    "LOG4J2_LOGGER",
    "SLF4J2_LOGGER",
    "SLF4J_LOGGER",
    "SLF4J_MARKER",
    "both",
    "concat",
    "enabled",
    "exception_var",
    "expensive",
    "getter",
    "guard",
    "log",
    "log_call",
    "logger_ref",
    "marker_var",
    "other",
    "text",
    "unit",
    "var",
]

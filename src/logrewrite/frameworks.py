"""
Logging-framework strategies.

The differences between logging APIs that matter to the rewrite core (method
names per level, the shape of the enablement check, placeholder support and
the deferred-evaluation chain) are captured in a small closed set of frozen
strategy values. One strategy is selected per compilation unit from the
statically known logger type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from logrewrite.tree.expressions import Expression, FieldAccess, Identifier, MethodCall
from logrewrite.tree.types import BOOLEAN, JavaType, class_type


class Level(Enum):
    """Log severity, ordered trace < debug < info < warn < error."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def title(self) -> str:
        return self.value.capitalize()


_RANKS: dict[Level, int] = {level: i for i, level in enumerate(Level)}


@dataclass(frozen=True)
class FluentDialect:
    """Shape of a chainable deferred-evaluation logging API.

    Attributes:
        name: Dialect name for diagnostics.
        builder_fqn: Type returned by the chain-opening method.
        marker_method: Chain method attaching a marker.
        cause_method: Chain method attaching the exception.
        argument_method: Chain method adding one argument, or ``None`` when
            arguments are passed to the terminal log call as suppliers.
        log_method: Terminal method.
        defers_message: Whether the terminal method accepts a message supplier.
    """

    name: str
    builder_fqn: str
    marker_method: str
    cause_method: str
    argument_method: str | None
    log_method: str = "log"
    defers_message: bool = True

    def starter(self, level: Level) -> str:
        """Name of the chain-opening method for ``level`` (``atInfo``)."""
        return f"at{level.title}"

    def probe(self, logger_type: JavaType) -> bool:
        """One-time capability probe on the logger's declared type."""
        return all(logger_type.declares(self.starter(level)) for level in Level)


SLF4J_FLUENT = FluentDialect(
    name="slf4j-fluent",
    builder_fqn="org.slf4j.spi.LoggingEventBuilder",
    marker_method="addMarker",
    cause_method="setCause",
    argument_method="addArgument",
)

LOG4J2_FLUENT = FluentDialect(
    name="log4j2-logbuilder",
    builder_fqn="org.apache.logging.log4j.LogBuilder",
    marker_method="withMarker",
    cause_method="withThrowable",
    argument_method=None,
    defers_message=False,
)


@dataclass(frozen=True)
class LoggingFramework:
    """Strategy describing one logging API.

    Attributes:
        name: Option name (``slf4j``, ``log4j2``, ``log4j1``, ``jul``).
        logger_fqn: Declared logger type.
        marker_fqn: Marker type, when the API supports markers.
        log_methods: Logging method name to level.
        enabled_methods: Level to enablement-check method name.
        level_type_fqn: Type of level constants passed to the check (JUL).
        level_constants: Level to constant name passed to the check (JUL).
        supports_placeholders: Whether messages use ``{}`` placeholders.
        fluent: Deferred-evaluation dialect, if the API has one.
    """

    name: str
    logger_fqn: str
    marker_fqn: str | None
    log_methods: tuple[tuple[str, Level], ...]
    enabled_methods: tuple[tuple[Level, str], ...]
    level_type_fqn: str | None = None
    level_constants: tuple[tuple[Level, str], ...] = ()
    supports_placeholders: bool = True
    fluent: FluentDialect | None = None

    def level_of(self, method_name: str) -> Level | None:
        return next((level for name, level in self.log_methods if name == method_name), None)

    def method_for(self, level: Level) -> str | None:
        return next((name for name, lvl in self.log_methods if lvl == level), None)

    def is_logger(self, expr: Expression) -> bool:
        return expr.type.is_assignable_to(self.logger_fqn)

    def is_marker(self, expr: Expression) -> bool:
        return self.marker_fqn is not None and expr.type.is_assignable_to(self.marker_fqn)

    def _enabled_method(self, level: Level) -> str | None:
        return next((name for lvl, name in self.enabled_methods if lvl == level), None)

    def _level_constant(self, level: Level) -> str | None:
        return next((name for lvl, name in self.level_constants if lvl == level), None)

    def can_guard(self, level: Level) -> bool:
        return self._enabled_method(level) is not None

    def enabled_check(self, logger: Expression, level: Level) -> MethodCall | None:
        """Build the enablement check for ``level`` on ``logger``, if the API has one."""
        method = self._enabled_method(level)
        if method is None:
            return None
        if self.level_type_fqn is None:
            return MethodCall(target=logger, name=method, type=BOOLEAN, param_count=0)
        constant = self._level_constant(level)
        if constant is None:
            return None
        level_type = class_type(self.level_type_fqn)
        simple = self.level_type_fqn.rsplit(".", 1)[-1]
        argument = FieldAccess(Identifier(simple, level_type), constant, level_type)
        return MethodCall(target=logger, name=method, args=(argument,), type=BOOLEAN)

    def enabled_level(self, condition: Expression) -> Level | None:
        """Return the level if ``condition`` is exactly one enablement check on a logger."""
        if not isinstance(condition, MethodCall) or condition.target is None:
            return None
        if not self.is_logger(condition.target):
            return None
        candidates = [lvl for lvl, name in self.enabled_methods if name == condition.name]
        if self.level_type_fqn is None:
            return candidates[0] if candidates and not condition.args else None
        if len(condition.args) != 1 or not isinstance(condition.args[0], FieldAccess):
            return None
        constant = condition.args[0].name
        return next((lvl for lvl in candidates if self._level_constant(lvl) == constant), None)

    def supports_fluent(self, logger_type: JavaType) -> bool:
        return self.fluent is not None and self.fluent.probe(logger_type)


_STANDARD_METHODS: tuple[tuple[str, Level], ...] = tuple((level.value, level) for level in Level)

SLF4J = LoggingFramework(
    name="slf4j",
    logger_fqn="org.slf4j.Logger",
    marker_fqn="org.slf4j.Marker",
    log_methods=_STANDARD_METHODS,
    enabled_methods=tuple((level, f"is{level.title}Enabled") for level in Level),
    fluent=SLF4J_FLUENT,
)

LOG4J2 = LoggingFramework(
    name="log4j2",
    logger_fqn="org.apache.logging.log4j.Logger",
    marker_fqn="org.apache.logging.log4j.Marker",
    log_methods=_STANDARD_METHODS,
    enabled_methods=tuple((level, f"is{level.title}Enabled") for level in Level),
    fluent=LOG4J2_FLUENT,
)

# log4j 1.x only has dedicated checks up to info; warn/error need isEnabledFor(Priority)
LOG4J1 = LoggingFramework(
    name="log4j1",
    logger_fqn="org.apache.log4j.Category",
    marker_fqn=None,
    log_methods=_STANDARD_METHODS,
    enabled_methods=(
        (Level.TRACE, "isTraceEnabled"),
        (Level.DEBUG, "isDebugEnabled"),
        (Level.INFO, "isInfoEnabled"),
    ),
    supports_placeholders=False,
)

# finer/config have no exact level counterpart, so they are never treated as log calls
JUL = LoggingFramework(
    name="jul",
    logger_fqn="java.util.logging.Logger",
    marker_fqn=None,
    log_methods=(
        ("finest", Level.TRACE),
        ("fine", Level.DEBUG),
        ("info", Level.INFO),
        ("warning", Level.WARN),
        ("severe", Level.ERROR),
    ),
    enabled_methods=tuple((level, "isLoggable") for level in Level),
    level_type_fqn="java.util.logging.Level",
    level_constants=(
        (Level.TRACE, "FINEST"),
        (Level.DEBUG, "FINE"),
        (Level.INFO, "INFO"),
        (Level.WARN, "WARNING"),
        (Level.ERROR, "SEVERE"),
    ),
    supports_placeholders=False,
)

ALL_FRAMEWORKS: tuple[LoggingFramework, ...] = (SLF4J, LOG4J2, LOG4J1, JUL)


def from_option(option: str | None) -> LoggingFramework:
    """Resolve a configured framework name, defaulting to SLF4J."""
    if option is not None:
        for framework in ALL_FRAMEWORKS:
            if framework.name.lower() == option.lower():
                return framework
    return SLF4J


__all__ = [
    "ALL_FRAMEWORKS",
    "FluentDialect",
    "JUL",
    "LOG4J1",
    "LOG4J2",
    "LOG4J2_FLUENT",
    "Level",
    "LoggingFramework",
    "SLF4J",
    "SLF4J_FLUENT",
    "from_option",
]

# tests/test_frameworks.py
"""Tests for the logging-framework strategies."""

from __future__ import annotations

import pytest

from logrewrite.frameworks import (
    ALL_FRAMEWORKS,
    JUL,
    LOG4J1,
    LOG4J2,
    SLF4J,
    Level,
    LoggingFramework,
    from_option,
)
from logrewrite.testing import (
    JUL_LOGGER,
    LOG4J1_LOGGER,
    LOG4J2_LOGGER,
    SLF4J2_LOGGER,
    SLF4J_LOGGER,
    logger_ref,
    marker_var,
    var,
)
from logrewrite.tree.expressions import MethodCall
from logrewrite.tree.printer import render_expression
from logrewrite.tree.types import BOOLEAN, JavaType


_LOGGER_TYPES: dict[str, JavaType] = {
    "slf4j": SLF4J_LOGGER,
    "log4j2": LOG4J2_LOGGER,
    "log4j1": LOG4J1_LOGGER,
    "jul": JUL_LOGGER,
}


class TestLevel:
    def test_ordering(self) -> None:
        ranks = [level.rank for level in (Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR)]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 5

    def test_title(self) -> None:
        assert Level.WARN.title == "Warn"


class TestLogMethods:
    def test_standard_methods(self) -> None:
        assert SLF4J.level_of("debug") is Level.DEBUG
        assert SLF4J.method_for(Level.WARN) == "warn"
        assert SLF4J.level_of("isDebugEnabled") is None

    def test_jul_methods(self) -> None:
        """JUL maps only the levels that have an exact guard constant."""
        assert JUL.level_of("fine") is Level.DEBUG
        assert JUL.level_of("severe") is Level.ERROR
        assert JUL.level_of("finer") is None
        assert JUL.level_of("config") is None

    def test_log4j1_logger_matches_category(self) -> None:
        assert LOG4J1.is_logger(logger_ref("LOG", LOG4J1_LOGGER))
        assert not LOG4J1.is_logger(logger_ref("LOG", SLF4J_LOGGER))

    def test_markers(self) -> None:
        assert SLF4J.is_marker(marker_var())
        assert not SLF4J.is_marker(var("name"))
        assert not JUL.is_marker(marker_var())


class TestEnablementChecks:
    @pytest.mark.parametrize("framework", ALL_FRAMEWORKS, ids=lambda f: f.name)
    def test_check_round_trips_through_enabled_level(self, framework: LoggingFramework) -> None:
        """Every check a framework builds is recognised as exactly that level."""
        logger = logger_ref("LOG", _LOGGER_TYPES[framework.name])
        for level in Level:
            check = framework.enabled_check(logger, level)
            if framework.can_guard(level):
                assert check is not None
                assert framework.enabled_level(check) is level
            else:
                assert check is None

    def test_slf4j_check_shape(self) -> None:
        check = SLF4J.enabled_check(logger_ref(), Level.TRACE)
        assert check is not None
        assert render_expression(check) == "LOG.isTraceEnabled()"

    def test_log4j1_cannot_guard_warn_or_error(self) -> None:
        assert LOG4J1.can_guard(Level.INFO)
        assert not LOG4J1.can_guard(Level.WARN)
        assert not LOG4J1.can_guard(Level.ERROR)

    def test_check_with_marker_is_not_exact(self) -> None:
        condition = MethodCall(logger_ref(), "isDebugEnabled", args=(marker_var(),), type=BOOLEAN)
        assert SLF4J.enabled_level(condition) is None

    def test_check_on_non_logger_is_not_exact(self) -> None:
        condition = MethodCall(var("config"), "isDebugEnabled", type=BOOLEAN)
        assert SLF4J.enabled_level(condition) is None

    def test_jul_unknown_constant(self) -> None:
        check = JUL.enabled_check(logger_ref("LOG", JUL_LOGGER), Level.INFO)
        assert check is not None
        unknown = MethodCall(check.target, "isLoggable", args=(var("level"),), type=BOOLEAN)
        assert JUL.enabled_level(unknown) is None


class TestFluentCapability:
    def test_probe(self) -> None:
        assert SLF4J.supports_fluent(SLF4J2_LOGGER)
        assert not SLF4J.supports_fluent(SLF4J_LOGGER)
        assert LOG4J2.supports_fluent(LOG4J2_LOGGER)

    def test_frameworks_without_dialect(self) -> None:
        assert not LOG4J1.supports_fluent(LOG4J1_LOGGER)
        assert not JUL.supports_fluent(JUL_LOGGER)


@pytest.mark.parametrize(
    ("option", "expected"),
    [("slf4j", SLF4J), ("LOG4J2", LOG4J2), ("jul", JUL), ("logback", SLF4J), (None, SLF4J)],
)
def test_from_option(option: str | None, expected: LoggingFramework) -> None:
    assert from_option(option) is expected

# tests/test_fluent.py
"""Tests for the deferred-evaluation ("fluent") rewrite of single log calls."""

from __future__ import annotations

from logrewrite.errors.planner import DeferredMessageUnsupported, FluentUnsupported, NothingToDefer
from logrewrite.fluent import to_fluent
from logrewrite.frameworks import LOG4J2, SLF4J
from logrewrite.testing import LOG4J2_LOGGER, exception_var, expensive, logger_ref, marker_var, text, var
from logrewrite.tree.printer import render_expression
from logrewrite.tree.types import INT
from tests.helpers import FLUENT_LOG, LOG, expect_failure, expect_success, make_log_call


NAME = var("name")
E = exception_var()
LOG4J2_LOG = logger_ref("logger", LOG4J2_LOGGER)


class TestSlf4jFluent:
    def test_expensive_argument_is_deferred(self) -> None:
        """Cheap arguments are passed as values, Expensive ones as suppliers."""
        call = make_log_call("info", text("Result: {} ({})"), expensive(), NAME, logger=FLUENT_LOG)
        chain = expect_success(to_fluent(call, SLF4J))
        assert render_expression(chain) == (
            'logger.atInfo().addArgument(() -> compute()).addArgument(name).log("Result: {} ({})")'
        )

    def test_expensive_message_is_deferred(self) -> None:
        call = make_log_call("info", expensive("expensiveOp"), logger=FLUENT_LOG)
        chain = expect_success(to_fluent(call, SLF4J))
        assert render_expression(chain) == "logger.atInfo().log(() -> expensiveOp())"

    def test_marker_and_cause(self) -> None:
        marker = marker_var()
        call = make_log_call("error", marker, text("Failed {}"), expensive(), E, logger=FLUENT_LOG)
        chain = expect_success(to_fluent(call, SLF4J))
        assert render_expression(chain) == (
            "logger.atError().addMarker(marker).setCause(e)"
            '.addArgument(() -> compute()).log("Failed {}")'
        )

    def test_exception_with_placeholder_is_an_argument(self) -> None:
        call = make_log_call("error", text("Failed {} {}"), expensive(), E, logger=FLUENT_LOG)
        chain = expect_success(to_fluent(call, SLF4J))
        assert render_expression(chain) == (
            'logger.atError().addArgument(() -> compute()).addArgument(e).log("Failed {} {}")'
        )

    def test_nothing_to_defer(self) -> None:
        call = make_log_call("info", text("x {}"), NAME, logger=FLUENT_LOG)
        assert isinstance(expect_failure(to_fluent(call, SLF4J)), NothingToDefer)

    def test_logger_without_fluent_api(self) -> None:
        call = make_log_call("info", text("x {}"), expensive(), logger=LOG)
        assert expect_failure(to_fluent(call, SLF4J)) == FluentUnsupported(logger_type="org.slf4j.Logger")

    def test_non_string_expensive_message(self) -> None:
        """Only ``Supplier<String>`` messages can be deferred."""
        call = make_log_call("info", expensive("count", INT), logger=FLUENT_LOG)
        assert expect_failure(to_fluent(call, SLF4J)) == DeferredMessageUnsupported(framework="slf4j")

    def test_missing_message(self) -> None:
        call = make_log_call("info", logger=FLUENT_LOG)
        assert isinstance(expect_failure(to_fluent(call, SLF4J)), NothingToDefer)


class TestLog4j2Fluent:
    def test_every_argument_becomes_a_supplier(self) -> None:
        call = make_log_call(
            "info", text("Result: {} ({})"), expensive(), NAME, logger=LOG4J2_LOG, framework=LOG4J2
        )
        chain = expect_success(to_fluent(call, LOG4J2))
        assert render_expression(chain) == (
            'logger.atInfo().log("Result: {} ({})", () -> compute(), () -> name)'
        )

    def test_cause_uses_with_throwable(self) -> None:
        call = make_log_call("warn", text("x {}"), expensive(), E, logger=LOG4J2_LOG, framework=LOG4J2)
        chain = expect_success(to_fluent(call, LOG4J2))
        assert render_expression(chain) == 'logger.atWarn().withThrowable(e).log("x {}", () -> compute())'

    def test_expensive_message_is_unsupported(self) -> None:
        call = make_log_call("info", expensive(), logger=LOG4J2_LOG, framework=LOG4J2)
        assert expect_failure(to_fluent(call, LOG4J2)) == DeferredMessageUnsupported(framework="log4j2")

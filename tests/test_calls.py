# tests/test_calls.py
"""Tests for log-call matching and tree traversal helpers."""

from __future__ import annotations

from logrewrite.calls import match_log_call, match_log_statement
from logrewrite.frameworks import LOG4J2, SLF4J
from logrewrite.testing import expensive, log, log_call, marker_var, other, text, var
from logrewrite.tree.expressions import Constant, Lambda, MethodCall
from logrewrite.tree.statements import CompoundStatement, ExpressionStatement, IfStatement
from logrewrite.tree.transform import map_statements, walk_statement, walk_statements
from logrewrite.tree.types import BOOLEAN
from tests.helpers import LOG, cheap_log, make_log_call


NAME = var("name")


class TestMatchLogCall:
    def test_view(self) -> None:
        call = make_log_call("debug", text("a {}"), NAME)
        assert call.logger == LOG
        assert call.message == text("a {}")
        assert call.format_arguments == (NAME,)
        assert call.leading == ()

    def test_leading_marker(self) -> None:
        marker = marker_var()
        call = make_log_call("info", marker, text("a"))
        assert call.message_index == 1
        assert call.leading == (marker,)
        assert call.message == text("a")

    def test_receiver_must_be_a_logger(self) -> None:
        assert match_log_call(log_call(var("printer"), "info", text("a")), SLF4J) is None

    def test_framework_mismatch(self) -> None:
        assert match_log_call(log_call(LOG, "info", text("a")), LOG4J2) is None

    def test_static_and_implicit_calls(self) -> None:
        assert match_log_call(MethodCall(None, "info", (text("a"),)), SLF4J) is None
        assert match_log_call(MethodCall(LOG, "info", (text("a"),), is_static=True), SLF4J) is None

    def test_non_logging_method(self) -> None:
        assert match_log_call(MethodCall(LOG, "getName"), SLF4J) is None

    def test_with_arguments_drops_declared_count(self) -> None:
        node = MethodCall(LOG, "info", (text("a"),), param_count=1)
        call = match_log_call(node, SLF4J)
        assert call is not None
        rewritten = call.with_arguments((text("a {}"), NAME))
        assert rewritten.declared_params == 2

    def test_statement_matching(self) -> None:
        assert match_log_statement(cheap_log("info"), SLF4J) is not None
        assert match_log_statement(other(), SLF4J) is None


class TestTraversal:
    def test_walk_reaches_lambda_blocks(self) -> None:
        inner = cheap_log("debug")
        stmt = ExpressionStatement(MethodCall(var("items"), "forEach", (Lambda(("s",), (inner,)),)))
        assert inner.expression in list(walk_statement(stmt))

    def test_walk_can_skip_catch_bodies(self) -> None:
        catch = CompoundStatement("catch (IOException e)", (cheap_log("error"),))
        found = list(walk_statement(catch, skip_catch=True))
        assert found == []
        assert len(list(walk_statement(catch))) > 0

    def test_walk_statements_covers_both_branches(self) -> None:
        stmt = IfStatement(var("flag", BOOLEAN), (cheap_log("debug"),), (cheap_log("info"),))
        calls = [e for e in walk_statements([stmt]) if match_log_call(e, SLF4J) is not None]
        assert len(calls) == 2

    def test_map_replaces_nested_nodes(self) -> None:
        compute = expensive()
        stmt = IfStatement(var("flag", BOOLEAN), (log(LOG, "info", text("a {}"), compute),))
        mapped = map_statements([stmt], lambda e: Constant("x") if e == compute else e)
        expected = IfStatement(var("flag", BOOLEAN), (log(LOG, "info", text("a {}"), Constant("x")),))
        assert mapped == (expected,)

    def test_map_without_changes_keeps_equality(self) -> None:
        statements = (cheap_log("debug"), other())
        assert map_statements(statements, lambda e: e) == statements

# tests/test_classifier.py
"""
Tests for the expression cost classifier.

The classifier must be total: every expression shape gets exactly one label,
and anything the rules do not recognise is Expensive.
"""

from __future__ import annotations

import pytest

from logrewrite.classifier import Cost, classify, is_expensive, is_simple_getter
from logrewrite.testing import concat, expensive, getter, var
from logrewrite.tree.expressions import (
    BinaryOp,
    Constant,
    Expression,
    FieldAccess,
    Identifier,
    MethodCall,
    NewArray,
    NewInstance,
    Opaque,
    thunk,
)
from logrewrite.tree.types import BOOLEAN, INT, OBJECT_TYPE, STRING, class_type, record_type


POINT = Identifier("point", record_type("com.example.Point", "x", "y"))
USER = var("user", class_type("com.example.User"))
THIS_USER = FieldAccess(Identifier("this"), "user", class_type("com.example.User"))


CHEAP_CASES: list[tuple[str, Expression]] = [
    ("string literal", Constant("text")),
    ("int literal", Constant(42, "int")),
    ("null literal", Constant(None, "null")),
    ("local", var("name")),
    ("field", FieldAccess(Identifier("this"), "count", INT)),
    ("getter", getter(USER, "getName")),
    ("boolean getter", getter(USER, "isActive", BOOLEAN)),
    ("implicit getter", getter(None, "getId")),
    ("getter on field", getter(THIS_USER, "getName")),
    ("record accessor", MethodCall(POINT, "x", type=INT)),
    ("arithmetic", BinaryOp("+", var("a", INT), Constant(1, "int"), INT)),
    ("comparison of getters", BinaryOp(">", getter(USER, "getAge", INT), Constant(18, "int"), BOOLEAN)),
    ("constant concatenation", concat("a", "b", "c")),
    ("lambda", thunk(expensive())),
]

EXPENSIVE_CASES: list[tuple[str, Expression]] = [
    ("plain call", expensive()),
    ("call with argument", MethodCall(USER, "getName", args=(Constant(1, "int"),), type=STRING)),
    ("declared parameter", MethodCall(USER, "getName", type=STRING, param_count=1)),
    ("static getter", MethodCall(Identifier("Util"), "getInstance", is_static=True)),
    ("chained getter", getter(getter(USER, "getAddress"), "getCity")),
    ("lowercase after prefix", getter(USER, "isolate")),
    ("bare prefix", getter(USER, "get")),
    ("non-component record call", MethodCall(POINT, "norm", type=INT)),
    ("concatenation with variable", concat("a", var("x"))),
    ("concatenation with getter", concat("a", getter(USER, "getName"))),
    ("allocation", NewInstance(class_type("java.util.ArrayList"))),
    ("array", NewArray(OBJECT_TYPE, (var("x"),))),
    ("opaque", Opaque("flag ? a : b")),
    ("arithmetic with call", BinaryOp("+", expensive("count", INT), Constant(1, "int"), INT)),
]


@pytest.mark.parametrize(("label", "expr"), CHEAP_CASES, ids=[label for label, _ in CHEAP_CASES])
def test_cheap(label: str, expr: Expression) -> None:
    assert classify(expr) is Cost.CHEAP, label


@pytest.mark.parametrize(("label", "expr"), EXPENSIVE_CASES, ids=[label for label, _ in EXPENSIVE_CASES])
def test_expensive(label: str, expr: Expression) -> None:
    assert classify(expr) is Cost.EXPENSIVE, label


class TestSimpleGetter:
    def test_getter_requires_zero_parameters(self) -> None:
        assert is_simple_getter(getter(USER, "getName"))
        assert not is_simple_getter(MethodCall(USER, "getName", args=(var("locale"),)))

    def test_getter_receiver_must_be_simple(self) -> None:
        """A getter on a call result hides the receiver's evaluation."""
        receiver = MethodCall(USER, "load", type=class_type("com.example.User"))
        assert not is_simple_getter(getter(receiver, "getName"))

    def test_record_accessor_without_prefix(self) -> None:
        assert is_simple_getter(MethodCall(POINT, "y", type=INT))
        assert not is_simple_getter(MethodCall(None, "y", type=INT))


def test_is_expensive_agrees_with_classify() -> None:
    """``is_expensive`` is the boolean view of ``classify``."""
    for _, expr in CHEAP_CASES + EXPENSIVE_CASES:
        assert is_expensive(expr) == (classify(expr) is Cost.EXPENSIVE)

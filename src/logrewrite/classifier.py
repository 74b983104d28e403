"""
Expression cost classifier.

Labels an expression ``Cost.CHEAP`` or ``Cost.EXPENSIVE`` to evaluate. The
rules are syntactic and deliberately narrow:

- literals, identifiers and field reads are cheap
- a "simple getter" is cheap: zero declared parameters, not static, named
  ``get<Upper>...`` or ``is<Upper>...`` (or a record component accessor), on an
  implicit, identifier or field-access receiver
- a boolean/arithmetic binary expression is cheap when both operands are
- a string concatenation is cheap only when it is a compile-time constant
- a lambda is cheap (creating it evaluates nothing)
- everything else, including shapes the tree does not model, is expensive

The getter rule is a naming heuristic, not a purity proof.
"""

from __future__ import annotations

import re
from enum import Enum

from logrewrite.tree.expressions import (
    BinaryOp,
    Concat,
    Constant,
    Expression,
    FieldAccess,
    Identifier,
    Lambda,
    MethodCall,
    NewArray,
    NewInstance,
    Opaque,
)


class Cost(Enum):
    CHEAP = "cheap"
    EXPENSIVE = "expensive"


_GETTER_NAME = re.compile(r"^(get|is)[A-Z]")


def _is_simple_receiver(target: Expression | None) -> bool:
    return target is None or isinstance(target, (Identifier, FieldAccess))


def _is_record_accessor(call: MethodCall) -> bool:
    if call.target is None:
        return False
    target_type = call.target.type
    return target_type.type_kind == "record" and call.name in target_type.components


def is_simple_getter(call: MethodCall) -> bool:
    """Zero-parameter, non-static getter-named call on a simple receiver."""
    if call.is_static or call.declared_params != 0:
        return False
    if not _is_simple_receiver(call.target):
        return False
    return bool(_GETTER_NAME.match(call.name)) or _is_record_accessor(call)


def _is_constant_concat(expr: Expression) -> bool:
    match expr:
        case Concat(left=left, right=right):
            return _is_constant_concat(left) and _is_constant_concat(right)
        case Constant():
            return True
        case _:
            return False


def classify(expr: Expression) -> Cost:
    """Classify ``expr``; total over every expression shape."""
    match expr:
        case Constant() | Identifier() | FieldAccess() | Lambda():
            return Cost.CHEAP
        case MethodCall():
            return Cost.CHEAP if is_simple_getter(expr) else Cost.EXPENSIVE
        case BinaryOp(left=left, right=right):
            both_cheap = classify(left) is Cost.CHEAP and classify(right) is Cost.CHEAP
            return Cost.CHEAP if both_cheap else Cost.EXPENSIVE
        case Concat():
            return Cost.CHEAP if _is_constant_concat(expr) else Cost.EXPENSIVE
        case NewInstance() | NewArray() | Opaque():
            return Cost.EXPENSIVE
        case _:
            return Cost.EXPENSIVE


def is_expensive(expr: Expression) -> bool:
    return classify(expr) is Cost.EXPENSIVE


__all__ = ["Cost", "classify", "is_expensive", "is_simple_getter"]

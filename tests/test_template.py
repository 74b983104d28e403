# tests/test_template.py
"""Tests for host template instantiation (``logrewrite.tree.template``)."""

from __future__ import annotations

import pytest

from logrewrite.errors.template import SlotCountMismatch, SlotInsideLiteral, TemplateSyntaxError
from logrewrite.testing import var
from logrewrite.tree.expressions import Constant
from logrewrite.tree.template import count_slots, instantiate_arguments
from tests.helpers import expect_failure, expect_success


# --------------------------------------------------------------------------- #
#                                  count_slots                                #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("", 0),
        ("#{}", 1),
        ('#{}, "a {}", #{}, #{}', 3),
        ('"a \\#{}"', 0),
        ('"a {}"', 0),
    ],
)
def test_count_slots(template: str, expected: int) -> None:
    assert count_slots(template) == expected


# --------------------------------------------------------------------------- #
#                             instantiate_arguments                           #
# --------------------------------------------------------------------------- #


class TestInstantiateArguments:
    def test_literal_and_slots_in_order(self) -> None:
        """Slots are filled in order around the decoded literal."""
        x, y = var("x"), var("y")
        args = expect_success(instantiate_arguments('#{}, "Hello {}", #{}', [x, y]))
        assert args == (x, Constant("Hello {}"), y)

    def test_escapes_are_decoded(self) -> None:
        """Constants hold runtime text, not the source spelling."""
        args = expect_success(instantiate_arguments('"say \\"hi\\"\\n\\\\ \\#1 \\u0041"', []))
        assert args == (Constant('say "hi"\n\\ #1 A'),)

    def test_slot_count_mismatch(self) -> None:
        error = expect_failure(instantiate_arguments('"a", #{}, #{}', [var("x")]))
        assert error == SlotCountMismatch(slots=2, values=1)

    def test_slot_inside_literal_is_rejected(self) -> None:
        """An unescaped introducer inside message text collides with a slot."""
        error = expect_failure(instantiate_arguments('"a#{}b"', [var("x")]))
        assert isinstance(error, SlotInsideLiteral)
        assert error.position == 2

    @pytest.mark.parametrize(
        "template",
        ['"unterminated', "bare", '"bad \\q escape"', '"short \\u12"'],
    )
    def test_syntax_errors(self, template: str) -> None:
        error = expect_failure(instantiate_arguments(template, []))
        assert isinstance(error, TemplateSyntaxError)

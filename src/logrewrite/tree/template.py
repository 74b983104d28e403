"""
Template instantiation for rewritten argument lists.

A host template is a comma-separated list of double-quoted string literals and
positional ``#{}`` slots::

    "Hello {}, see #\\{}", #{}, #{}

Slots are recognised by their ``#`` introducer wherever they occur, so a ``#``
that belongs to message text must be written ``\\#`` inside a literal. Java
escape sequences inside literals are decoded, so the resulting ``Constant``
nodes hold runtime text.
"""

from __future__ import annotations

from collections.abc import Sequence

from logrewrite.errors.template import (
    SlotCountMismatch,
    SlotInsideLiteral,
    TemplateError,
    TemplateSyntaxError,
)
from logrewrite.result import Failure, Result, Success
from logrewrite.tree.expressions import Constant, Expression


INTRODUCER = "#"
SLOT = "#{}"

_DECODE: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    INTRODUCER: INTRODUCER,
}


def count_slots(template: str) -> int:
    """Count unescaped ``#{}`` slots in host template text."""
    count = 0
    i = 0
    while i < len(template):
        if template[i] == "\\":
            i += 2
            continue
        if template.startswith(SLOT, i):
            count += 1
            i += len(SLOT)
            continue
        i += 1
    return count


def _read_literal(template: str, start: int) -> Result[tuple[str, int], TemplateError]:
    """Decode the literal opening at ``start``; return (text, index after closing quote)."""
    chars: list[str] = []
    i = start + 1
    while i < len(template):
        c = template[i]
        if c == "\\":
            if i + 1 >= len(template):
                return Failure(TemplateSyntaxError(position=i, reason="dangling escape"))
            nxt = template[i + 1]
            if nxt == "u":
                digits = template[i + 2 : i + 6]
                if len(digits) != 4 or not all(d in "0123456789abcdefABCDEF" for d in digits):
                    return Failure(TemplateSyntaxError(position=i, reason="bad unicode escape"))
                chars.append(chr(int(digits, 16)))
                i += 6
                continue
            if nxt not in _DECODE:
                return Failure(TemplateSyntaxError(position=i, reason=f"unknown escape \\{nxt}"))
            chars.append(_DECODE[nxt])
            i += 2
            continue
        if template.startswith(SLOT, i):
            return Failure(SlotInsideLiteral(position=i))
        if c == '"':
            return Success(("".join(chars), i + 1))
        chars.append(c)
        i += 1
    return Failure(TemplateSyntaxError(position=start, reason="unterminated literal"))


def instantiate_arguments(
    template: str,
    values: Sequence[Expression],
) -> Result[tuple[Expression, ...], TemplateError]:
    """Instantiate a host template into an argument tuple.

    Args:
        template: Host template text (quoted literals and ``#{}`` slots).
        values: One expression per slot, in slot order.

    Returns:
        Success with the argument tuple, or the reason the template is unusable.
    """
    slots = count_slots(template)
    if slots != len(values):
        return Failure(SlotCountMismatch(slots=slots, values=len(values)))

    remaining = iter(values)
    out: list[Expression] = []
    i = 0
    while i < len(template):
        c = template[i]
        if c in " \t\n,":
            i += 1
        elif template.startswith(SLOT, i):
            out.append(next(remaining))
            i += len(SLOT)
        elif c == '"':
            match _read_literal(template, i):
                case Failure(error):
                    return Failure(error)
                case Success((text, end)):
                    out.append(Constant(text))
                    i = end
        else:
            return Failure(TemplateSyntaxError(position=i, reason=f"unexpected {c!r}"))
    return Success(tuple(out))


__all__ = ["INTRODUCER", "SLOT", "count_slots", "instantiate_arguments"]

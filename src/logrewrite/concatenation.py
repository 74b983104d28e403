"""
Concatenation-to-template compiler.

A ``+``-concatenation message is flattened, left to right, into an ordered
tuple of ``Segment`` values: string literals become literal segments (adjacent
ones merged), every other operand becomes a placeholder. The segments are then
rendered into a ``{}``-style message plus the ordered placeholder arguments.

Two spellings of the message exist:

- ``TemplateResult.message`` is the runtime text a logging framework sees. A
  literal ``{}`` inside message text is written ``\\{}`` so it is not taken as
  a placeholder, and a literal backslash directly before a placeholder is
  doubled.
- ``TemplateResult.template`` is the source spelling used inside a host
  template: Java string escapes plus ``\\#`` for the slot introducer.

Example:
    >>> from logrewrite.tree import Constant, Concat, Identifier
    >>> x, y = Identifier("x"), Identifier("y")
    >>> msg = Concat(Concat(Concat(Constant("a"), x), Constant("b")), y)
    >>> result = compile_message(msg)
    >>> result.template, result.placeholder_args == (x, y)
    ('a{}b{}', True)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from logrewrite.tree.expressions import Concat, Constant, Expression
from logrewrite.tree.printer import escape_java_string
from logrewrite.tree.template import INTRODUCER


MARKER = "{}"


@dataclass(frozen=True)
class Segment:
    """One flattened piece of a concatenation: literal text or a placeholder value."""

    text: str = ""
    value: Expression | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class TemplateResult:
    """Compiled message.

    Attributes:
        message: Runtime message text with ``{}`` markers.
        placeholder_args: Arguments filling the markers, in source order.
        trailing_exception: Final raw exception argument, kept out of the template.
    """

    message: str
    placeholder_args: tuple[Expression, ...] = ()
    trailing_exception: Expression | None = None

    @property
    def template(self) -> str:
        return escape_template_text(self.message)

    @property
    def marker_count(self) -> int:
        return count_markers(self.message)

    @property
    def is_well_formed(self) -> bool:
        return self.marker_count == len(self.placeholder_args)


def escape_template_text(text: str) -> str:
    """Escape runtime text for a quoted literal inside a host template."""
    return escape_java_string(text).replace(INTRODUCER, "\\" + INTRODUCER)


def count_markers(message: str) -> int:
    """Count ``{}`` markers, honouring the ``\\{}`` escape and ``\\\\{}`` un-escape."""
    count = 0
    i = message.find(MARKER)
    while i != -1:
        escaped = i >= 1 and message[i - 1] == "\\" and not (i >= 2 and message[i - 2] == "\\")
        if not escaped:
            count += 1
        i = message.find(MARKER, i + len(MARKER))
    return count


def _join(left: tuple[Segment, ...], right: tuple[Segment, ...]) -> tuple[Segment, ...]:
    if left and right and not left[-1].is_placeholder and not right[0].is_placeholder:
        return (*left[:-1], Segment(text=left[-1].text + right[0].text), *right[1:])
    return (*left, *right)


def flatten_concatenation(
    root: Expression,
    exclude: Expression | None = None,
) -> tuple[Segment, ...]:
    """Flatten a concatenation tree into merged literal and placeholder segments.

    Args:
        root: Concatenation root; any other expression is a single leaf.
        exclude: Operand to leave out entirely (the trailing exception).
    """
    match root:
        case Concat(left=left, right=right):
            return _join(flatten_concatenation(left, exclude), flatten_concatenation(right, exclude))
        case Constant(value=value, literal_kind="string"):
            return (Segment(text=str(value)),)
        case _ if exclude is not None and root == exclude:
            return ()
        case _:
            return (Segment(value=root),)


def _literal_text(text: str, before_marker: bool) -> str:
    text = text.replace(MARKER, "\\" + MARKER)
    if before_marker and text.endswith("\\"):
        text += "\\"
    return text


def render_segments(segments: Sequence[Segment]) -> str:
    """Render segments as runtime message text with ``{}`` markers."""
    parts: list[str] = []
    for index, segment in enumerate(segments):
        if segment.is_placeholder:
            parts.append(MARKER)
        else:
            following = segments[index + 1] if index + 1 < len(segments) else None
            before_marker = following is not None and following.is_placeholder
            parts.append(_literal_text(segment.text, before_marker))
    return "".join(parts)


def split_trailing_exception(
    following: Sequence[Expression],
) -> tuple[tuple[Expression, ...], Expression | None]:
    """Split the arguments after the message into (extra args, trailing exception)."""
    if following and following[-1].type.is_exception:
        return tuple(following[:-1]), following[-1]
    return tuple(following), None


def compile_message(
    message: Expression,
    following: Sequence[Expression] = (),
) -> TemplateResult:
    """Compile a log message into a ``TemplateResult``.

    Args:
        message: The message argument (a concatenation, or any single expression).
        following: Raw call arguments after the message. The last one, when
            exception-typed, becomes the trailing exception; the rest are
            appended to the placeholder arguments.

    Returns:
        The compiled result. A non-concatenation string literal is taken
        verbatim as an existing template; any other single non-concatenation
        message becomes ``"{}"`` with the message as its only argument.
    """
    extras, trailing = split_trailing_exception(following)

    match message:
        case Constant(value=value, literal_kind="string"):
            return TemplateResult(str(value), extras, trailing)
        case Concat():
            segments = flatten_concatenation(message, exclude=trailing)
        case _:
            segments = (Segment(value=message),)

    placeholders = tuple(s.value for s in segments if s.value is not None)
    return TemplateResult(render_segments(segments), placeholders + extras, trailing)


__all__ = [
    "MARKER",
    "Segment",
    "TemplateResult",
    "compile_message",
    "count_markers",
    "escape_template_text",
    "flatten_concatenation",
    "render_segments",
    "split_trailing_exception",
]

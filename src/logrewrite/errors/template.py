"""Error ADTs for template instantiation and message parameterization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeVar

from logrewrite.result import Result


@dataclass(frozen=True)
class TemplateSyntaxError:
    """Host template text could not be tokenized."""

    position: int
    reason: str
    kind: Literal["TemplateSyntaxError"] = "TemplateSyntaxError"


@dataclass(frozen=True)
class SlotInsideLiteral:
    """An unescaped ``#{}`` slot appeared inside a quoted literal (introducer collision)."""

    position: int
    kind: Literal["SlotInsideLiteral"] = "SlotInsideLiteral"


@dataclass(frozen=True)
class SlotCountMismatch:
    """Number of ``#{}`` slots differs from the number of supplied values."""

    slots: int
    values: int
    kind: Literal["SlotCountMismatch"] = "SlotCountMismatch"


TemplateError = TemplateSyntaxError | SlotInsideLiteral | SlotCountMismatch


@dataclass(frozen=True)
class MalformedTemplate:
    """Placeholder marker count differs from the placeholder argument count."""

    template: str
    markers: int
    arguments: int
    kind: Literal["MalformedTemplate"] = "MalformedTemplate"


@dataclass(frozen=True)
class ExceptionOnlyMessage:
    """The sole argument is exception-typed; logging APIs overload this case."""

    kind: Literal["ExceptionOnlyMessage"] = "ExceptionOnlyMessage"


@dataclass(frozen=True)
class MessageAlreadyTemplate:
    """The message is a non-concatenated String; there is nothing to compile."""

    kind: Literal["MessageAlreadyTemplate"] = "MessageAlreadyTemplate"


@dataclass(frozen=True)
class UnresolvedMessageType:
    """The message is not a concatenation and its type could not be resolved."""

    kind: Literal["UnresolvedMessageType"] = "UnresolvedMessageType"


@dataclass(frozen=True)
class DeferredMessage:
    """The message is already a supplier or fluent chain."""

    kind: Literal["DeferredMessage"] = "DeferredMessage"


@dataclass(frozen=True)
class PlaceholdersUnsupported:
    """The logging framework has no ``{}`` placeholder syntax."""

    framework: str
    kind: Literal["PlaceholdersUnsupported"] = "PlaceholdersUnsupported"


@dataclass(frozen=True)
class MissingMessage:
    """The call has no message argument."""

    kind: Literal["MissingMessage"] = "MissingMessage"


@dataclass(frozen=True)
class TemplateInstantiationFailed:
    """The host template for the rewritten arguments could not be instantiated."""

    error: TemplateError
    kind: Literal["TemplateInstantiationFailed"] = "TemplateInstantiationFailed"


ParameterizeSkip = (
    MalformedTemplate
    | ExceptionOnlyMessage
    | MessageAlreadyTemplate
    | UnresolvedMessageType
    | DeferredMessage
    | PlaceholdersUnsupported
    | MissingMessage
    | TemplateInstantiationFailed
)

T = TypeVar("T")
ParameterizeResult = Result[T, ParameterizeSkip]

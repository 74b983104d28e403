"""Error ADTs for guard planning and deferred-evaluation rewrites."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class AmbiguousGuardCondition:
    """An ``if`` tests more than the single expected enablement predicate."""

    condition: str
    kind: Literal["AmbiguousGuardCondition"] = "AmbiguousGuardCondition"


@dataclass(frozen=True)
class FluentUnsupported:
    """The logger's declared type exposes no deferred-evaluation chain."""

    logger_type: str
    kind: Literal["FluentUnsupported"] = "FluentUnsupported"


@dataclass(frozen=True)
class DeferredMessageUnsupported:
    """The fluent dialect cannot defer an expensive message."""

    framework: str
    kind: Literal["DeferredMessageUnsupported"] = "DeferredMessageUnsupported"


@dataclass(frozen=True)
class NothingToDefer:
    """The call carries no expensive argument."""

    kind: Literal["NothingToDefer"] = "NothingToDefer"


FluentSkip = FluentUnsupported | DeferredMessageUnsupported | NothingToDefer


class AccumulatorInvariantError(AssertionError):
    """Guard planner state became inconsistent (programming error).

    Raised instead of guessing; the unit driver decides whether to propagate
    (strict mode) or keep the original block.
    """

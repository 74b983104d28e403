"""
Result type for explicit error handling.

Every rewrite step in logrewrite either produces a replacement node or explains
why the node is left alone. This module provides the generic Result[T, E] ADT
that carries that outcome, so a skipped call site is data rather than an
exception.

Type Safety:
    - All functions returning Result specify both the success and the error type
    - Pattern matching handles both cases exhaustively
    - No implicit None returns or silent exception swallowing

Usage:
    >>> def first_argument(args: tuple[str, ...]) -> Result[str, str]:
    ...     if not args:
    ...         return Failure("no arguments")
    ...     return Success(args[0])
    ...
    >>> match first_argument(("msg",)):
    ...     case Success(value):
    ...         print(f"message: {value}")
    ...     case Failure(error):
    ...         print(f"skipped: {error}")
    message: msg
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result containing a value of type T."""

    value: T


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result containing an error of type E."""

    error: E


# Type alias for the union of Success and Failure
Result = Success[T] | Failure[E]


def partition_results(
    results: list[Result[T, E]],
) -> tuple[list[T], list[E]]:
    """
    Partition a list of Results into successes and failures.

    Args:
        results: List of Result values to partition

    Returns:
        Tuple of (successes, failures)
    """
    successes: list[T] = [result.value for result in results if isinstance(result, Success)]
    failures: list[E] = [result.error for result in results if isinstance(result, Failure)]
    return (successes, failures)

# tests/helpers/__init__.py
"""Shared test utilities for the logrewrite test suite.

Usage:
    >>> from tests.helpers import expect_success, expensive_log, guarded, LOG
    >>>
    >>> planned = plan_guards([expensive_log("debug")], lambda level: True)
    >>> assert planned == (guarded(Level.DEBUG, expensive_log("debug")),)
"""

from __future__ import annotations

from tests.helpers.factories import (
    FLUENT_LOG,
    LOG,
    cheap_log,
    expensive_log,
    getter_log,
    guarded,
    make_log_call,
)
from tests.helpers.result_utils import expect_failure, expect_success

__all__ = [
    "FLUENT_LOG",
    "LOG",
    "cheap_log",
    "expect_failure",
    "expect_success",
    "expensive_log",
    "getter_log",
    "guarded",
    "make_log_call",
]

# tests/conftest.py
"""Global PyTest fixtures for the test-suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from logrewrite.config import RewriteConfig


@pytest.fixture
def strict_config() -> RewriteConfig:
    """Default options with planner invariant violations propagated."""
    return RewriteConfig(strict=True)


@pytest.fixture
def guard_config() -> RewriteConfig:
    """Guards only: no deferred-evaluation chains."""
    return RewriteConfig(strict=True, prefer_fluent=False)


@pytest.fixture
def pyproject(tmp_path: Path) -> Path:
    """Path of a ``pyproject.toml`` inside a fresh temporary directory."""
    return tmp_path / "pyproject.toml"

# tests/test_config.py
"""Tests for ``RewriteConfig`` and loading ``[tool.logrewrite]`` from pyproject files."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from logrewrite.config import DEFAULT_GUARD_LEVELS, RewriteConfig, load_rewrite_config
from logrewrite.errors.config import ConfigFileNotFound, ConfigValidationFailed, InvalidConfigSection
from logrewrite.frameworks import JUL, SLF4J, Level
from tests.helpers import expect_failure, expect_success


# --------------------------------------------------------------------------- #
#                               RewriteConfig                                 #
# --------------------------------------------------------------------------- #


class TestRewriteConfig:
    def test_defaults(self) -> None:
        config = RewriteConfig()
        assert config.framework == "slf4j"
        assert config.logging_framework is SLF4J
        assert config.guard_levels == DEFAULT_GUARD_LEVELS
        assert config.parameterize and config.wrap_expensive and config.prefer_fluent
        assert not (config.remove_to_string or config.complete_exception_logging or config.strict)

    def test_levels_from_strings(self) -> None:
        config = RewriteConfig.model_validate({"framework": "jul", "guard_levels": ["debug", "warn"]})
        assert config.logging_framework is JUL
        assert config.guard_levels == (Level.DEBUG, Level.WARN)
        assert config.guards_level(Level.WARN)
        assert not config.guards_level(Level.INFO)

    @pytest.mark.parametrize(
        "data",
        [
            {"guard_levels": []},
            {"guard_levels": ["debug", "debug"]},
            {"guard_levels": ["verbose"]},
            {"framework": "logback"},
            {"unknown_option": True},
        ],
        ids=["empty-levels", "repeated-level", "unknown-level", "unknown-framework", "extra-field"],
    )
    def test_invalid_values(self, data: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            RewriteConfig.model_validate(data)

    def test_frozen(self) -> None:
        config = RewriteConfig()
        with pytest.raises(ValidationError):
            config.strict = True  # type: ignore[misc]


# --------------------------------------------------------------------------- #
#                            load_rewrite_config                              #
# --------------------------------------------------------------------------- #


class TestLoadRewriteConfig:
    def test_missing_file(self, pyproject: Path) -> None:
        error = expect_failure(load_rewrite_config(pyproject))
        assert error == ConfigFileNotFound(path=str(pyproject))

    def test_file_without_table_gives_defaults(self, pyproject: Path) -> None:
        pyproject.write_text('[project]\nname = "service"\n')
        assert expect_success(load_rewrite_config(pyproject)) == RewriteConfig()

    def test_table_values(self, pyproject: Path) -> None:
        pyproject.write_text(
            "[tool.logrewrite]\n"
            'framework = "log4j2"\n'
            'guard_levels = ["trace", "debug"]\n'
            "remove_to_string = true\n"
            "strict = true\n"
        )
        config = expect_success(load_rewrite_config(pyproject))
        assert config.framework == "log4j2"
        assert config.guard_levels == (Level.TRACE, Level.DEBUG)
        assert config.remove_to_string
        assert config.strict

    def test_invalid_toml(self, pyproject: Path) -> None:
        pyproject.write_text("[tool.logrewrite\nframework = ")
        error = expect_failure(load_rewrite_config(pyproject))
        assert isinstance(error, InvalidConfigSection)

    def test_section_must_be_a_table(self, pyproject: Path) -> None:
        pyproject.write_text("[tool]\nlogrewrite = 3\n")
        error = expect_failure(load_rewrite_config(pyproject))
        assert isinstance(error, InvalidConfigSection)
        assert "must be a table" in error.reason

    def test_validation_failure(self, pyproject: Path) -> None:
        pyproject.write_text('[tool.logrewrite]\nframework = "logback"\n')
        error = expect_failure(load_rewrite_config(pyproject))
        assert isinstance(error, ConfigValidationFailed)
        assert "framework" in str(error.error)

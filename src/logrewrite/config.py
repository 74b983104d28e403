"""Rewrite configuration.

Options are read from the ``[tool.logrewrite]`` table of a ``pyproject.toml``::

    [tool.logrewrite]
    framework = "slf4j"
    guard_levels = ["trace", "debug", "info"]
    prefer_fluent = true

A file without the table yields the defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from logrewrite.errors.config import (
    ConfigError,
    ConfigFileNotFound,
    ConfigValidationFailed,
    InvalidConfigSection,
)
from logrewrite.frameworks import Level, LoggingFramework, from_option
from logrewrite.result import Failure, Result, Success
from logrewrite.validation import validate_model


FrameworkName = Literal["slf4j", "log4j2", "log4j1", "jul"]

# warn and error are rarely disabled, so guarding them only adds noise
DEFAULT_GUARD_LEVELS: tuple[Level, ...] = (Level.TRACE, Level.DEBUG, Level.INFO)


class RewriteConfig(BaseModel):
    """Options for one rewrite run.

    Attributes
    ----------
    framework
        Logging framework of the processed units.
    guard_levels
        Levels whose Expensive calls are guarded or deferred.
    parameterize
        Compile concatenated messages into ``{}`` templates.
    remove_to_string
        Drop ``.toString()`` from format arguments.
    complete_exception_logging
        Pass ``e`` instead of only ``e.getMessage()``.
    wrap_expensive
        Guard or defer calls with Expensive arguments.
    prefer_fluent
        Use the deferred-evaluation chain where the logger supports it.
    align_guard_levels
        Match ``is<L>Enabled()`` checks to the level their body logs at.
    strict
        Propagate planner invariant violations instead of keeping the block.
    """

    framework: FrameworkName = "slf4j"
    guard_levels: Annotated[tuple[Level, ...], Field(min_length=1)] = DEFAULT_GUARD_LEVELS
    parameterize: bool = True
    remove_to_string: bool = False
    complete_exception_logging: bool = False
    wrap_expensive: bool = True
    prefer_fluent: bool = True
    align_guard_levels: bool = False
    strict: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("guard_levels")
    @classmethod
    def _unique_levels(cls, value: tuple[Level, ...]) -> tuple[Level, ...]:
        if len(set(value)) != len(value):
            raise ValueError("guard_levels must not repeat a level")
        return value

    @property
    def logging_framework(self) -> LoggingFramework:
        return from_option(self.framework)

    def guards_level(self, level: Level) -> bool:
        return level in self.guard_levels


def load_rewrite_config(path: Path) -> Result[RewriteConfig, ConfigError]:
    """Load ``[tool.logrewrite]`` from the pyproject file at ``path``.

    Returns:
        Success with the validated configuration (defaults when the table is
        absent), or the reason the file cannot be used.
    """
    if not path.is_file():
        return Failure(ConfigFileNotFound(path=str(path)))

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        return Failure(InvalidConfigSection(path=str(path), reason=str(exc)))

    tool = data.get("tool", {})
    raw: object = tool.get("logrewrite", {}) if isinstance(tool, dict) else {}
    if not isinstance(raw, dict):
        return Failure(InvalidConfigSection(path=str(path), reason="[tool.logrewrite] must be a table"))

    match validate_model(RewriteConfig, **raw):
        case Success(config):
            return Success(config)
        case Failure(error):
            return Failure(ConfigValidationFailed(error=error))


__all__ = ["DEFAULT_GUARD_LEVELS", "FrameworkName", "RewriteConfig", "load_rewrite_config"]

"""Error ADTs for configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import ValidationError


@dataclass(frozen=True)
class ConfigFileNotFound:
    """No pyproject file at the requested location."""

    path: str
    kind: Literal["ConfigFileNotFound"] = "ConfigFileNotFound"


@dataclass(frozen=True)
class InvalidConfigSection:
    """The file is not valid TOML or ``[tool.logrewrite]`` is not a table."""

    path: str
    reason: str
    kind: Literal["InvalidConfigSection"] = "InvalidConfigSection"


@dataclass(frozen=True)
class ConfigValidationFailed:
    """Pydantic validation of ``[tool.logrewrite]`` failed."""

    error: ValidationError
    kind: Literal["ConfigValidationFailed"] = "ConfigValidationFailed"


ConfigError = ConfigFileNotFound | InvalidConfigSection | ConfigValidationFailed

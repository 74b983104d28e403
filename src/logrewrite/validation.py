"""Helper utilities for Result-based Pydantic validation."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from logrewrite.result import Failure, Result, Success


TModel = TypeVar("TModel", bound=BaseModel)

__all__: list[str] = ["validate_model"]


def validate_model(model_cls: type[TModel], **data: object) -> Result[TModel, ValidationError]:
    """
    Construct a Pydantic model and surface validation issues as a Result.

    Configuration values come from user-edited TOML, so a bad value is an
    expected outcome rather than a bug: the ``ValidationError`` is caught at
    this boundary and returned as a Failure carrying Pydantic's messages.
    """
    try:
        return Success(model_cls(**data))
    except ValidationError as exc:
        return Failure(exc)

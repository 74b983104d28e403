"""logrewrite error ADTs."""

from logrewrite.errors.config import (
    ConfigError,
    ConfigFileNotFound,
    ConfigValidationFailed,
    InvalidConfigSection,
)
from logrewrite.errors.planner import (
    AccumulatorInvariantError,
    AmbiguousGuardCondition,
    DeferredMessageUnsupported,
    FluentSkip,
    FluentUnsupported,
    NothingToDefer,
)
from logrewrite.errors.template import (
    DeferredMessage,
    ExceptionOnlyMessage,
    MalformedTemplate,
    MessageAlreadyTemplate,
    MissingMessage,
    ParameterizeSkip,
    PlaceholdersUnsupported,
    SlotCountMismatch,
    SlotInsideLiteral,
    TemplateError,
    TemplateInstantiationFailed,
    TemplateSyntaxError,
    UnresolvedMessageType,
)

__all__ = [
    "AccumulatorInvariantError",
    "AmbiguousGuardCondition",
    "ConfigError",
    "ConfigFileNotFound",
    "ConfigValidationFailed",
    "DeferredMessage",
    "DeferredMessageUnsupported",
    "ExceptionOnlyMessage",
    "FluentSkip",
    "FluentUnsupported",
    "InvalidConfigSection",
    "MalformedTemplate",
    "MessageAlreadyTemplate",
    "MissingMessage",
    "NothingToDefer",
    "ParameterizeSkip",
    "PlaceholdersUnsupported",
    "SlotCountMismatch",
    "SlotInsideLiteral",
    "TemplateError",
    "TemplateInstantiationFailed",
    "TemplateSyntaxError",
    "UnresolvedMessageType",
]

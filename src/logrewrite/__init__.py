"""Rewrite logging call-sites: parameterized messages and enablement guards."""

from logrewrite.classifier import Cost, classify, is_expensive
from logrewrite.concatenation import TemplateResult, compile_message
from logrewrite.config import RewriteConfig, load_rewrite_config
from logrewrite.frameworks import JUL, LOG4J1, LOG4J2, SLF4J, Level, LoggingFramework, from_option
from logrewrite.guards import align_guard_levels, wrap_expensive_statements
from logrewrite.parameterize import parameterize_call, strip_to_string
from logrewrite.pipeline import RewriteReport, optimize_unit
from logrewrite.planner import plan_guards
from logrewrite.reorder import reorder

__all__ = [
    "Cost",
    "JUL",
    "LOG4J1",
    "LOG4J2",
    "Level",
    "LoggingFramework",
    "RewriteConfig",
    "RewriteReport",
    "SLF4J",
    "TemplateResult",
    "align_guard_levels",
    "classify",
    "compile_message",
    "from_option",
    "is_expensive",
    "load_rewrite_config",
    "optimize_unit",
    "parameterize_call",
    "plan_guards",
    "reorder",
    "strip_to_string",
    "wrap_expensive_statements",
]

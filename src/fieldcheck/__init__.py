"""fieldcheck: declarative field validation for nested records."""

from fieldcheck.domain.checks import RuleRegistry, default_registry
from fieldcheck.domain.paths import MISSING, resolve_path
from fieldcheck.domain.rules import RuleSpec, RuleTable, build_rule_table
from fieldcheck.validator import Validator, validate

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "RuleRegistry",
    "RuleSpec",
    "RuleTable",
    "Validator",
    "build_rule_table",
    "default_registry",
    "resolve_path",
    "validate",
]

"""Architectural rule catalog and rule-kind enums."""

from cssarch.model.enums import RuleKind, RuleSetting, Severity
from cssarch.rules.catalog import RULES, ArchitectureRule, get_rule

__all__ = [
    "RuleKind",
    "RuleSetting",
    "Severity",
    "ArchitectureRule",
    "RULES",
    "get_rule",
]

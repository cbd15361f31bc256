"""cssarch model layer -- public type re-exports."""

from cssarch.model.api import APIBinding, CustomPropertyDecl
from cssarch.model.enums import RuleKind, RuleSetting, Severity
from cssarch.model.layer import CANONICAL_LAYERS, LayerTag
from cssarch.model.stylesheet import Declaration, SourceLocation, StyleRule, StylesheetModel
from cssarch.model.violation import Violation

__all__ = [
    # stylesheet
    "SourceLocation",
    "Declaration",
    "StyleRule",
    "StylesheetModel",
    # layer
    "LayerTag",
    "CANONICAL_LAYERS",
    # api
    "CustomPropertyDecl",
    "APIBinding",
    # enums
    "RuleKind",
    "RuleSetting",
    "Severity",
    # violation
    "Violation",
]

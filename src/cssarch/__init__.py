"""cssarch -- architecture linter for layered, custom-property driven CSS."""

from __future__ import annotations

__version__ = "0.3.0"

from cssarch.config import ConfigError, LintConfig, config_from_mapping, load_config  # noqa: E402
from cssarch.engine import ArchitectureError, analyze, analyze_many, analyze_or_raise  # noqa: E402
from cssarch.model import (  # noqa: E402
    Declaration,
    LayerTag,
    Severity,
    SourceLocation,
    StyleRule,
    StylesheetModel,
    Violation,
)
from cssarch.rules import RuleKind, RuleSetting  # noqa: E402

__all__ = [
    "__version__",
    "ConfigError",
    "LintConfig",
    "config_from_mapping",
    "load_config",
    "ArchitectureError",
    "analyze",
    "analyze_many",
    "analyze_or_raise",
    "Declaration",
    "LayerTag",
    "Severity",
    "SourceLocation",
    "StyleRule",
    "StylesheetModel",
    "Violation",
    "RuleKind",
    "RuleSetting",
]

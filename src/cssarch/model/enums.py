"""Enumerations shared by the rule catalog, configuration, and diagnostics."""

from __future__ import annotations

from enum import Enum


class RuleKind(str, Enum):
    """Identifier of an architectural check."""

    LAYER_UNRESOLVED = "layer-unresolved"
    ORPHAN_API = "orphan-api"
    MISSING_API = "missing-api"
    NAMING_CONVENTION = "naming-convention"
    TOKEN_USAGE = "token-usage"
    API_SCOPE = "api-scope"
    UTILITY_RESPONSIBILITY = "utility-responsibility"


class Severity(Enum):
    """Severity level for a violation."""

    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return 2 if self is Severity.ERROR else 1


class RuleSetting(str, Enum):
    """Configured state of a check: disabled, or enabled at a severity."""

    OFF = "off"
    WARNING = "warning"
    ERROR = "error"

    @property
    def enabled(self) -> bool:
        return self is not RuleSetting.OFF

    def to_severity(self) -> Severity:
        if self is RuleSetting.OFF:
            raise ValueError("A disabled rule has no severity")
        return Severity(self.value)

"""Violation model: structured findings about stylesheet architecture."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cssarch.model.enums import RuleKind, Severity
from cssarch.model.stylesheet import SourceLocation


@dataclass(frozen=True)
class Violation:
    """A single architectural finding.

    Attributes:
        rule_kind: The check that produced this violation.
        location: Where the offending rule starts.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        selector: The selector involved, if applicable.
        fix: Suggested remediation, if available.
    """

    rule_kind: RuleKind
    location: SourceLocation
    severity: Severity
    message: str
    selector: str | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def sort_key(self) -> tuple[int, int, int, str, str]:
        """Location first, then error before warning, then rule kind."""
        return (
            self.location.line,
            self.location.column,
            -self.severity.rank,
            self.rule_kind.value,
            self.message,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "location": {"line": self.location.line, "column": self.location.column},
            "ruleKind": self.rule_kind.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.selector is not None:
            data["selector"] = self.selector
        if self.fix is not None:
            data["fix"] = self.fix
        return data

    def __str__(self) -> str:
        return (
            f"{self.location} {self.severity.value} "
            f"[{self.rule_kind.value}]: {self.message}"
        )

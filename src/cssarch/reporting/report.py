"""Report: the violations of one stylesheet plus what a caller needs to act on them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cssarch.model.enums import Severity
from cssarch.model.violation import Violation


@dataclass(frozen=True)
class Report:
    """Analysis output for one stylesheet, ready for a formatter or a CI gate."""

    source: str | None
    violations: list[Violation] = field(default_factory=list)

    @property
    def errors(self) -> list[Violation]:
        return [v for v in self.violations if v.is_error]

    @property
    def warnings(self) -> list[Violation]:
        return [v for v in self.violations if v.is_warning]

    @property
    def is_clean(self) -> bool:
        return not self.violations

    @property
    def has_errors(self) -> bool:
        return any(v.is_error for v in self.violations)

    def exit_code(self, fail_on: Severity = Severity.ERROR) -> int:
        """1 when any violation is at or above *fail_on*, else 0."""
        if any(v.severity.rank >= fail_on.rank for v in self.violations):
            return 1
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "summary": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
            },
            "violations": [v.to_dict() for v in self.violations],
        }

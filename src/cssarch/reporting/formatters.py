"""Text and JSON renderings of reports."""

from __future__ import annotations

import json
from typing import Sequence

from cssarch.reporting.report import Report


def format_text(reports: Sequence[Report]) -> str:
    """One line per violation, prefixed by its source, and a closing summary."""
    lines: list[str] = []
    errors = warnings = 0
    for report in reports:
        name = report.source or "<stylesheet>"
        for violation in report.violations:
            lines.append(f"{name}:{violation}")
            if violation.fix:
                lines.append(f"    fix: {violation.fix}")
        errors += len(report.errors)
        warnings += len(report.warnings)
    if lines:
        lines.append("")
    checked = len(reports)
    lines.append(
        f"Summary: {checked} file(s) checked, {errors} error(s), {warnings} warning(s)"
    )
    return "\n".join(lines)


def format_json(reports: Sequence[Report], indent: int | None = 2) -> str:
    return json.dumps([r.to_dict() for r in reports], indent=indent)


FORMATTERS = {
    "text": format_text,
    "json": format_json,
}

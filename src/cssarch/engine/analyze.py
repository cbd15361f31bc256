"""Diagnostic engine: classify, track APIs, run rule checks, report violations."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, Mapping, Sequence

from cssarch.classifier import classify, unresolved_violations
from cssarch.config import LintConfig
from cssarch.model.enums import RuleKind
from cssarch.model.layer import LayerTag
from cssarch.model.stylesheet import StyleRule, StylesheetModel
from cssarch.model.violation import Violation
from cssarch.rules.naming import check_naming_convention, check_utility_responsibility
from cssarch.rules.tokens import check_token_usage
from cssarch.tracker import track

log = logging.getLogger("cssarch")

CheckFunc = Callable[
    [Sequence[StyleRule], Mapping[StyleRule, LayerTag], LintConfig], list[Violation]
]

# Checks that run after classification, keyed by the rule kind they report.
RULE_CHECKS: dict[RuleKind, CheckFunc] = {
    RuleKind.NAMING_CONVENTION: check_naming_convention,
    RuleKind.TOKEN_USAGE: check_token_usage,
    RuleKind.UTILITY_RESPONSIBILITY: check_utility_responsibility,
}


class ArchitectureError(Exception):
    """Raised by :func:`analyze_or_raise` when error-severity violations exist."""

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = violations
        messages = [str(v) for v in violations if v.is_error]
        super().__init__(
            f"Architecture check failed with {len(messages)} error(s): " + "; ".join(messages)
        )


def _rules_of(model: StylesheetModel | Iterable[StyleRule]) -> tuple[StyleRule, ...]:
    if isinstance(model, StylesheetModel):
        return model.rules
    return tuple(model)


def finalize(violations: Iterable[Violation], config: LintConfig) -> list[Violation]:
    """Apply configured severities, drop disabled rules, sort, and deduplicate.

    Ordering is (location, severity descending, rule kind, message); of
    several violations sharing a (location, rule kind) pair only the first
    in that order is kept.
    """
    resolved: list[Violation] = []
    for violation in violations:
        setting = config.setting_for(violation.rule_kind)
        if not setting.enabled:
            continue
        severity = setting.to_severity()
        if violation.severity is not severity:
            violation = replace(violation, severity=severity)
        resolved.append(violation)
    resolved.sort(key=Violation.sort_key)

    seen: set[tuple[object, RuleKind]] = set()
    ordered: list[Violation] = []
    for violation in resolved:
        key = (violation.location, violation.rule_kind)
        if key in seen:
            continue
        seen.add(key)
        ordered.append(violation)
    return ordered


def analyze(
    model: StylesheetModel | Iterable[StyleRule],
    config: LintConfig | None = None,
    extra_checks: Iterable[CheckFunc] | None = None,
) -> list[Violation]:
    """Analyze one stylesheet and return its ordered violations.

    An empty list means the stylesheet conforms. Violations are data and are
    never raised; the pass always completes.
    """
    config = config or LintConfig()
    rules = _rules_of(model)

    tags = classify(rules, config)
    violations = unresolved_violations(tags, config)
    violations.extend(track(rules, tags, config).violations)
    for kind, check in RULE_CHECKS.items():
        if config.setting_for(kind).enabled:
            violations.extend(check(rules, tags, config))
    for check in extra_checks or ():
        violations.extend(check(rules, tags, config))

    result = finalize(violations, config)
    source = model.source if isinstance(model, StylesheetModel) else None
    log.debug(
        "Analyzed %s: %d rule(s), %d violation(s)",
        source or "<stylesheet>",
        len(rules),
        len(result),
    )
    return result


def analyze_many(
    models: Iterable[StylesheetModel], config: LintConfig | None = None
) -> list[list[Violation]]:
    """Analyze several stylesheets independently, one result per model."""
    config = config or LintConfig()
    return [analyze(model, config) for model in models]


def analyze_or_raise(
    model: StylesheetModel | Iterable[StyleRule],
    config: LintConfig | None = None,
) -> list[Violation]:
    """Run analysis; raises :class:`ArchitectureError` if any error violations exist.

    Returns the warnings when no errors are found.
    """
    violations = analyze(model, config)
    errors = [v for v in violations if v.is_error]
    if errors:
        raise ArchitectureError(errors)
    return violations

"""Naming-convention and utility checks.

Each check takes the rules, their layer tags and the configuration, and
returns a list of Violation objects describing any issues found.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence

from cssarch.classifier.selector import parse_selector, property_family, split_selector_list, var_references
from cssarch.config import LintConfig
from cssarch.model.enums import RuleKind, Severity
from cssarch.model.layer import LayerTag
from cssarch.model.stylesheet import StyleRule
from cssarch.model.violation import Violation


def _class_names(rule: StyleRule) -> list[str]:
    names: list[str] = []
    for part in split_selector_list(rule.selector):
        for compound in parse_selector(part).compounds:
            for name in compound.classes:
                if name not in names:
                    names.append(name)
    return names


# ---------------------------------------------------------------------------
# naming-convention
# ---------------------------------------------------------------------------


def check_naming_convention(
    rules: Sequence[StyleRule],
    tags: Mapping[StyleRule, LayerTag],
    config: LintConfig,
) -> list[Violation]:
    """Class and custom property names must match the configured patterns."""
    class_re = re.compile(config.class_pattern)
    property_re = re.compile(config.property_pattern)
    diagnostics: list[Violation] = []
    for rule in rules:
        problems: list[str] = []
        bad_classes = [c for c in _class_names(rule) if not class_re.search(c)]
        if bad_classes:
            problems.append("class name(s) " + ", ".join(f"'.{c}'" for c in bad_classes))

        custom = [d.property for d in rule.custom_properties()]
        bad_props = [p for p in dict.fromkeys(custom) if not property_re.search(p)]
        if bad_props:
            problems.append("custom propert(ies) " + ", ".join(bad_props))

        if problems:
            diagnostics.append(
                Violation(
                    rule_kind=RuleKind.NAMING_CONVENTION,
                    location=rule.location,
                    severity=Severity.WARNING,
                    message=f"'{rule.selector}' breaks naming conventions: " + "; ".join(problems) + ".",
                    selector=rule.selector,
                    fix="Rename to match the project's class and property patterns.",
                )
            )
    return diagnostics


# ---------------------------------------------------------------------------
# utility-responsibility
# ---------------------------------------------------------------------------


def _families(rule: StyleRule) -> set[str]:
    """Property families a rule sets; custom properties read locally fold away."""
    read_here: set[str] = set()
    for d in rule.declarations:
        read_here.update(var_references(d.value))
    return {
        property_family(d.property)
        for d in rule.declarations
        if not (d.is_custom and d.property in read_here)
    }


def check_utility_responsibility(
    rules: Sequence[StyleRule],
    tags: Mapping[StyleRule, LayerTag],
    config: LintConfig,
) -> list[Violation]:
    """A utility changes one property family. ``data-*`` modifiers are exempt."""
    diagnostics: list[Violation] = []
    for rule in rules:
        if tags.get(rule) is not LayerTag.UTILITY:
            continue
        parts = [parse_selector(p) for p in split_selector_list(rule.selector)]
        if any(p.recognized and p.base.data_attributes for p in parts):
            continue
        families = _families(rule)
        if len(families) > 1:
            listed = ", ".join(sorted(families))
            diagnostics.append(
                Violation(
                    rule_kind=RuleKind.UTILITY_RESPONSIBILITY,
                    location=rule.location,
                    severity=Severity.WARNING,
                    message=f"Utility '{rule.selector}' changes {len(families)} unrelated properties ({listed}).",
                    selector=rule.selector,
                    fix="Split the utility, or move the combination into a block or data-* modifier.",
                )
            )
    return diagnostics

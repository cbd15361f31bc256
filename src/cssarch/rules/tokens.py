"""Design-token checks."""

from __future__ import annotations

from typing import Mapping, Sequence

from cssarch.config import LintConfig
from cssarch.model.enums import RuleKind, Severity
from cssarch.model.layer import LayerTag
from cssarch.model.stylesheet import StyleRule
from cssarch.model.violation import Violation


def check_token_usage(
    rules: Sequence[StyleRule],
    tags: Mapping[StyleRule, LayerTag],
    config: LintConfig,
) -> list[Violation]:
    """Custom properties declared on global rules must carry ``token_property_prefix``.

    Private properties are exempt. Nothing is checked while no prefix is
    configured.
    """
    prefix = config.token_property_prefix
    if not prefix:
        return []
    diagnostics: list[Violation] = []
    for rule in rules:
        if tags.get(rule) is not LayerTag.GLOBAL:
            continue
        untagged = [
            name
            for name in dict.fromkeys(d.property for d in rule.custom_properties())
            if not name.startswith(prefix) and not config.is_private_property(name)
        ]
        if untagged:
            diagnostics.append(
                Violation(
                    rule_kind=RuleKind.TOKEN_USAGE,
                    location=rule.location,
                    severity=Severity.WARNING,
                    message=(
                        f"Design token(s) on '{rule.selector}' lack the '{prefix}' prefix: "
                        + ", ".join(untagged)
                        + "."
                    ),
                    selector=rule.selector,
                    fix=f"Rename to start with '{prefix}', or make them private.",
                )
            )
    return diagnostics

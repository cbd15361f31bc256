"""Catalog of the architectural rules cssarch knows how to check."""

from __future__ import annotations

from dataclasses import dataclass

from cssarch.model.enums import RuleKind, RuleSetting


@dataclass(frozen=True)
class ArchitectureRule:
    """Static description of one architectural check."""

    kind: RuleKind
    category: str  # "layering", "api", "naming", "token"
    summary: str
    default: RuleSetting = RuleSetting.WARNING


RULES: tuple[ArchitectureRule, ...] = (
    ArchitectureRule(
        kind=RuleKind.LAYER_UNRESOLVED,
        category="layering",
        summary=(
            "Every rule belongs to one of the global, layout, block or utility "
            "layers, either through @layer or a recognizable selector."
        ),
    ),
    ArchitectureRule(
        kind=RuleKind.ORPHAN_API,
        category="api",
        summary=(
            "Utilities and data-* modifiers only set custom properties that a "
            "block or layout exposes, design tokens, or properties read elsewhere."
        ),
    ),
    ArchitectureRule(
        kind=RuleKind.MISSING_API,
        category="api",
        summary=(
            "A property overridden by several modifiers of the same block "
            "should be exposed through a custom property instead."
        ),
    ),
    ArchitectureRule(
        kind=RuleKind.API_SCOPE,
        category="api",
        summary=(
            "API custom properties are declared on the component's base "
            "selector, not on descendants, unless scoped as a sub-API."
        ),
    ),
    ArchitectureRule(
        kind=RuleKind.NAMING_CONVENTION,
        category="naming",
        summary=(
            "Class and custom property names follow the project's naming "
            "pattern."
        ),
    ),
    ArchitectureRule(
        kind=RuleKind.TOKEN_USAGE,
        category="token",
        summary=(
            "Custom properties declared in the global layer are design tokens "
            "and carry the configured token prefix."
        ),
    ),
    ArchitectureRule(
        kind=RuleKind.UTILITY_RESPONSIBILITY,
        category="naming",
        summary="A utility class changes one property or one cohesive property family.",
    ),
)

_BY_KIND: dict[RuleKind, ArchitectureRule] = {r.kind: r for r in RULES}


def get_rule(kind: RuleKind) -> ArchitectureRule:
    """Return the catalog entry for *kind*."""
    return _BY_KIND[kind]

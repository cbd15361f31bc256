"""Custom-property API tracker.

Builds, for every block and layout class, the set of custom properties it
exposes and consumes, then checks how the rest of the stylesheet talks to
those APIs:

* ``orphan-api``: a utility (or ``data-*`` modifier) sets a custom property
  that no component exposes, that is not a design token, and that nothing
  else reads.
* ``missing-api``: several modifiers of the same component override one raw
  property directly instead of going through a custom property.
* ``api-scope``: an API property is declared on a descendant selector only,
  without being listed as a scoped sub-API.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from cssarch.classifier.selector import ComplexSelector, parse_selector, split_selector_list, var_references
from cssarch.config import LintConfig
from cssarch.model.api import APIBinding, CustomPropertyDecl
from cssarch.model.enums import RuleKind, Severity
from cssarch.model.layer import LayerTag
from cssarch.model.stylesheet import SourceLocation, StyleRule
from cssarch.model.violation import Violation

log = logging.getLogger("cssarch")


@dataclass(frozen=True)
class TrackResult:
    """Bindings keyed by base selector (``.card``) plus the violations found."""

    bindings: dict[str, APIBinding]
    violations: list[Violation]


@dataclass
class _Component:
    """Rules grouped under one base class while building a binding."""

    name: str
    base_rules: list[StyleRule] = field(default_factory=list)
    descendant_rules: list[tuple[StyleRule, ComplexSelector]] = field(default_factory=list)
    modifier_rules: list[StyleRule] = field(default_factory=list)
    layer: LayerTag | None = None

    @property
    def selector(self) -> str:
        return f".{self.name}"

    @property
    def anchor(self) -> StyleRule:
        """The rule violations about the component as a whole point at."""
        candidates = self.base_rules or [r for r, _ in self.descendant_rules]
        return min(candidates, key=lambda r: (r.location, r.selector))


def _is_base(selector: ComplexSelector) -> bool:
    base = selector.base
    return (
        not selector.has_combinator
        and len(base.classes) == 1
        and base.element is None
        and not base.ids
        and not base.attributes
        and not base.pseudos
    )


def _is_modifier(selector: ComplexSelector, config: LintConfig) -> bool:
    """``.card.--ghost`` or ``.card[data-variant]`` with no combinator."""
    if selector.has_combinator:
        return False
    base = selector.base
    extra_utilities = [c for c in base.classes[1:] if config.is_utility_class(c)]
    return bool(extra_utilities or base.data_attributes)


def _is_modifier_like(tag: LayerTag, parts: list[ComplexSelector]) -> bool:
    """Utilities, and any rule keyed on a ``data-*`` attribute."""
    if tag is LayerTag.UTILITY:
        return True
    return any(p.recognized and p.base.data_attributes for p in parts)


def _decls(rule: StyleRule, config: LintConfig) -> list[CustomPropertyDecl]:
    return [
        CustomPropertyDecl(
            name=d.property,
            value=d.value,
            selector=rule.selector,
            location=d.location or rule.location,
            is_api=config.is_api_property(d.property),
        )
        for d in rule.custom_properties()
    ]


def _collect_components(
    parsed: list[tuple[StyleRule, LayerTag, list[ComplexSelector]]], config: LintConfig
) -> dict[str, _Component]:
    components: dict[str, _Component] = {}
    modifiers: dict[str, list[StyleRule]] = defaultdict(list)

    for rule, tag, parts in parsed:
        for part in parts:
            if not part.recognized or part.base_class is None:
                continue
            name = part.base_class
            if _is_modifier(part, config):
                if rule not in modifiers[name]:
                    modifiers[name].append(rule)
                continue
            if not tag.is_component or config.is_utility_class(name):
                continue
            component = components.setdefault(name, _Component(name=name))
            if _is_base(part):
                if rule not in component.base_rules:
                    component.base_rules.append(rule)
            else:
                # Descendants and stateful bases such as ``.card:hover``.
                component.descendant_rules.append((rule, part))

    for name, component in components.items():
        component.modifier_rules = modifiers.get(name, [])
        anchor = component.anchor
        component.layer = next(
            (t for r, t, _ in parsed if r is anchor),
            LayerTag.BLOCK,
        )
    return components


def _build_binding(
    component: _Component, config: LintConfig, violations: list[Violation]
) -> APIBinding:
    exposes: dict[str, CustomPropertyDecl] = {}
    for rule in sorted(component.base_rules, key=lambda r: r.location):
        for decl in _decls(rule, config):
            if decl.is_api:
                exposes.setdefault(decl.name, decl)

    consumes: set[str] = set()
    for rule in component.base_rules:
        for d in rule.declarations:
            consumes.update(var_references(d.value))

    sub_apis: dict[str, CustomPropertyDecl] = {}
    scoped = {s.strip() for s in config.scoped_sub_apis}
    misplaced: dict[StyleRule, set[str]] = defaultdict(set)
    for rule, part in component.descendant_rules:
        for d in rule.declarations:
            consumes.update(var_references(d.value))
        for decl in _decls(rule, config):
            if not decl.is_api or decl.name in exposes:
                continue
            if part.text in scoped:
                sub_apis.setdefault(decl.name, decl)
            else:
                misplaced[rule].add(decl.name)

    for rule, names in misplaced.items():
        listed = ", ".join(sorted(names))
        violations.append(
            Violation(
                rule_kind=RuleKind.API_SCOPE,
                location=rule.location,
                severity=Severity.WARNING,
                message=(
                    f"API propert{'ies' if len(names) > 1 else 'y'} {listed} declared on "
                    f"descendant selector '{rule.selector}' instead of '{component.selector}'."
                ),
                selector=rule.selector,
                fix=(
                    f"Declare {listed} on '{component.selector}', or list the descendant "
                    "selector under scoped_sub_apis."
                ),
            )
        )

    return APIBinding(
        selector=component.selector,
        layer=component.layer or LayerTag.BLOCK,
        exposes=tuple(sorted(exposes.values(), key=lambda d: (d.location, d.name))),
        consumes=frozenset(consumes),
        sub_apis=tuple(sorted(sub_apis.values(), key=lambda d: (d.location, d.name))),
    )


def _overridden(component: _Component, config: LintConfig) -> dict[str, int]:
    """Raw properties set directly by at least the threshold number of modifiers."""
    overridden: dict[str, set[StyleRule]] = defaultdict(set)
    for rule in component.modifier_rules:
        for d in rule.standard_properties():
            if "var(" in d.value:
                continue
            overridden[d.property.lower()].add(rule)
    return {
        prop: len(rules)
        for prop, rules in sorted(overridden.items())
        if len(rules) >= config.missing_api_threshold
    }


def _details(overridden: dict[str, int]) -> str:
    return ", ".join(f"{prop} ({count} modifiers)" for prop, count in overridden.items())


def _missing_api(group: list[tuple[_Component, dict[str, int]]]) -> Violation:
    """One violation for all components anchored at the same rule."""
    anchor = group[0][0].anchor
    suggestions = ", ".join(f"--{c.name}-{prop}" for c, overridden in group for prop in overridden)
    if len(group) == 1:
        component, overridden = group[0]
        selector = component.selector
        message = f"'{selector}' is overridden directly by its modifiers: {_details(overridden)}. "
    else:
        selector = anchor.selector
        listed = ", ".join(f"'{c.selector}'" for c, _ in group)
        details = "; ".join(f"{c.selector} {_details(overridden)}" for c, overridden in group)
        message = f"{listed} are overridden directly by their modifiers: {details}. "
    return Violation(
        rule_kind=RuleKind.MISSING_API,
        location=anchor.location,
        severity=Severity.WARNING,
        message=message + "Expose these values through custom properties.",
        selector=selector,
        fix=f"Read the value from a custom property on '{selector}' (e.g. {suggestions}) and set that in the modifiers.",
    )


def track(
    rules: Iterable[StyleRule],
    tags: Mapping[StyleRule, LayerTag],
    config: LintConfig | None = None,
) -> TrackResult:
    """Build API bindings for every block/layout class and check API usage."""
    config = config or LintConfig()
    parsed = [
        (rule, tags.get(rule, LayerTag.UNCLASSIFIED), [parse_selector(p) for p in split_selector_list(rule.selector)])
        for rule in rules
    ]
    violations: list[Violation] = []

    # Custom properties read via var(), and by which rules.
    consumers: dict[str, set[StyleRule]] = defaultdict(set)
    tokens: set[str] = set()
    for rule, tag, _ in parsed:
        for d in rule.declarations:
            for name in var_references(d.value):
                consumers[name].add(rule)
        if tag is LayerTag.GLOBAL:
            tokens.update(d.property for d in rule.custom_properties())

    components = _collect_components(parsed, config)
    bindings: dict[str, APIBinding] = {}
    # Components sharing a base rule (".card, .panel") report missing-api together.
    missing: dict[SourceLocation, list[tuple[_Component, dict[str, int]]]] = defaultdict(list)
    for name in sorted(components):
        component = components[name]
        bindings[component.selector] = _build_binding(component, config, violations)
        overridden = _overridden(component, config)
        if overridden:
            missing[component.anchor.location].append((component, overridden))
    violations.extend(_missing_api(group) for group in missing.values())

    api_names: set[str] = set()
    for binding in bindings.values():
        api_names.update(binding.api_names)

    for rule, tag, parts in parsed:
        if not _is_modifier_like(tag, parts):
            continue
        orphans = sorted(
            {
                d.property
                for d in rule.custom_properties()
                if d.property not in api_names
                and d.property not in tokens
                and not (consumers.get(d.property, set()) - {rule})
            }
        )
        if not orphans:
            continue
        listed = ", ".join(orphans)
        violations.append(
            Violation(
                rule_kind=RuleKind.ORPHAN_API,
                location=rule.location,
                severity=Severity.WARNING,
                message=(
                    f"'{rule.selector}' sets {listed}, which no block or layout exposes "
                    "and nothing else reads."
                ),
                selector=rule.selector,
                fix="Set a property from a component's API or a design token, or remove the declaration.",
            )
        )

    log.debug("Tracked %d API binding(s), %d violation(s)", len(bindings), len(violations))
    return TrackResult(bindings=bindings, violations=violations)

"""Layer classifier: assign exactly one LayerTag to every style rule.

An enclosing ``@layer`` whose name is one of the configured layers always
wins. Otherwise the selector's leading compound decides:

* ``:root``, ``html``, bare elements, ``*`` and attribute-only or plain
  pseudo-class compounds are Global;
* a compound holding a utility-marked class is Utility (the marker beats a
  layout pattern name on the same selector);
* a compound whose first class names a layout pattern is Layout;
* any other class compound is Block.

Ids, nesting selectors and unparseable text are Unclassified, as are
selector lists whose parts disagree.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Mapping

from cssarch.classifier.selector import parse_selector, split_selector_list
from cssarch.config import LintConfig
from cssarch.model.enums import RuleKind, Severity
from cssarch.model.layer import LayerTag
from cssarch.model.stylesheet import StyleRule
from cssarch.model.violation import Violation

log = logging.getLogger("cssarch")


def _tag_for_selector(text: str, config: LintConfig) -> LayerTag:
    """Heuristic layer for one complex selector."""
    selector = parse_selector(text)
    if not selector.recognized:
        return LayerTag.UNCLASSIFIED
    base = selector.base
    if base.classes:
        if any(config.is_utility_class(c) for c in base.classes):
            return LayerTag.UTILITY
        if config.is_layout_pattern(base.classes[0]):
            return LayerTag.LAYOUT
        return LayerTag.BLOCK
    if base.ids:
        return LayerTag.UNCLASSIFIED
    if base.is_root or base.element is not None:
        return LayerTag.GLOBAL
    if base.attributes:
        return LayerTag.GLOBAL
    if base.pseudos and not base.has_functional_pseudo:
        return LayerTag.GLOBAL
    return LayerTag.UNCLASSIFIED


def classify_rule(rule: StyleRule, config: LintConfig | None = None) -> LayerTag:
    """Return the LayerTag for a single rule."""
    config = config or LintConfig()
    explicit = config.layer_tag_for(rule.layer)
    if explicit is not None:
        return explicit
    tags = {_tag_for_selector(part, config) for part in split_selector_list(rule.selector)}
    if len(tags) == 1:
        return tags.pop()
    return LayerTag.UNCLASSIFIED


def classify(
    rules: Iterable[StyleRule], config: LintConfig | None = None
) -> dict[StyleRule, LayerTag]:
    """Classify every rule; never fails, Unclassified is the total fallback."""
    config = config or LintConfig()
    tags = {rule: classify_rule(rule, config) for rule in rules}
    if log.isEnabledFor(logging.DEBUG):
        counts = Counter(tag.value for tag in tags.values())
        log.debug("Classified %d rule(s): %s", len(tags), dict(sorted(counts.items())))
    return tags


def _unresolved_message(rule: StyleRule, config: LintConfig) -> str:
    parts = split_selector_list(rule.selector)
    if rule.layer and config.layer_tag_for(rule.layer) is None:
        layer_note = (
            f"enclosing @layer '{rule.layer}' is not one of "
            f"{', '.join(config.layer_names)}"
        )
    else:
        layer_note = "no enclosing @layer"
    if len(parts) > 1:
        mixed = sorted({_tag_for_selector(p, config).value for p in parts})
        return (
            f"Selector list '{rule.selector}' mixes layers ({', '.join(mixed)}) "
            f"and has {layer_note}."
        )
    return f"Selector '{rule.selector}' matches no layer pattern and has {layer_note}."


def unresolved_violations(
    tags: Mapping[StyleRule, LayerTag], config: LintConfig | None = None
) -> list[Violation]:
    """One ``layer-unresolved`` violation per Unclassified rule."""
    config = config or LintConfig()
    violations: list[Violation] = []
    for rule, tag in tags.items():
        if tag is not LayerTag.UNCLASSIFIED:
            continue
        violations.append(
            Violation(
                rule_kind=RuleKind.LAYER_UNRESOLVED,
                location=rule.location,
                severity=Severity.WARNING,
                message=_unresolved_message(rule, config),
                selector=rule.selector,
                fix=(
                    "Wrap the rule in one of the configured @layer blocks or use "
                    "a class that follows the layout, block or utility conventions."
                ),
            )
        )
    return violations

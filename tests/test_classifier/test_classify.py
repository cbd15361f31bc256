"""Tests for layer classification."""

import pytest

from cssarch.classifier import classify, classify_rule, unresolved_violations
from cssarch.config import LintConfig
from cssarch.model import Declaration, LayerTag, RuleKind, Severity, SourceLocation, StyleRule


def _make_rule(selector, *declarations, line=1, column=1, layer=None) -> StyleRule:
    """Build a StyleRule from ``"property: value"`` strings."""
    decls = []
    for raw in declarations:
        name, _, value = raw.partition(":")
        decls.append(Declaration(property=name.strip(), value=value.strip()))
    return StyleRule(
        selector=selector,
        declarations=tuple(decls),
        location=SourceLocation(line=line, column=column),
        layer=layer,
    )


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------


class TestHeuristics:
    @pytest.mark.parametrize(
        "selector, tag",
        [
            (":root", LayerTag.GLOBAL),
            ("html", LayerTag.GLOBAL),
            ("body", LayerTag.GLOBAL),
            ("*", LayerTag.GLOBAL),
            ("a:hover", LayerTag.GLOBAL),
            ("[hidden]", LayerTag.GLOBAL),
            ("::selection", LayerTag.GLOBAL),
            ("h1, h2, h3", LayerTag.GLOBAL),
            (".switcher", LayerTag.LAYOUT),
            (".switcher > *", LayerTag.LAYOUT),
            (".stack > * + *", LayerTag.LAYOUT),
            (".card", LayerTag.BLOCK),
            (".card > h2", LayerTag.BLOCK),
            ('.card[data-variant="ghost"]', LayerTag.BLOCK),
            (".--mystery", LayerTag.UTILITY),
            (".card.--bg-black", LayerTag.UTILITY),
        ],
    )
    def test_selector_shapes(self, selector, tag):
        assert classify_rule(_make_rule(selector, "color: red")) is tag

    @pytest.mark.parametrize("selector", ["#main", "&:hover", ":is(.a, .b)", "> .child"])
    def test_unresolvable(self, selector):
        assert classify_rule(_make_rule(selector, "color: red")) is LayerTag.UNCLASSIFIED

    def test_utility_marker_beats_layout_pattern(self):
        assert classify_rule(_make_rule(".stack.--gap-s", "gap: 1rem")) is LayerTag.UTILITY

    def test_mixed_selector_list_unclassified(self):
        assert classify_rule(_make_rule("h1, .card", "color: red")) is LayerTag.UNCLASSIFIED

    def test_configured_layout_patterns(self):
        config = LintConfig(layout_patterns=("l-grid",))
        assert classify_rule(_make_rule(".l-grid", "display: grid"), config) is LayerTag.LAYOUT
        assert classify_rule(_make_rule(".switcher", "display: flex"), config) is LayerTag.BLOCK


# ---------------------------------------------------------------------------
# @layer membership
# ---------------------------------------------------------------------------


class TestExplicitLayer:
    def test_layer_wins_over_heuristic(self):
        rule = _make_rule(".switcher", "display: flex", layer="utility")
        assert classify_rule(rule) is LayerTag.UTILITY

    def test_layer_resolves_unclassifiable_selector(self):
        assert classify_rule(_make_rule("#main", "color: red", layer="global")) is LayerTag.GLOBAL

    def test_unknown_layer_falls_back(self):
        assert classify_rule(_make_rule(".card", "color: red", layer="vendor")) is LayerTag.BLOCK

    def test_nested_layer_name(self):
        rule = _make_rule("#x", "color: red", layer="components.block")
        assert classify_rule(rule) is LayerTag.BLOCK


# ---------------------------------------------------------------------------
# Totality and unresolved violations
# ---------------------------------------------------------------------------


class TestClassify:
    def test_every_rule_gets_one_tag(self):
        rules = [
            _make_rule(":root", "--a: 1", line=1),
            _make_rule("#main", "color: red", line=2),
            _make_rule(".card", "color: red", line=3),
            _make_rule("&", "color: red", line=4),
        ]
        tags = classify(rules)
        assert set(tags) == set(rules)
        assert all(isinstance(t, LayerTag) for t in tags.values())

    def test_unresolved_violation(self):
        rule = _make_rule("#main", "color: red", line=7)
        violations = unresolved_violations(classify([rule]))
        assert len(violations) == 1
        v = violations[0]
        assert v.rule_kind is RuleKind.LAYER_UNRESOLVED
        assert v.severity is Severity.WARNING
        assert v.location.line == 7
        assert "no enclosing @layer" in v.message

    def test_unknown_layer_mentioned(self):
        rule = _make_rule("#main", "color: red", layer="vendor")
        violations = unresolved_violations(classify([rule]))
        assert "'vendor'" in violations[0].message

    def test_no_violations_for_resolved_rules(self):
        assert unresolved_violations(classify([_make_rule(".card", "color: red")])) == []

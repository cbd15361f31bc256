"""Tests for the stylesheet, layer, API, and violation models."""

import pytest

from cssarch.model import (
    APIBinding,
    CustomPropertyDecl,
    Declaration,
    LayerTag,
    RuleKind,
    RuleSetting,
    Severity,
    SourceLocation,
    StyleRule,
    Violation,
)


# ---------------------------------------------------------------------------
# SourceLocation / StyleRule
# ---------------------------------------------------------------------------


class TestSourceLocation:
    def test_ordering_by_line_then_column(self):
        assert SourceLocation(1, 9) < SourceLocation(2, 1)
        assert SourceLocation(3, 2) < SourceLocation(3, 10)

    def test_str(self):
        assert str(SourceLocation(12, 4)) == "12:4"


class TestStyleRule:
    def test_empty_selector_rejected(self):
        with pytest.raises(ValueError, match="non-empty"):
            StyleRule(selector="  ", declarations=(), location=SourceLocation(1))

    def test_custom_and_standard_properties(self):
        rule = StyleRule(
            selector=".card",
            declarations=(
                Declaration("--card-bg", "white"),
                Declaration("padding", "1rem"),
            ),
            location=SourceLocation(1),
        )
        assert [d.property for d in rule.custom_properties()] == ["--card-bg"]
        assert [d.property for d in rule.standard_properties()] == ["padding"]

    def test_rules_are_hashable(self):
        rule = StyleRule(".a", (Declaration("color", "red"),), SourceLocation(1))
        assert {rule: LayerTag.BLOCK}[rule] is LayerTag.BLOCK


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TestEnums:
    def test_component_layers(self):
        assert LayerTag.BLOCK.is_component
        assert LayerTag.LAYOUT.is_component
        assert not LayerTag.UTILITY.is_component
        assert not LayerTag.UNCLASSIFIED.is_component

    def test_severity_rank(self):
        assert Severity.ERROR.rank > Severity.WARNING.rank

    def test_setting_to_severity(self):
        assert RuleSetting.ERROR.to_severity() is Severity.ERROR
        assert RuleSetting.WARNING.to_severity() is Severity.WARNING

    def test_off_has_no_severity(self):
        assert not RuleSetting.OFF.enabled
        with pytest.raises(ValueError):
            RuleSetting.OFF.to_severity()

    def test_rule_kind_values(self):
        assert RuleKind("orphan-api") is RuleKind.ORPHAN_API


# ---------------------------------------------------------------------------
# APIBinding
# ---------------------------------------------------------------------------


class TestAPIBinding:
    def test_api_names_include_sub_apis(self):
        loc = SourceLocation(1)
        binding = APIBinding(
            selector=".card",
            layer=LayerTag.BLOCK,
            exposes=(CustomPropertyDecl("--card-bg", "white", ".card", loc, True),),
            sub_apis=(CustomPropertyDecl("--card-title", "1em", ".card > h2", loc, True),),
        )
        assert binding.api_names == {"--card-bg", "--card-title"}
        assert binding.exposes_property("--card-title")
        assert not binding.exposes_property("--other")


# ---------------------------------------------------------------------------
# Violation
# ---------------------------------------------------------------------------


class TestViolation:
    def _violation(self, **overrides) -> Violation:
        defaults = dict(
            rule_kind=RuleKind.MISSING_API,
            location=SourceLocation(4, 2),
            severity=Severity.WARNING,
            message="something",
            selector=".card",
        )
        defaults.update(overrides)
        return Violation(**defaults)

    def test_flags(self):
        assert self._violation(severity=Severity.ERROR).is_error
        assert self._violation().is_warning

    def test_str(self):
        assert str(self._violation()) == "4:2 warning [missing-api]: something"

    def test_to_dict(self):
        data = self._violation(fix="do it").to_dict()
        assert data == {
            "location": {"line": 4, "column": 2},
            "ruleKind": "missing-api",
            "severity": "warning",
            "message": "something",
            "selector": ".card",
            "fix": "do it",
        }

    def test_sort_key_puts_errors_first(self):
        warning = self._violation()
        error = self._violation(severity=Severity.ERROR, rule_kind=RuleKind.ORPHAN_API)
        assert sorted([warning, error], key=Violation.sort_key) == [error, warning]

    def test_frozen(self):
        v = self._violation()
        with pytest.raises(AttributeError):
            v.message = "changed"  # type: ignore[misc]

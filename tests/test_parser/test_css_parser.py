"""Tests for the CSS stylesheet loader."""

from pathlib import Path

import pytest

from cssarch.model import Declaration, SourceLocation
from cssarch.parser import ParseError, load_stylesheet, parse_css


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------


class TestRuleSets:
    def test_single_rule(self):
        model = parse_css(".card { background: white; padding: 1rem; }")
        assert len(model.rules) == 1
        rule = model.rules[0]
        assert rule.selector == ".card"
        assert [(d.property, d.value) for d in rule.declarations] == [
            ("background", "white"),
            ("padding", "1rem"),
        ]
        assert rule.layer is None

    def test_selector_whitespace_normalized(self):
        model = parse_css(".switcher   >\n  * { flex-grow: 1 }")
        assert model.rules[0].selector == ".switcher > *"

    def test_selector_list(self):
        model = parse_css("h1,\nh2 { margin: 0 }")
        assert model.rules[0].selector == "h1, h2"

    def test_empty_block(self):
        model = parse_css(".card {}")
        assert model.rules[0].declarations == ()

    def test_custom_property_case_kept(self):
        rule = parse_css(".card { --Card-BG: white; COLOR: red }").rules[0]
        assert [d.property for d in rule.declarations] == ["--Card-BG", "color"]

    def test_important(self):
        decl = parse_css(".a { color: red !important; }").rules[0].declarations[0]
        assert decl.value == "red"
        assert decl.important

    def test_semicolons_inside_functions(self):
        decl = parse_css('.a { background: url("data:image/svg+xml;utf8,<svg/>"); }').rules[0].declarations[0]
        assert decl.value == 'url("data:image/svg+xml;utf8,<svg/>")'

    def test_calc_value(self):
        decl = parse_css(".s > * { flex-basis: calc((var(--token-bp-0) - 100%) * 999); }").rules[0].declarations[0]
        assert decl.value == "calc((var(--token-bp-0) - 100%) * 999)"

    def test_comments_stripped(self):
        model = parse_css("/* { not a rule } */\n.a { /* c: d; */ color: red; }")
        assert len(model.rules) == 1
        assert [d.property for d in model.rules[0].declarations] == ["color"]


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


class TestLocations:
    def test_rule_location(self):
        model = parse_css("\n\n  .card { color: red }")
        assert model.rules[0].location == SourceLocation(3, 3)

    def test_declaration_location(self):
        model = parse_css("a {\n  color: red;\n  margin: 0;\n}")
        decls = model.rules[0].declarations
        assert decls[0].location == SourceLocation(2, 3)
        assert decls[1].location == SourceLocation(3, 3)

    def test_lines_survive_multiline_comments(self):
        model = parse_css("/*\n\n*/\n.a { color: red }")
        assert model.rules[0].location.line == 4


# ---------------------------------------------------------------------------
# At-rules
# ---------------------------------------------------------------------------


class TestAtRules:
    def test_layer_block(self):
        model = parse_css("@layer block { .card { color: red } }")
        assert model.rules[0].layer == "block"

    def test_nested_layers_joined(self):
        model = parse_css("@layer components { @layer block { .card { color: red } } }")
        assert model.rules[0].layer == "components.block"

    def test_layer_keyword_case_insensitive(self):
        model = parse_css("@LAYER block { .card { color: red } }\n@Layer a, b;")
        assert [r.layer for r in model.rules] == ["block"]

    def test_anonymous_layer(self):
        model = parse_css("@layer { .card { color: red } }")
        assert model.rules[0].layer is None

    def test_layer_statement_ignored(self):
        model = parse_css("@layer global, layout, block, utility;\n.card { color: red }")
        assert len(model.rules) == 1

    def test_media_is_transparent(self):
        css = "@layer layout { @media (min-width: 40em) { .switcher { gap: 1rem } } }"
        rule = parse_css(css).rules[0]
        assert rule.selector == ".switcher"
        assert rule.layer == "layout"

    def test_keyframes_skipped(self):
        css = "@keyframes spin { from { rotate: 0deg } to { rotate: 360deg } }\n.a { color: red }"
        model = parse_css(css)
        assert [r.selector for r in model.rules] == [".a"]

    def test_descriptor_blocks_skipped(self):
        css = '@font-face { font-family: "Inter"; src: url(inter.woff2); }\n.a { color: red }'
        assert [r.selector for r in parse_css(css).rules] == [".a"]

    def test_import_statement_ignored(self):
        css = '@import url("reset.css") layer(reset);\n.a { color: red }'
        assert [r.selector for r in parse_css(css).rules] == [".a"]


# ---------------------------------------------------------------------------
# Errors and files
# ---------------------------------------------------------------------------


class TestErrors:
    def test_nested_rules_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse_css(".a { .b { color: red } }")
        assert exc_info.value.line == 1

    def test_unclosed_block(self):
        with pytest.raises(ParseError):
            parse_css(".a { color: red")


class TestLoadStylesheet:
    def test_source_name(self, tmp_path: Path):
        path = tmp_path / "site.css"
        path.write_text(":root { --token-primary: #000; }\n")
        model = load_stylesheet(path)
        assert model.source == str(path)
        assert model.rules[0].declarations == (
            Declaration("--token-primary", "#000", location=SourceLocation(1, 9)),
        )

    def test_non_utf8_file(self, tmp_path: Path):
        path = tmp_path / "latin1.css"
        path.write_bytes(b"\xff\xfe.a { color: red }")
        with pytest.raises(ParseError, match="not valid UTF-8"):
            load_stylesheet(path)


class TestParseErrorLocation:
    def test_location_text(self):
        assert ParseError("x", line=3, column=7).location == "3:7"
        assert ParseError("x", line=3).location == "3"
        assert ParseError("x").location == ""

"""Shared builders for stylesheet models."""

from __future__ import annotations

import pytest

from cssarch.model import Declaration, SourceLocation, StyleRule, StylesheetModel


def _make_rule(
    selector: str,
    *declarations: str,
    line: int = 1,
    column: int = 1,
    layer: str | None = None,
) -> StyleRule:
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


def _make_model(*rules: StyleRule, source: str | None = None) -> StylesheetModel:
    return StylesheetModel(rules=tuple(rules), source=source)


@pytest.fixture()
def conforming_model() -> StylesheetModel:
    return _make_model(
        _make_rule(":root", "--token-primary: #000", line=1),
        _make_rule(".switcher", "--layout-gap: var(--token-size-0)", line=2),
        _make_rule(
            ".switcher > *",
            "flex-basis: calc((var(--token-bp-0) - 100%) * 999)",
            line=3,
        ),
    )


@pytest.fixture()
def card_model() -> StylesheetModel:
    return _make_model(
        _make_rule(".card", "--card-bg: white", line=1),
        _make_rule(".card.--bg-black", "background-color: black", line=2),
        _make_rule(".card.--bg-green", "background-color: green", line=3),
        _make_rule(".card.--bg-blue", "background-color: blue", line=4),
    )

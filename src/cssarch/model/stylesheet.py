"""Stylesheet model: SourceLocation, Declaration, StyleRule, and StylesheetModel."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class SourceLocation:
    """A 1-based (line, column) position in the source stylesheet."""

    line: int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair inside a rule block."""

    property: str
    value: str
    important: bool = False
    location: SourceLocation | None = None

    @property
    def is_custom(self) -> bool:
        """True for custom properties (``--name``)."""
        return self.property.startswith("--")


@dataclass(frozen=True)
class StyleRule:
    """A single rule pairing a selector with its ordered declarations.

    ``layer`` is the enclosing ``@layer`` name, dotted for nested layers,
    or ``None`` when the rule sits outside any named layer.
    """

    selector: str
    declarations: tuple[Declaration, ...]
    location: SourceLocation
    layer: str | None = None

    def __post_init__(self) -> None:
        if not self.selector.strip():
            raise ValueError("StyleRule selector must be a non-empty string")

    def custom_properties(self) -> tuple[Declaration, ...]:
        return tuple(d for d in self.declarations if d.is_custom)

    def standard_properties(self) -> tuple[Declaration, ...]:
        return tuple(d for d in self.declarations if not d.is_custom)


@dataclass(frozen=True)
class StylesheetModel:
    """A parsed stylesheet: rules in source order plus an optional source name."""

    rules: tuple[StyleRule, ...]
    source: str | None = None

    def __len__(self) -> int:
        return len(self.rules)

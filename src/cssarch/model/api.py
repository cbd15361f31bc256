"""Custom-property API model: declarations and the bindings that expose them."""

from __future__ import annotations

from dataclasses import dataclass

from cssarch.model.layer import LayerTag
from cssarch.model.stylesheet import SourceLocation


@dataclass(frozen=True)
class CustomPropertyDecl:
    """A custom property defined inside a rule's declaration block.

    ``is_api`` marks public API surface; everything else is internal.
    """

    name: str
    value: str
    selector: str
    location: SourceLocation
    is_api: bool


@dataclass(frozen=True)
class APIBinding:
    """The public API a block or layout class exposes.

    Attributes:
        selector: The component's base selector, e.g. ``.card``.
        layer: Layout or Block.
        exposes: API properties declared on the base selector.
        consumes: Custom properties read via ``var()`` by the base rule or
            any descendant rule sharing the base class.
        sub_apis: API properties declared on explicitly scoped descendants.
    """

    selector: str
    layer: LayerTag
    exposes: tuple[CustomPropertyDecl, ...] = ()
    consumes: frozenset[str] = frozenset()
    sub_apis: tuple[CustomPropertyDecl, ...] = ()

    @property
    def api_names(self) -> frozenset[str]:
        return frozenset(d.name for d in self.exposes) | frozenset(
            d.name for d in self.sub_apis
        )

    def exposes_property(self, name: str) -> bool:
        return name in self.api_names

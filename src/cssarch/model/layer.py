"""Layer model: the architectural category assigned to every rule."""

from __future__ import annotations

from enum import Enum


class LayerTag(Enum):
    """Architectural layer of a style rule."""

    GLOBAL = "global"
    LAYOUT = "layout"
    BLOCK = "block"
    UTILITY = "utility"
    UNCLASSIFIED = "unclassified"

    @property
    def is_component(self) -> bool:
        """True for layers whose classes expose a custom-property API."""
        return self in (LayerTag.LAYOUT, LayerTag.BLOCK)


# Canonical order; LintConfig.layer_names maps positionally onto it.
CANONICAL_LAYERS: tuple[LayerTag, ...] = (
    LayerTag.GLOBAL,
    LayerTag.LAYOUT,
    LayerTag.BLOCK,
    LayerTag.UTILITY,
)

"""Layout engine: hierarchical and organic node placement."""

from flowforge.layout.config import (
    HierarchicalLayoutConfig,
    LayoutDirection,
    LayoutStrategy,
    OrganicLayoutConfig,
)
from flowforge.layout.engine import apply_layout
from flowforge.layout.hierarchical import layout_hierarchical
from flowforge.layout.organic import GOLDEN_RATIO, layout_organic

__all__ = [
    "apply_layout",
    "layout_hierarchical",
    "layout_organic",
    "LayoutStrategy",
    "LayoutDirection",
    "HierarchicalLayoutConfig",
    "OrganicLayoutConfig",
    "GOLDEN_RATIO",
]

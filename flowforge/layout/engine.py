"""Dispatch a Graph to one of the layout strategies."""

from __future__ import annotations

import random

from flowforge.layout.config import (
    HierarchicalLayoutConfig,
    LayoutDirection,
    LayoutStrategy,
)
from flowforge.layout.hierarchical import layout_hierarchical
from flowforge.layout.organic import layout_organic
from flowforge.models.graph import Graph, ensure_graph


def apply_layout(
    graph: Graph,
    strategy: LayoutStrategy | str = LayoutStrategy.hierarchical,
    canvas_width: float = 1200,
    canvas_height: float = 800,
    direction: LayoutDirection | str = LayoutDirection.TB,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> Graph:
    """Return a copy of `graph` with every node positioned.

    `direction` only applies to the hierarchical strategy, `rng`/`seed` only
    to the organic one. Raises ValueError for an unknown strategy or
    direction. A graph without a node array is returned unchanged.
    """
    graph = ensure_graph(graph)
    strategy = LayoutStrategy(strategy)
    if graph.nodes is None:
        return graph.model_copy(deep=True)
    edges = graph.edges or []

    if strategy == LayoutStrategy.hierarchical:
        config = HierarchicalLayoutConfig(direction=LayoutDirection(direction))
        positioned = layout_hierarchical(graph.nodes, edges, canvas_width, canvas_height, config=config)
    else:
        positioned = layout_organic(graph.nodes, edges, canvas_width, canvas_height, rng=rng, seed=seed)

    return graph.model_copy(update={"nodes": positioned}, deep=True)

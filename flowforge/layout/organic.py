"""Cluster/radial ("organic") layout.

Each connected component becomes a cluster. Clusters are spread across the
canvas width and nudged up or down along a golden-ratio sine so neighbours
do not line up; members sit on a ring around their cluster center. A little
seeded jitter keeps the result from looking mechanical.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

import networkx as nx

from flowforge.layout.common import build_index_graph, clamp
from flowforge.layout.config import OrganicLayoutConfig
from flowforge.models.graph import Edge, Node, Position

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2


def find_clusters(nodes: Sequence[Node], edges: Sequence[Edge]) -> list[list[int]]:
    """Connected components as sorted index lists, ordered by first member."""
    graph = build_index_graph(nodes, edges, directed=False)
    clusters = [sorted(component) for component in nx.connected_components(graph)]
    clusters.sort(key=lambda members: members[0])
    return clusters


def layout_organic(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    canvas_width: float = 1200,
    canvas_height: float = 800,
    rng: random.Random | None = None,
    seed: int | None = None,
    config: OrganicLayoutConfig | None = None,
) -> list[Node]:
    """Place nodes in per-component rings; returns positioned copies.

    Pass `rng` (or `seed`) for reproducible output. Every position lands in
    `[margin, width - right_reserve] x [margin, height - bottom_reserve]`.
    """
    if not nodes:
        return []
    config = config or OrganicLayoutConfig()
    if rng is None:
        rng = random.Random(seed)

    clusters = find_clusters(nodes, edges)

    left, top = config.margin, config.margin
    right = canvas_width - config.right_reserve
    bottom = canvas_height - config.bottom_reserve
    usable_width = max(right - left, 0)
    usable_height = max(bottom - top, 0)
    middle = top + usable_height / 2
    slot_width = usable_width / len(clusters)

    positions: dict[int, Position] = {}
    for i, members in enumerate(clusters):
        center_x = left + slot_width * (i + 0.5)
        center_y = middle + math.sin(i * GOLDEN_RATIO * math.pi) * usable_height / 4
        count = len(members)
        radius = 0.0 if count == 1 else config.base_radius + config.radius_step * count

        for j, index in enumerate(members):
            angle = 2 * math.pi * j / count
            x = center_x + radius * math.cos(angle) + rng.uniform(-config.jitter, config.jitter)
            y = center_y + radius * math.sin(angle) + rng.uniform(-config.jitter, config.jitter)
            positions[index] = Position(x=clamp(x, left, right), y=clamp(y, top, bottom))

    return [
        node.model_copy(update={"position": positions[i]}, deep=True)
        for i, node in enumerate(nodes)
    ]

"""Shared helpers for the layout strategies."""

from __future__ import annotations

from collections.abc import Sequence

import networkx as nx

from flowforge.models.graph import Edge, Node


def index_by_id(nodes: Sequence[Node]) -> dict[str, int]:
    """Map each node id to the index of its first occurrence."""
    index: dict[str, int] = {}
    for i, node in enumerate(nodes):
        if node.id and node.id not in index:
            index[node.id] = i
    return index


def build_index_graph(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    directed: bool = True,
) -> nx.Graph:
    """Build a networkx graph over node *indices*.

    Indices rather than ids keep id-less and duplicate-id nodes in the layout.
    Edges with an unresolved endpoint and self-loops are skipped; node and
    edge insertion order follows the input.
    """
    graph: nx.Graph = nx.DiGraph() if directed else nx.Graph()
    graph.add_nodes_from(range(len(nodes)))

    index = index_by_id(nodes)
    for edge in edges:
        source = index.get(edge.source) if edge.source else None
        target = index.get(edge.target) if edge.target else None
        if source is None or target is None or source == target:
            continue
        graph.add_edge(source, target)
    return graph


def clamp(value: float, low: float, high: float) -> float:
    """Clamp into [low, high]; `low` wins when the range is empty."""
    return max(low, min(value, high))

"""Rank-based (layered) layout.

Pipeline:
  1. build a DiGraph over node indices (self-loops and dangling edges dropped)
  2. break cycles by reversing the back-edges of an insertion-order DFS
  3. rank each node by its longest path from a source
  4. order each rank by the barycenter of its predecessors
  5. place ranks along the main axis, centered on the cross axis

Every step iterates in input order, so equal input always gives equal output.
"""

from __future__ import annotations

from collections.abc import Sequence

import networkx as nx

from flowforge.layout.common import build_index_graph
from flowforge.layout.config import HierarchicalLayoutConfig, LayoutDirection
from flowforge.models.graph import Edge, Node, Position


def find_back_edges(graph: nx.DiGraph) -> list[tuple[int, int]]:
    """Edges closing a cycle during an iterative DFS in insertion order."""
    on_stack, done = set(), set()
    back: list[tuple[int, int]] = []
    for root in graph.nodes:
        if root in on_stack or root in done:
            continue
        on_stack.add(root)
        stack = [(root, iter(graph.successors(root)))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if child in on_stack:
                    back.append((node, child))
                elif child not in done:
                    on_stack.add(child)
                    stack.append((child, iter(graph.successors(child))))
                    break
            else:
                stack.pop()
                on_stack.discard(node)
                done.add(node)
    return back


def remove_cycles(graph: nx.DiGraph) -> nx.DiGraph:
    """Copy of `graph` with every DFS back-edge reversed."""
    dag = graph.copy()
    for source, target in find_back_edges(graph):
        dag.remove_edge(source, target)
        # the reverse may already exist (a 2-cycle); one edge is enough
        if not dag.has_edge(target, source):
            dag.add_edge(target, source)
    return dag


def assign_ranks(dag: nx.DiGraph) -> dict[int, int]:
    """Longest-path rank of each node, sources at rank 0."""
    ranks: dict[int, int] = {}
    for node in nx.lexicographical_topological_sort(dag):
        ranks[node] = max((ranks[pred] + 1 for pred in dag.predecessors(node)), default=0)
    return ranks


def order_ranks(dag: nx.DiGraph, ranks: dict[int, int]) -> list[list[int]]:
    """Group nodes per rank and order each rank by predecessor barycenter."""
    layer_count = max(ranks.values()) + 1 if ranks else 0
    layers: list[list[int]] = [[] for _ in range(layer_count)]
    for node in sorted(ranks):
        layers[ranks[node]].append(node)

    slot: dict[int, int] = {node: i for i, node in enumerate(layers[0])} if layers else {}
    for layer in layers[1:]:

        def barycenter(node: int) -> tuple[float, int]:
            positions = [slot[pred] for pred in dag.predecessors(node) if pred in slot]
            if not positions:
                return float("inf"), node
            return sum(positions) / len(positions), node

        layer.sort(key=barycenter)
        slot.update({node: i for i, node in enumerate(layer)})
    return layers


def layout_hierarchical(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    canvas_width: float = 1200,
    canvas_height: float = 800,
    config: HierarchicalLayoutConfig | None = None,
) -> list[Node]:
    """Place nodes in ranks; returns positioned copies in input order.

    Only the cross axis is fitted to the canvas (width for TB, height for LR);
    ranks advance by a fixed step along the main axis.
    """
    if not nodes:
        return []
    config = config or HierarchicalLayoutConfig()
    horizontal = config.direction == LayoutDirection.LR

    graph = build_index_graph(nodes, edges, directed=True)
    dag = remove_cycles(graph)
    layers = order_ranks(dag, assign_ranks(dag))

    if horizontal:
        main_step = config.node_width + config.rank_sep
        cross_size, cross_sep = config.node_height, config.node_sep
        main_margin, cross_margin = config.margin_x, config.margin_y
        canvas_cross = canvas_height
    else:
        main_step = config.node_height + config.rank_sep
        cross_size, cross_sep = config.node_width, config.node_sep
        main_margin, cross_margin = config.margin_y, config.margin_x
        canvas_cross = canvas_width

    def span(count: int) -> float:
        return count * cross_size + max(count - 1, 0) * cross_sep

    cross_extent = max(max(span(len(layer)) for layer in layers), canvas_cross - 2 * cross_margin)

    handles = (
        {"sourcePosition": "right", "targetPosition": "left"}
        if horizontal
        else {"sourcePosition": "bottom", "targetPosition": "top"}
    )

    positioned: list[Node | None] = [None] * len(nodes)
    for rank, layer in enumerate(layers):
        main = main_margin + rank * main_step
        offset = cross_margin + (cross_extent - span(len(layer))) / 2
        for slot, index in enumerate(layer):
            cross = offset + slot * (cross_size + cross_sep)
            x, y = (main, cross) if horizontal else (cross, main)
            positioned[index] = nodes[index].model_copy(
                update={"position": Position(x=x, y=y), **handles}, deep=True
            )
    return positioned

"""Consistency repair for generated graphs.

A generated graph may reference node ids that were never declared. Repair
closes the graph: every dangling reference gets a synthesized stub node, any
edge that still cannot resolve is dropped, and a graph left with no edges at
all is chained in node order so it does not render as a point cloud.

Repair never fails. A graph whose `nodes` or `edges` is missing entirely is
passed through unchanged, leaving the shape error for the validator.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from itertools import pairwise

from flowforge.models.graph import Edge, Graph, Node, Position, ensure_graph
from flowforge.pipeline.styling import default_node_style
from flowforge.utils.identifiers import IdSequence

logger = logging.getLogger(__name__)


# (id substring, label, node type); first match wins
_STUB_LABEL_RULES: tuple[tuple[str, str, str], ...] = (
    ("auth", "Authentication", "process"),
    ("valid", "Validation", "process"),
    ("process", "Processing", "process"),
    ("decision", "Decision Point", "decision"),
    ("input", "Input", "input"),
    ("output", "Output", "output"),
)
_FALLBACK_STUB_LABEL = "Process Step"

# placeholder grid for stub nodes; the layout engine overwrites these
GRID_ORIGIN = 100.0
GRID_SPACING_X = 250.0
GRID_SPACING_Y = 150.0

FALLBACK_EDGE_PREFIX = "edge_fallback"


@dataclass
class RepairResult:
    """Repaired graph plus what repair had to do to it."""

    graph: Graph
    synthesized_node_ids: list[str] = field(default_factory=list)
    rerouted_edge_ids: list[str | None] = field(default_factory=list)  # kept via a stub endpoint
    dropped_edge_ids: list[str | None] = field(default_factory=list)
    fallback_edge_ids: list[str] = field(default_factory=list)

    @property
    def repaired_edge_count(self) -> int:
        return len(self.rerouted_edge_ids) + len(self.dropped_edge_ids) + len(self.fallback_edge_ids)


def stub_label(node_id: str) -> tuple[str, str]:
    """Pick a (label, node type) for a synthesized node from its id."""
    lowered = node_id.lower()
    for needle, label, node_type in _STUB_LABEL_RULES:
        if needle in lowered:
            return label, node_type
    return _FALLBACK_STUB_LABEL, "process"


def grid_position(index: int, total: int) -> Position:
    """Cell `index` of a square grid large enough for `total` nodes."""
    columns = max(1, math.ceil(math.sqrt(max(total, 1))))
    row, column = divmod(index, columns)
    return Position(x=GRID_ORIGIN + column * GRID_SPACING_X, y=GRID_ORIGIN + row * GRID_SPACING_Y)


def synthesize_node(node_id: str, index: int, total: int) -> Node:
    """Build a stub node standing in for an undeclared reference."""
    label, node_type = stub_label(node_id)
    return Node(
        id=node_id,
        type=node_type,
        position=grid_position(index, total),
        data={
            "label": label,
            "category": node_type,
            "description": f"Synthesized for dangling reference '{node_id}'",
            "synthesized": True,
        },
        style=default_node_style(node_type),
    )


def repair_with_stats(graph: Graph, ids: IdSequence | None = None) -> RepairResult:
    """Close `graph` under edge references and report what changed.

    Args:
        graph: candidate graph (a raw mapping is parsed leniently).
        ids: id source for fallback chain edges. Defaults to a fresh
            `edge_fallback_<n>` sequence that skips ids already in the graph.

    Returns:
        RepairResult whose graph has every edge endpoint resolvable.
    """
    graph = ensure_graph(graph)
    if graph.nodes is None or graph.edges is None:
        return RepairResult(graph=graph.model_copy(deep=True))

    nodes = [node.model_copy(deep=True) for node in graph.nodes]
    existing = {node.id for node in nodes if node.id}

    # ordered by first mention
    missing: dict[str, None] = {}
    for edge in graph.edges:
        for ref in (edge.source, edge.target):
            if ref and ref not in existing:
                missing.setdefault(ref)

    total = len(nodes) + len(missing)
    synthesized: list[str] = []
    for node_id in missing:
        nodes.append(synthesize_node(node_id, index=len(nodes), total=total))
        existing.add(node_id)
        synthesized.append(node_id)

    edges: list[Edge] = []
    rerouted: list[str | None] = []
    dropped: list[str | None] = []
    for edge in graph.edges:
        if edge.source in existing and edge.target in existing:
            edges.append(edge.model_copy(deep=True))
            if edge.source in missing or edge.target in missing:
                rerouted.append(edge.id)
        else:
            dropped.append(edge.id)

    fallback: list[str] = []
    chainable = [node for node in nodes if node.id]
    if not edges and len(chainable) >= 2:
        if ids is None:
            ids = IdSequence(FALLBACK_EDGE_PREFIX)
        ids.reserve(edge.id for edge in graph.edges)
        for upstream, downstream in pairwise(chainable):
            edge_id = ids.next_id()
            edges.append(
                Edge(
                    id=edge_id,
                    source=upstream.id,
                    target=downstream.id,
                    type="smoothstep",
                    data={"fallback": True},
                )
            )
            fallback.append(edge_id)

    if synthesized or dropped or fallback:
        logger.debug(
            "repair: synthesized %d nodes, dropped %d edges, added %d fallback edges",
            len(synthesized),
            len(dropped),
            len(fallback),
        )

    repaired = graph.model_copy(update={"nodes": nodes, "edges": edges}, deep=True)
    return RepairResult(
        graph=repaired,
        synthesized_node_ids=synthesized,
        rerouted_edge_ids=rerouted,
        dropped_edge_ids=dropped,
        fallback_edge_ids=fallback,
    )


def repair(graph: Graph, ids: IdSequence | None = None) -> Graph:
    """Return a referentially closed copy of `graph`."""
    return repair_with_stats(graph, ids=ids).graph

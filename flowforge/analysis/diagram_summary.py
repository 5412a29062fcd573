"""Basic statistics over a diagram graph.

Read-only, like the validator: summarizing a graph never changes it.
"""

from collections import Counter
from dataclasses import dataclass, field

from flowforge.models.diagram import ComplexityTier
from flowforge.models.graph import Graph, ensure_graph
from flowforge.pipeline.labels import is_meaningful


def complexity_tier(node_count: int) -> str:
    """Size class for a node count: simple, medium, complex or enterprise."""
    return ComplexityTier.for_node_count(node_count).value


@dataclass
class DiagramSummary:
    """Summary of one graph.

    `isolated_nodes` lists ids that appear in no edge; nodes without an id
    are counted in `node_count` but never listed.
    """

    node_count: int
    edge_count: int
    complexity_tier: str
    meaningful_node_count: int = 0
    nodes_by_type: dict[str, int] = field(default_factory=dict)
    edges_by_type: dict[str, int] = field(default_factory=dict)
    isolated_nodes: list[str] = field(default_factory=list)
    synthesized_nodes: list[str] = field(default_factory=list)
    fallback_edge_count: int = 0
    metadata: dict = field(default_factory=dict)


def diagram_summary(graph: Graph) -> DiagramSummary:
    graph = ensure_graph(graph)
    nodes = graph.nodes or []
    edges = graph.edges or []

    connected: set[str] = set()
    for edge in edges:
        connected.update(ref for ref in (edge.source, edge.target) if ref)

    return DiagramSummary(
        node_count=len(nodes),
        edge_count=len(edges),
        complexity_tier=complexity_tier(len(nodes)),
        meaningful_node_count=sum(1 for node in nodes if is_meaningful(node.label)),
        nodes_by_type=dict(Counter(node.type or "default" for node in nodes)),
        edges_by_type=dict(Counter(edge.type or "default" for edge in edges)),
        isolated_nodes=[node.id for node in nodes if node.id and node.id not in connected],
        synthesized_nodes=[node.id for node in nodes if node.id and (node.data or {}).get("synthesized")],
        fallback_edge_count=sum(1 for edge in edges if (edge.data or {}).get("fallback")),
        metadata=dict(graph.metadata),
    )

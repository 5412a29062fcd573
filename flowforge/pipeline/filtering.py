"""Node/edge filter.

Removes nodes whose content is a placeholder and every edge that pointed at
one. Filtered nodes are never resurrected; callers that need a closed graph
rely on the edge pass here rather than re-running repair.
"""

from flowforge.models.graph import Graph, Node, ensure_graph
from flowforge.pipeline.labels import is_meaningful


def keeps_node(node: Node) -> bool:
    """True when a node has a non-empty data payload with a meaningful label."""
    if not node.data:
        return False
    label = node.data.get("label")
    return isinstance(label, str) and is_meaningful(label)


def filter_graph(graph: Graph) -> Graph:
    """Drop low-value nodes and the edges that referenced them.

    Order-preserving and idempotent. A graph with a missing node or edge
    array is returned unchanged.
    """
    graph = ensure_graph(graph)
    if graph.nodes is None or graph.edges is None:
        return graph.model_copy(deep=True)

    nodes = [node.model_copy(deep=True) for node in graph.nodes if keeps_node(node)]
    surviving = {node.id for node in nodes if node.id}
    edges = [
        edge.model_copy(deep=True)
        for edge in graph.edges
        if edge.source in surviving and edge.target in surviving
    ]
    return graph.model_copy(update={"nodes": nodes, "edges": edges}, deep=True)

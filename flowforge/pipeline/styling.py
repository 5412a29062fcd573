"""Default presentation styles for nodes and edges.

Styles are opaque to the pipeline; they only supply defaults. A node's own
style always wins over the type default, which wins over the base style.
"""

from typing import Any

from flowforge.models.graph import Graph, ensure_graph


BASE_NODE_STYLE: dict[str, Any] = {
    "backgroundColor": "#ffffff",
    "color": "#333333",
    "border": "2px solid #ddd",
    "borderRadius": "8px",
    "fontSize": "14px",
    "fontWeight": "500",
    "padding": "10px",
}

NODE_TYPE_STYLES: dict[str, dict[str, Any]] = {
    "input": {
        "backgroundColor": "#e3f2fd",
        "border": "2px solid #2196f3",
        "borderRadius": "20px",
    },
    "output": {
        "backgroundColor": "#e8f5e8",
        "border": "2px solid #4caf50",
        "borderRadius": "20px",
    },
    "decision": {
        "backgroundColor": "#fff3e0",
        "border": "2px solid #ff9800",
        "borderRadius": "4px",
    },
    "default": {
        "backgroundColor": "#f5f5f5",
        "border": "2px solid #757575",
    },
}

# free-text nodes render without a box
FREETEXT_TYPES = {"freetext"}

BASE_EDGE_STYLE: dict[str, Any] = {
    "stroke": "#666",
    "strokeWidth": 2,
}


def default_node_style(node_type: str | None) -> dict[str, Any]:
    """Base style merged with the type-specific defaults for `node_type`."""
    if node_type in FREETEXT_TYPES:
        return {}
    type_style = NODE_TYPE_STYLES.get(node_type or "default", NODE_TYPE_STYLES["default"])
    return {**BASE_NODE_STYLE, **type_style}


def enhance_styling(graph: Graph) -> Graph:
    """Return a copy of `graph` with default node and edge styles filled in."""
    graph = ensure_graph(graph)
    if graph.nodes is None or graph.edges is None:
        return graph.model_copy(deep=True)

    nodes = []
    for node in graph.nodes:
        style = {**default_node_style(node.type), **(node.style or {})}
        nodes.append(node.model_copy(update={"style": style}, deep=True))

    edges = []
    for edge in graph.edges:
        style = {**BASE_EDGE_STYLE, **(edge.style or {})}
        animated = bool(getattr(edge, "animated", False) or False)
        edges.append(edge.model_copy(update={"style": style, "animated": animated}, deep=True))

    return graph.model_copy(update={"nodes": nodes, "edges": edges}, deep=True)

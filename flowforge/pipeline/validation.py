"""Structural validator.

Read-only: produces a ValidationReport and never touches the graph. Errors
make a graph unrenderable (the assembler treats them as fatal); warnings are
informational.
"""

from collections.abc import Mapping
from typing import Any

from flowforge.models.graph import Graph, ensure_graph
from flowforge.models.report import ValidationReport
from flowforge.pipeline.labels import is_meaningful
from flowforge.pipeline.styling import FREETEXT_TYPES


def _has_label(node_type: str | None, data: dict[str, Any] | None) -> bool:
    if not data or "label" not in data:
        return False
    label = data["label"]
    # free-text boxes start out empty in the editor
    if node_type in FREETEXT_TYPES and label == "":
        return True
    return isinstance(label, str) and label != ""


def validate(graph: Graph | Mapping[str, Any]) -> ValidationReport:
    """Check one graph snapshot and report errors and warnings.

    Accepts a Graph or a raw mapping (parsed with `Graph.from_raw`).
    """
    graph = ensure_graph(graph)
    errors: list[str] = []
    warnings: list[str] = []

    if graph.nodes is None:
        errors.append("Missing or invalid nodes array")
    if graph.edges is None:
        errors.append("Missing or invalid edges array")

    nodes = graph.nodes or []
    edges = graph.edges or []

    seen_nodes: set[str] = set()
    meaningful = 0
    for i, node in enumerate(nodes):
        if not node.id:
            errors.append(f"Node {i}: missing id")
        elif node.id in seen_nodes:
            warnings.append(f"Duplicate node id '{node.id}'")
        else:
            seen_nodes.add(node.id)

        if not _has_label(node.type, node.data):
            warnings.append(f"Node {i}: missing label")
        if is_meaningful(node.label):
            meaningful += 1

    seen_edges: set[str] = set()
    connected: set[str] = set()
    for i, edge in enumerate(edges):
        if not edge.id:
            warnings.append(f"Edge {i}: missing id")
        elif edge.id in seen_edges:
            warnings.append(f"Duplicate edge id '{edge.id}'")
        else:
            seen_edges.add(edge.id)

        if not edge.source:
            errors.append(f"Edge {i}: missing source")
        elif graph.nodes is not None and edge.source not in seen_nodes:
            errors.append(f"Edge {i}: source '{edge.source}' not found")
        if not edge.target:
            errors.append(f"Edge {i}: missing target")
        elif graph.nodes is not None and edge.target not in seen_nodes:
            errors.append(f"Edge {i}: target '{edge.target}' not found")

        if edge.source:
            connected.add(edge.source)
        if edge.target:
            connected.add(edge.target)

    if len(nodes) > 1:
        disconnected = sum(1 for node in nodes if node.id and node.id not in connected)
        if disconnected:
            warnings.append(f"Found {disconnected} disconnected nodes")

    return ValidationReport(
        is_valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
        meaningful_node_count=meaningful,
    )

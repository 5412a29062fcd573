"""Editing operations used by the canvas editor.

Every operation returns a new Graph and leaves its input alone. Node and edge
ids come from an IdSequence owned by the caller; when none is given a fresh
sequence is built that skips every id already in the graph.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from flowforge.models.graph import Edge, Graph, Node, Position, ensure_graph
from flowforge.pipeline.styling import FREETEXT_TYPES, default_node_style
from flowforge.utils.identifiers import IdSequence

logger = logging.getLogger(__name__)

NODE_ID_PREFIX = "node"
NODE_ID_START = 1000

NODE_TYPE_LABELS = {
    "input": "Input",
    "output": "Output",
    "process": "Process",
    "decision": "Decision",
    "text": "Text Box",
    "freetext": "Free Text",
    "default": "Default",
}


def default_label(kind: str) -> str:
    """Label a freshly created node of `kind` starts with."""
    if kind in FREETEXT_TYPES:
        return ""
    return f"New {NODE_TYPE_LABELS.get(kind, kind.capitalize())}"


def new_node(kind: str, node_id: str, position: Position | None = None) -> Node:
    """Create a node of `kind` with the editor's default label and style."""
    return Node(
        id=node_id,
        type=kind,
        position=position or Position(x=0, y=0),
        data={"label": default_label(kind)},
        style=default_node_style(kind),
    )


def add_node(
    graph: Graph,
    kind: str,
    position: Position | None = None,
    ids: IdSequence | None = None,
) -> tuple[Graph, Node]:
    """Append a new node; returns the updated graph and the node itself."""
    graph = ensure_graph(graph)
    if ids is None:
        ids = IdSequence(NODE_ID_PREFIX, start=NODE_ID_START, taken=graph.node_ids())
    node = new_node(kind, ids.next_id(), position)
    nodes = [*(graph.nodes or []), node]
    return graph.model_copy(update={"nodes": nodes}, deep=True), node


def connect(
    graph: Graph,
    source: str,
    target: str,
    kind: str = "smoothstep",
    label: str | None = None,
    ids: IdSequence | None = None,
) -> Graph:
    """Add an edge from `source` to `target`.

    Unknown endpoints and an existing identical connection leave the graph
    unchanged. Without `ids` the edge is named `edge_<source>_to_<target>`,
    suffixed when that name is taken.
    """
    graph = ensure_graph(graph)
    known = graph.node_ids()
    if source not in known or target not in known:
        logger.warning("cannot connect %s -> %s: unknown node", source, target)
        return graph.model_copy(deep=True)

    edges = list(graph.edges or [])
    for edge in edges:
        if edge.source == source and edge.target == target:
            return graph.model_copy(deep=True)

    taken = {edge.id for edge in edges if edge.id}
    if ids is not None:
        edge_id = ids.next_id()
    else:
        edge_id = f"edge_{source}_to_{target}"
        if edge_id in taken:
            edge_id = IdSequence(edge_id, start=2, taken=taken).next_id()

    edge = Edge(id=edge_id, source=source, target=target, type=kind, label=label)
    return graph.model_copy(update={"edges": [*edges, edge]}, deep=True)


def remove_nodes(graph: Graph, node_ids: Iterable[str]) -> Graph:
    """Delete nodes together with every edge touching them."""
    graph = ensure_graph(graph)
    doomed = set(node_ids)
    nodes = [node for node in graph.nodes or [] if node.id not in doomed]
    edges = [
        edge
        for edge in graph.edges or []
        if edge.source not in doomed and edge.target not in doomed
    ]
    return graph.model_copy(update={"nodes": nodes, "edges": edges}, deep=True)


def remove_edges(graph: Graph, edge_ids: Iterable[str]) -> Graph:
    graph = ensure_graph(graph)
    doomed = set(edge_ids)
    edges = [edge for edge in graph.edges or [] if edge.id not in doomed]
    return graph.model_copy(update={"edges": edges}, deep=True)


def relabel(graph: Graph, node_id: str, label: str) -> Graph:
    """Set the label of one node; other data keys are kept."""
    graph = ensure_graph(graph)
    nodes = []
    for node in graph.nodes or []:
        if node.id == node_id:
            node = node.model_copy(update={"data": {**(node.data or {}), "label": label}}, deep=True)
        nodes.append(node)
    return graph.model_copy(update={"nodes": nodes}, deep=True)

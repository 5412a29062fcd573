"""Core data models for FlowForge."""

from flowforge.models.graph import (
    Edge,
    Graph,
    Node,
    Position,
    ensure_graph,
)
from flowforge.models.report import ValidationReport
from flowforge.models.diagram import (
    DIAGRAM_KINDS,
    EDGE_TYPES,
    NODE_TYPES,
    STYLE_OPTIONS,
    AssembledDiagram,
    ComplexityTier,
    DiagramCreate,
    DiagramMetadata,
    DiagramUpdate,
    StoredDiagram,
)

__all__ = [
    # graph exchange shapes
    "Edge",
    "Graph",
    "Node",
    "Position",
    "ensure_graph",
    # validation
    "ValidationReport",
    # assembled / stored diagrams
    "DIAGRAM_KINDS",
    "EDGE_TYPES",
    "NODE_TYPES",
    "STYLE_OPTIONS",
    "AssembledDiagram",
    "ComplexityTier",
    "DiagramCreate",
    "DiagramMetadata",
    "DiagramUpdate",
    "StoredDiagram",
]

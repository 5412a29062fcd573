"""FlowForge - repair, validation and layout for generated diagram graphs."""

from flowforge.models.graph import Edge, Graph, Node, Position
from flowforge.models.report import ValidationReport
from flowforge.models.diagram import AssembledDiagram, DiagramMetadata
from flowforge.pipeline.assembler import DiagramGenerationError, assemble
from flowforge.pipeline.validation import validate
from flowforge.layout.engine import apply_layout
from flowforge.layout.config import LayoutStrategy
from flowforge.sdk.generator import GraphGenerator, GraphGeneratorError
from flowforge.utils.identifiers import IdSequence

__all__ = [
    # Graph exchange shapes
    "Edge",
    "Graph",
    "Node",
    "Position",
    # Pipeline
    "AssembledDiagram",
    "DiagramMetadata",
    "DiagramGenerationError",
    "ValidationReport",
    "assemble",
    "validate",
    "IdSequence",
    # Layout
    "LayoutStrategy",
    "apply_layout",
    # Generator client
    "GraphGenerator",
    "GraphGeneratorError",
]

"""Assembled and stored diagram models.

An assembled diagram is what the pipeline hands to the rendering surface; a
stored diagram is the record the persistence layer keeps per owner.
"""

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from flowforge.models.graph import Graph
from flowforge.models.report import ValidationReport


DIAGRAM_KINDS = (
    "flowchart",
    "er",
    "uml",
    "network",
    "mindmap",
    "sequence",
    "orgchart",
)

NODE_TYPES = ("input", "default", "output", "decision", "process", "text", "freetext")
EDGE_TYPES = ("default", "straight", "step", "smoothstep", "bezier", "organic", "animated")
STYLE_OPTIONS = ("default", "modern", "minimal", "colorful")


class ComplexityTier(str, Enum):
    """Size class of a diagram, derived from its node count only."""

    simple = "simple"
    medium = "medium"
    complex = "complex"
    enterprise = "enterprise"

    @classmethod
    def for_node_count(cls, node_count: int) -> "ComplexityTier":
        if node_count < 30:
            return cls.simple
        if node_count < 80:
            return cls.medium
        if node_count < 200:
            return cls.complex
        return cls.enterprise


class DiagramMetadata(BaseModel):
    """Summary block attached to every assembled diagram."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    diagram_kind: str
    node_count: int
    edge_count: int
    complexity_tier: ComplexityTier
    repaired_edge_count: int = 0
    filtered_node_count: int = 0

    # extended counters
    synthesized_node_count: int = 0
    filtered_edge_count: int = 0
    generated_at: str | None = None


class AssembledDiagram(BaseModel):
    """A repaired, filtered and validated graph plus its report."""

    graph: Graph
    report: ValidationReport
    metadata: DiagramMetadata


class StoredDiagram(BaseModel):
    """A diagram persisted for one owner."""

    model_config = {"extra": "forbid"}

    diagram_id: str
    owner_id: str
    title: str
    diagram_kind: str = "flowchart"
    layout: str | None = None  # "hierarchical", "organic"
    graph: Graph = Field(default_factory=Graph)

    created_at: str
    updated_at: str


class DiagramCreate(BaseModel):
    """Request model for saving a new diagram."""

    title: str
    diagram_kind: str = "flowchart"
    layout: str | None = None
    graph: Graph = Field(default_factory=Graph)


class DiagramUpdate(BaseModel):
    """Request model for updating a stored diagram; omitted fields are kept."""

    title: str | None = None
    diagram_kind: str | None = None
    layout: str | None = None
    graph: Graph | None = None

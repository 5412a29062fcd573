"""Repair, filter, validate and assemble diagram graphs."""

from flowforge.pipeline.assembler import DiagramGenerationError, assemble
from flowforge.pipeline.editing import (
    add_node,
    connect,
    new_node,
    relabel,
    remove_edges,
    remove_nodes,
)
from flowforge.pipeline.filtering import filter_graph
from flowforge.pipeline.labels import is_meaningful
from flowforge.pipeline.repair import RepairResult, repair, repair_with_stats
from flowforge.pipeline.styling import enhance_styling
from flowforge.pipeline.validation import validate

__all__ = [
    # Stages
    "is_meaningful",
    "repair",
    "repair_with_stats",
    "RepairResult",
    "filter_graph",
    "validate",
    # Orchestration
    "assemble",
    "DiagramGenerationError",
    # Presentation and editing
    "enhance_styling",
    "new_node",
    "add_node",
    "connect",
    "remove_nodes",
    "remove_edges",
    "relabel",
]

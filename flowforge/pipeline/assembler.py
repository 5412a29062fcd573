"""Diagram assembler: the one place the pipeline stages are wired together.

Order is fixed: repair, then filter, then validate. The report always
describes the graph that is handed to the renderer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from flowforge.models.diagram import AssembledDiagram, ComplexityTier, DiagramMetadata
from flowforge.models.graph import Graph
from flowforge.models.report import ValidationReport
from flowforge.pipeline.filtering import filter_graph
from flowforge.pipeline.repair import repair_with_stats
from flowforge.pipeline.validation import validate
from flowforge.utils.identifiers import IdSequence, utc_timestamp

logger = logging.getLogger(__name__)


class DiagramGenerationError(Exception):
    """Raised when an assembled graph still has structural errors."""

    def __init__(self, report: ValidationReport, diagram_kind: str = "flowchart") -> None:
        self.report = report
        self.diagram_kind = diagram_kind
        super().__init__(
            f"Generated {diagram_kind} has structural errors: " + "; ".join(report.errors)
        )

    @property
    def errors(self) -> tuple[str, ...]:
        return self.report.errors

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.report.warnings


def assemble(
    raw: Graph | Mapping[str, Any] | Any,
    diagram_kind: str = "flowchart",
    ids: IdSequence | None = None,
) -> AssembledDiagram:
    """Turn a candidate graph into a renderable, validated diagram.

    Args:
        raw: candidate graph, as a Graph or an untrusted JSON-like object.
        diagram_kind: the requested kind, recorded in the metadata.
        ids: id source for fallback edges created during repair.

    Returns:
        AssembledDiagram with the repaired and filtered graph, its report and
        the metadata block (also merged into `graph.metadata`).

    Raises:
        DiagramGenerationError: the report has at least one error.
    """
    graph = Graph.from_raw(raw)

    repaired = repair_with_stats(graph, ids=ids)
    filtered = filter_graph(repaired.graph)
    report = validate(filtered)

    for warning in report.warnings:
        logger.warning("%s validation warning: %s", diagram_kind, warning)

    if not report.is_valid:
        logger.error("%s assembly failed with %d errors", diagram_kind, len(report.errors))
        raise DiagramGenerationError(report, diagram_kind)

    node_count = len(filtered.nodes or [])
    edge_count = len(filtered.edges or [])
    metadata = DiagramMetadata(
        diagram_kind=diagram_kind,
        node_count=node_count,
        edge_count=edge_count,
        complexity_tier=ComplexityTier.for_node_count(node_count),
        repaired_edge_count=repaired.repaired_edge_count,
        filtered_node_count=len(repaired.graph.nodes or []) - node_count,
        synthesized_node_count=len(repaired.synthesized_node_ids),
        filtered_edge_count=len(repaired.graph.edges or []) - edge_count,
        generated_at=utc_timestamp(),
    )

    logger.info(
        "assembled %s: %d nodes, %d edges (%d synthesized, %d filtered, %d edges repaired)",
        diagram_kind,
        node_count,
        edge_count,
        metadata.synthesized_node_count,
        metadata.filtered_node_count,
        metadata.repaired_edge_count,
    )

    merged = {**filtered.metadata, **metadata.model_dump(mode="json", by_alias=True)}
    assembled_graph = filtered.model_copy(update={"metadata": merged})
    return AssembledDiagram(graph=assembled_graph, report=report, metadata=metadata)

"""Analysis utilities for diagram graphs."""

from flowforge.analysis.diagram_summary import (
    DiagramSummary,
    complexity_tier,
    diagram_summary,
)
from flowforge.analysis.check_diagram import (
    format_summary,
    load_graph_file,
    summary_to_dict,
)

__all__ = [
    # diagram_summary exports
    "DiagramSummary",
    "complexity_tier",
    "diagram_summary",
    # check_diagram exports
    "format_summary",
    "load_graph_file",
    "summary_to_dict",
]

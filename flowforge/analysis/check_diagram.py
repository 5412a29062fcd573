"""CLI to assemble and check a diagram graph file.

Usage:
    flowforge-check <graph.json>

    # with JSON output, after laying the graph out
    flowforge-check <graph.json> --json --layout hierarchical
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from flowforge.analysis.diagram_summary import DiagramSummary, diagram_summary
from flowforge.layout import LayoutStrategy, apply_layout
from flowforge.models.diagram import DIAGRAM_KINDS
from flowforge.models.report import ValidationReport
from flowforge.pipeline.assembler import DiagramGenerationError, assemble


def load_graph_file(graph_file: Path) -> Any:
    """Load a raw graph from a JSON file.

    Raises:
        OSError: the file cannot be read
        json.JSONDecodeError: the file is not JSON
    """
    with open(graph_file) as f:
        return json.load(f)


def format_summary(summary: DiagramSummary, report: ValidationReport | None = None) -> str:
    """Format a diagram summary for human-readable output."""
    lines = []
    lines.append("=" * 60)
    lines.append("DIAGRAM SUMMARY")
    lines.append("=" * 60)
    lines.append("")

    lines.append(f"Nodes:       {summary.node_count} ({summary.meaningful_node_count} meaningful)")
    lines.append(f"Edges:       {summary.edge_count}")
    lines.append(f"Complexity:  {summary.complexity_tier}")
    lines.append("")

    lines.append("-" * 40)
    lines.append("NODE TYPES")
    lines.append("-" * 40)
    for node_type, count in sorted(summary.nodes_by_type.items()):
        lines.append(f"  • {node_type}: {count}")
    if not summary.nodes_by_type:
        lines.append("  (no nodes)")
    lines.append("")

    if summary.edges_by_type:
        lines.append("-" * 40)
        lines.append("EDGE TYPES")
        lines.append("-" * 40)
        for edge_type, count in sorted(summary.edges_by_type.items()):
            lines.append(f"  • {edge_type}: {count}")
        lines.append("")

    if summary.synthesized_nodes or summary.fallback_edge_count:
        lines.append("-" * 40)
        lines.append("REPAIRS")
        lines.append("-" * 40)
        for node_id in summary.synthesized_nodes:
            lines.append(f"  + synthesized node {node_id}")
        if summary.fallback_edge_count:
            lines.append(f"  + {summary.fallback_edge_count} fallback edges")
        lines.append("")

    if summary.isolated_nodes:
        lines.append("-" * 40)
        lines.append("DISCONNECTED NODES")
        lines.append("-" * 40)
        for node_id in summary.isolated_nodes:
            lines.append(f"  • {node_id}")
        lines.append("")

    if report is not None and report.warnings:
        lines.append("-" * 40)
        lines.append("WARNINGS")
        lines.append("-" * 40)
        for warning in report.warnings:
            lines.append(f"  ! {warning}")
        lines.append("")

    if report is not None and not report.warnings:
        lines.append("-" * 40)
        lines.append("✓ No warnings")
        lines.append("-" * 40)
        lines.append("")

    return "\n".join(lines)


def summary_to_dict(summary: DiagramSummary, report: ValidationReport | None = None) -> dict:
    """Convert a DiagramSummary (and its report) to a JSON-serializable dict."""
    d = asdict(summary)
    if report is not None:
        d["report"] = report.model_dump(by_alias=True, mode="json")
    return d


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Repair, filter and validate a diagram graph file."
    )
    parser.add_argument(
        "graph_file",
        type=Path,
        help="path to a JSON file holding {nodes, edges}",
    )
    parser.add_argument(
        "--kind",
        default="flowchart",
        choices=DIAGRAM_KINDS,
        help="diagram kind recorded in the metadata",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="output summary as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--layout",
        choices=[strategy.value for strategy in LayoutStrategy],
        help="lay the assembled graph out and include positions in --json output",
    )

    args = parser.parse_args(argv)

    if not args.graph_file.exists():
        print(f"Error: graph file not found: {args.graph_file}", file=sys.stderr)
        return 1

    try:
        raw = load_graph_file(args.graph_file)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read graph file: {e}", file=sys.stderr)
        return 1

    try:
        assembled = assemble(raw, diagram_kind=args.kind)
    except DiagramGenerationError as e:
        print(f"Error: {args.kind} generation failed", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error}", file=sys.stderr)
        return 1

    graph = assembled.graph
    if args.layout:
        graph = apply_layout(graph, args.layout, seed=0)

    summary = diagram_summary(graph)
    if args.json:
        payload = summary_to_dict(summary, assembled.report)
        if args.layout:
            payload["graph"] = graph.to_raw()
        print(json.dumps(payload, indent=2))
    else:
        print(format_summary(summary, assembled.report))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Tests for the structural validator."""

from flowforge.models.graph import Graph
from flowforge.pipeline.validation import validate


class TestShapeErrors:
    def test_missing_arrays(self):
        """Non-list nodes/edges are errors."""
        report = validate({"nodes": "x"})
        assert report.is_valid is False
        assert "Missing or invalid nodes array" in report.errors
        assert "Missing or invalid edges array" in report.errors

    def test_non_mapping_input(self):
        report = validate(None)
        assert report.errors == ("Missing or invalid nodes array", "Missing or invalid edges array")

    def test_edges_not_checked_against_missing_nodes(self):
        """Without a node array, endpoint lookups are not reported."""
        report = validate({"edges": [{"id": "e1", "source": "a", "target": "b"}]})
        assert report.errors == ("Missing or invalid nodes array",)


class TestErrors:
    def test_missing_node_id(self):
        report = validate({"nodes": [{"data": {"label": "A"}}], "edges": []})
        assert report.errors == ("Node 0: missing id",)

    def test_missing_endpoints(self):
        report = validate({
            "nodes": [{"id": "a", "data": {"label": "A"}}],
            "edges": [{"id": "e1"}],
        })
        assert "Edge 0: missing source" in report.errors
        assert "Edge 0: missing target" in report.errors

    def test_unknown_endpoints(self):
        report = validate({
            "nodes": [{"id": "a", "data": {"label": "A"}}],
            "edges": [{"id": "e1", "source": "x", "target": "y"}],
        })
        assert report.errors == (
            "Edge 0: source 'x' not found",
            "Edge 0: target 'y' not found",
        )
        assert len(report.not_found_errors()) == 2


class TestWarnings:
    def test_duplicates(self):
        """Duplicate ids are warnings, not errors."""
        report = validate({
            "nodes": [
                {"id": "a", "data": {"label": "A"}},
                {"id": "a", "data": {"label": "A again"}},
            ],
            "edges": [
                {"id": "e1", "source": "a", "target": "a"},
                {"id": "e1", "source": "a", "target": "a"},
            ],
        })
        assert report.is_valid is True
        assert "Duplicate node id 'a'" in report.warnings
        assert "Duplicate edge id 'e1'" in report.warnings

    def test_missing_label_and_edge_id(self):
        report = validate({
            "nodes": [{"id": "a"}, {"id": "b", "data": {"label": "B"}}],
            "edges": [{"source": "a", "target": "b"}],
        })
        assert "Node 0: missing label" in report.warnings
        assert "Edge 0: missing id" in report.warnings
        assert report.is_valid is True

    def test_freetext_empty_label_allowed(self):
        """An empty free-text box is not a missing label."""
        report = validate({
            "nodes": [{"id": "t", "type": "freetext", "data": {"label": ""}}],
            "edges": [],
        })
        assert report.warnings == ()

    def test_disconnected_nodes(self):
        report = validate({
            "nodes": [
                {"id": "a", "data": {"label": "A"}},
                {"id": "b", "data": {"label": "B"}},
                {"id": "c", "data": {"label": "C"}},
            ],
            "edges": [{"id": "e1", "source": "a", "target": "b"}],
        })
        assert "Found 1 disconnected nodes" in report.warnings

    def test_single_node_is_not_disconnected(self):
        report = validate({"nodes": [{"id": "a", "data": {"label": "A"}}], "edges": []})
        assert report.warnings == ()


class TestReport:
    def test_meaningful_count(self):
        report = validate({
            "nodes": [
                {"id": "a", "data": {"label": "Pay invoice"}},
                {"id": "b", "data": {"label": "node 2"}},
                {"id": "c"},
            ],
            "edges": [
                {"id": "e1", "source": "a", "target": "b"},
                {"id": "e2", "source": "b", "target": "c"},
            ],
        })
        assert report.meaningful_node_count == 1

    def test_validation_is_read_only(self):
        """Validating never changes the graph."""
        graph = Graph.from_raw({"nodes": [{"id": "a"}], "edges": [{"source": "a", "target": "z"}]})
        before = graph.to_raw()
        validate(graph)
        assert graph.to_raw() == before

    def test_partition(self):
        """is_valid is exactly 'no errors'; warnings never flip it."""
        report = validate({"nodes": [{"id": "a"}, {"id": "b"}], "edges": []})
        assert report.is_valid is True
        assert report.errors == ()
        assert report.warnings

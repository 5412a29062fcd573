"""Tests for the graph exchange models and id utilities."""

from flowforge.models.diagram import ComplexityTier
from flowforge.models.graph import Edge, Graph, Node, Position, ensure_graph
from flowforge.models.report import ValidationReport
from flowforge.utils.identifiers import IdSequence, generate_diagram_id, utc_timestamp


class TestGraphFromRaw:
    """Graph.from_raw never raises and keeps what it can."""

    def test_non_mapping_gives_missing_arrays(self):
        """Anything that is not an object yields nodes=None, edges=None."""
        for raw in (None, 42, "graph", [1, 2]):
            graph = Graph.from_raw(raw)
            assert graph.nodes is None
            assert graph.edges is None

    def test_non_list_arrays_become_none(self):
        """A non-sequence nodes/edges value is carried as None."""
        graph = Graph.from_raw({"nodes": "oops", "edges": {"a": 1}})
        assert graph.nodes is None
        assert graph.edges is None

    def test_non_mapping_entries_become_empty_records(self):
        """Junk entries survive as empty nodes so the validator can index them."""
        graph = Graph.from_raw({"nodes": [7, {"id": "a"}], "edges": ["x"]})
        assert len(graph.nodes) == 2
        assert graph.nodes[0].id is None
        assert graph.nodes[1].id == "a"
        assert graph.edges[0].source is None

    def test_scalar_ids_are_coerced_to_strings(self):
        """Numeric ids and references become strings; booleans are dropped."""
        graph = Graph.from_raw({
            "nodes": [{"id": 1}, {"id": True}],
            "edges": [{"id": 3, "source": 1, "target": 2.5}],
        })
        assert graph.nodes[0].id == "1"
        assert graph.nodes[1].id is None
        assert graph.edges[0].id == "3"
        assert graph.edges[0].source == "1"
        assert graph.edges[0].target == "2.5"

    def test_malformed_position_and_style_are_dropped(self):
        """Positions without numeric x/y and non-mapping styles become None."""
        node = Node.model_validate({"id": "a", "position": {"x": "1", "y": 2}, "style": "red"})
        assert node.position is None
        assert node.style is None

    def test_extra_keys_round_trip(self):
        """Renderer-specific keys are kept on nodes, edges and the graph."""
        raw = {
            "nodes": [{"id": "a", "width": 120, "data": {"label": "Start"}}],
            "edges": [{"id": "e1", "source": "a", "target": "a", "markerEnd": {"type": "arrow"}}],
            "viewport": {"zoom": 1},
        }
        out = Graph.from_raw(raw).to_raw()
        assert out["nodes"][0]["width"] == 120
        assert out["edges"][0]["markerEnd"] == {"type": "arrow"}
        assert out["viewport"] == {"zoom": 1}

    def test_to_raw_omits_absent_fields(self):
        """Unset optional fields are not serialized."""
        out = Graph(nodes=[Node(id="a")], edges=[]).to_raw()
        assert out["nodes"] == [{"id": "a"}]

    def test_ensure_graph_passes_graphs_through(self):
        graph = Graph(nodes=[], edges=[])
        assert ensure_graph(graph) is graph
        assert isinstance(ensure_graph({"nodes": [], "edges": []}), Graph)


class TestNodeAccessors:
    def test_label_category_description(self):
        node = Node(id="a", data={"label": "Pay", "category": "billing", "description": "Charge card"})
        assert node.label == "Pay"
        assert node.category == "billing"
        assert node.description == "Charge card"

    def test_accessors_without_data(self):
        node = Node(id="a")
        assert node.label is None
        assert node.category is None
        assert node.description is None

    def test_node_ids_skips_empty(self):
        graph = Graph(nodes=[Node(id="a"), Node(), Node(id="")], edges=[])
        assert graph.node_ids() == {"a"}


class TestValidationReport:
    def test_serializes_with_camel_case(self):
        """Reports use camelCase keys on the wire."""
        report = ValidationReport(is_valid=True, meaningful_node_count=3)
        dumped = report.model_dump(by_alias=True)
        assert dumped["isValid"] is True
        assert dumped["meaningfulNodeCount"] == 3

    def test_not_found_errors(self):
        report = ValidationReport(
            is_valid=False,
            errors=("Edge 0: source 'x' not found", "Node 1: missing id"),
        )
        assert report.not_found_errors() == ["Edge 0: source 'x' not found"]


class TestComplexityTier:
    def test_boundaries(self):
        """Tiers switch at 30, 80 and 200 nodes."""
        assert ComplexityTier.for_node_count(0) == ComplexityTier.simple
        assert ComplexityTier.for_node_count(29) == ComplexityTier.simple
        assert ComplexityTier.for_node_count(30) == ComplexityTier.medium
        assert ComplexityTier.for_node_count(79) == ComplexityTier.medium
        assert ComplexityTier.for_node_count(80) == ComplexityTier.complex
        assert ComplexityTier.for_node_count(199) == ComplexityTier.complex
        assert ComplexityTier.for_node_count(200) == ComplexityTier.enterprise


class TestIdentifiers:
    def test_diagram_ids_are_unique(self):
        assert generate_diagram_id() != generate_diagram_id()

    def test_utc_timestamp_is_iso(self):
        assert "+00:00" in utc_timestamp()

    def test_sequence_skips_taken_ids(self):
        """An IdSequence never hands out an id it was told is taken."""
        ids = IdSequence("node", start=1000, taken=["node_1000", "node_1002"])
        assert ids.next_id() == "node_1001"
        assert ids() == "node_1003"

    def test_reserve(self):
        ids = IdSequence("edge_fallback")
        ids.reserve(["edge_fallback_1", None])
        assert ids.next_id() == "edge_fallback_2"

    def test_sequences_are_independent(self):
        """Two sequences never share a counter."""
        first, second = IdSequence("n"), IdSequence("n")
        assert first.next_id() == second.next_id() == "n_1"


class TestPosition:
    def test_position_fields(self):
        assert Position(x=1, y=2.5).model_dump() == {"x": 1.0, "y": 2.5}

    def test_edge_defaults(self):
        edge = Edge(source="a", target="b")
        assert edge.id is None
        assert edge.type is None

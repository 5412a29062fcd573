"""Tests for the consistency repairer."""

from flowforge.models.graph import Graph
from flowforge.pipeline.repair import grid_position, repair, repair_with_stats, stub_label
from flowforge.utils.identifiers import IdSequence


def _node(node_id: str, label: str | None = None) -> dict:
    return {"id": node_id, "type": "process", "data": {"label": label or node_id.title()}}


def _edge(edge_id: str, source: str, target: str) -> dict:
    return {"id": edge_id, "source": source, "target": target}


class TestReferentialClosure:
    """After repair every edge endpoint names a node in the graph."""

    def test_dangling_references_get_stub_nodes(self):
        graph = repair({
            "nodes": [_node("start")],
            "edges": [_edge("e1", "start", "auth_check"), _edge("e2", "auth_check", "end")],
        })
        ids = [node.id for node in graph.nodes]
        assert ids == ["start", "auth_check", "end"]
        for edge in graph.edges:
            assert edge.source in ids
            assert edge.target in ids

    def test_stubs_follow_first_seen_order(self):
        """Missing ids are synthesized in the order edges first mention them."""
        result = repair_with_stats({
            "nodes": [],
            "edges": [_edge("e1", "b", "a"), _edge("e2", "c", "b")],
        })
        assert result.synthesized_node_ids == ["b", "a", "c"]

    def test_edges_without_endpoints_are_dropped(self):
        """Edges that still cannot resolve (no source/target) are removed."""
        result = repair_with_stats({
            "nodes": [_node("a"), _node("b")],
            "edges": [_edge("e1", "a", "b"), {"id": "e2", "source": "a"}],
        })
        assert [edge.id for edge in result.graph.edges] == ["e1"]
        assert result.dropped_edge_ids == ["e2"]

    def test_rerouted_edges_are_reported(self):
        result = repair_with_stats({
            "nodes": [_node("a")],
            "edges": [_edge("e1", "a", "ghost")],
        })
        assert result.rerouted_edge_ids == ["e1"]
        assert result.repaired_edge_count == 1

    def test_input_is_not_mutated(self):
        graph = Graph.from_raw({"nodes": [_node("a")], "edges": [_edge("e1", "a", "b")]})
        repair(graph)
        assert len(graph.nodes) == 1


class TestStubNodes:
    def test_stub_labels_from_id(self):
        """Stub labels are picked by substring of the lower-cased id."""
        assert stub_label("user_AUTH") == ("Authentication", "process")
        assert stub_label("validate_form") == ("Validation", "process")
        assert stub_label("process_order") == ("Processing", "process")
        assert stub_label("decision_1") == ("Decision Point", "decision")
        assert stub_label("input_card") == ("Input", "input")
        assert stub_label("final_output") == ("Output", "output")
        assert stub_label("xyz") == ("Process Step", "process")

    def test_stub_data_marks_synthesized(self):
        graph = repair({"nodes": [], "edges": [_edge("e1", "decision_x", "other")]})
        stub = graph.nodes[0]
        assert stub.type == "decision"
        assert stub.data["label"] == "Decision Point"
        assert stub.data["synthesized"] is True
        assert stub.data["category"] == "decision"
        assert "decision_x" in stub.data["description"]
        assert stub.style["border"] == "2px solid #ff9800"

    def test_stub_positions_on_square_grid(self):
        """Stubs sit on a grid sized for the final node count."""
        graph = repair({
            "nodes": [_node("a")],
            "edges": [_edge("e1", "a", "b"), _edge("e2", "a", "c"), _edge("e3", "a", "d")],
        })
        # 4 nodes -> 2 columns; b is cell 1, c is cell 2, d is cell 3
        positions = {node.id: (node.position.x, node.position.y) for node in graph.nodes[1:]}
        assert positions == {"b": (350.0, 100.0), "c": (100.0, 250.0), "d": (350.0, 250.0)}

    def test_grid_position(self):
        assert grid_position(0, 1).x == 100
        assert grid_position(4, 9).model_dump() == {"x": 350.0, "y": 250.0}


class TestFallbackChain:
    def test_chain_added_when_no_edges(self):
        """A graph with nodes but no edges is chained in node order."""
        result = repair_with_stats({"nodes": [_node("a"), _node("b"), _node("c")], "edges": []})
        pairs = [(edge.source, edge.target) for edge in result.graph.edges]
        assert pairs == [("a", "b"), ("b", "c")]
        assert result.fallback_edge_ids == ["edge_fallback_1", "edge_fallback_2"]

    def test_chain_after_all_edges_dropped(self):
        """Dropping every edge also triggers the chain."""
        result = repair_with_stats({
            "nodes": [_node("a"), _node("b")],
            "edges": [{"id": "edge_fallback_1", "source": "a"}],
        })
        # the dropped edge's id is still skipped
        assert result.fallback_edge_ids == ["edge_fallback_2"]
        assert result.repaired_edge_count == 2

    def test_injected_id_sequence(self):
        ids = IdSequence("link", start=10)
        graph = repair({"nodes": [_node("a"), _node("b")], "edges": []}, ids=ids)
        assert graph.edges[0].id == "link_10"

    def test_no_chain_for_single_node(self):
        graph = repair({"nodes": [_node("a")], "edges": []})
        assert graph.edges == []

    def test_no_chain_when_some_edges_remain(self):
        """Only a literally empty edge list triggers the chain."""
        graph = repair({
            "nodes": [_node("a"), _node("b"), _node("c")],
            "edges": [_edge("e1", "a", "b")],
        })
        assert [edge.id for edge in graph.edges] == ["e1"]

    def test_id_less_nodes_are_skipped(self):
        graph = repair({"nodes": [_node("a"), {"data": {"label": "x"}}, _node("b")], "edges": []})
        assert [(edge.source, edge.target) for edge in graph.edges] == [("a", "b")]


class TestShapeErrorsPassThrough:
    def test_missing_arrays_unchanged(self):
        """Repair leaves input-shape errors for the validator."""
        graph = repair({"nodes": "bad", "edges": [_edge("e1", "a", "b")]})
        assert graph.nodes is None
        assert len(graph.edges) == 1

    def test_metadata_preserved(self):
        graph = repair({"nodes": [_node("a")], "edges": [], "metadata": {"source": "llm"}})
        assert graph.metadata == {"source": "llm"}

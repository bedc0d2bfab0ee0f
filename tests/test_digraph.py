"""Tests for DirectedGraph mutation, queries and counters."""

import numpy as np
import pytest

from dyngraph.graph.digraph import DirectedGraph


@pytest.fixture
def sample_graph() -> DirectedGraph[int, int]:
    """Vertices 0..5, edges (0,1),(0,2),(1,2),(2,0),(2,3),(3,3)."""
    g: DirectedGraph[int, int] = DirectedGraph()
    for i in range(6):
        g.add_vertex(i)
    for u, v in [(0, 1), (0, 2), (1, 2), (2, 0), (2, 3), (3, 3)]:
        g.add_edge(u, v, 1)
    return g


def _brute_in_degree(g: DirectedGraph, u: int) -> int:
    return sum(1 for w in range(g.slot_count) if g.has_edge(w, u))


class TestVertices:
    """Vertex lifecycle and tombstones."""

    def test_add_vertex_assigns_sequential_ids(self) -> None:
        g: DirectedGraph[int, int] = DirectedGraph()
        assert [g.add_vertex() for _ in range(3)] == [0, 1, 2]
        assert g.order == 3
        assert g.size == 0

    def test_default_vertex_payload_is_zero_value(self) -> None:
        g: DirectedGraph[str, int] = DirectedGraph(vertex_factory=str)
        u = g.add_vertex()
        assert g.vertex_data(u) == ""

    def test_has_vertex_bounds(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.has_vertex(0)
        assert not sample_graph.has_vertex(6)
        assert not sample_graph.has_vertex(-1)

    def test_remove_vertex_scenario(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.remove_vertex(2) is True
        assert not sample_graph.has_vertex(2)
        assert sample_graph.order == 5
        assert not sample_graph.has_edge(1, 2)
        assert not sample_graph.has_edge(0, 2)
        assert not sample_graph.has_edge(2, 0)
        assert sample_graph.out_degree(2) == 0
        assert sample_graph.validate() == []

    def test_remove_vertex_counts_exact_edges(self, sample_graph: DirectedGraph) -> None:
        sample_graph.remove_vertex(2)
        assert sample_graph.all_edges() == [(0, 1), (3, 3)]
        assert sample_graph.size == 2
        assert sample_graph.in_degree(3) == 1
        assert sample_graph.in_degree(0) == 0

    def test_remove_vertex_with_self_loop(self, sample_graph: DirectedGraph) -> None:
        sample_graph.remove_vertex(3)
        assert sample_graph.size == 4
        assert sample_graph.validate() == []

    def test_remove_vertex_idempotent(self, sample_graph: DirectedGraph) -> None:
        sample_graph.remove_vertex(2)
        order, size = sample_graph.order, sample_graph.size
        assert sample_graph.remove_vertex(2) is False
        assert not sample_graph.has_vertex(2)
        assert (sample_graph.order, sample_graph.size) == (order, size)

    def test_tombstoned_id_not_reused(self, sample_graph: DirectedGraph) -> None:
        sample_graph.remove_vertex(4)
        assert sample_graph.add_vertex() == 6
        assert sample_graph.slot_count == 7
        assert sample_graph.invalid_vertices() == [4]
        assert sample_graph.valid_vertices() == [0, 1, 2, 3, 5, 6]

    def test_removed_vertex_payload_reset(self, sample_graph: DirectedGraph) -> None:
        sample_graph.set_vertex_data(1, 42)
        sample_graph.remove_vertex(1)
        assert sample_graph.vertex_data(1) == 0
        assert sample_graph.set_vertex_data(1, 7) is False

    def test_edges_to_tombstone_rejected(self, sample_graph: DirectedGraph) -> None:
        sample_graph.remove_vertex(5)
        assert sample_graph.add_edge(0, 5) is False
        assert sample_graph.add_edge(5, 0) is False
        assert sample_graph.size == 6


class TestEdges:
    """Edge insertion, removal and payloads."""

    def test_round_trip_payload(self) -> None:
        g: DirectedGraph[int, float] = DirectedGraph(edge_factory=float)
        g.add_vertex()
        g.add_vertex()
        g.add_edge(0, 1, 2.5)
        assert g.edge_data(0, 1) == 2.5
        assert g.remove_edge(0, 1) is True
        assert not g.has_edge(0, 1)
        assert g.edge_data(0, 1) == 0.0

    def test_add_edge_invalid_endpoint_noop(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.add_edge(0, 99) is False
        assert sample_graph.add_edge(-1, 0) is False
        assert sample_graph.size == 6

    def test_add_edge_existing_overwrites_without_counting(
        self, sample_graph: DirectedGraph
    ) -> None:
        assert sample_graph.add_edge(0, 1, 7) is False
        assert sample_graph.edge_data(0, 1) == 7
        assert sample_graph.size == 6
        assert sample_graph.validate() == []

    def test_add_edge_checked_keeps_payload(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.add_edge_checked(0, 1, 7) is False
        assert sample_graph.edge_data(0, 1) == 1
        assert sample_graph.add_edge_checked(4, 5, 3) is True
        assert sample_graph.size == 7

    def test_remove_missing_edge_noop(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.remove_edge(1, 0) is False
        assert sample_graph.remove_edge(0, 42) is False
        assert sample_graph.size == 6

    def test_set_edge_data(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.set_edge_data(2, 3, 9) is True
        assert sample_graph.edge_data(2, 3) == 9
        assert sample_graph.set_edge_data(3, 2, 9) is False
        assert not sample_graph.has_edge(3, 2)

    def test_all_edges_source_major(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.all_edges() == [
            (0, 1), (0, 2), (1, 2), (2, 0), (2, 3), (3, 3)
        ]

    def test_clear(self, sample_graph: DirectedGraph) -> None:
        sample_graph.clear()
        assert sample_graph.order == 0
        assert sample_graph.size == 0
        assert sample_graph.slot_count == 0
        assert sample_graph.all_edges() == []


class TestDegrees:
    """Degree and adjacency queries."""

    def test_out_edges_ascending(self, sample_graph: DirectedGraph) -> None:
        sample_graph.add_edge(0, 5)
        sample_graph.add_edge(0, 4)
        assert sample_graph.out_edges(0) == [1, 2, 4, 5]

    def test_in_edges(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.in_edges(2) == [0, 1]
        assert sample_graph.in_edges(3) == [2, 3]
        assert sample_graph.in_edges(99) == []

    def test_degrees_of_invalid_vertex(self, sample_graph: DirectedGraph) -> None:
        assert sample_graph.in_degree(42) == 0
        assert sample_graph.out_degree(42) == 0
        assert sample_graph.out_edges(42) == []

    def test_degree_properties_random_graph(self) -> None:
        rng = np.random.default_rng(7)
        g: DirectedGraph[int, int] = DirectedGraph()
        for _ in range(40):
            g.add_vertex()
        for _ in range(400):
            u, v = (int(x) for x in rng.integers(0, 40, size=2))
            if rng.random() < 0.75:
                g.add_edge(u, v)
            else:
                g.remove_edge(u, v)
        for u in rng.choice(40, size=5, replace=False):
            g.remove_vertex(int(u))

        assert g.validate() == []
        for u in range(g.slot_count):
            assert g.out_degree(u) == len(g.out_edges(u))
            if g.has_vertex(u):
                assert g.in_degree(u) == _brute_in_degree(g, u)
                assert g.in_degree(u) == len(g.in_edges(u))
        assert g.size == len(g.all_edges())


class TestRender:
    """Debug text rendering."""

    def test_render_lists_valid_vertices(self, sample_graph: DirectedGraph) -> None:
        sample_graph.remove_vertex(5)
        text = sample_graph.render()
        assert "Vertex 0: 0" in text
        assert "Vertex 5" not in text
        assert "(0, 1, 1) (0, 2, 1)" in text
        assert "Incoming edges: (2, 3, 1) (3, 3, 1)" in text
        assert str(sample_graph) == text

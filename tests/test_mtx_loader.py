"""Tests for Matrix Market loading and scipy.sparse conversion."""

from pathlib import Path

import numpy as np
import pytest
import scipy.sparse

from dyngraph.graph.traversal import breadth_first_search
from dyngraph.io.mtx import graph_from_sparse, graph_to_sparse, load_mtx_graph

PATTERN_MTX = """%%MatrixMarket matrix coordinate pattern general
% scenario graph, 1-based indices
% second comment line
6 6 6
1 2
1 3
2 3
3 1
3 4
4 4
"""

WEIGHTED_MTX = """%%MatrixMarket matrix coordinate integer general
3 3 2
1 2 7
3 1 4
"""

SYMMETRIC_MTX = """%%MatrixMarket matrix coordinate pattern symmetric
3 3 2
2 1
3 2
"""

SKEW_MTX = """%%MatrixMarket matrix coordinate integer skew-symmetric
3 3 2
2 1 5
3 1 -2
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


class TestLoadMtx:

    def test_pattern_file(self, tmp_path: Path) -> None:
        g = load_mtx_graph(_write(tmp_path, "g.mtx", PATTERN_MTX))
        assert g.order == 6
        assert g.size == 6
        assert g.all_edges() == [(0, 1), (0, 2), (1, 2), (2, 0), (2, 3), (3, 3)]
        assert g.edge_data(0, 1) == 0
        assert breadth_first_search(g, 0) == [0, 1, 2, 3]

    def test_weighted_payloads(self, tmp_path: Path) -> None:
        g = load_mtx_graph(_write(tmp_path, "w.mtx", WEIGHTED_MTX), weighted=True)
        assert g.edge_data(0, 1) == 7
        assert g.edge_data(2, 0) == 4

    def test_unweighted_ignores_values(self, tmp_path: Path) -> None:
        g = load_mtx_graph(_write(tmp_path, "w.mtx", WEIGHTED_MTX))
        assert g.edge_data(0, 1) == 0

    def test_symmetric_adds_one_edge_per_stored_entry(self, tmp_path: Path) -> None:
        g = load_mtx_graph(_write(tmp_path, "s.mtx", SYMMETRIC_MTX))
        assert g.size == 2
        assert g.all_edges() == [(1, 0), (2, 1)]
        assert not g.has_edge(0, 1)

    def test_skew_symmetric_keeps_stored_values(self, tmp_path: Path) -> None:
        g = load_mtx_graph(_write(tmp_path, "k.mtx", SKEW_MTX), weighted=True)
        assert g.all_edges() == [(1, 0), (2, 0)]
        assert g.edge_data(1, 0) == 5
        assert g.edge_data(2, 0) == -2

    def test_vertex_payload_is_id(self, tmp_path: Path) -> None:
        g = load_mtx_graph(_write(tmp_path, "g.mtx", PATTERN_MTX))
        assert [g.vertex_data(u) for u in g.valid_vertices()] == list(range(6))

    def test_wrong_extension(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match=".mtx"):
            load_mtx_graph(_write(tmp_path, "g.txt", PATTERN_MTX))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_mtx_graph(tmp_path / "absent.mtx")


class TestSparseBridge:

    def test_from_sparse(self) -> None:
        m = scipy.sparse.csr_matrix(
            np.array([[0, 2, 0], [0, 0, 3], [1, 0, 0]], dtype=np.float64)
        )
        g = graph_from_sparse(m, weighted=True)
        assert g.all_edges() == [(0, 1), (1, 2), (2, 0)]
        assert g.edge_data(1, 2) == 3.0

    def test_rectangular_uses_larger_dimension(self) -> None:
        m = scipy.sparse.coo_matrix(([1.0], ([0], [3])), shape=(2, 4))
        g = graph_from_sparse(m)
        assert g.order == 4
        assert g.has_edge(0, 3)
        assert g.vertex_data(3) == 3

    def test_to_sparse_keeps_tombstone_slots(self) -> None:
        m = scipy.sparse.csr_matrix(
            np.array([[0, 1, 1], [0, 0, 1], [1, 0, 0]], dtype=np.float64)
        )
        g = graph_from_sparse(m, weighted=True)
        g.remove_vertex(1)
        out = graph_to_sparse(g)
        assert out.shape == (3, 3)
        assert out.nnz == 2
        assert out[0, 2] == 1.0 and out[2, 0] == 1.0
        assert out[0, 1] == 0.0

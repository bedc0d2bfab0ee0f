"""Matrix Market loading and scipy.sparse conversion for DirectedGraph.

The loader only drives the graph construction contract: add_vertex for every
id (the id is also the payload), then add_edge per stored entry with 0-based
ids.
"""

import logging
from pathlib import Path

import numpy as np
import scipy.io
import scipy.sparse

from dyngraph.graph.digraph import DirectedGraph

log = logging.getLogger(__name__)


def _is_mtx(path: Path) -> bool:
    suffixes = [s.lower() for s in path.suffixes]
    return suffixes[-1:] == [".mtx"] or suffixes[-2:] == [".mtx", ".gz"]


def graph_from_sparse(
    matrix: scipy.sparse.spmatrix | scipy.sparse.sparray | np.ndarray,
    weighted: bool = False,
) -> DirectedGraph:
    """Build a graph with one vertex per row/column and one edge per stored entry.

    Args:
        matrix: Adjacency matrix; entry (i, j) becomes edge i -> j. Explicitly
            stored zeros are kept as edges.
        weighted: Use the stored values as edge payloads; otherwise edges get
            the zero payload.

    Returns:
        DirectedGraph with max(rows, cols) vertices, each carrying its own
        id as payload.
    """
    coo = scipy.sparse.coo_matrix(matrix)
    graph: DirectedGraph = DirectedGraph()
    for i in range(max(coo.shape)):
        graph.add_vertex(i)

    if weighted:
        for u, v, value in zip(coo.row.tolist(), coo.col.tolist(), coo.data.tolist()):
            graph.add_edge(u, v, value)
    else:
        for u, v in zip(coo.row.tolist(), coo.col.tolist()):
            graph.add_edge(u, v)
    return graph


def graph_to_sparse(graph: DirectedGraph) -> scipy.sparse.csr_matrix:
    """Directed adjacency of graph as CSR, indexed by vertex id.

    Tombstoned ids keep their row and column, which are empty. Payloads
    become the matrix values.
    """
    rows: list[int] = []
    cols: list[int] = []
    data: list = []
    for u in graph.valid_vertices():
        for v, payload in graph.out_entries(u):
            rows.append(u)
            cols.append(v)
            data.append(payload)
    n = graph.slot_count
    return scipy.sparse.csr_matrix(
        (np.asarray(data, dtype=np.float64), (rows, cols)), shape=(n, n)
    )


def load_mtx_graph(path: str | Path, weighted: bool = False) -> DirectedGraph:
    """Load a Matrix Market coordinate or array file into a DirectedGraph.

    scipy.io.mmread handles the header, %-comment lines and the 1-based to
    0-based index shift. It also mirrors symmetric, skew-symmetric and
    hermitian storage, so for those files only the stored lower triangle is
    kept and each stored entry becomes exactly one edge.

    Args:
        path: File ending in .mtx or .mtx.gz.
        weighted: Keep the file's values as edge payloads.

    Returns:
        The loaded graph.

    Raises:
        ValueError: If path does not have a Matrix Market extension.
        FileNotFoundError: If path does not exist.
    """
    path = Path(path)
    if not _is_mtx(path):
        raise ValueError(f"Expected a .mtx file, got {path}")
    if not path.exists():
        raise FileNotFoundError(path)

    matrix = scipy.io.mmread(str(path))
    symmetry = scipy.io.mminfo(str(path))[5]
    if symmetry != "general":
        matrix = scipy.sparse.tril(matrix, format="coo")
    graph = graph_from_sparse(matrix, weighted=weighted)
    log.info(
        "Loaded %s: order=%d, size=%d", path.name, graph.order, graph.size
    )
    return graph

"""Graph input: Matrix Market files and scipy.sparse adjacency matrices."""

from dyngraph.io.mtx import graph_from_sparse, graph_to_sparse, load_mtx_graph

__all__ = [
    "graph_from_sparse",
    "graph_to_sparse",
    "load_mtx_graph",
]

"""Ordered adjacency engine: AVL edge maps, directed graph, traversal."""

from dyngraph.graph.digraph import DirectedGraph
from dyngraph.graph.ordered_map import NIL, EdgeNotFoundError, OrderedEdgeMap
from dyngraph.graph.traversal import breadth_first_search

__all__ = [
    "DirectedGraph",
    "EdgeNotFoundError",
    "NIL",
    "OrderedEdgeMap",
    "breadth_first_search",
]

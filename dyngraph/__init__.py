"""Dynamic directed graphs and stochastic insertion/deletion workloads."""

from dyngraph.delta import DeltaDomainError, DeltaGenerator, GraphDelta
from dyngraph.graph import (
    DirectedGraph,
    EdgeNotFoundError,
    OrderedEdgeMap,
    breadth_first_search,
)

__all__ = [
    "DeltaDomainError",
    "DeltaGenerator",
    "DirectedGraph",
    "EdgeNotFoundError",
    "GraphDelta",
    "OrderedEdgeMap",
    "breadth_first_search",
]

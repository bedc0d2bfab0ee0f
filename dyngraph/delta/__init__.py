"""Delta generation: uniform and preferential edge insertion/deletion batches."""

from dyngraph.delta.generator import DeltaGenerator
from dyngraph.delta.preferential import (
    preferential_attachment_edges,
    preferential_detachment_edges,
    preferential_weights,
)
from dyngraph.delta.sampling import (
    DeltaDomainError,
    available_new_pairs,
    random_existing_edges,
    random_new_edge,
    random_new_edge_forcibly,
    random_new_edges,
)
from dyngraph.delta.types import EdgePair, GraphDelta, RoundStats

__all__ = [
    "DeltaDomainError",
    "DeltaGenerator",
    "EdgePair",
    "GraphDelta",
    "RoundStats",
    "available_new_pairs",
    "preferential_attachment_edges",
    "preferential_detachment_edges",
    "preferential_weights",
    "random_existing_edges",
    "random_new_edge",
    "random_new_edge_forcibly",
    "random_new_edges",
]

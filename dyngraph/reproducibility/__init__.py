"""Reproducibility infrastructure: seeded random generator construction."""

from dyngraph.reproducibility.seed import DELTA_STREAM, GRAPH_STREAM, make_rng, spawn_rngs

__all__ = [
    "DELTA_STREAM",
    "GRAPH_STREAM",
    "make_rng",
    "spawn_rngs",
]

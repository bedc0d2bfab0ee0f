"""Delta generator: samples a pending change-set against a graph and applies it.

The generator reads the graph only while sampling. The pending GraphDelta is
applied in a separate step, so a delta can be inspected, rendered or dropped
before it touches the graph.
"""

import logging

import numpy as np

from dyngraph.config.run import DeltaConfig
from dyngraph.delta.preferential import (
    preferential_attachment_edges,
    preferential_detachment_edges,
)
from dyngraph.delta.sampling import (
    check_count,
    random_existing_edges,
    random_new_edges,
)
from dyngraph.delta.types import GraphDelta
from dyngraph.graph.digraph import DirectedGraph
from dyngraph.reproducibility.seed import make_rng

log = logging.getLogger(__name__)


def _split(count: int, fraction: float, name: str) -> tuple[int, int]:
    """Split count into (int(fraction * count), remainder)."""
    check_count(count)
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {fraction}")
    insertions = int(fraction * count)
    return insertions, count - insertions


class DeltaGenerator:
    """Holds a random generator and the pending delta.

    Every generate_* call replaces the pending delta and returns it.

    Args:
        rng: Seed or numpy Generator; None seeds from OS entropy.
    """

    def __init__(
        self, rng: int | np.random.Generator | None = None
    ) -> None:
        self.rng = make_rng(rng)
        self.delta = GraphDelta()

    def _replace(self, insertions: list, deletions: list) -> GraphDelta:
        self.delta = GraphDelta(insertions=insertions, deletions=deletions)
        log.debug(
            "Generated delta: %d insertions, %d deletions",
            len(insertions),
            len(deletions),
        )
        return self.delta

    def generate_mixed_delta(
        self,
        graph: DirectedGraph,
        alpha: float,
        count: int,
        strict_delta: bool = True,
    ) -> GraphDelta:
        """Uniform delta: int(alpha * count) insertions, the rest deletions.

        Args:
            graph: Graph snapshot (not modified).
            alpha: Fraction of count spent on insertions, in [0, 1].
            count: Total number of changes requested.
            strict_delta: Insertions are distinct genuinely new edges.
        """
        n_insert, n_delete = _split(count, alpha, "alpha")
        return self._replace(
            random_new_edges(graph, n_insert, self.rng, strict_delta),
            random_existing_edges(graph, n_delete, self.rng),
        )

    def generate_preferential_attachment_delta(
        self,
        graph: DirectedGraph,
        count: int,
        alpha: float = 0.0,
        beta: float = 1.0,
        lam: float = 0.0,
        strict_preferential: bool = False,
        strict_delta: bool = True,
    ) -> GraphDelta:
        """Insertion-only delta with in-degree weighted targets."""
        insertions = preferential_attachment_edges(
            graph, count, self.rng, alpha, beta, lam,
            strict_preferential, strict_delta,
        )
        return self._replace(insertions, [])

    def generate_preferential_detachment_delta(
        self,
        graph: DirectedGraph,
        count: int,
        alpha: float = 0.0,
        beta: float = 1.0,
        lam: float = 0.0,
        strict_preferential: bool = False,
        strict_delta: bool = True,
    ) -> GraphDelta:
        """Deletion-only delta with in-degree weighted targets."""
        deletions = preferential_detachment_edges(
            graph, count, self.rng, alpha, beta, lam,
            strict_preferential, strict_delta,
        )
        return self._replace([], deletions)

    def generate_preferential_mixed_delta(
        self,
        graph: DirectedGraph,
        count: int,
        epsilon: float,
        alpha: float = 0.0,
        beta: float = 1.0,
        lam: float = 0.0,
        strict_preferential: bool = False,
        strict_delta: bool = True,
    ) -> GraphDelta:
        """Preferential attachment for int(epsilon * count) changes, detachment for the rest.

        Both halves are sampled against the same snapshot.
        """
        n_insert, n_delete = _split(count, epsilon, "epsilon")
        insertions = preferential_attachment_edges(
            graph, n_insert, self.rng, alpha, beta, lam,
            strict_preferential, strict_delta,
        )
        deletions = preferential_detachment_edges(
            graph, n_delete, self.rng, alpha, beta, lam,
            strict_preferential, strict_delta,
        )
        return self._replace(insertions, deletions)

    def generate_from_config(
        self, graph: DirectedGraph, config: DeltaConfig
    ) -> GraphDelta:
        """Dispatch on config.model (one of DELTA_MODELS)."""
        if config.model == "uniform_mixed":
            return self.generate_mixed_delta(
                graph, config.insert_fraction, config.count, config.strict_delta
            )

        params = dict(
            alpha=config.alpha,
            beta=config.beta,
            lam=config.lam,
            strict_preferential=config.strict_preferential,
            strict_delta=config.strict_delta,
        )
        if config.model == "preferential_attachment":
            return self.generate_preferential_attachment_delta(
                graph, config.count, **params
            )
        if config.model == "preferential_detachment":
            return self.generate_preferential_detachment_delta(
                graph, config.count, **params
            )
        if config.model == "preferential_mixed":
            return self.generate_preferential_mixed_delta(
                graph, config.count, config.insert_fraction, **params
            )
        raise ValueError(f"Unknown delta model: {config.model!r}")

    def apply_current_delta(self, graph: DirectedGraph) -> tuple[int, int]:
        """Apply queued insertions via add_edge, then queued deletions via remove_edge.

        Returns:
            (edges created, edges removed). Pairs that were already present
            or already absent count as no-ops.
        """
        added = sum(graph.add_edge(u, v) for u, v in self.delta.insertions)
        removed = sum(graph.remove_edge(u, v) for u, v in self.delta.deletions)
        log.debug("Applied delta: +%d -%d edges", added, removed)
        return added, removed

    def clear_delta(self) -> None:
        """Start a fresh pending delta; deltas returned earlier keep their pairs."""
        self.delta = GraphDelta()

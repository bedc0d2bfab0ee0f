"""Uniform edge sampling for insertion and deletion deltas.

All samplers take an explicit numpy Generator so a fixed seed reproduces the
same delta. Strict insertion sampling only yields pairs that are absent from
the graph, are not self-loops, and are mutually distinct.
"""

import logging

import numpy as np

from dyngraph.delta.types import EdgePair
from dyngraph.graph.digraph import DirectedGraph

log = logging.getLogger(__name__)


class DeltaDomainError(ValueError):
    """Raised when a sampling request has no valid outcome."""


def check_count(count: int) -> None:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")


def available_new_pairs(graph: DirectedGraph) -> int:
    """Number of distinct non-loop pairs (u, v) not yet present as edges."""
    n = graph.order
    loops = sum(1 for u in graph.valid_vertices() if graph.has_edge(u, u))
    return n * (n - 1) - (graph.size - loops)


def random_new_edge(
    graph: DirectedGraph, rng: np.random.Generator
) -> EdgePair | None:
    """Pick u and v independently and uniformly from the valid vertices.

    The pair may already exist or be a self-loop.

    Returns:
        (u, v), or None if the graph has no valid vertices.
    """
    vertices = graph.valid_vertices()
    if not vertices:
        return None
    a, b = rng.integers(0, len(vertices), size=2)
    return vertices[a], vertices[b]


def _draw_new_pair(
    graph: DirectedGraph, vertices: list[int], rng: np.random.Generator
) -> EdgePair:
    # Caller guarantees at least one absent non-loop pair exists.
    n = len(vertices)
    while True:
        a, b = rng.integers(0, n, size=2)
        u, v = vertices[a], vertices[b]
        if u != v and not graph.has_edge(u, v):
            return u, v


def random_new_edge_forcibly(
    graph: DirectedGraph, rng: np.random.Generator
) -> EdgePair:
    """Rejection-sample a uniform pair that is not a self-loop or an edge.

    Raises:
        DeltaDomainError: If every non-loop pair is already an edge.
    """
    if available_new_pairs(graph) <= 0:
        raise DeltaDomainError(
            f"No absent non-loop pair in graph with order={graph.order}, "
            f"size={graph.size}"
        )
    return _draw_new_pair(graph, graph.valid_vertices(), rng)


def random_new_edges(
    graph: DirectedGraph,
    count: int,
    rng: np.random.Generator,
    strict_delta: bool = True,
) -> list[EdgePair]:
    """Sample pairs to insert.

    Without strict_delta this is count independent random_new_edge draws.
    With strict_delta, pairs are new, non-loop and distinct, and the result
    is capped at available_new_pairs(graph). When the request covers at least
    half of the available pairs, the candidates are enumerated and sampled
    without replacement instead of rejection-sampled.

    Args:
        graph: Graph snapshot (not modified).
        count: Number of pairs requested.
        rng: numpy random Generator for reproducibility.
        strict_delta: Require every pair to be a genuinely new edge.

    Returns:
        List of (u, v) pairs.
    """
    check_count(count)
    vertices = graph.valid_vertices()
    if count == 0 or not vertices:
        return []

    if not strict_delta:
        draws = rng.integers(0, len(vertices), size=(count, 2))
        return [(vertices[a], vertices[b]) for a, b in draws]

    available = available_new_pairs(graph)
    target = min(count, available)
    if target < count:
        log.warning(
            "Requested %d new edges but only %d distinct pairs are available",
            count,
            available,
        )
    if target <= 0:
        return []

    if 2 * target >= available:
        candidates = [
            (u, v)
            for u in vertices
            for v in vertices
            if u != v and not graph.has_edge(u, v)
        ]
        picks = rng.choice(len(candidates), size=target, replace=False)
        return [candidates[i] for i in picks]

    result: list[EdgePair] = []
    seen: set[EdgePair] = set()
    while len(result) < target:
        edge = _draw_new_pair(graph, vertices, rng)
        if edge in seen:
            continue
        seen.add(edge)
        result.append(edge)
    return result


def random_existing_edges(
    graph: DirectedGraph, count: int, rng: np.random.Generator
) -> list[EdgePair]:
    """Sample distinct existing edges to delete.

    Picks a uniform valid vertex among those with out-edges, then a uniform
    neighbor of it, rejecting pairs already chosen. A request for at least
    graph.size edges returns every edge.

    Args:
        graph: Graph snapshot (not modified).
        count: Number of edges requested.
        rng: numpy random Generator for reproducibility.

    Returns:
        List of distinct (u, v) edges present in graph.
    """
    check_count(count)
    if count >= graph.size:
        return graph.all_edges()

    sources = [u for u in graph.valid_vertices() if graph.out_degree(u) > 0]
    neighbors: dict[int, list[int]] = {}
    result: list[EdgePair] = []
    seen: set[EdgePair] = set()

    while len(result) < count:
        u = sources[rng.integers(0, len(sources))]
        if u not in neighbors:
            neighbors[u] = graph.out_edges(u)
        targets = neighbors[u]
        edge = (u, targets[rng.integers(0, len(targets))])
        if edge in seen:
            continue
        seen.add(edge)
        result.append(edge)
    return result

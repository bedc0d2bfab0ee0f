"""Preferential attachment and detachment sampling weighted by in-degree.

A vertex with in-degree d gets weight

    w = max(0, exp(alpha + beta * ln(1 + d)) - lam)

so alpha is a baseline log-weight, beta sets the degree sensitivity, and lam
is a floor below which vertices are never selected. Attachment favors
high-in-degree targets for new edges; detachment favors them for removal.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from dyngraph.delta.sampling import DeltaDomainError, available_new_pairs, check_count
from dyngraph.delta.types import EdgePair
from dyngraph.graph.digraph import DirectedGraph

log = logging.getLogger(__name__)


def preferential_weights(
    graph: DirectedGraph,
    vertices: list[int],
    alpha: float,
    beta: float,
    lam: float,
) -> np.ndarray:
    """Normalized selection probabilities for vertices by in-degree.

    Args:
        graph: Graph supplying in-degrees.
        vertices: Vertex ids to weight (usually graph.valid_vertices()).
        alpha: Baseline log-weight.
        beta: Degree sensitivity.
        lam: Floor subtracted before clamping at zero.

    Returns:
        Float array aligned with vertices, summing to 1.

    Raises:
        DeltaDomainError: If every weight is zero or the mass is not finite.
    """
    degrees = np.array([graph.in_degree(u) for u in vertices], dtype=np.float64)
    with np.errstate(over="ignore"):
        raw = np.exp(alpha + beta * np.log1p(degrees)) - lam
    weights = np.clip(raw, 0.0, None)
    total = weights.sum()
    if not np.isfinite(total) or total <= 0.0:
        raise DeltaDomainError(
            f"Preferential weights have no usable mass (total={total}) "
            f"for alpha={alpha}, beta={beta}, lam={lam} "
            f"over {len(vertices)} vertices"
        )
    return weights / total


def _source_probabilities(p: np.ndarray, strict_preferential: bool) -> np.ndarray:
    if strict_preferential:
        return p.copy()
    return np.full(len(p), 1.0 / len(p))


class _CumulativeSampler:
    """Draws indices in proportion to fixed weights via a cumulative table.

    Each draw is one binary search over the table, so a batch of k draws
    costs O(n + k log n) however the accepted indices are filtered.
    """

    def __init__(self, weights: np.ndarray):
        self._cdf = np.cumsum(weights)
        self._last = int(np.flatnonzero(weights)[-1])

    @property
    def total(self) -> float:
        return float(self._cdf[-1])

    def draw(self, rng: np.random.Generator) -> int:
        i = int(np.searchsorted(self._cdf, rng.random() * self._cdf[-1], side="right"))
        return min(i, self._last)


class _SourcePool:
    """Source sampler that supports dropping exhausted sources.

    Dropped sources are rejected on draw. Once they hold half of the
    sampler's mass the table is rebuilt without them, which keeps the
    expected number of rejections per draw below two.
    """

    def __init__(self, weights: np.ndarray):
        self._weights = weights.copy()
        self._sampler: _CumulativeSampler | None = _CumulativeSampler(self._weights)
        self._dropped: set[int] = set()
        self._dropped_mass = 0.0

    def empty(self) -> bool:
        return self._sampler is None

    def draw(self, rng: np.random.Generator) -> int:
        while True:
            i = self._sampler.draw(rng)
            if i not in self._dropped:
                return i

    def drop(self, i: int) -> None:
        if i in self._dropped:
            return
        self._dropped.add(i)
        self._dropped_mass += self._weights[i]
        self._weights[i] = 0.0
        if self._dropped_mass < 0.5 * self._sampler.total:
            return
        if not np.any(self._weights > 0.0):
            self._sampler = None
        else:
            self._sampler = _CumulativeSampler(self._weights)
        self._dropped.clear()
        self._dropped_mass = 0.0


@dataclass(slots=True)
class _Exclusions:
    """Target indices a source may no longer attach to, with their weight."""

    indices: set[int] = field(default_factory=set)
    mass: float = 0.0
    positive: int = 0

    def add(self, j: int, weight: float) -> None:
        if j in self.indices:
            return
        self.indices.add(j)
        self.mass += weight
        if weight > 0.0:
            self.positive += 1


def _draw_excluding(
    p: np.ndarray, excluded: set[int], rng: np.random.Generator
) -> int:
    weights = p.copy()
    weights[np.fromiter(excluded, dtype=np.intp, count=len(excluded))] = 0.0
    return _CumulativeSampler(weights).draw(rng)


def _warn_exhausted(drawn: int, target: int) -> None:
    log.warning("Sample space exhausted after %d of %d pairs", drawn, target)


def _draw_new_pairs(
    graph: DirectedGraph,
    vertices: list[int],
    p: np.ndarray,
    source_p: np.ndarray,
    target: int,
    rng: np.random.Generator,
) -> list[EdgePair]:
    """Draw up to target distinct, absent, non-loop pairs with targets from p.

    The target of each pair is resampled from p until it is neither the
    source, an existing out-neighbor, nor a target already drawn for that
    source. Each source keeps only the set of its excluded indices. When
    those hold at least half of the mass, the draw is made exactly from p
    restricted to the remaining targets instead. A source with no positive
    weight target left is dropped from the source distribution, so the loop
    always terminates.

    Returns:
        List of (u, v) pairs, shorter than target if every source ran out.
    """
    slot_position = np.full(graph.slot_count, -1, dtype=np.intp)
    slot_position[vertices] = np.arange(len(vertices))
    positive = int(np.count_nonzero(p))
    targets = _CumulativeSampler(p)
    pool = _SourcePool(source_p)
    exclusions: dict[int, _Exclusions] = {}
    result: list[EdgePair] = []

    while len(result) < target:
        if pool.empty():
            _warn_exhausted(len(result), target)
            break
        i = pool.draw(rng)

        excluded = exclusions.get(i)
        if excluded is None:
            excluded = _Exclusions()
            excluded.add(i, p[i])
            for v in graph.out_edges(vertices[i]):
                j = int(slot_position[v])
                excluded.add(j, p[j])
            exclusions[i] = excluded
        if excluded.positive >= positive:
            pool.drop(i)
            continue

        if excluded.mass < 0.5:
            j = targets.draw(rng)
            while j in excluded.indices:
                j = targets.draw(rng)
        else:
            j = _draw_excluding(p, excluded.indices, rng)
        excluded.add(j, p[j])
        result.append((vertices[i], vertices[j]))

    return result


def _draw_existing_pairs(
    graph: DirectedGraph,
    vertices: list[int],
    p: np.ndarray,
    source_p: np.ndarray,
    target: int,
    rng: np.random.Generator,
    distinct: bool,
) -> list[EdgePair]:
    """Draw up to target existing edges with targets weighted by p.

    The target is drawn among the source's out-neighbors in proportion to p,
    the exact distribution of resampling from p until an out-neighbor comes
    up. With distinct, an edge leaves its source's candidates once drawn.

    Returns:
        List of (u, v) edges, shorter than target if every source ran out.
    """
    slot_position = np.full(graph.slot_count, -1, dtype=np.intp)
    slot_position[vertices] = np.arange(len(vertices))
    pool = _SourcePool(source_p)
    candidates: dict[int, list[int]] = {}
    result: list[EdgePair] = []

    while len(result) < target:
        if pool.empty():
            _warn_exhausted(len(result), target)
            break
        i = pool.draw(rng)

        neighbors = candidates.get(i)
        if neighbors is None:
            neighbors = [
                j
                for j in (int(slot_position[v]) for v in graph.out_edges(vertices[i]))
                if p[j] > 0.0
            ]
            candidates[i] = neighbors
        if not neighbors:
            pool.drop(i)
            continue

        weights = p[neighbors]
        k = int(rng.choice(len(neighbors), p=weights / weights.sum()))
        j = neighbors[k]
        if distinct:
            neighbors[k] = neighbors[-1]
            neighbors.pop()
        result.append((vertices[i], vertices[j]))

    return result


def preferential_attachment_edges(
    graph: DirectedGraph,
    count: int,
    rng: np.random.Generator,
    alpha: float = 0.0,
    beta: float = 1.0,
    lam: float = 0.0,
    strict_preferential: bool = False,
    strict_delta: bool = True,
) -> list[EdgePair]:
    """Sample new edges whose targets are drawn by preferential weight.

    Args:
        graph: Graph snapshot (not modified).
        count: Number of pairs requested.
        rng: numpy random Generator for reproducibility.
        alpha: Baseline log-weight.
        beta: Degree sensitivity.
        lam: Weight floor.
        strict_preferential: Weight the source as well; otherwise the source
            is uniform over valid vertices.
        strict_delta: Only yield distinct, absent, non-loop pairs, capped at
            available_new_pairs(graph).

    Returns:
        List of (u, v) pairs.

    Raises:
        DeltaDomainError: If the weights have no usable mass.
    """
    check_count(count)
    vertices = graph.valid_vertices()
    if count == 0 or not vertices:
        return []

    p = preferential_weights(graph, vertices, alpha, beta, lam)
    source_p = _source_probabilities(p, strict_preferential)
    n = len(vertices)

    if not strict_delta:
        sources = rng.choice(n, size=count, p=source_p)
        targets = rng.choice(n, size=count, p=p)
        return [(vertices[a], vertices[b]) for a, b in zip(sources, targets)]

    available = available_new_pairs(graph)
    target = min(count, available)
    if target < count:
        log.warning(
            "Requested %d attachments but only %d distinct pairs are available",
            count,
            available,
        )
    return _draw_new_pairs(graph, vertices, p, source_p, target, rng)


def preferential_detachment_edges(
    graph: DirectedGraph,
    count: int,
    rng: np.random.Generator,
    alpha: float = 0.0,
    beta: float = 1.0,
    lam: float = 0.0,
    strict_preferential: bool = False,
    strict_delta: bool = True,
) -> list[EdgePair]:
    """Sample existing edges whose targets are drawn by preferential weight.

    Every pair is an edge of the snapshot. With strict_delta the pairs are
    also distinct and the result is capped at graph.size; without it the
    same edge may be drawn more than once.

    Args:
        graph: Graph snapshot (not modified).
        count: Number of pairs requested.
        rng: numpy random Generator for reproducibility.
        alpha: Baseline log-weight.
        beta: Degree sensitivity.
        lam: Weight floor.
        strict_preferential: Weight the source as well; otherwise the source
            is uniform over valid vertices.
        strict_delta: Require distinct pairs.

    Returns:
        List of (u, v) edges.

    Raises:
        DeltaDomainError: If the weights have no usable mass.
    """
    check_count(count)
    vertices = graph.valid_vertices()
    if count == 0 or not vertices or graph.size == 0:
        return []

    p = preferential_weights(graph, vertices, alpha, beta, lam)
    source_p = _source_probabilities(p, strict_preferential)

    target = count
    if strict_delta and count > graph.size:
        log.warning(
            "Requested %d detachments but the graph has only %d edges",
            count,
            graph.size,
        )
        target = graph.size

    return _draw_existing_pairs(
        graph, vertices, p, source_p, target, rng, distinct=strict_delta
    )

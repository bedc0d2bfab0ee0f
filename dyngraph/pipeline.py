"""Run pipeline: build the initial graph, then generate and apply deltas.

Each round samples a delta against the current graph, applies it, and
records the resulting order and size, so the graph evolves across rounds.
"""

import logging
import time
from collections.abc import Callable

import numpy as np

from dyngraph.config.run import GraphSourceConfig, RunConfig
from dyngraph.delta.generator import DeltaGenerator
from dyngraph.delta.sampling import random_new_edges
from dyngraph.delta.types import GraphDelta, RoundStats
from dyngraph.graph.digraph import DirectedGraph
from dyngraph.io.mtx import load_mtx_graph
from dyngraph.reproducibility.seed import DELTA_STREAM, GRAPH_STREAM, spawn_rngs

log = logging.getLogger(__name__)


def build_initial_graph(
    config: GraphSourceConfig, rng: np.random.Generator
) -> DirectedGraph:
    """Load config.path, or build n vertices with initial_edges uniform edges.

    Args:
        config: Graph source configuration.
        rng: Generator for the random graph (unused when loading a file).

    Returns:
        The initial graph.
    """
    if config.path:
        return load_mtx_graph(config.path, weighted=config.weighted)

    graph: DirectedGraph = DirectedGraph()
    for _ in range(config.n):
        graph.add_vertex()
    for u, v in random_new_edges(graph, config.initial_edges, rng, strict_delta=True):
        graph.add_edge(u, v)
    log.info("Built random graph: order=%d, size=%d", graph.order, graph.size)
    return graph


def run_rounds(
    graph: DirectedGraph,
    config: RunConfig,
    generator: DeltaGenerator,
    on_delta: Callable[[int, GraphDelta], None] | None = None,
) -> list[RoundStats]:
    """Run config.rounds generate-and-apply rounds on graph in place.

    Args:
        graph: Graph to evolve.
        config: Run configuration (delta model and round count).
        generator: Delta generator holding the sampling Generator.
        on_delta: Optional callback receiving (round index, delta) before
            the delta is applied.

    Returns:
        One RoundStats per round.
    """
    stats: list[RoundStats] = []
    for round_idx in range(config.rounds):
        t0 = time.monotonic()
        delta = generator.generate_from_config(graph, config.delta)
        if on_delta is not None:
            on_delta(round_idx, delta)
        generator.apply_current_delta(graph)
        elapsed = time.monotonic() - t0

        stats.append(
            RoundStats(
                round=round_idx,
                insertions=len(delta.insertions),
                deletions=len(delta.deletions),
                order=graph.order,
                size=graph.size,
                elapsed=elapsed,
            )
        )
        log.debug(
            "Round %d: +%d -%d -> order=%d, size=%d (%.3fs)",
            round_idx,
            len(delta.insertions),
            len(delta.deletions),
            graph.order,
            graph.size,
            elapsed,
        )
        generator.clear_delta()
    return stats


def run_pipeline(
    config: RunConfig,
    on_delta: Callable[[int, GraphDelta], None] | None = None,
) -> tuple[DirectedGraph, list[RoundStats]]:
    """Build the initial graph and run every round from config.seed.

    Returns:
        (final graph, per-round stats).
    """
    rngs = spawn_rngs(config.seed, 2)
    graph = build_initial_graph(config.graph, rngs[GRAPH_STREAM])
    generator = DeltaGenerator(rngs[DELTA_STREAM])
    stats = run_rounds(graph, config, generator, on_delta)
    log.info(
        "Completed %d rounds: order=%d, size=%d",
        len(stats),
        graph.order,
        graph.size,
    )
    return graph, stats

"""Breadth-first traversal over a DirectedGraph's out-edges."""

from collections import deque

from dyngraph.graph.digraph import DirectedGraph


def breadth_first_search(graph: DirectedGraph, start: int) -> list[int]:
    """Return vertices reachable from start in breadth-first visitation order.

    Neighbors are expanded in ascending id order, so the result is
    deterministic. An invalid start vertex yields an empty list.

    Args:
        graph: Graph to traverse.
        start: Starting vertex id.

    Returns:
        Visitation order, one entry per reachable vertex.
    """
    if not graph.has_vertex(start):
        return []

    # Indexed by id over every issued slot; tombstones have no out-edges.
    visited = [False] * graph.slot_count
    visited[start] = True
    frontier = deque([start])
    order: list[int] = []

    while frontier:
        u = frontier.popleft()
        order.append(u)
        for v in graph.out_edges(u):
            if not visited[v]:
                visited[v] = True
                frontier.append(v)

    return order

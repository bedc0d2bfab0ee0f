"""Directed graph with tombstoned vertices and per-vertex ordered edge maps.

Vertex ids are dense indices that are never reused: removing a vertex marks
its slot invalid, resets its payload and drops every incident edge, but the
slot itself stays. Order (valid vertices), size (live edges) and per-vertex
in-degrees are maintained counters updated on every mutation.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from dyngraph.graph.ordered_map import OrderedEdgeMap

V = TypeVar("V")
E = TypeVar("E")

log = logging.getLogger(__name__)


class DirectedGraph(Generic[V, E]):
    """Simple directed graph with scalar vertex and edge payloads.

    Operations on absent vertices or edges are no-ops: mutators return False
    and readers return an empty result or the payload zero value.

    Args:
        vertex_factory: Callable producing the zero value for vertex payloads.
        edge_factory: Callable producing the zero value for edge payloads.
    """

    def __init__(
        self,
        vertex_factory: Callable[[], V] = int,  # type: ignore[assignment]
        edge_factory: Callable[[], E] = int,  # type: ignore[assignment]
    ) -> None:
        self._vertex_factory = vertex_factory
        self._edge_factory = edge_factory
        self._valid: list[bool] = []
        self._vertex_data: list[V] = []
        self._edges: list[OrderedEdgeMap[E]] = []
        self._in_degree: list[int] = []
        self._order = 0
        self._size = 0

    @property
    def order(self) -> int:
        """Number of currently valid vertices."""
        return self._order

    @property
    def size(self) -> int:
        """Number of live edges."""
        return self._size

    @property
    def slot_count(self) -> int:
        """Number of vertex ids issued so far, tombstones included."""
        return len(self._valid)

    # ── membership ──────────────────────────────────────────────────

    def has_vertex(self, u: int) -> bool:
        return 0 <= u < len(self._valid) and self._valid[u]

    def has_edge(self, u: int, v: int) -> bool:
        return 0 <= u < len(self._edges) and self._edges[u].has(v)

    def valid_vertices(self) -> list[int]:
        return [i for i, ok in enumerate(self._valid) if ok]

    def invalid_vertices(self) -> list[int]:
        return [i for i, ok in enumerate(self._valid) if not ok]

    # ── mutation ────────────────────────────────────────────────────

    def add_vertex(self, payload: V | None = None) -> int:
        """Append a new valid vertex and return its id."""
        self._valid.append(True)
        self._vertex_data.append(
            self._vertex_factory() if payload is None else payload
        )
        self._edges.append(OrderedEdgeMap())
        self._in_degree.append(0)
        self._order += 1
        return len(self._valid) - 1

    def add_edge(self, u: int, v: int, payload: E | None = None) -> bool:
        """Insert edge (u, v), overwriting the payload if it already exists.

        Returns:
            True if a new edge was created. False if an endpoint is not a
            valid vertex or the edge already existed.
        """
        if not self.has_vertex(u) or not self.has_vertex(v):
            return False
        data = self._edge_factory() if payload is None else payload
        created = self._edges[u].insert(v, data)
        if created:
            self._size += 1
            self._in_degree[v] += 1
        return created

    def add_edge_checked(self, u: int, v: int, payload: E | None = None) -> bool:
        """Insert edge (u, v) only if it does not exist yet."""
        if self.has_edge(u, v):
            return False
        return self.add_edge(u, v, payload)

    def remove_edge(self, u: int, v: int) -> bool:
        if not self.has_vertex(u) or not self.has_vertex(v):
            return False
        if not self._edges[u].remove(v):
            return False
        self._size -= 1
        self._in_degree[v] -= 1
        return True

    def remove_vertex(self, u: int) -> bool:
        """Tombstone vertex u and drop every edge touching it."""
        if not self.has_vertex(u):
            return False

        removed = 0
        for w in self.in_edges(u):
            if self.remove_edge(w, u):
                removed += 1

        # Remaining out-edges (the self-loop, if any, is already gone).
        outgoing = self._edges[u]
        for v in outgoing:
            self._in_degree[v] -= 1
        removed += len(outgoing)
        self._size -= len(outgoing)
        outgoing.clear()

        self._valid[u] = False
        self._vertex_data[u] = self._vertex_factory()
        self._order -= 1
        log.debug("Removed vertex %d with %d incident edges", u, removed)
        return True

    def clear(self) -> None:
        self._valid.clear()
        self._vertex_data.clear()
        self._edges.clear()
        self._in_degree.clear()
        self._order = 0
        self._size = 0

    # ── degree and adjacency ────────────────────────────────────────

    def in_degree(self, u: int) -> int:
        if not self.has_vertex(u):
            return 0
        return self._in_degree[u]

    def out_degree(self, u: int) -> int:
        if not self.has_vertex(u):
            return 0
        return self._edges[u].size()

    def out_edges(self, u: int) -> list[int]:
        """Targets of u's outgoing edges in ascending order."""
        if not self.has_vertex(u):
            return []
        return self._edges[u].ordered_keys()

    def in_edges(self, u: int) -> list[int]:
        """Sources of u's incoming edges in ascending order (O(order) scan)."""
        if not self.has_vertex(u):
            return []
        return [w for w, edges in enumerate(self._edges) if edges.has(u)]

    def out_entries(self, u: int) -> list[tuple[int, E]]:
        """(target, payload) pairs of u's outgoing edges in ascending order."""
        if not self.has_vertex(u):
            return []
        return self._edges[u].ordered_entries()

    def all_edges(self) -> list[tuple[int, int]]:
        """Every live edge, source-major, targets ascending."""
        return [
            (u, v)
            for u, ok in enumerate(self._valid)
            if ok
            for v in self._edges[u]
        ]

    # ── payload access ──────────────────────────────────────────────

    def vertex_data(self, u: int) -> V:
        if not self.has_vertex(u):
            return self._vertex_factory()
        return self._vertex_data[u]

    def set_vertex_data(self, u: int, data: V) -> bool:
        if not self.has_vertex(u):
            return False
        self._vertex_data[u] = data
        return True

    def edge_data(self, u: int, v: int) -> E:
        if not self.has_vertex(u) or not self.has_vertex(v) or not self.has_edge(u, v):
            return self._edge_factory()
        return self._edges[u].get(v)

    def set_edge_data(self, u: int, v: int, data: E) -> bool:
        if not self.has_vertex(u) or not self.has_vertex(v) or not self.has_edge(u, v):
            return False
        self._edges[u].set(v, data)
        return True

    # ── diagnostics ─────────────────────────────────────────────────

    def validate(self) -> list[str]:
        """Check counters and edge endpoints against the stored structure.

        Returns:
            List of error strings (empty = consistent graph).
        """
        errors: list[str] = []

        valid_count = sum(self._valid)
        if valid_count != self._order:
            errors.append(f"Order counter {self._order} != valid vertices {valid_count}")

        edge_count = sum(edges.size() for edges in self._edges)
        if edge_count != self._size:
            errors.append(f"Size counter {self._size} != stored edges {edge_count}")

        in_counts = [0] * len(self._valid)
        for u, edges in enumerate(self._edges):
            if not self._valid[u] and edges.size():
                errors.append(f"Tombstoned vertex {u} still has {edges.size()} out-edges")
            for v in edges:
                in_counts[v] += 1
                if not self._valid[v]:
                    errors.append(f"Edge ({u}, {v}) targets tombstoned vertex {v}")
            errors.extend(f"Edge map of {u}: {e}" for e in edges.validate())

        for u, (stored, actual) in enumerate(zip(self._in_degree, in_counts)):
            if stored != actual:
                errors.append(f"In-degree of {u} stored as {stored}, actual {actual}")

        return errors

    def render(self) -> str:
        """Debug listing of every valid vertex with its in and out edges."""
        lines: list[str] = []
        for u, ok in enumerate(self._valid):
            if not ok:
                continue
            out_part = " ".join(
                f"({u}, {v}, {data})" for v, data in self._edges[u].ordered_entries()
            )
            in_part = " ".join(
                f"({w}, {u}, {self._edges[w].get(u)})" for w in self.in_edges(u)
            )
            lines.append(f"Vertex {u}: {self._vertex_data[u]}")
            lines.append(f"  Outgoing edges: {out_part}")
            lines.append(f"  Incoming edges: {in_part}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"DirectedGraph(order={self._order}, size={self._size})"

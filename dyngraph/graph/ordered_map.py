"""AVL tree keyed by target vertex id, stored in an index-addressed slot arena.

Each vertex of a DirectedGraph owns one OrderedEdgeMap holding its outgoing
edges. Nodes live in a single list per map and link to each other by slot
index (NIL = -1 marks an empty link). Removed nodes release their slot onto a
free-list that later insertions reuse, so the slot index of every node still
in the tree stays fixed for the lifetime of that node.
"""

import operator
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

E = TypeVar("E")

NIL = -1


class EdgeNotFoundError(KeyError):
    """Raised when a key is looked up or updated but is not in the map."""


@dataclass(slots=True)
class _Node:
    key: int
    data: Any
    left: int = NIL
    right: int = NIL
    height: int = 1


class OrderedEdgeMap(Generic[E]):
    """Ordered map from integer keys to payloads with O(log n) updates.

    Inserting an existing key overwrites its payload in place; the tree never
    holds two nodes with the same key.
    """

    def __init__(self) -> None:
        self._nodes: list[_Node | None] = []
        self._free: list[int] = []
        self._root = NIL
        self._size = 0

    # ── arena ───────────────────────────────────────────────────────

    def _node(self, index: int) -> _Node:
        node = self._nodes[index]
        if node is None:
            raise RuntimeError(f"Slot {index} is free but still linked")
        return node

    def _allocate(self, key: int, data: E) -> int:
        if self._free:
            index = self._free.pop()
            self._nodes[index] = _Node(key, data)
        else:
            index = len(self._nodes)
            self._nodes.append(_Node(key, data))
        return index

    def _release(self, index: int) -> None:
        self._nodes[index] = None
        self._free.append(index)

    # ── balancing ───────────────────────────────────────────────────

    def _height(self, index: int) -> int:
        return 0 if index == NIL else self._node(index).height

    def _balance_factor(self, index: int) -> int:
        node = self._node(index)
        return self._height(node.right) - self._height(node.left)

    def _fix_height(self, index: int) -> None:
        node = self._node(index)
        node.height = max(self._height(node.left), self._height(node.right)) + 1

    def _rotate_right(self, y: int) -> int:
        node_y = self._node(y)
        x = node_y.left
        node_x = self._node(x)
        node_y.left = node_x.right
        node_x.right = y
        self._fix_height(y)
        self._fix_height(x)
        return x

    def _rotate_left(self, x: int) -> int:
        node_x = self._node(x)
        y = node_x.right
        node_y = self._node(y)
        node_x.right = node_y.left
        node_y.left = x
        self._fix_height(x)
        self._fix_height(y)
        return y

    def _balance(self, index: int) -> int:
        """Restore the AVL property at index and return the subtree root."""
        self._fix_height(index)
        node = self._node(index)
        factor = self._balance_factor(index)

        if factor == 2:
            if self._balance_factor(node.right) < 0:
                node.right = self._rotate_right(node.right)
            return self._rotate_left(index)

        if factor == -2:
            if self._balance_factor(node.left) > 0:
                node.left = self._rotate_left(node.left)
            return self._rotate_right(index)

        return index

    # ── recursive structure changes ─────────────────────────────────

    def _insert(self, index: int, key: int, data: E) -> tuple[int, bool]:
        if index == NIL:
            return self._allocate(key, data), True

        node = self._node(index)
        if key == node.key:
            node.data = data
            return index, False

        if key < node.key:
            node.left, created = self._insert(node.left, key, data)
        else:
            node.right, created = self._insert(node.right, key, data)

        if not created:
            return index, False
        return self._balance(index), True

    def _find_min(self, index: int) -> int:
        while self._node(index).left != NIL:
            index = self._node(index).left
        return index

    def _remove_min(self, index: int) -> int:
        """Unlink the minimum of the subtree at index (slot is kept)."""
        node = self._node(index)
        if node.left == NIL:
            return node.right
        node.left = self._remove_min(node.left)
        return self._balance(index)

    def _remove(self, index: int, key: int) -> tuple[int, bool]:
        if index == NIL:
            return NIL, False

        node = self._node(index)
        if key < node.key:
            node.left, removed = self._remove(node.left, key)
        elif key > node.key:
            node.right, removed = self._remove(node.right, key)
        else:
            left, right = node.left, node.right
            self._release(index)
            if right == NIL:
                return left, True

            # Splice the in-order successor into the removed node's position.
            successor = self._find_min(right)
            succ_node = self._node(successor)
            succ_node.right = self._remove_min(right)
            succ_node.left = left
            return self._balance(successor), True

        if not removed:
            return index, False
        return self._balance(index), True

    def _find(self, key: int) -> int:
        current = self._root
        while current != NIL:
            node = self._node(current)
            if key < node.key:
                current = node.left
            elif key > node.key:
                current = node.right
            else:
                return current
        return NIL

    def _walk(self) -> Iterator[_Node]:
        """Yield nodes in ascending key order (iterative in-order)."""
        stack: list[int] = []
        current = self._root
        while stack or current != NIL:
            while current != NIL:
                stack.append(current)
                current = self._node(current).left
            current = stack.pop()
            node = self._node(current)
            yield node
            current = node.right

    # ── public API ──────────────────────────────────────────────────

    def has(self, key: int) -> bool:
        """Return True if key is present."""
        return self._find(operator.index(key)) != NIL

    def get(self, key: int) -> E:
        """Return the payload stored under key.

        Raises:
            EdgeNotFoundError: If key is absent (including on an empty map).
        """
        index = self._find(operator.index(key))
        if index == NIL:
            raise EdgeNotFoundError(key)
        return self._node(index).data

    def set(self, key: int, value: E) -> None:
        """Replace the payload of an existing key.

        Raises:
            EdgeNotFoundError: If key is absent.
        """
        index = self._find(operator.index(key))
        if index == NIL:
            raise EdgeNotFoundError(key)
        self._node(index).data = value

    def insert(self, key: int, value: E) -> bool:
        """Insert key with value, overwriting the payload if key exists.

        Returns:
            True if a new node was created, False if an existing key was
            overwritten.
        """
        self._root, created = self._insert(self._root, operator.index(key), value)
        if created:
            self._size += 1
        return created

    def remove(self, key: int) -> bool:
        """Remove key if present. Returns True if a node was removed."""
        self._root, removed = self._remove(self._root, operator.index(key))
        if removed:
            self._size -= 1
        return removed

    def ordered_keys(self) -> list[int]:
        return [node.key for node in self._walk()]

    def ordered_entries(self) -> list[tuple[int, E]]:
        return [(node.key, node.data) for node in self._walk()]

    def values(self) -> list[E]:
        return [node.data for node in self._walk()]

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        """Height of the tree (0 when empty)."""
        return self._height(self._root)

    def clear(self) -> None:
        self._nodes.clear()
        self._free.clear()
        self._root = NIL
        self._size = 0

    def validate(self) -> list[str]:
        """Check the AVL and arena invariants.

        Checks stored heights, balance factors in {-1, 0, 1}, strict key
        ordering, and that every arena slot is either linked exactly once
        or on the free-list.

        Returns:
            List of error strings (empty = valid tree).
        """
        errors: list[str] = []
        seen: set[int] = set()

        def check(index: int, low: int | None, high: int | None) -> int:
            if index == NIL:
                return 0
            if index in seen:
                errors.append(f"Slot {index} linked more than once")
                return 0
            seen.add(index)
            node = self._nodes[index]
            if node is None:
                errors.append(f"Free slot {index} is linked into the tree")
                return 0
            if (low is not None and node.key <= low) or (
                high is not None and node.key >= high
            ):
                errors.append(
                    f"Key {node.key} at slot {index} out of order "
                    f"(bounds {low}, {high})"
                )
            left_h = check(node.left, low, node.key)
            right_h = check(node.right, node.key, high)
            if abs(right_h - left_h) > 1:
                errors.append(
                    f"Key {node.key} unbalanced: left={left_h}, right={right_h}"
                )
            actual = max(left_h, right_h) + 1
            if node.height != actual:
                errors.append(
                    f"Key {node.key} stores height {node.height}, actual {actual}"
                )
            return actual

        check(self._root, None, None)

        if len(seen) != self._size:
            errors.append(
                f"Size counter {self._size} != reachable nodes {len(seen)}"
            )
        if len(seen) + len(self._free) != len(self._nodes):
            errors.append(
                f"Arena has {len(self._nodes)} slots but {len(seen)} linked "
                f"and {len(self._free)} free"
            )
        return errors

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        try:
            return self.has(key)  # type: ignore[arg-type]
        except TypeError:
            return False

    def __iter__(self) -> Iterator[int]:
        return (node.key for node in self._walk())

    def __repr__(self) -> str:
        return f"OrderedEdgeMap({dict(self.ordered_entries())!r})"

"""OverlapForest: index-based parent/children arena for the overlap tree.

Node ``i`` is the proxy at position ``i`` of the proxy list. Each node
stores its parent index, an owned list of child indices, and the builder
pass (``level``) in which it settled. A parent always settles in an
earlier pass than its children, so ordering by level gives a valid
pre-order (ascending) or post-order (descending) for the whole forest.
"""

from __future__ import annotations


class OverlapForest:
    """Mutable forest over ``size`` nodes, built by OverlapTreeBuilder."""

    __slots__ = ("_parent", "_children", "_level")

    def __init__(self, size: int) -> None:
        self._parent: list[int | None] = [None] * size
        self._children: list[list[int]] = [[] for _ in range(size)]
        self._level: list[int | None] = [None] * size

    @property
    def size(self) -> int:
        return len(self._parent)

    def parent(self, node: int) -> int | None:
        return self._parent[node]

    def children(self, node: int) -> tuple[int, ...]:
        return tuple(self._children[node])

    def level(self, node: int) -> int | None:
        """Builder pass in which ``node`` settled, or None if it never did."""
        return self._level[node]

    def is_leaf(self, node: int) -> bool:
        return not self._children[node]

    def roots(self) -> list[int]:
        return [i for i, p in enumerate(self._parent) if p is None]

    def settle(self, node: int, level: int) -> None:
        self._level[node] = level

    def link(self, child: int, parent: int, *, release_from: int | None = None) -> None:
        """Make ``parent`` the parent of ``child``.

        If ``release_from`` is given, ``child`` is first removed from that
        node's children list.
        """
        self._parent[child] = parent
        if release_from is not None:
            self._children[release_from] = [
                c for c in self._children[release_from] if c != child
            ]
        self._children[parent].append(child)

    def post_order(self) -> list[int]:
        """Nodes ordered so every node comes after all of its children."""
        return sorted(range(self.size), key=self._level_key, reverse=True)

    def pre_order(self) -> list[int]:
        """Nodes ordered so every node comes after its parent."""
        return sorted(range(self.size), key=self._level_key)

    def _level_key(self, node: int) -> int:
        level = self._level[node]
        if level is None:
            raise RuntimeError(f"Node {node} has not settled; forest is incomplete.")
        return level

    def verify_integrity(self) -> None:
        """Raise RuntimeError if the parent links are cyclic or inconsistent."""
        for node in range(self.size):
            parent = self._parent[node]
            if parent is not None and node not in self._children[parent]:
                raise RuntimeError(
                    f"Node {node} has parent {parent} but is not among its children."
                )
            seen = {node}
            while parent is not None:
                if parent in seen:
                    raise RuntimeError(f"Cycle through node {parent}.")
                seen.add(parent)
                parent = self._parent[parent]
        for node, kids in enumerate(self._children):
            if len(set(kids)) != len(kids):
                raise RuntimeError(f"Node {node} lists a child more than once.")

    def to_dict(self) -> dict:
        """Plain-data view, handy for debugging and tests."""
        return {
            "parent": list(self._parent),
            "children": [list(c) for c in self._children],
            "level": list(self._level),
        }

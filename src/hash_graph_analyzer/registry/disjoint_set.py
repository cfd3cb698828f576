"""Union-find over array indices."""

from collections.abc import Iterator

import numpy as np

from hash_graph_analyzer.graph.types import Node


class DisjointSet:
    """
    Disjoint-set forest over ``[0, size)`` backed by two integer arrays.

    Union by rank plus path compression keeps the amortized cost per
    operation near O(1). ``find`` is iterative so adversarially long parent
    chains cannot exhaust the stack.

    Not thread-safe: a single writer performs all unions.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self._parent = np.arange(size, dtype=np.int64)
        self._rank = np.zeros(size, dtype=np.int8)
        self._count = size

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, x: Node) -> Node:
        """Return the representative of the set containing ``x``."""
        parent = self._parent
        root = x
        while parent[root] != root:
            root = int(parent[root])

        # Second pass: point every node on the path straight at the root.
        while parent[x] != root:
            parent[x], x = root, int(parent[x])
        return root

    def union(self, x: Node, y: Node) -> bool:
        """Merge the sets containing ``x`` and ``y``. Returns False if already merged."""
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return False

        rank = self._rank
        if rank[root_x] < rank[root_y]:
            self._parent[root_x] = root_y
        elif rank[root_x] > rank[root_y]:
            self._parent[root_y] = root_x
        else:
            self._parent[root_y] = root_x
            rank[root_x] += 1

        self._count -= 1
        return True

    def count(self) -> int:
        """Number of disjoint sets."""
        return self._count

    def representatives(self) -> Iterator[tuple[Node, Node]]:
        """
        Yield ``(root, first_node)`` once per set.

        Sets are reported in order of their lowest node, and ``first_node`` is
        that lowest node.
        """
        seen: set[Node] = set()
        for x in range(len(self._parent)):
            root = self.find(x)
            if root not in seen:
                seen.add(root)
                yield root, x

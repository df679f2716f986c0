"""CascadeLayout: widths and horizontal offsets derived from the overlap forest."""

from __future__ import annotations

import numpy as np

from ..core.forest import OverlapForest


FULL_WIDTH = 100.0
# Interior events may grow into their children's area by this factor.
OVERLAP_GROWTH = 1.7


class CascadeLayout:
    """Computes per-node width and x offset, in percent of the column.

    A root starts at offset 0 with the full column available. A node with
    children gets ``available / depth`` as its own share and may overgrow
    it by ``OVERLAP_GROWTH`` (capped at the full width); a leaf takes all
    the width left to it. Each child starts where its parent's share ends.

    All values are computed once, depths in post-order and widths/offsets
    in pre-order, and cached as float64 arrays indexed like the forest.
    """

    def __init__(
        self,
        forest: OverlapForest,
        full_width: float = FULL_WIDTH,
        overlap_growth: float = OVERLAP_GROWTH,
    ) -> None:
        self._forest = forest
        self._full_width = full_width
        self._overlap_growth = overlap_growth
        self._interior = np.array(
            [not forest.is_leaf(i) for i in range(forest.size)], dtype=bool
        )
        self._depths = self._compute_depths()
        self._available, self._no_overlap, self._offsets = self._compute_shares()
        self._widths = self._compute_widths()

    def _compute_depths(self) -> np.ndarray:
        depths = np.ones(self._forest.size, dtype=np.int64)
        for node in self._forest.post_order():
            children = self._forest.children(node)
            if children:
                depths[node] = 1 + max(depths[c] for c in children)
        return depths

    def _compute_shares(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Available width, own share and x offset for every node."""
        n = self._forest.size
        available = np.empty(n, dtype=np.float64)
        no_overlap = np.empty(n, dtype=np.float64)
        offsets = np.zeros(n, dtype=np.float64)
        for node in self._forest.pre_order():
            parent = self._forest.parent(node)
            if parent is not None:
                offsets[node] = no_overlap[parent] + offsets[parent]
                available[node] = self._full_width - offsets[node]
            else:
                available[node] = self._full_width
            if self._interior[node]:
                no_overlap[node] = available[node] / self._depths[node]
            else:
                no_overlap[node] = available[node]
        return available, no_overlap, offsets

    def _compute_widths(self) -> np.ndarray:
        grown = np.minimum(self._full_width, self._no_overlap * self._overlap_growth)
        return np.where(self._interior, grown, self._no_overlap)

    @staticmethod
    def _read_only(arr: np.ndarray) -> np.ndarray:
        v = arr.view()
        v.flags.writeable = False
        return v

    @property
    def size(self) -> int:
        return self._forest.size

    @property
    def depths(self) -> np.ndarray:
        """Tree depth of each node (1 for a leaf), read-only."""
        return self._read_only(self._depths)

    @property
    def widths(self) -> np.ndarray:
        """Drawn width of each node in percent, read-only."""
        return self._read_only(self._widths)

    @property
    def x_offsets(self) -> np.ndarray:
        """Unclamped left offset of each node in percent, read-only."""
        return self._read_only(self._offsets)

    @property
    def max_depth(self) -> int:
        if self.size == 0:
            return 0
        return int(self._depths.max())

    def depth(self, node: int) -> int:
        return int(self._depths[node])

    def available_width(self, node: int) -> float:
        return float(self._available[node])

    def no_overlap_width(self, node: int) -> float:
        """Width the node would get without overgrowing into its children."""
        return float(self._no_overlap[node])

    def width(self, node: int) -> float:
        return float(self._widths[node])

    def x_offset(self, node: int) -> float:
        return float(self._offsets[node])

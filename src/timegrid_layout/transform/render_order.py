"""RenderOrderEngine: deterministic drawing order that keeps overlap clusters together."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..core.proxy import IntervalProxy


class RenderOrderEngine:
    """Order proxies so each cluster of overlapping events is contiguous.

    Events are first sorted by start ascending, then end descending, so
    the longest of several equal-start events comes first. The engine
    then walks that list and pulls the first event of the next cluster
    forward to sit right after the event that precedes it.
    """

    @staticmethod
    def sort_by_time(proxies: Sequence[IntervalProxy]) -> list[int]:
        """Indices sorted by (start_ms asc, end_ms desc), stable on ties.

        NaN boundaries sort last.
        """
        starts = np.array([p.start_ms for p in proxies], dtype=np.float64)
        ends = np.array([p.end_ms for p in proxies], dtype=np.float64)
        # lexsort is stable; the last key is the primary one
        return np.lexsort((-ends, starts)).tolist()

    @classmethod
    def compute_order(cls, proxies: Sequence[IntervalProxy]) -> list[int]:
        """Return proxy indices in render order.

        Parameters
        ----------
        proxies : proxies in input order

        Returns
        -------
        List of indices into ``proxies``, one per proxy.
        """
        working = cls.sort_by_time(proxies)
        order: list[int] = []

        while working:
            current = working.pop(0)
            order.append(current)
            current_end = proxies[current].end_ms

            for i, candidate in enumerate(working):
                # Still inside the current event, keep looking.
                if current_end > proxies[candidate].start_ms:
                    continue
                # First event of the next group: move it up unless it is
                # already next in line.
                if i > 0:
                    order.append(working.pop(i))
                # Only the first candidate is considered.
                break

        return order

"""OverlapTreeBuilder: nest overlapping events into a forest, pass by pass."""

from __future__ import annotations

from collections.abc import Sequence

from ..core.forest import OverlapForest
from ..core.proxy import IntervalProxy
from ..utils.logging import get_logger

logger = get_logger(__name__)


def nests_under(
    candidate: IntervalProxy,
    event: IntervalProxy,
    minimum_start_difference: float,
) -> bool:
    """True if ``event`` should be drawn inside ``candidate``.

    Either the two overlap in time, or they start within
    ``minimum_start_difference`` of each other even without overlapping.
    """
    return (
        candidate.end_ms > event.start_ms
        or abs(event.start_ms - candidate.start_ms) < minimum_start_difference
    )


class OverlapTreeBuilder:
    """Build the overlap forest from proxies in render order.

    Each pass walks the unsettled events in render order. An event that
    fits under none of this pass's roots becomes a root of the pass and
    settles; any other event is attached to the first root it fits
    under. Settled events drop out, and the next pass re-examines the
    attached ones, which deepens the tree one level per pass.
    """

    @staticmethod
    def build(
        proxies: Sequence[IntervalProxy],
        order: Sequence[int],
        minimum_start_difference: float,
    ) -> OverlapForest:
        """Return the forest for ``proxies`` visited in ``order``.

        Parameters
        ----------
        proxies : proxies in input order
        order : render order as indices into ``proxies``
        minimum_start_difference : start-proximity threshold, same units
            as ``start_ms``

        Returns
        -------
        OverlapForest indexed like ``proxies``.
        """
        forest = OverlapForest(len(proxies))
        remaining = list(order)
        level = 0

        while remaining:
            roots: list[int] = []
            for node in remaining:
                event = proxies[node]
                parent = next(
                    (
                        c for c in roots
                        if nests_under(proxies[c], event, minimum_start_difference)
                    ),
                    None,
                )
                if parent is None:
                    roots.append(node)
                    forest.settle(node, level)
                    continue
                # The event may still be listed under the parent's parent
                # from the previous pass.
                forest.link(node, parent, release_from=forest.parent(parent))

            settled = set(roots)
            remaining = [node for node in remaining if node not in settled]
            logger.debug(
                "overlap pass %d: %d settled, %d remaining",
                level, len(roots), len(remaining),
            )
            level += 1

        return forest

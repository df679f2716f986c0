"""LayoutPipeline: orchestrates proxy → render order → overlap tree → geometry."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..core.forest import OverlapForest
from ..core.proxy import IntervalProxy
from ..core.validation import (
    validate_accessors,
    validate_minimum_start_difference,
    validate_slot_metrics,
)
from ..layout.cascade_layout import CascadeLayout
from ..layout.geometry import EventStyle, StyledEvent
from ..utils.logging import get_logger
from .overlap_tree import OverlapTreeBuilder
from .render_order import RenderOrderEngine

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Every intermediate stage of one layout run.

    ``proxies``, ``forest`` and ``layout`` are indexed by input position;
    ``order`` lists those positions in render order.
    """

    proxies: list[IntervalProxy]
    order: list[int]
    forest: OverlapForest
    layout: CascadeLayout

    def style_of(self, node: int) -> EventStyle:
        proxy = self.proxies[node]
        return EventStyle(
            top=proxy.top,
            height=proxy.height,
            width=self.layout.width(node),
            # NaN stays NaN
            x_offset=float(np.maximum(0.0, self.layout.x_offset(node))),
        )

    def styled_events(self) -> list[StyledEvent]:
        """One StyledEvent per input event, in render order."""
        return [
            StyledEvent(event=self.proxies[node].data, style=self.style_of(node))
            for node in self.order
        ]


class LayoutPipeline:
    """Runs the layout stages in order for one column of events.

    1. Proxy: resolve each event through accessors and slot metrics
    2. Render order: sort and keep overlap clusters contiguous
    3. Overlap tree: nest events into a forest
    4. Geometry: derive width and x offset from the forest

    Collaborators are checked before any event is touched, so a call
    either fails up front or returns a complete result.
    """

    @staticmethod
    def run(
        events: Iterable[Any],
        minimum_start_difference: Any,
        slot_metrics: Any,
        accessors: Any,
    ) -> PipelineResult:
        """Run every stage and return all intermediate results.

        Parameters
        ----------
        events : iterable of opaque event records
        minimum_start_difference : number of milliseconds, or a timedelta
        slot_metrics : object with ``get_range(start, end)``
        accessors : object with ``start(event)`` and ``end(event)``

        Returns
        -------
        PipelineResult
        """
        validate_accessors(accessors)
        validate_slot_metrics(slot_metrics)
        threshold = validate_minimum_start_difference(minimum_start_difference)

        proxies = [
            IntervalProxy.from_event(event, accessors, slot_metrics)
            for event in events
        ]
        order = RenderOrderEngine.compute_order(proxies)
        forest = OverlapTreeBuilder.build(proxies, order, threshold)
        layout = CascadeLayout(forest)

        logger.debug(
            "laid out %d events, %d roots, max depth %d",
            len(proxies), len(forest.roots()), layout.max_depth,
        )
        return PipelineResult(
            proxies=proxies,
            order=order,
            forest=forest,
            layout=layout,
        )

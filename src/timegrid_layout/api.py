"""Public entry points: lay out a column from records or from a DataFrame."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from .core.accessors import Accessors
from .core.slot_metrics import DaySlotMetrics, default_minimum_start_difference
from .core.validation import validate_events_frame
from .layout.geometry import StyledEvent
from .transform.pipeline import LayoutPipeline

FRAME_COLUMNS = ["top", "height", "width", "x_offset", "depth"]


def compute_layout(
    events: Iterable[Any],
    minimum_start_difference: Any,
    slot_metrics: Any,
    accessors: Any,
) -> list[StyledEvent]:
    """Lay out ``events`` in one time-grid column.

    Usage::

        import timegrid_layout as tl

        metrics = tl.DaySlotMetrics.for_day("2024-05-01")
        styled = tl.compute_layout(
            events,
            minimum_start_difference=metrics.minimum_start_difference,
            slot_metrics=metrics,
            accessors=tl.Accessors.from_fields("start", "end"),
        )
        for item in styled:
            print(item.event, item.style.width, item.style.x_offset)

    Parameters
    ----------
    events : iterable of event records; never modified
    minimum_start_difference : milliseconds (or a timedelta). Events
        starting closer together than this nest even if they do not overlap.
    slot_metrics : object with ``get_range(start, end)``
    accessors : object with ``start(event)`` and ``end(event)``

    Returns
    -------
    One StyledEvent per input event, in render order (not input order).
    """
    result = LayoutPipeline.run(
        events,
        minimum_start_difference=minimum_start_difference,
        slot_metrics=slot_metrics,
        accessors=accessors,
    )
    return result.styled_events()


def layout_frame(
    df: pd.DataFrame,
    start: str = "start",
    end: str = "end",
    slot_metrics: Any = None,
    minimum_start_difference: Any = None,
) -> pd.DataFrame:
    """Lay out a DataFrame of events (one row per event, index = event ID).

    Parameters
    ----------
    df : DataFrame with unique index and ``start``/``end`` columns
    start, end : column names holding each event's boundaries
    slot_metrics : optional; defaults to the day of the earliest start,
        which needs at least one readable ``start`` timestamp; unreadable
        cells lay out with NaN geometry
    minimum_start_difference : optional; defaults to the slot metrics'
        own threshold, or half a default slot group

    Returns
    -------
    DataFrame indexed by event ID in render order, with columns
    ``top``, ``height``, ``width``, ``x_offset`` and ``depth``.
    """
    df = validate_events_frame(df, start, end)
    if df.empty:
        return pd.DataFrame(columns=FRAME_COLUMNS, index=df.index[:0])

    if slot_metrics is None:
        earliest = pd.to_datetime(df[start], errors="coerce").min()
        if pd.isna(earliest):
            raise ValueError(
                f"No readable timestamp in column '{start}'; pass slot_metrics "
                "to lay out this frame."
            )
        slot_metrics = DaySlotMetrics.for_day(earliest)
    if minimum_start_difference is None:
        minimum_start_difference = getattr(
            slot_metrics,
            "minimum_start_difference",
            default_minimum_start_difference(),
        )

    starts = df[start]
    ends = df[end]
    result = LayoutPipeline.run(
        list(df.index),
        minimum_start_difference=minimum_start_difference,
        slot_metrics=slot_metrics,
        accessors=Accessors(
            start=lambda event_id: starts.loc[event_id],
            end=lambda event_id: ends.loc[event_id],
        ),
    )

    rows = []
    for node in result.order:
        style = result.style_of(node)
        rows.append([
            style.top,
            style.height,
            style.width,
            style.x_offset,
            result.layout.depth(node),
        ])
    index = pd.Index(
        [result.proxies[node].data for node in result.order], name=df.index.name
    )
    return pd.DataFrame(rows, index=index, columns=FRAME_COLUMNS)

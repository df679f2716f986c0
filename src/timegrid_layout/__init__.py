"""timegrid-layout: cascading overlap layout for events in a calendar day column."""

from ._version import __version__
from .api import compute_layout, layout_frame
from .core.accessors import Accessors
from .core.slot_metrics import (
    DaySlotMetrics,
    SlotMetrics,
    SlotRange,
    default_minimum_start_difference,
)
from .layout.geometry import EventStyle, StyledEvent


def export_html(path, styled, title="timegrid-layout", label=None, event_id=None):
    """Write a standalone HTML preview of ``compute_layout`` output.

    Parameters
    ----------
    path : str or Path
        Output file path.
    styled : list of StyledEvent
        Result of ``compute_layout``.
    title : str
        Page title.
    label : callable, optional
        Maps an event to the text shown in its block.
    event_id : callable, optional
        Maps an event to its ID in the embedded layout JSON.
    """
    from .export.html_export import DayColumnExporter

    DayColumnExporter.export(
        path, styled, title=title, label=label, event_id=event_id
    )


__all__ = [
    "__version__",
    "compute_layout",
    "layout_frame",
    "export_html",
    "Accessors",
    "DaySlotMetrics",
    "SlotMetrics",
    "SlotRange",
    "default_minimum_start_difference",
    "EventStyle",
    "StyledEvent",
]

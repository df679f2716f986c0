"""DayColumnExporter: write a standalone HTML preview of a laid-out column."""

from __future__ import annotations

import pathlib
from collections.abc import Sequence
from typing import Any, Callable

import jinja2

from ..layout.geometry import StyledEvent
from ..utils.logging import get_logger
from ..widget.serializers import serialize_styled_events

logger = get_logger(__name__)

_TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"

DEFAULT_HEIGHT_PX = 960
DEFAULT_WIDTH_PX = 320
DEFAULT_SLOT_COUNT = 48
PALETTE = ("#3174ad", "#2e9b6a", "#c0673a", "#7a4fb3", "#b03a5b", "#4a8fa8")


class DayColumnExporter:
    """Export a laid-out column as a self-contained HTML file.

    Each event becomes an absolutely positioned block using its style as
    CSS percentages, stacked in render order. The layout data is also
    embedded as ``{"id", "style"}`` JSON records in a ``#layout-data``
    script tag.
    """

    @staticmethod
    def build_blocks(
        styled: Sequence[StyledEvent],
        label: Callable[[Any], str] | None = None,
    ) -> list[dict]:
        """Plain-float block descriptions in render order."""
        if label is None:
            label = str
        blocks = []
        for position, item in enumerate(styled):
            style = item.style
            blocks.append({
                "label": label(item.event),
                "top": float(style.top),
                "height": float(style.height),
                "width": float(style.width),
                "x_offset": float(style.x_offset),
                "color": PALETTE[position % len(PALETTE)],
            })
        return blocks

    @staticmethod
    def render(
        styled: Sequence[StyledEvent],
        title: str = "timegrid-layout",
        label: Callable[[Any], str] | None = None,
        event_id: Callable[[Any], Any] | None = None,
        height_px: int = DEFAULT_HEIGHT_PX,
        width_px: int = DEFAULT_WIDTH_PX,
        slot_count: int = DEFAULT_SLOT_COUNT,
    ) -> str:
        """Return the HTML document as a string.

        Parameters
        ----------
        styled : output of ``compute_layout``
        title : page title and heading
        label : event -> text shown in its block; defaults to ``str``
        event_id : event -> ID in the embedded JSON; defaults to render position
        height_px, width_px : rendered column size
        slot_count : number of grid lines drawn across the column
        """
        if slot_count <= 0:
            raise ValueError(f"slot_count must be positive, got {slot_count}.")
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
            autoescape=True,  # event labels are user content
        )
        template = env.get_template("day_column.html.j2")
        return template.render(
            title=title,
            blocks=DayColumnExporter.build_blocks(styled, label),
            layout_json=serialize_styled_events(styled, event_id, html_safe=True),
            height_px=height_px,
            width_px=width_px,
            slot_percent=100.0 / slot_count,
        )

    @staticmethod
    def export(
        path: str | pathlib.Path,
        styled: Sequence[StyledEvent],
        title: str = "timegrid-layout",
        label: Callable[[Any], str] | None = None,
        event_id: Callable[[Any], Any] | None = None,
        height_px: int = DEFAULT_HEIGHT_PX,
        width_px: int = DEFAULT_WIDTH_PX,
        slot_count: int = DEFAULT_SLOT_COUNT,
    ) -> None:
        """Write the HTML preview to ``path``."""
        path = pathlib.Path(path)
        html = DayColumnExporter.render(
            styled,
            title=title,
            label=label,
            event_id=event_id,
            height_px=height_px,
            width_px=width_px,
            slot_count=slot_count,
        )
        path.write_text(html, encoding="utf-8")
        logger.info("wrote %d events to %s", len(styled), path)

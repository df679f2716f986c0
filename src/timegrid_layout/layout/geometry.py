"""Output records for a laid-out column."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EventStyle:
    """Where to draw one event.

    ``top`` and ``height`` come straight from the slot metrics; ``width``
    and ``x_offset`` are percentages of the column width.
    """

    top: Any
    height: Any
    width: float
    x_offset: float

    def to_dict(self) -> dict:
        return {
            "top": self.top,
            "height": self.height,
            "width": self.width,
            "xOffset": self.x_offset,
        }


@dataclass(frozen=True, eq=False)
class StyledEvent:
    """An input event paired with its computed style."""

    event: Any
    style: EventStyle

    def to_dict(self) -> dict:
        return {"event": self.event, "style": self.style.to_dict()}

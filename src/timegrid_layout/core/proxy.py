"""IntervalProxy: one event with its resolved time range and column geometry."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any

import pandas as pd

from ..utils.logging import get_logger
from .slot_metrics import SlotRange

logger = get_logger(__name__)

_NS_PER_MS = 1_000_000


def to_epoch_ms(value: Any) -> float:
    """Convert a timestamp-like value to milliseconds since the epoch.

    Real numbers are assumed to be milliseconds already. Datetime-likes go
    through ``pandas.Timestamp``; naive values count as UTC. Anything that
    cannot be converted becomes NaN instead of raising.
    """
    if value is None:
        return math.nan
    if isinstance(value, numbers.Real):
        return float(value)
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError) as exc:
        logger.debug("cannot convert %r to a timestamp: %s", value, exc)
        return math.nan
    if pd.isna(ts):
        return math.nan
    return ts.value / _NS_PER_MS


@dataclass(frozen=True, eq=False)
class IntervalProxy:
    """Layout-side stand-in for one input event.

    ``data`` is the caller's event, carried through untouched. Overlap
    tests use ``start_ms``/``end_ms``; ``top`` and ``height`` are opaque and
    copied to the output as-is.
    """

    data: Any
    start: Any
    end: Any
    start_ms: float
    end_ms: float
    top: Any
    height: Any

    @classmethod
    def from_range(cls, event: Any, slot_range: SlotRange) -> IntervalProxy:
        return cls(
            data=event,
            start=slot_range.start,
            end=slot_range.end,
            start_ms=to_epoch_ms(slot_range.start_date),
            end_ms=to_epoch_ms(slot_range.end_date),
            top=slot_range.top,
            height=slot_range.height,
        )

    @classmethod
    def from_event(cls, event: Any, accessors: Any, slot_metrics: Any) -> IntervalProxy:
        """Resolve ``event`` through the accessors and the slot metrics."""
        result = slot_metrics.get_range(accessors.start(event), accessors.end(event))
        proxy = cls.from_range(event, SlotRange.coerce(result))
        if proxy.duration_ms < 0:
            logger.debug("event %r ends %.0f ms before it starts", event, -proxy.duration_ms)
        return proxy

    @property
    def duration_ms(self) -> float:
        """``end_ms - start_ms``; may be zero or negative for inverted events."""
        return self.end_ms - self.start_ms

    def __repr__(self) -> str:
        return f"IntervalProxy(start_ms={self.start_ms!r}, end_ms={self.end_ms!r})"

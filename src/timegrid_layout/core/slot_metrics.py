"""Slot metrics: map event start/end values onto a day column's geometry.

The layout core only consumes ``get_range()``. ``DaySlotMetrics`` is the
stock implementation for a single day column; callers with their own grid
can pass any object with a compatible ``get_range``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import pandas as pd

from ..utils.logging import get_logger
from .validation import validate_range_fields

logger = get_logger(__name__)


DEFAULT_STEP = 30  # minutes per slot
DEFAULT_TIMESLOTS = 2  # slots per labelled group

_MS_PER_MINUTE = 60_000

# Keys accepted from mapping-shaped get_range() results, with camelCase aliases.
_RANGE_KEYS = {
    "start": ("start",),
    "end": ("end",),
    "start_date": ("start_date", "startDate"),
    "end_date": ("end_date", "endDate"),
    "top": ("top",),
    "height": ("height",),
}


def default_minimum_start_difference(
    step: int = DEFAULT_STEP,
    timeslots: int = DEFAULT_TIMESLOTS,
) -> float:
    """Half a slot group, rounded up to whole minutes, in milliseconds."""
    return float(math.ceil(step * timeslots / 2) * _MS_PER_MINUTE)


@dataclass(frozen=True)
class SlotRange:
    """Geometry and time boundaries for one event in a column."""

    start: Any
    end: Any
    start_date: Any
    end_date: Any
    top: Any
    height: Any

    @classmethod
    def coerce(cls, result: Any) -> SlotRange:
        """Accept a SlotRange or any mapping carrying the same fields."""
        if isinstance(result, SlotRange):
            return result
        if not isinstance(result, Mapping):
            raise TypeError(
                "slot_metrics.get_range() must return a SlotRange or a mapping, "
                f"got {type(result).__name__}."
            )
        values = {}
        missing = []
        for name, aliases in _RANGE_KEYS.items():
            for key in aliases:
                if key in result:
                    values[name] = result[key]
                    break
            else:
                missing.append(aliases[-1])
        if missing:
            validate_range_fields(result, tuple(missing))
        return cls(**values)


@runtime_checkable
class SlotMetrics(Protocol):
    """Anything that can place a (start, end) pair in the column."""

    def get_range(self, start: Any, end: Any) -> SlotRange | Mapping[str, Any]:
        ...


class DaySlotMetrics:
    """Slot metrics for a single time-grid column spanning ``[min, max]``.

    Positions are minutes from ``min``; ``top`` and ``height`` are
    percentages of the column's total span. Event boundaries outside the
    column are clamped to its edges.
    """

    def __init__(
        self,
        min: Any,
        max: Any,
        step: int = DEFAULT_STEP,
        timeslots: int = DEFAULT_TIMESLOTS,
    ) -> None:
        self._min = pd.Timestamp(min)
        if pd.isna(self._min):
            raise ValueError("Column bounds must be valid timestamps.")
        self._max = self._align(pd.Timestamp(max))
        if pd.isna(self._max):
            raise ValueError("Column bounds must be valid timestamps.")
        if self._max <= self._min:
            raise ValueError(
                f"Column end ({self._max}) must be after its start ({self._min})."
            )
        if step <= 0 or timeslots <= 0:
            raise ValueError(
                f"step and timeslots must be positive, got step={step}, "
                f"timeslots={timeslots}."
            )
        self._step = step
        self._timeslots = timeslots
        self._total_minutes = (self._max - self._min) / pd.Timedelta(minutes=1)

    @classmethod
    def for_day(
        cls,
        day: Any,
        step: int = DEFAULT_STEP,
        timeslots: int = DEFAULT_TIMESLOTS,
    ) -> DaySlotMetrics:
        """Column spanning midnight to midnight of ``day``."""
        start = pd.Timestamp(day).normalize()
        return cls(start, start + pd.Timedelta(days=1), step=step, timeslots=timeslots)

    @property
    def min(self) -> pd.Timestamp:
        return self._min

    @property
    def max(self) -> pd.Timestamp:
        return self._max

    @property
    def step(self) -> int:
        return self._step

    @property
    def timeslots(self) -> int:
        return self._timeslots

    @property
    def total_minutes(self) -> float:
        return self._total_minutes

    @property
    def slot_count(self) -> int:
        """Number of ``step``-sized slots in the column."""
        return math.ceil(self._total_minutes / self._step)

    @property
    def group_count(self) -> int:
        """Number of labelled slot groups (``timeslots`` slots each)."""
        return math.ceil(self.slot_count / self._timeslots)

    @property
    def minimum_start_difference(self) -> float:
        return default_minimum_start_difference(self._step, self._timeslots)

    def _align(self, ts: pd.Timestamp) -> pd.Timestamp:
        """Bring ``ts`` into the column's timezone convention."""
        if pd.isna(ts):
            return ts
        if self._min.tzinfo is None:
            # naive column: compare wall-clock times
            return ts.tz_localize(None) if ts.tzinfo is not None else ts
        if ts.tzinfo is None:
            return ts.tz_localize(self._min.tzinfo)
        return ts.tz_convert(self._min.tzinfo)

    def clamp(self, value: Any) -> pd.Timestamp:
        """Convert ``value`` to a timestamp clipped to the column bounds.

        Values that cannot be read as a timestamp become ``NaT``.
        """
        try:
            ts = pd.Timestamp(value)
        except (TypeError, ValueError, OverflowError) as exc:
            logger.debug("cannot place %r in the column: %s", value, exc)
            return pd.NaT
        ts = self._align(ts)
        if pd.isna(ts):
            return ts
        if ts < self._min:
            return self._min
        if ts > self._max:
            return self._max
        return ts

    def position_from_date(self, value: Any) -> float:
        """Minutes from the column start to ``value`` (NaN for NaT)."""
        ts = self.clamp(value)
        if pd.isna(ts):
            return math.nan
        return (ts - self._min) / pd.Timedelta(minutes=1)

    def get_range(self, start: Any, end: Any) -> SlotRange:
        start_date = self.clamp(start)
        end_date = self.clamp(end)
        start_pos = self.position_from_date(start_date)
        end_pos = self.position_from_date(end_date)
        top = start_pos / self._total_minutes * 100
        height = end_pos / self._total_minutes * 100 - top
        return SlotRange(
            start=start_pos,
            end=end_pos,
            start_date=start_date,
            end_date=end_date,
            top=top,
            height=height,
        )

    def __repr__(self) -> str:
        return (
            f"DaySlotMetrics(min={self._min!r}, max={self._max!r}, "
            f"step={self._step}, timeslots={self._timeslots})"
        )

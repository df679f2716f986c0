"""Input validation with clear error messages for calendar integrators."""

from __future__ import annotations

import datetime as dt
import numbers
from typing import Any

import numpy as np
import pandas as pd


def validate_accessors(accessors: Any) -> Any:
    """Check that ``accessors`` exposes callable ``start`` and ``end``.

    Returns the accessors unchanged.
    """
    missing = [
        name for name in ("start", "end")
        if not callable(getattr(accessors, name, None))
    ]
    if missing:
        raise TypeError(
            f"accessors must provide callable {' and '.join(missing)}, "
            f"got {type(accessors).__name__}. "
            "Use Accessors(start=..., end=...) or Accessors.from_fields()."
        )
    return accessors


def validate_slot_metrics(slot_metrics: Any) -> Any:
    """Check that ``slot_metrics`` exposes a callable ``get_range``."""
    if not callable(getattr(slot_metrics, "get_range", None)):
        raise TypeError(
            f"slot_metrics must provide a callable get_range(start, end), "
            f"got {type(slot_metrics).__name__}."
        )
    return slot_metrics


def validate_minimum_start_difference(value: Any) -> float:
    """Normalize the start-proximity threshold to milliseconds.

    Real numbers are taken as milliseconds already. ``timedelta`` and
    ``pandas.Timedelta`` are converted. NaN is accepted and simply never
    groups anything.
    """
    if isinstance(value, (dt.timedelta, pd.Timedelta, np.timedelta64)):
        return pd.Timedelta(value) / pd.Timedelta(milliseconds=1)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(
            "minimum_start_difference must be a number of milliseconds or a "
            f"timedelta, got {type(value).__name__}."
        )
    return float(value)


def validate_range_fields(result: Any, required: tuple[str, ...]) -> None:
    """Raise if a get_range() mapping lacks any of ``required``."""
    missing = [key for key in required if key not in result]
    if missing:
        raise ValueError(
            f"slot_metrics.get_range() result is missing fields: {missing}. "
            f"Got keys: {sorted(map(str, result))}"
        )


def validate_events_frame(data: Any, start: str, end: str) -> pd.DataFrame:
    """Validate an events DataFrame for table-driven layout.

    Returns the validated DataFrame (unchanged).
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas DataFrame, got {type(data).__name__}. "
            "Wrap your events with pd.DataFrame(records, index=event_ids)."
        )
    if data.index.has_duplicates:
        dupes = data.index[data.index.duplicated()].unique().tolist()
        raise ValueError(
            f"Event IDs must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    missing = [col for col in (start, end) if col not in data.columns]
    if missing:
        raise ValueError(
            f"Events DataFrame is missing columns: {missing}. "
            f"Available: {list(data.columns)}"
        )
    return data

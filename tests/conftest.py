"""Shared test fixtures for timegrid-layout."""

import pandas as pd
import pytest

from timegrid_layout.core.accessors import Accessors
from timegrid_layout.core.slot_metrics import DaySlotMetrics, SlotRange


class MillisecondSlotMetrics:
    """Slot metrics where every value is already a millisecond timestamp.

    Positions, dates and top all equal the input; height is the duration.
    Keeps expected numbers in tests readable.
    """

    def __init__(self):
        self.calls = []

    def get_range(self, start, end):
        self.calls.append((start, end))
        return SlotRange(
            start=start,
            end=end,
            start_date=start,
            end_date=end,
            top=start,
            height=end - start,
        )


@pytest.fixture
def ms_metrics():
    return MillisecondSlotMetrics()


@pytest.fixture
def accessors():
    return Accessors.from_fields("start", "end")


@pytest.fixture
def day_metrics():
    """Midnight-to-midnight column for 2024-05-01, 30 min slots."""
    return DaySlotMetrics.for_day("2024-05-01")


@pytest.fixture
def meetings_df():
    """Three meetings on 2024-05-01: two overlapping, one at lunch."""
    day = pd.Timestamp("2024-05-01")
    return pd.DataFrame(
        {
            "start": [
                day + pd.Timedelta(hours=9),
                day + pd.Timedelta(hours=9),
                day + pd.Timedelta(hours=12),
            ],
            "end": [
                day + pd.Timedelta(hours=9, minutes=30),
                day + pd.Timedelta(hours=10),
                day + pd.Timedelta(hours=13),
            ],
            "title": ["Standup", "Review", "Lunch"],
        },
        index=pd.Index(["standup", "review", "lunch"], name="event_id"),
    )

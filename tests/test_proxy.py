"""Tests for IntervalProxy and timestamp coercion."""

import datetime as dt
import logging
import math

import numpy as np
import pandas as pd
import pytest

from timegrid_layout.core.accessors import Accessors
from timegrid_layout.core.proxy import IntervalProxy, to_epoch_ms


class TestToEpochMs:
    def test_numbers_pass_through(self):
        assert to_epoch_ms(1500) == 1500.0
        assert to_epoch_ms(12.5) == 12.5
        assert to_epoch_ms(np.int64(7)) == 7.0

    def test_naive_datetime_is_utc(self):
        assert to_epoch_ms(dt.datetime(1970, 1, 1, 0, 0, 1)) == 1000.0

    def test_aware_datetime(self):
        value = dt.datetime(1970, 1, 1, 1, 0, tzinfo=dt.timezone(dt.timedelta(hours=1)))
        assert to_epoch_ms(value) == 0.0

    def test_date(self):
        assert to_epoch_ms(dt.date(1970, 1, 2)) == 86_400_000.0

    def test_pandas_and_numpy(self):
        assert to_epoch_ms(pd.Timestamp("1970-01-01T00:00:02")) == 2000.0
        assert to_epoch_ms(np.datetime64("1970-01-01T00:00:03")) == 3000.0

    def test_iso_string(self):
        assert to_epoch_ms("1970-01-01T00:01:00Z") == 60_000.0

    def test_none_is_nan(self):
        assert math.isnan(to_epoch_ms(None))

    def test_nat_is_nan(self):
        assert math.isnan(to_epoch_ms(pd.NaT))

    def test_garbage_is_nan(self):
        assert math.isnan(to_epoch_ms("not a date"))
        assert math.isnan(to_epoch_ms(object()))


class TestIntervalProxy:
    def test_from_event_copies_geometry(self, ms_metrics, accessors):
        event = {"start": 100, "end": 250}
        proxy = IntervalProxy.from_event(event, accessors, ms_metrics)
        assert proxy.data is event
        assert proxy.start == 100
        assert proxy.end == 250
        assert proxy.start_ms == 100.0
        assert proxy.end_ms == 250.0
        assert proxy.top == 100
        assert proxy.height == 150
        assert ms_metrics.calls == [(100, 250)]

    def test_event_not_mutated(self, ms_metrics, accessors):
        event = {"start": 1, "end": 2}
        IntervalProxy.from_event(event, accessors, ms_metrics)
        assert event == {"start": 1, "end": 2}

    def test_mapping_result_with_camel_case(self, accessors):
        class CamelMetrics:
            def get_range(self, start, end):
                return {
                    "start": 0, "end": 1,
                    "startDate": start, "endDate": end,
                    "top": 5.0, "height": 10.0,
                }

        proxy = IntervalProxy.from_event({"start": 10, "end": 20}, accessors, CamelMetrics())
        assert proxy.start_ms == 10.0
        assert proxy.end_ms == 20.0
        assert proxy.top == 5.0

    def test_mapping_result_missing_fields(self, accessors):
        class Incomplete:
            def get_range(self, start, end):
                return {"start": 0, "end": 1, "top": 0}

        with pytest.raises(ValueError, match="missing fields"):
            IntervalProxy.from_event({"start": 0, "end": 1}, accessors, Incomplete())

    def test_non_mapping_result(self, accessors):
        class Wrong:
            def get_range(self, start, end):
                return (start, end)

        with pytest.raises(TypeError, match="SlotRange or a mapping"):
            IntervalProxy.from_event({"start": 0, "end": 1}, accessors, Wrong())

    def test_inverted_event_kept(self, ms_metrics, caplog):
        accessors = Accessors.from_fields("start", "end")
        with caplog.at_level(logging.DEBUG, logger="timegrid_layout"):
            proxy = IntervalProxy.from_event({"start": 50, "end": 20}, accessors, ms_metrics)
        assert proxy.start_ms == 50.0
        assert proxy.end_ms == 20.0
        assert proxy.duration_ms == -30.0
        assert "ends 30 ms before it starts" in caplog.text

    def test_forward_event_not_logged(self, ms_metrics, accessors, caplog):
        with caplog.at_level(logging.DEBUG, logger="timegrid_layout"):
            IntervalProxy.from_event({"start": 20, "end": 50}, accessors, ms_metrics)
        assert "before it starts" not in caplog.text

    def test_unconvertible_dates_become_nan(self, accessors):
        class BadDates:
            def get_range(self, start, end):
                return {
                    "start": 0, "end": 0, "start_date": "soon",
                    "end_date": None, "top": 0, "height": 0,
                }

        proxy = IntervalProxy.from_event({"start": 0, "end": 0}, accessors, BadDates())
        assert math.isnan(proxy.start_ms)
        assert math.isnan(proxy.end_ms)

"""Tests for trend window bucketing."""

import datetime

import pytest

from training_analytics.analytics.buckets import (
    DEFAULT_BUCKET_CONFIG,
    STANDARD_WINDOWS,
    BucketConfig,
    bucket_for_date,
    compute_buckets,
    window_bounds,
)

TODAY = datetime.date(2025, 6, 30)


# ======================================================================
# Window
# ======================================================================


class TestWindowBounds:
    def test_bounds_inclusive(self):
        start, end = window_bounds(30, TODAY)
        assert start == datetime.date(2025, 5, 31)
        assert end == TODAY

    @pytest.mark.parametrize("window_days", [0, -1, -30])
    def test_rejects_non_positive(self, window_days):
        with pytest.raises(ValueError):
            window_bounds(window_days, TODAY)

    def test_defaults_to_local_today(self):
        _, end = window_bounds(7)
        assert end == datetime.date.today()


# ======================================================================
# Coverage invariants
# ======================================================================


class TestBucketCoverage:
    @pytest.mark.parametrize("window_days", [1, 2, 6, 7, 8, 13, *STANDARD_WINDOWS, 365, 1000])
    def test_contiguous_and_exact_span(self, window_days):
        buckets = compute_buckets(window_days, TODAY)
        assert buckets[0].start_date == TODAY - datetime.timedelta(days=window_days)
        assert buckets[-1].end_date == TODAY
        for previous, current in zip(buckets, buckets[1:]):
            assert current.start_date == previous.end_date + datetime.timedelta(days=1)
        assert sum(b.days for b in buckets) == window_days + 1

    @pytest.mark.parametrize("window_days", [30, 90, 180, 360, 31, 100])
    def test_widths_differ_by_at_most_one_day(self, window_days):
        widths = [b.days for b in compute_buckets(window_days, TODAY)]
        assert max(widths) - min(widths) <= 1

    def test_extra_days_go_to_oldest_buckets(self):
        # 31 days / 6 buckets -> 6,5,5,5,5,5
        widths = [b.days for b in compute_buckets(30, TODAY)]
        assert widths == [6, 5, 5, 5, 5, 5]

    def test_indices_are_sequential(self):
        buckets = compute_buckets(90, TODAY)
        assert [b.index for b in buckets] == list(range(len(buckets)))


# ======================================================================
# Orientation & granularity
# ======================================================================


class TestBucketOrientation:
    def test_index_zero_is_oldest(self):
        buckets = compute_buckets(90, TODAY)
        assert buckets[0].start_date < buckets[-1].start_date
        assert buckets[-1].contains(TODAY)
        assert not buckets[0].contains(TODAY)

    def test_seven_day_window_is_daily(self):
        buckets = compute_buckets(7, TODAY)
        assert len(buckets) == 8
        assert all(b.days == 1 for b in buckets)

    def test_longer_windows_use_configured_count(self):
        assert len(compute_buckets(8, TODAY)) == DEFAULT_BUCKET_CONFIG.bucket_count
        assert len(compute_buckets(360, TODAY)) == 6

    def test_custom_config(self):
        cfg = BucketConfig(bucket_count=4, daily_max_days=0)
        buckets = compute_buckets(3, TODAY, cfg)
        assert len(buckets) == 4
        assert all(b.days == 1 for b in buckets)

    def test_count_never_exceeds_days(self):
        cfg = BucketConfig(bucket_count=10, daily_max_days=0)
        buckets = compute_buckets(2, TODAY, cfg)
        assert len(buckets) == 3

    def test_invalid_window_raises(self):
        with pytest.raises(ValueError):
            compute_buckets(0, TODAY)


class TestBucketForDate:
    def test_finds_bucket(self):
        buckets = compute_buckets(30, TODAY)
        assert bucket_for_date(TODAY, buckets) == 5
        assert bucket_for_date(TODAY - datetime.timedelta(days=30), buckets) == 0

    def test_outside_window(self):
        buckets = compute_buckets(30, TODAY)
        assert bucket_for_date(TODAY + datetime.timedelta(days=1), buckets) is None
        assert bucket_for_date(TODAY - datetime.timedelta(days=31), buckets) is None

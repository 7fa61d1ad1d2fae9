"""Tests for wellboard.analytics.window -- trailing window filter."""

from datetime import datetime

import pytest

from wellboard.analytics.window import (
    FilteredView,
    filter_entries,
    filter_snapshot,
    filter_window,
    validate_window,
    window_cutoff,
)
from wellboard.records import ExerciseEntry, Snapshot

from tests.conftest import TODAY, at, days_ago, exercise, mood, sleep


class TestValidateWindow:
    @pytest.mark.parametrize("days", [1, 7, 30, 90, 365])
    def test_positive_ints(self, days):
        assert validate_window(days) == days

    @pytest.mark.parametrize("days", [0, -7])
    def test_non_positive(self, days):
        with pytest.raises(ValueError):
            validate_window(days)

    @pytest.mark.parametrize("days", [7.0, "30", None, True])
    def test_non_int(self, days):
        with pytest.raises(ValueError):
            validate_window(days)


class TestWindowCutoff:
    def test_start_of_day_minus_window(self):
        assert window_cutoff(7, TODAY) == datetime(2026, 10, 12, 0, 0)
        assert window_cutoff(30, TODAY) == datetime(2026, 9, 19, 0, 0)

    def test_invalid_window_raises(self):
        with pytest.raises(ValueError):
            window_cutoff(0, TODAY)


class TestFilterEntries:
    def test_cutoff_is_inclusive(self):
        cutoff = window_cutoff(7, TODAY)
        kept = filter_entries([mood(7, 5), mood(8, 6)], cutoff)
        assert [e.score for e in kept] == [5]

    def test_timestamp_just_before_cutoff_excluded(self):
        cutoff = window_cutoff(7, TODAY)
        late_night = ExerciseEntry(timestamp=at(days_ago(8), 23, 59), activity_type="Yoga",
                                   duration_minutes=20)
        assert filter_entries([late_night], cutoff) == []

    def test_missing_timestamp_excluded(self):
        entry = ExerciseEntry(timestamp=None, activity_type="Running", duration_minutes=30)
        assert filter_window([entry], 90, TODAY) == []

    def test_preserves_order(self):
        entries = [sleep(0, 400), sleep(3, 500), sleep(1, 450)]
        kept = filter_window(entries, 7, TODAY)
        assert [e.duration_minutes for e in kept] == [400, 500, 450]

    def test_empty(self):
        assert filter_window([], 30, TODAY) == []


class TestFilterSnapshot:
    def test_seven_days(self, sample_snapshot):
        view = filter_snapshot(sample_snapshot, 7, TODAY)
        assert isinstance(view, FilteredView)
        assert view.window_days == 7
        assert [e.score for e in view.mood] == [9, 9, 8]
        assert len(view.sleep) == 2
        assert [e.activity_type for e in view.exercise] == ["Running", "Running", "Yoga"]

    def test_thirty_days(self, sample_snapshot):
        view = filter_snapshot(sample_snapshot, 30, TODAY)
        assert len(view.mood) == 4
        assert len(view.sleep) == 3
        assert len(view.exercise) == 4

    def test_ninety_days_keeps_everything(self, sample_snapshot):
        view = filter_snapshot(sample_snapshot, 90, TODAY)
        assert view.mood == sample_snapshot.mood
        assert view.sleep == sample_snapshot.sleep
        assert view.exercise == sample_snapshot.exercise

    def test_wider_window_is_superset(self, sample_snapshot):
        narrow = filter_snapshot(sample_snapshot, 7, TODAY)
        wide = filter_snapshot(sample_snapshot, 30, TODAY)
        assert set(narrow.mood) <= set(wide.mood)
        assert set(narrow.sleep) <= set(wide.sleep)
        assert set(narrow.exercise) <= set(wide.exercise)

    def test_pure(self, sample_snapshot):
        assert filter_snapshot(sample_snapshot, 30, TODAY) == filter_snapshot(sample_snapshot, 30, TODAY)

    def test_empty_snapshot(self):
        view = filter_snapshot(Snapshot(), 30, TODAY)
        assert view.mood == () and view.sleep == () and view.exercise == ()

"""Tests for shareddeps.tracker."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from shareddeps.tracker import FirstOccurrenceTracker


def test_first_time_is_true_only_once() -> None:
    tracker = FirstOccurrenceTracker()

    assert tracker.first_time("a/package.json") is True
    assert tracker.first_time("a/package.json") is False
    assert tracker.first_time("a/package.json") is False


def test_interleaved_keys_are_tracked_independently() -> None:
    tracker = FirstOccurrenceTracker()
    keys = ["a", "b", "a", "c", "b", "a", "c", "d"]

    results = [tracker.first_time(key) for key in keys]

    assert results == [True, True, False, True, False, False, False, True]
    assert len(tracker) == 4
    assert "c" in tracker
    assert "z" not in tracker


def test_first_time_under_concurrent_callers() -> None:
    tracker = FirstOccurrenceTracker()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(tracker.first_time, ["shared"] * 64))

    assert results.count(True) == 1

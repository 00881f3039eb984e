# ==============================================================================
# Tests for Identity & Time Primitives
# ==============================================================================
"""
Unit tests for remove_duplicates, utc_day_bounds and the probe retry policy.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest
from tenacity import wait_none

from sessionstore.utils.clock import SystemClock, utc_day_bounds
from sessionstore.utils.retry import retry_light
from sessionstore.utils.strings import remove_duplicates


class TestRemoveDuplicates:
    """Tests for first-seen order deduplication."""

    def test_example(self):
        assert remove_duplicates(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]

    def test_idempotent(self):
        """Applying twice gives the same result as applying once."""
        values = ["x", "y", "x", "z", "z", "y"]
        once = remove_duplicates(values)
        assert remove_duplicates(once) == once

    def test_empty(self):
        assert remove_duplicates([]) == []

    def test_accepts_generator(self):
        assert remove_duplicates(v for v in ["b", "b", "a"]) == ["b", "a"]

    def test_does_not_mutate_input(self):
        values = ["a", "a"]
        remove_duplicates(values)
        assert values == ["a", "a"]


class TestUtcDayBounds:
    """Tests for the UTC calendar day computation."""

    def test_midday(self):
        start, end = utc_day_bounds(datetime(2024, 5, 17, 12, 30, tzinfo=timezone.utc))
        assert start == datetime(2024, 5, 17, tzinfo=timezone.utc)
        assert end == datetime(2024, 5, 18, tzinfo=timezone.utc)

    def test_exact_midnight_starts_the_day(self):
        midnight = datetime(2024, 5, 17, tzinfo=timezone.utc)
        assert utc_day_bounds(midnight) == (midnight, midnight + timedelta(hours=24))

    def test_other_timezone_is_converted(self):
        """23:30 at UTC-02:00 is 01:30 UTC on the next day."""
        moment = datetime(2024, 5, 17, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
        start, _ = utc_day_bounds(moment)
        assert start == datetime(2024, 5, 18, tzinfo=timezone.utc)

    def test_naive_is_treated_as_utc(self):
        start, _ = utc_day_bounds(datetime(2024, 5, 17, 3, 0))
        assert start == datetime(2024, 5, 17, tzinfo=timezone.utc)


class TestSystemClock:
    def test_now_is_utc_aware(self):
        now = SystemClock().now()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_epoch_seconds(self):
        clock = SystemClock()
        assert abs(clock.epoch_seconds() - int(clock.now().timestamp())) <= 1


class TestRetryLight:
    """Tests for the probe retry decorator (backoff disabled via retry_with)."""

    def _probe(self, failures, exc_type=ConnectionError):
        calls = []

        @retry_light((ConnectionError,), logging.getLogger("test"))
        def probe():
            calls.append(1)
            if len(calls) <= failures:
                raise exc_type("down")
            return "ok"

        return probe.retry_with(wait=wait_none()), calls

    def test_recovers_after_transient_failures(self):
        probe, calls = self._probe(failures=2)
        assert probe() == "ok"
        assert len(calls) == 3

    def test_gives_up_after_attempts(self):
        probe, calls = self._probe(failures=5)
        with pytest.raises(ConnectionError):
            probe()
        assert len(calls) == 3

    def test_other_exceptions_not_retried(self):
        probe, calls = self._probe(failures=1, exc_type=ValueError)
        with pytest.raises(ValueError):
            probe()
        assert len(calls) == 1

# ==============================================================================
# Tests for SessionTracker
# ==============================================================================
"""
Tests for SessionTracker over fakeredis and the in-memory OpenSearch client.
"""

from unittest.mock import MagicMock

import pytest

from sessionstore.core import SessionTracker
from sessionstore.core.errors import StoreUnavailableError
from sessionstore.core.models import Event
from tests.conftest import NOON


@pytest.fixture()
def tracker(repository, timestamp_store, clock):
    return SessionTracker(repository, timestamp_store, clock=clock)


class TestTrack:
    def test_first_event_starts_session(self, tracker, repository, timestamp_store, make_session):
        stored = tracker.track(make_session(duration=12345), Event(type="pageview"))

        assert stored.duration == 0
        assert stored.time_report == NOON
        assert timestamp_store.get_first_timestamp("s1") == int(NOON.timestamp())
        assert repository.get_session_count("u1", "s1") == 1

    def test_later_event_measures_from_first_seen(self, tracker, repository, clock, make_session):
        tracker.track(make_session(), Event(type="pageview"))
        clock.advance(30)
        stored = tracker.track(make_session(), Event(type="click"))

        assert stored.duration == 30_000
        (latest,) = repository.get_all_sessions("u1", "w1", ["s1"])
        assert latest.duration == 30_000
        assert latest.event.model_dump() == {"type": "click"}

    def test_first_seen_not_moved_by_later_events(self, tracker, timestamp_store, clock, make_session):
        tracker.track(make_session(), Event())
        clock.advance(10)
        tracker.track(make_session(), Event())
        assert timestamp_store.get_first_timestamp("s1") == int(NOON.timestamp())

    def test_expired_first_seen_restarts_duration(
        self, tracker, timestamp_store, fake_redis, clock, make_session
    ):
        tracker.track(make_session(), Event())
        fake_redis.delete("s1")
        clock.advance(120)

        stored = tracker.track(make_session(), Event())
        assert stored.duration == 0
        assert timestamp_store.get_first_timestamp("s1") == int(NOON.timestamp()) + 120

    def test_sessions_tracked_independently(self, tracker, clock, make_session):
        tracker.track(make_session(session_id="a"), Event())
        clock.advance(5)
        tracker.track(make_session(session_id="b"), Event())
        clock.advance(5)

        assert tracker.track(make_session(session_id="a"), Event()).duration == 10_000
        assert tracker.track(make_session(session_id="b"), Event()).duration == 5_000

    def test_timestamp_store_failure_propagates(self, repository, clock, make_session):
        timestamps = MagicMock()
        timestamps.record_first_timestamp.side_effect = StoreUnavailableError("down")
        tracker = SessionTracker(repository, timestamps, clock=clock)

        with pytest.raises(StoreUnavailableError):
            tracker.track(make_session(), Event())
        assert repository.get_session_count("u1", "s1") == 0

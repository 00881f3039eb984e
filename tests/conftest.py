# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- fakeredis-backed ValkeyTimestampStore
- In-memory OpenSearch client and OpenSearchSessionRepository
- A fixed clock pinned to midday UTC
- A factory for Session objects
"""

from datetime import datetime, timezone

import fakeredis
import pytest

from sessionstore.core.models import Event, Session, SessionMetadata
from sessionstore.infrastructure.cache import ValkeyTimestampStore
from sessionstore.infrastructure.repositories import OpenSearchSessionRepository
from sessionstore.utils.config import get_settings
from tests.fakes import FakeOpenSearch, FixedClock

NOON = datetime(2024, 5, 17, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are lru_cached; start each test from the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def fake_redis():
    """A clean fakeredis instance for each test.

    Uses decode_responses=True to match the real Valkey client.
    """
    server = fakeredis.FakeServer()
    client = fakeredis.FakeRedis(server=server, decode_responses=True)
    yield client
    client.flushall()
    client.close()


@pytest.fixture()
def timestamp_store(fake_redis):
    """A ValkeyTimestampStore backed by fakeredis with the default 24h TTL."""
    return ValkeyTimestampStore(fake_redis)


@pytest.fixture()
def clock():
    """A settable clock starting at 2024-05-17 12:00:00 UTC."""
    return FixedClock(NOON)


@pytest.fixture()
def fake_opensearch():
    return FakeOpenSearch()


@pytest.fixture()
def repository(fake_opensearch, clock):
    """An OpenSearchSessionRepository over the in-memory client."""
    repo = OpenSearchSessionRepository(fake_opensearch, index_name="test-sessions", clock=clock)
    repo.ensure_index()
    return repo


@pytest.fixture()
def make_session():
    """Factory building a Session with sensible metadata defaults."""

    def _make(
        session_id: str = "s1",
        user_id: str = "u1",
        website_id: str = "w1",
        time_report: datetime = NOON,
        duration: int = 0,
        **event_fields,
    ) -> Session:
        return Session(
            metadata=SessionMetadata(
                id=session_id,
                user_id=user_id,
                website_id=website_id,
                country="NL",
                city="Amsterdam",
                device="desktop",
                os="Linux",
                browser="Firefox",
                version="126.0",
                created_at=time_report,
            ),
            duration=duration,
            event=Event(**event_fields),
            time_report=time_report,
        )

    return _make

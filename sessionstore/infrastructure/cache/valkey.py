# ==============================================================================
# Valkey Timestamp Store Implementation
# ==============================================================================
"""
Valkey/Redis implementation of the TimestampStore interface.

Stores each session's first-seen time as a plain decimal string:

    {key_prefix}{session_id} -> "1718000000"    (EX = session TTL)

The value format matches what other writers of the same keyspace use, so
entries are interchangeable with existing data.
"""

import logging

import redis
from redis.backoff import NoBackoff
from redis.exceptions import RedisError
from redis.retry import Retry

from sessionstore.base.timestamps import TimestampStore
from sessionstore.core.errors import NotFoundError, StoreUnavailableError, TimestampParseError
from sessionstore.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


def get_valkey_client(settings: Settings | None = None) -> redis.Redis:
    """
    Get a Valkey/Redis client connection.

    Configured with:
    - Socket timeouts from settings for fast failure detection
    - No client-side retries: failures surface to the caller immediately
    - Health check interval to keep pooled connections alive

    The client wraps a thread-safe connection pool; create one per process
    and share it.

    Args:
        settings: Application settings. If None, uses get_settings().

    Returns:
        redis.Redis client instance
    """
    settings = settings or get_settings()
    valkey = settings.valkey

    return redis.from_url(
        valkey.url,
        decode_responses=True,
        socket_timeout=valkey.socket_timeout,
        socket_connect_timeout=valkey.socket_timeout,
        retry=Retry(NoBackoff(), 0),
        health_check_interval=30,
    )


class ValkeyTimestampStore(TimestampStore):
    """
    Valkey/Redis implementation of TimestampStore.

    Every write resets the TTL; there is no explicit delete path.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = 24 * 3600, key_prefix: str = ""):
        """
        Initialize the timestamp store.

        Args:
            client: Redis client created with decode_responses=True
            ttl_seconds: Expiry applied on every write (default: 24 hours)
            key_prefix: Prepended to the session id to build the key
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._client = client
        self._ttl_seconds = ttl_seconds
        self._key_prefix = key_prefix

    @classmethod
    def from_settings(
        cls, client: redis.Redis, settings: Settings | None = None
    ) -> "ValkeyTimestampStore":
        """Build a store using the TTL and key prefix from settings."""
        settings = settings or get_settings()
        return cls(
            client,
            ttl_seconds=settings.valkey.session_ttl_seconds,
            key_prefix=settings.valkey.key_prefix,
        )

    @property
    def client(self) -> redis.Redis:
        """Get the underlying Redis client."""
        return self._client

    @property
    def ttl_seconds(self) -> int:
        """Expiry applied to every entry."""
        return self._ttl_seconds

    def _key(self, session_id: str) -> str:
        return f"{self._key_prefix}{session_id}"

    def record_first_timestamp(self, session_id: str, epoch_seconds: int) -> None:
        """
        Store the first-seen time of a session.

        Args:
            session_id: Session identifier
            epoch_seconds: Unix timestamp in seconds
        """
        key = self._key(session_id)
        try:
            self._client.set(key, int(epoch_seconds), ex=self._ttl_seconds)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to record timestamp for {key}: {e}") from e
        logger.debug("Recorded first timestamp %d for %s", epoch_seconds, key)

    def get_first_timestamp(self, session_id: str) -> int:
        """
        Get the first-seen time of a session.

        Args:
            session_id: Session identifier

        Returns:
            Unix timestamp in seconds
        """
        key = self._key(session_id)
        try:
            value = self._client.get(key)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to read timestamp for {key}: {e}") from e

        if value is None:
            raise NotFoundError(f"No first timestamp recorded for session {session_id}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise TimestampParseError(
                f"Stored timestamp for {key} is not an integer: {value!r}"
            ) from e
